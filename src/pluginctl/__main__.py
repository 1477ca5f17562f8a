"""CLI entry point: list, enable, disable, prune."""

from __future__ import annotations

import logging
import re

import click
from rich.logging import RichHandler
from rich.markup import escape

from .core.config import load_config
from .core.errors import PluginctlError
from .core.output import err_console
from .plugins import PluginManager


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _print_error(message: str) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


class PluginctlGroup(click.Group):
    """Reports pluginctl errors on stderr and exits with status 2."""

    def invoke(self, ctx: click.Context):
        try:
            return super().invoke(ctx)
        except PluginctlError as e:
            _print_error(str(e))
            ctx.exit(2)


@click.group(cls=PluginctlGroup, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="pluginctl", prog_name="pluginctl")
@click.option(
    "--plugins-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding the active plugins",
)
@click.option(
    "--plugins-dist-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory holding every available plugin package",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, plugins_dir: str | None, plugins_dist_dir: str | None, verbose: bool):
    """pluginctl: enable and disable plugins along with their dependencies."""
    _setup_logging(verbose)
    config = load_config(plugins_dir=plugins_dir, plugins_dist_dir=plugins_dist_dir, verbose=verbose)
    ctx.obj = PluginManager(config)


@cli.command("list")
@click.argument("pattern", required=False, default=".*")
@click.option("--compact", "-c", is_flag=True, help="One line per plugin")
@click.pass_obj
def list_cmd(manager: PluginManager, pattern: str, compact: bool):
    """List plugins whose name matches PATTERN (a regular expression)."""
    try:
        re.compile(pattern)
    except re.error as e:
        raise click.BadParameter(f"invalid regular expression: {e}", param_hint="PATTERN") from e
    manager.list_plugins(pattern, compact)


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def enable(manager: PluginManager, names: tuple[str, ...]):
    """Enable plugins and everything they depend on."""
    manager.enable(names)


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def disable(manager: PluginManager, names: tuple[str, ...]):
    """Disable plugins and everything that depends on them."""
    manager.disable(names)


@cli.command()
@click.pass_obj
def prune(manager: PluginManager):
    """Remove active plugins that nothing explicitly enabled needs."""
    manager.prune()


def main():
    """True entry point."""
    cli(prog_name="pluginctl")


if __name__ == "__main__":
    main()
