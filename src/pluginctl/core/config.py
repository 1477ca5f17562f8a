"""Configuration: env, settings.json, plugin directories."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError

VERSION_ORDERINGS = ("lexical", "natural")


@dataclass
class Config:
    global_dir: Path = field(default_factory=lambda: Path.home() / ".pluginctl")
    plugins_dir: Path | None = None  # None = <global_dir>/plugins
    plugins_dist_dir: Path | None = None  # None = <global_dir>/plugins-dist
    version_ordering: str = "lexical"
    runtime_provided: set[str] = field(default_factory=set)
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.version_ordering not in VERSION_ORDERINGS:
            raise ConfigError(
                f"unknown version ordering {self.version_ordering!r} "
                f"(expected one of {', '.join(VERSION_ORDERINGS)})"
            )

    @property
    def active_dir(self) -> Path:
        return self.plugins_dir or self.global_dir / "plugins"

    @property
    def dist_dir(self) -> Path:
        return self.plugins_dist_dir or self.global_dir / "plugins-dist"

    @property
    def settings_path(self) -> Path:
        return self.global_dir / "settings.json"


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single settings.json file to config."""
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"cannot read settings file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"settings file {path} must contain a JSON object")

    if data.get("pluginsDir"):
        config.plugins_dir = Path(data["pluginsDir"]).expanduser()
    if data.get("pluginsDistDir"):
        config.plugins_dist_dir = Path(data["pluginsDistDir"]).expanduser()
    if "versionOrdering" in data:
        _set_ordering(config, data["versionOrdering"])
    if "runtimeProvided" in data:
        provided = data["runtimeProvided"]
        if not isinstance(provided, list) or not all(isinstance(n, str) for n in provided):
            raise ConfigError(f"{path}: 'runtimeProvided' must be a list of names")
        config.runtime_provided.update(provided)


def _set_ordering(config: Config, value: object) -> None:
    if value not in VERSION_ORDERINGS:
        raise ConfigError(
            f"unknown version ordering {value!r} (expected one of {', '.join(VERSION_ORDERINGS)})"
        )
    config.version_ordering = value  # type: ignore[assignment]


def load_config(
    plugins_dir: str | Path | None = None,
    plugins_dist_dir: str | Path | None = None,
    verbose: bool = False,
    global_dir: Path | None = None,
) -> Config:
    """Load config with priority: CLI args > env > .env > settings.json > defaults."""
    load_dotenv()

    config = Config(global_dir=global_dir) if global_dir else Config()
    config.verbose = verbose

    if env_home := os.getenv("PLUGINCTL_HOME"):
        if global_dir is None:
            config.global_dir = Path(env_home).expanduser()

    _apply_settings(config, config.settings_path)

    if env_dir := os.getenv("PLUGINCTL_PLUGINS_DIR"):
        config.plugins_dir = Path(env_dir).expanduser()
    if env_dist := os.getenv("PLUGINCTL_PLUGINS_DIST_DIR"):
        config.plugins_dist_dir = Path(env_dist).expanduser()
    if env_ordering := os.getenv("PLUGINCTL_VERSION_ORDERING"):
        _set_ordering(config, env_ordering)

    if plugins_dir:
        config.plugins_dir = Path(plugins_dir)
    if plugins_dist_dir:
        config.plugins_dist_dir = Path(plugins_dist_dir)

    return config
