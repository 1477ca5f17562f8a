"""Shared rich consoles: ``console`` for normal output, ``err_console`` for errors and logs."""

from rich.console import Console

console = Console()
err_console = Console(stderr=True, soft_wrap=True)
