"""Persisted list of explicitly enabled plugin names.

The file lives at ``<plugins_dir>/enabled_plugins`` as a JSON array. There
is no locking: two invocations running against the same directory can
overwrite each other's changes.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

from pluginctl.core.errors import EnabledPluginsFileError

ENABLED_PLUGINS_FILE = "enabled_plugins"


def enabled_plugins_path(plugins_dir: Path) -> Path:
    return plugins_dir / ENABLED_PLUGINS_FILE


def read_enabled_plugins(plugins_dir: Path) -> frozenset[str]:
    path = enabled_plugins_path(plugins_dir)
    try:
        text = path.read_text()
    except FileNotFoundError:
        return frozenset()
    except OSError as e:
        raise EnabledPluginsFileError(path, str(e), "read") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EnabledPluginsFileError(path, f"invalid JSON ({e})", "read") from e
    if not isinstance(data, list) or not all(isinstance(n, str) for n in data):
        raise EnabledPluginsFileError(path, "expected a list of plugin names", "read")
    return frozenset(data)


def write_enabled_plugins(plugins_dir: Path, names: Iterable[str]) -> None:
    path = enabled_plugins_path(plugins_dir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(sorted(set(names)), indent=2) + "\n")
    except OSError as e:
        raise EnabledPluginsFileError(path, str(e), "write") from e


class EnabledPluginsStore:
    """Read-then-write access to the explicit set of one plugins directory."""

    def __init__(self, plugins_dir: Path) -> None:
        self.plugins_dir = plugins_dir

    @property
    def path(self) -> Path:
        return enabled_plugins_path(self.plugins_dir)

    def load(self) -> frozenset[str]:
        return read_enabled_plugins(self.plugins_dir)

    def save(self, names: Iterable[str]) -> None:
        write_enabled_plugins(self.plugins_dir, names)
