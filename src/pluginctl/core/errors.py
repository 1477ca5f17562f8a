"""Exception hierarchy.

Fatal conditions (activation I/O, enabled-plugins file I/O, bad settings)
are raised and abort the invocation. Unreadable archives are collected as
``MetadataError`` instances by scans and reported together. Names that
cannot be found are never exceptions; they come back in ``missing`` sets.
"""

from __future__ import annotations

from pathlib import Path


class PluginctlError(Exception):
    """Base class for all pluginctl errors."""


class ConfigError(PluginctlError):
    """Invalid settings or option values."""


class MetadataError(PluginctlError):
    """A plugin archive could not be read or its descriptor is invalid."""

    def __init__(self, location: Path | str, reason: str) -> None:
        self.location = Path(location)
        self.reason = reason
        super().__init__(f"{self.location.name}: {reason}")


class ActivationError(PluginctlError):
    """Copying a plugin into, or deleting it from, the active directory failed."""

    def __init__(self, name: str, location: Path | str, reason: str, action: str) -> None:
        self.name = name
        self.location = Path(location)
        self.reason = reason
        self.action = action  # "cannot_enable_plugin" | "cannot_delete_plugin"
        super().__init__(f"{action} {name} ({self.location}): {reason}")


class EnabledPluginsFileError(PluginctlError):
    """The persisted explicitly-enabled plugins file could not be read or written."""

    def __init__(self, path: Path | str, reason: str, action: str) -> None:
        self.path = Path(path)
        self.reason = reason
        self.action = action  # "read" | "write"
        super().__init__(f"cannot {action} enabled plugins file {self.path}: {reason}")
