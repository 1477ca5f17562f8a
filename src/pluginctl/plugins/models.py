"""Plugin data models: PluginRecord, ScanResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pluginctl.core.errors import MetadataError


@dataclass(frozen=True)
class PluginRecord:
    """One plugin package, as described by its descriptor."""

    name: str
    version: str = "0"
    description: str = ""
    dependencies: tuple[str, ...] = ()
    location: Path = field(default_factory=Path)

    @property
    def label(self) -> str:
        return f"{self.name}-{self.version}"


@dataclass
class ScanResult:
    """Records found in a directory plus the archives that could not be read."""

    plugins: list[PluginRecord] = field(default_factory=list)
    problems: list[MetadataError] = field(default_factory=list)
