"""Plugin archives: read descriptors out of ``*.ez`` zip packages."""

from __future__ import annotations

import json
import logging
import re
import zipfile
from collections.abc import Callable, Iterable
from dataclasses import replace
from importlib import metadata
from pathlib import Path

from pluginctl.core.errors import MetadataError

from .models import PluginRecord, ScanResult

logger = logging.getLogger(__name__)

ARCHIVE_GLOB = "*.ez"
DESCRIPTOR_RE = re.compile(r"^.+/plugin\.json$")


def runtime_provides(name: str, provided: Iterable[str] = ()) -> bool:
    """True if *name* is already supplied by the base runtime.

    That is: listed in *provided*, or installed as a distribution in the
    running interpreter.
    """
    if name in set(provided):
        return True
    try:
        metadata.distribution(name)
    except metadata.PackageNotFoundError:
        return False
    except ValueError:
        return False
    return True


def _find_descriptors(names: list[str]) -> list[str]:
    return [n for n in names if DESCRIPTOR_RE.match(n)]


def _read_descriptor(path: Path) -> dict:
    try:
        with zipfile.ZipFile(path) as zf:
            candidates = _find_descriptors(zf.namelist())
            if not candidates:
                raise MetadataError(path, "no plugin.json descriptor")
            raw = zf.read(candidates[0])
    except (zipfile.BadZipFile, OSError) as e:
        raise MetadataError(path, f"invalid archive ({e})") from e
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataError(path, f"invalid descriptor ({e})") from e
    if not isinstance(data, dict):
        raise MetadataError(path, "invalid descriptor (expected a JSON object)")
    return data


def _validate(path: Path, data: dict) -> tuple[str, str, str, list[str]]:
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise MetadataError(path, "descriptor: 'name' must be a non-empty string")
    version = data.get("version", "0")
    if not isinstance(version, str):
        raise MetadataError(path, "descriptor: 'version' must be a string")
    description = data.get("description", "")
    if not isinstance(description, str):
        raise MetadataError(path, "descriptor: 'description' must be a string")
    deps = data.get("dependencies", [])
    if not isinstance(deps, list) or not all(isinstance(d, str) and d for d in deps):
        raise MetadataError(path, "descriptor: 'dependencies' must be a list of names")
    return name, version, description, deps


def read_metadata(
    path: Path,
    provides: Callable[[str], bool] | None = None,
) -> PluginRecord:
    """Build a PluginRecord from an archive. Raises MetadataError.

    Dependencies for which *provides* returns True are dropped. Without
    *provides* every declared dependency is kept.
    """
    name, version, description, deps = _validate(path, _read_descriptor(path))
    dependencies = tuple(d for d in dict.fromkeys(deps) if not (provides and provides(d)))
    return PluginRecord(
        name=name,
        version=version,
        description=description,
        dependencies=dependencies,
        location=path,
    )


def drop_runtime_dependencies(
    records: Iterable[PluginRecord],
    provides: Callable[[str], bool],
    known: Iterable[str] = (),
) -> list[PluginRecord]:
    """Remove dependencies the base runtime already supplies.

    Names in *known* (plugins found in a scanned directory) are always kept,
    even when an installed distribution shares the name.
    """
    records = list(records)
    keep = set(known) | {r.name for r in records}
    return [
        replace(r, dependencies=tuple(d for d in r.dependencies if d in keep or not provides(d)))
        for r in records
    ]


def find_plugins(
    directory: Path,
    provides: Callable[[str], bool] | None = None,
) -> ScanResult:
    """Read every archive in *directory*. Bad archives are collected, not raised."""
    result = ScanResult()
    if not directory.is_dir():
        logger.debug("plugin directory %s does not exist", directory)
        return result
    for path in sorted(directory.glob(ARCHIVE_GLOB)):
        try:
            result.plugins.append(read_metadata(path, provides))
        except MetadataError as e:
            logger.debug("skipping %s: %s", path, e.reason)
            result.problems.append(e)
    return result
