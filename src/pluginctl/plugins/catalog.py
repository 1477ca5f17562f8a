"""Plugin catalog: deduplicated name -> record mapping.

When a name appears more than once the record with the greatest version
wins. With the default ``lexical`` ordering versions are compared as plain
strings, so ``"9"`` beats ``"10"``. ``natural`` ordering compares digit runs
numerically instead. Equal versions fall back to the archive location so
the winner is always the same for the same input.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping

from .models import PluginRecord

_DIGITS = re.compile(r"(\d+)")


def version_key(version: str, ordering: str = "lexical") -> tuple:
    if ordering == "natural":
        return tuple(
            (1, int(part), "") if part.isdigit() else (0, 0, part)
            for part in _DIGITS.split(version)
            if part
        )
    return (version,)


def _sort_key(record: PluginRecord, ordering: str) -> tuple:
    return (record.name, version_key(record.version, ordering), str(record.location))


def sort_plugins(records: Iterable[PluginRecord], ordering: str = "lexical") -> list[PluginRecord]:
    """Sort by (name, version), dropping records that are exact duplicates."""
    result: list[PluginRecord] = []
    for record in sorted(records, key=lambda r: _sort_key(r, ordering)):
        if result and (result[-1].name, result[-1].version) == (record.name, record.version):
            continue
        result.append(record)
    return result


class Catalog(Mapping[str, PluginRecord]):
    """Immutable mapping of plugin name to its winning record."""

    def __init__(self, records: Mapping[str, PluginRecord] | None = None) -> None:
        self._records = dict(sorted((records or {}).items()))

    def __getitem__(self, name: str) -> PluginRecord:
        return self._records[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Catalog({', '.join(r.label for r in self._records.values())})"

    @property
    def records(self) -> list[PluginRecord]:
        return list(self._records.values())

    def names(self) -> frozenset[str]:
        return frozenset(self._records)

    def lookup(self, names: Iterable[str]) -> list[PluginRecord]:
        """Records for the requested names, in name order. Unknown names are skipped."""
        wanted = set(names)
        return [r for name, r in self._records.items() if name in wanted]


def build_catalog(*sources: Iterable[PluginRecord], ordering: str = "lexical") -> Catalog:
    """Merge one or more record lists, keeping the highest version of each name."""
    winners: dict[str, PluginRecord] = {}
    for source in sources:
        for record in source:
            current = winners.get(record.name)
            if current is None or _sort_key(current, ordering) < _sort_key(record, ordering):
                winners[record.name] = record
    return Catalog(winners)


def plugin_names(records: Iterable[PluginRecord]) -> list[str]:
    return [r.name for r in records]
