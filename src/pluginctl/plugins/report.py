"""Plugin listing with activation-status glyphs.

``[E]`` explicitly enabled, ``[e]`` active only as a dependency,
``[A]`` available but not active.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from rich.text import Text

from .catalog import plugin_names, sort_plugins
from .models import PluginRecord

GLYPH_EXPLICIT = "[E]"
GLYPH_IMPLICIT = "[e]"
GLYPH_AVAILABLE = "[A]"

_GLYPH_STYLES = {
    GLYPH_EXPLICIT: "bold green",
    GLYPH_IMPLICIT: "green",
    GLYPH_AVAILABLE: "dim",
}


def status_glyph(name: str, explicit: Iterable[str], implicit: Iterable[str]) -> str:
    is_explicit = name in set(explicit)
    is_implicit = name in set(implicit)
    if is_explicit and not is_implicit:
        return GLYPH_EXPLICIT
    if is_implicit and not is_explicit:
        return GLYPH_IMPLICIT
    return GLYPH_AVAILABLE


def format_plugin(
    record: PluginRecord,
    explicit: Iterable[str],
    implicit: Iterable[str],
    compact: bool = False,
) -> Text:
    glyph = status_glyph(record.name, explicit, implicit)
    text = Text()
    text.append(glyph, style=_GLYPH_STYLES[glyph])
    if compact:
        text.append(" ")
        text.append(record.label, style="bold")
        text.append(f": {record.description}")
        return text
    text.append(" ")
    text.append(record.name, style="bold")
    text.append(f"\n    Version:    \t{record.version}")
    if record.dependencies:
        text.append(f"\n    Dependencies:\t{', '.join(record.dependencies)}")
    text.append(f"\n    Description:\t{record.description}\n")
    return text


def format_plugins(
    available: Iterable[PluginRecord],
    active: Iterable[PluginRecord],
    explicit: Iterable[str],
    pattern: str = ".*",
    compact: bool = False,
    ordering: str = "lexical",
) -> list[Text]:
    """Render every known record whose name matches *pattern*.

    Raises ``re.error`` for an invalid pattern.
    """
    regex = re.compile(pattern)
    active = list(active)
    explicit = frozenset(explicit)
    implicit = frozenset(plugin_names(active)) - explicit
    return [
        format_plugin(record, explicit, implicit, compact)
        for record in sort_plugins([*active, *available], ordering)
        if regex.search(record.name)
    ]
