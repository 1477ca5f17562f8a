"""Reconcile the active plugins directory with the explicitly enabled set.

Planning (``plan_enable``, ``plan_prune``, ``plan_disable``) is pure and
works on catalogs and name sets. ``PluginManager`` scans the directories,
applies a plan through the lifecycle helpers and persists the explicit set.

Ordering within one run: every activation finishes before the explicit set
is written, and the write happens before prune deletes anything. If a copy
fails the run aborts with the previous explicit set still on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from rich.markup import escape

from pluginctl.core.config import Config
from pluginctl.core.output import console

from .archive import drop_runtime_dependencies, find_plugins, runtime_provides
from .catalog import Catalog, build_catalog, plugin_names, version_key
from .graph import dependent_plugins, required_plugins
from .lifecycle import activate_plugin, deactivate_plugin
from .models import PluginRecord
from .report import format_plugins
from .store import EnabledPluginsStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnablePlan:
    to_activate: list[PluginRecord]
    missing: frozenset[str]
    new_explicit: frozenset[str]


@dataclass(frozen=True)
class PrunePlan:
    to_deactivate: list[PluginRecord]


@dataclass(frozen=True)
class DisablePlan:
    to_deactivate: frozenset[str]
    missing: frozenset[str]
    new_explicit: frozenset[str]


def plan_enable(
    requested: Iterable[str],
    catalog: Catalog,
    explicit: Iterable[str],
    active: Catalog,
) -> EnablePlan:
    requested = frozenset(requested)
    missing = requested - catalog.names()
    new_explicit = catalog.names() & (frozenset(explicit) | requested)
    required = required_plugins(catalog, new_explicit)
    to_activate = catalog.lookup(required - active.names())
    return EnablePlan(to_activate=to_activate, missing=missing, new_explicit=new_explicit)


def plan_prune(
    catalog: Catalog,
    explicit: Iterable[str],
    active_records: Iterable[PluginRecord],
    ordering: str = "lexical",
) -> PrunePlan:
    """Every active archive that is not the kept copy of a required plugin.

    *active_records* is the raw scan of the active directory, so older
    duplicates of a required plugin are pruned as well.
    """
    active_records = list(active_records)
    required = required_plugins(catalog, explicit)
    keep = set(build_catalog(active_records, ordering=ordering).lookup(required))
    to_deactivate = sorted(
        (r for r in active_records if r not in keep),
        key=lambda r: (r.name, version_key(r.version, ordering), str(r.location)),
    )
    return PrunePlan(to_deactivate=to_deactivate)


def plan_disable(
    requested: Iterable[str],
    active: Catalog,
    explicit: Iterable[str],
) -> DisablePlan:
    """Drop the requested plugins and their dependents from the explicit set.

    Only names that were explicitly enabled are reported; anything active
    purely as a dependency is left for the following prune to decide.
    """
    requested = frozenset(requested)
    explicit = frozenset(explicit)
    missing = requested - active.names()
    candidates = dependent_plugins(active, requested & active.names())
    to_deactivate = candidates & explicit
    return DisablePlan(
        to_deactivate=to_deactivate,
        missing=missing,
        new_explicit=explicit - to_deactivate,
    )


def _names(names: Iterable[str]) -> str:
    return ", ".join(escape(n) for n in sorted(names))


class PluginManager:
    """Runs enable/disable/prune/list against the configured directories.

    Not safe to run concurrently with another invocation on the same
    directories: there is no lock around the active directory or the
    enabled plugins file.
    """

    def __init__(self, config: Config, store: EnabledPluginsStore | None = None) -> None:
        self.config = config
        self.store = store or EnabledPluginsStore(config.active_dir)
        self._reported: set[Path] = set()
        self._known: set[str] = set()

    def _provides(self, name: str) -> bool:
        return runtime_provides(name, self.config.runtime_provided)

    def _scan(self, directory: Path) -> list[PluginRecord]:
        result = find_plugins(directory)
        fresh = [p for p in result.problems if p.location not in self._reported]
        if fresh:
            console.print("[yellow]Warning: problem reading some plugins:[/yellow]")
            for problem in fresh:
                console.print(f"  [yellow]{escape(str(problem))}[/yellow]")
            self._reported.update(p.location for p in fresh)
        self._known.update(plugin_names(result.plugins))
        return drop_runtime_dependencies(result.plugins, self._provides, self._known)

    def _catalog(self, records: Iterable[PluginRecord]) -> Catalog:
        return build_catalog(records, ordering=self.config.version_ordering)

    def available(self) -> list[PluginRecord]:
        return self._scan(self.config.dist_dir)

    def active(self) -> list[PluginRecord]:
        return self._scan(self.config.active_dir)

    def _warn_missing(self, missing: frozenset[str]) -> None:
        if missing:
            console.print(
                "[yellow]Warning: the following plugins could not be found: "
                f"{_names(missing)}[/yellow]"
            )

    def enable(self, names: Iterable[str]) -> EnablePlan:
        catalog = self._catalog(self.available())
        explicit = self.store.load()
        active = self._catalog(self.active())
        plan = plan_enable(names, catalog, explicit, active)
        self._warn_missing(plan.missing)

        if not plan.to_activate:
            console.print("No plugins to enable.")
            if plan.new_explicit != explicit:
                self.store.save(plan.new_explicit)
            return plan

        console.print(f"Will enable: {_names(r.name for r in plan.to_activate)}")
        for record in plan.to_activate:
            activate_plugin(record, self.config.active_dir)
        self.store.save(plan.new_explicit)
        self.prune()
        return plan

    def prune(self) -> PrunePlan:
        explicit = self.store.load()
        catalog = self._catalog(self.available())
        plan = plan_prune(catalog, explicit, self.active(), self.config.version_ordering)
        if not plan.to_deactivate:
            console.print("No unnecessary plugins found.")
            return plan
        console.print(
            f"Disabling unnecessary plugins: {_names({r.name for r in plan.to_deactivate})}"
        )
        for record in plan.to_deactivate:
            deactivate_plugin(record)
        return plan

    def disable(self, names: Iterable[str]) -> DisablePlan:
        active = self._catalog(self.active())
        explicit = self.store.load()
        plan = plan_disable(names, active, explicit)
        self._warn_missing(plan.missing)

        if plan.to_deactivate:
            console.print(f"Will disable: {_names(plan.to_deactivate)}")
        else:
            console.print("No plugins to disable.")
        if plan.new_explicit != explicit:
            self.store.save(plan.new_explicit)
        self.prune()
        return plan

    def list_plugins(self, pattern: str = ".*", compact: bool = False) -> int:
        """Print matching plugins. Returns how many were shown."""
        available = self.available()
        explicit = self.store.load()
        lines = format_plugins(
            available,
            self.active(),
            explicit,
            pattern=pattern,
            compact=compact,
            ordering=self.config.version_ordering,
        )
        for line in lines:
            console.print(line)
        logger.debug("listed %d of %d available plugins", len(lines), len(available))
        return len(lines)
