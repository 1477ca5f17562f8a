"""Plugins: catalog, dependency closure, archives, reconciliation."""

from .archive import drop_runtime_dependencies, find_plugins, read_metadata, runtime_provides
from .catalog import Catalog, build_catalog, plugin_names, sort_plugins, version_key
from .graph import (
    DependencyGraph,
    Direction,
    build_graph,
    dependent_plugins,
    reachable,
    required_plugins,
)
from .lifecycle import activate_plugin, deactivate_plugin
from .models import PluginRecord, ScanResult
from .reconcile import (
    DisablePlan,
    EnablePlan,
    PluginManager,
    PrunePlan,
    plan_disable,
    plan_enable,
    plan_prune,
)
from .report import format_plugin, format_plugins
from .store import EnabledPluginsStore, read_enabled_plugins, write_enabled_plugins

__all__ = [
    "Catalog",
    "DependencyGraph",
    "Direction",
    "DisablePlan",
    "EnablePlan",
    "EnabledPluginsStore",
    "PluginManager",
    "PluginRecord",
    "PrunePlan",
    "ScanResult",
    "activate_plugin",
    "build_catalog",
    "build_graph",
    "deactivate_plugin",
    "dependent_plugins",
    "drop_runtime_dependencies",
    "find_plugins",
    "format_plugin",
    "format_plugins",
    "plan_disable",
    "plan_enable",
    "plan_prune",
    "plugin_names",
    "reachable",
    "read_enabled_plugins",
    "read_metadata",
    "required_plugins",
    "runtime_provides",
    "sort_plugins",
    "version_key",
    "write_enabled_plugins",
]
