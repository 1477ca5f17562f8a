"""Dependency graph over catalog names, and reachability closure.

Edges follow the declared ``dependencies`` of each catalog record. In the
``FORWARD`` direction ``a -> b`` means "a requires b"; ``REVERSE`` flips
every edge so a traversal finds dependents instead. Cycles are allowed:
closure is plain reachability, nothing here needs a topological order.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .catalog import Catalog

logger = logging.getLogger(__name__)


class Direction(Enum):
    FORWARD = "forward"
    REVERSE = "reverse"


@dataclass
class DependencyGraph:
    direction: Direction
    edges: dict[str, list[str]] = field(default_factory=dict)

    @property
    def nodes(self) -> frozenset[str]:
        return frozenset(self.edges)

    def successors(self, name: str) -> list[str]:
        return self.edges.get(name, [])


def build_graph(catalog: Catalog, direction: Direction = Direction.FORWARD) -> DependencyGraph:
    """Build a graph whose nodes are exactly the catalog's names.

    Dependencies naming plugins outside the catalog produce no edge.
    """
    edges: dict[str, list[str]] = {name: [] for name in catalog}
    for record in catalog.values():
        for dep in record.dependencies:
            if dep not in edges:
                logger.debug("%s depends on %s, which is not in the catalog", record.name, dep)
                continue
            src, dst = (record.name, dep) if direction is Direction.FORWARD else (dep, record.name)
            if dst not in edges[src]:
                edges[src].append(dst)
    return DependencyGraph(direction=direction, edges=edges)


def reachable(graph: DependencyGraph, seeds: Iterable[str]) -> frozenset[str]:
    """All names reachable from any seed, seeds included (breadth-first)."""
    seen: set[str] = set()
    queue = deque(sorted(set(seeds)))
    while queue:
        name = queue.popleft()
        if name in seen:
            continue
        seen.add(name)
        queue.extend(n for n in graph.successors(name) if n not in seen)
    return frozenset(seen)


def required_plugins(catalog: Catalog, names: Iterable[str]) -> frozenset[str]:
    """The given names plus everything they transitively depend on."""
    return reachable(build_graph(catalog, Direction.FORWARD), names)


def dependent_plugins(catalog: Catalog, names: Iterable[str]) -> frozenset[str]:
    """The given names plus everything that transitively depends on them."""
    return reachable(build_graph(catalog, Direction.REVERSE), names)
