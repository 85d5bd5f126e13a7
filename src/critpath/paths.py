"""Single-source shortest and longest (critical) paths on a DAG."""

from __future__ import annotations

import dataclasses
import logging
import operator
from typing import TYPE_CHECKING

from critpath import topo
from critpath.metrics import Metrics

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from critpath.graph import Graph

logger = logging.getLogger(__name__)

__all__ = [
    "PathResult",
    "CriticalPath",
    "shortest_paths",
    "longest_paths",
    "reconstruct_path",
    "find_critical_target",
    "critical_path",
]


@dataclasses.dataclass(frozen=True)
class PathResult:
    """Distances and predecessor links from one source vertex.

    Attributes:
        source: The source vertex.
        dist: dist[v] is the best distance from source to v, or None if v is
            unreached. dist[source] is always 0.
        parent: parent[v] is the previous vertex on an optimal path to v, or
            None for the source and for unreached vertices.
        longest: True if distances are maximized rather than minimized.
    """

    source: int
    dist: list[int | None]
    parent: list[int | None]
    longest: bool = False

    def reached(self, vertex: int) -> bool:
        return self.dist[vertex] is not None

    def reachable(self) -> list[int]:
        """Reached vertices in index order (the source included)."""
        return [v for v, d in enumerate(self.dist) if d is not None]


@dataclasses.dataclass(frozen=True)
class CriticalPath:
    """End vertex, accumulated weight and vertex sequence of a critical path."""

    target: int
    length: int
    path: list[int]


def _relax_in_order(
    dag: Graph,
    source: int,
    order: Sequence[int] | None,
    metrics: Metrics | None,
    better: Callable[[int, int], bool],
    longest: bool,
) -> PathResult:
    m = metrics if metrics is not None else Metrics()
    if order is None:
        order = topo.topological_sort(dag, m)

    n = dag.n
    dist: list[int | None] = [None] * n
    parent: list[int | None] = [None] * n
    dist[source] = 0

    with m.timed():
        for v in order:
            dv = dist[v]
            if dv is None:
                continue
            for edge in dag.neighbors(v):
                candidate = dv + edge.weight
                current = dist[edge.to]
                if current is None or better(candidate, current):
                    dist[edge.to] = candidate
                    parent[edge.to] = v
                    m.relaxations += 1

    kind = "longest" if longest else "shortest"
    reached = sum(1 for d in dist if d is not None)
    logger.debug(f"DAG {kind} paths from {source}: {reached} of {n} vertices reached")
    return PathResult(source=source, dist=dist, parent=parent, longest=longest)


def shortest_paths(
    dag: Graph,
    source: int,
    metrics: Metrics | None = None,
    order: Sequence[int] | None = None,
) -> PathResult:
    """Compute shortest distances from ``source`` by DP over a topological order.

    Edge weights are assumed non-negative; this is not checked.

    Args:
        dag: Acyclic graph.
        source: Source vertex, assumed to be a valid index.
        metrics: Optional sink; receives one ``relaxations`` per improvement,
            plus the sorter's counters when ``order`` is not supplied.
        order: Precomputed topological order of ``dag``. Computed if omitted.

    Raises:
        CyclicGraphError: If ``order`` is omitted and ``dag`` has a cycle.
    """
    return _relax_in_order(dag, source, order, metrics, operator.lt, longest=False)


def longest_paths(
    dag: Graph,
    source: int,
    metrics: Metrics | None = None,
    order: Sequence[int] | None = None,
) -> PathResult:
    """Compute longest (critical) distances from ``source``.

    Same contract as shortest_paths, maximizing instead of minimizing.
    """
    return _relax_in_order(dag, source, order, metrics, operator.gt, longest=True)


def reconstruct_path(target: int, result: PathResult) -> list[int]:
    """Follow parent links from ``target`` back to the source.

    Returns the source-to-target vertex sequence. For an unreached target the
    walk stops immediately and yields ``[target]``; check
    ``result.reached(target)`` first.
    """
    path = list[int]()
    current: int | None = target
    while current is not None:
        path.append(current)
        current = result.parent[current]
    path.reverse()
    return path


def find_critical_target(result: PathResult) -> int:
    """Return the reached vertex with the largest distance.

    Ties go to the lowest index. The source is always reached, so a vertex
    is always found.
    """
    best_vertex = result.source
    best: int | None = None
    for v, d in enumerate(result.dist):
        if d is not None and (best is None or d > best):
            best = d
            best_vertex = v
    return best_vertex


def critical_path(dag: Graph, source: int, metrics: Metrics | None = None) -> CriticalPath:
    """Longest path from ``source`` to the farthest reachable vertex."""
    result = longest_paths(dag, source, metrics)
    target = find_critical_target(result)
    length = result.dist[target]
    assert length is not None, "critical target must be reached"
    return CriticalPath(target=target, length=length, path=reconstruct_path(target, result))
