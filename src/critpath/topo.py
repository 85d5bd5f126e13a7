"""Topological ordering via Kahn's algorithm."""

from __future__ import annotations

import collections
import logging
from typing import TYPE_CHECKING

from critpath import exceptions
from critpath.metrics import Metrics

if TYPE_CHECKING:
    from critpath.graph import Graph

logger = logging.getLogger(__name__)

__all__ = ["topological_sort", "is_dag"]


def topological_sort(graph: Graph, metrics: Metrics | None = None) -> list[int]:
    """Return an order of all vertices in which every edge points forward.

    Zero in-degree vertices are seeded in index order and processed FIFO, so
    the result is deterministic for a given adjacency.

    Args:
        graph: Graph to order.
        metrics: Optional sink; receives one ``topo_pushes`` per enqueue and
            one ``topo_pops`` per dequeue.

    Returns:
        List of vertex indices in topological order.

    Raises:
        CyclicGraphError: If the graph contains a cycle. No partial order is
            returned.

    Example:
        >>> g = Graph.from_edges(3, [(2, 0, 1), (0, 1, 1)])
        >>> topological_sort(g)
        [2, 0, 1]
    """
    m = metrics if metrics is not None else Metrics()
    n = graph.n
    adj = graph.adjacency()

    with m.timed():
        indegree = [0] * n
        for out_edges in adj:
            for edge in out_edges:
                indegree[edge.to] += 1

        queue = collections.deque[int]()
        for v in range(n):
            if indegree[v] == 0:
                queue.append(v)
                m.topo_pushes += 1

        order = list[int]()
        while queue:
            v = queue.popleft()
            m.topo_pops += 1
            order.append(v)
            for edge in adj[v]:
                indegree[edge.to] -= 1
                if indegree[edge.to] == 0:
                    queue.append(edge.to)
                    m.topo_pushes += 1

    if len(order) != n:
        blocked = [v for v in range(n) if indegree[v] > 0]
        logger.debug(f"Cycle detected: {len(blocked)} of {n} vertices blocked")
        raise exceptions.CyclicGraphError(n, blocked)

    return order


def is_dag(graph: Graph) -> bool:
    """Check whether ``graph`` is acyclic."""
    try:
        topological_sort(graph)
    except exceptions.CyclicGraphError:
        return False
    return True
