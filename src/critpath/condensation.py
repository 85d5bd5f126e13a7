"""Contract each strongly connected component to a single vertex."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from critpath import scc
from critpath.graph import Graph
from critpath.metrics import Metrics

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

__all__ = ["build_condensation", "condense"]


def build_condensation(
    graph: Graph,
    comp_id: Sequence[int],
    comp_count: int,
    metrics: Metrics | None = None,
) -> Graph:
    """Build the condensation DAG of ``graph``.

    The result has one vertex per component and at most one edge per ordered
    pair of distinct components. When several original edges join the same
    pair, the weight of the first one met in vertex/adjacency order is kept
    (not the min, max or sum). Edges inside a component are dropped.

    Args:
        graph: Original graph.
        comp_id: Component index of every vertex, as in SCCResult.comp_id.
        comp_count: Number of components.
        metrics: Optional sink; only the elapsed time is recorded.

    Returns:
        New directed Graph with ``comp_count`` vertices. It is acyclic
        whenever ``comp_id`` is a true SCC partition of ``graph``.
    """
    m = metrics if metrics is not None else Metrics()
    dag = Graph(comp_count, directed=True)
    seen = set[tuple[int, int]]()

    with m.timed():
        for u, v, w in graph.edges():
            cu = comp_id[u]
            cv = comp_id[v]
            if cu == cv or (cu, cv) in seen:
                continue
            seen.add((cu, cv))
            dag.add_edge(cu, cv, w)

    logger.debug(f"Condensation: {comp_count} components, {dag.edge_count} edges")
    return dag


def condense(graph: Graph, metrics: Metrics | None = None) -> tuple[scc.SCCResult, Graph]:
    """Find the SCCs of ``graph`` and build its condensation in one call."""
    result = scc.find_sccs(graph, metrics)
    return result, build_condensation(graph, result.comp_id, result.count, metrics)
