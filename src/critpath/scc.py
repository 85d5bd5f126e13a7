"""Strongly connected components via Tarjan's algorithm."""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING

from critpath.metrics import Metrics

if TYPE_CHECKING:
    from critpath.graph import Graph

logger = logging.getLogger(__name__)

__all__ = ["SCCResult", "find_sccs"]

_UNVISITED = -1


@dataclasses.dataclass(frozen=True)
class SCCResult:
    """Partition of a graph's vertices into strongly connected components.

    Attributes:
        components: components[k] lists the vertices of the k-th SCC, in the
            order they were popped off the Tarjan stack. Components appear in
            DFS finish order, i.e. reverse topological order of the
            condensation.
        comp_id: comp_id[v] is the index of the component containing v.
    """

    components: list[list[int]]
    comp_id: list[int]

    @property
    def count(self) -> int:
        return len(self.components)

    def component_of(self, vertex: int) -> list[int]:
        return self.components[self.comp_id[vertex]]


def find_sccs(graph: Graph, metrics: Metrics | None = None) -> SCCResult:
    """Compute the SCCs of ``graph`` in O(V + E).

    The depth-first search runs on an explicit frame stack instead of the
    Python call stack, visiting out-edges in adjacency order and starting a
    new tree from every still-unvisited vertex in index order. This yields
    exactly the traversal of the recursive formulation.

    Args:
        graph: Graph to partition. Undirected graphs are accepted (their SCCs
            are the connected components).
        metrics: Optional sink; receives one ``dfs_visits`` per vertex entered
            and one ``dfs_edges`` per out-edge inspected.

    Returns:
        SCCResult with the component list and per-vertex component ids.
    """
    m = metrics if metrics is not None else Metrics()
    n = graph.n
    adj = graph.adjacency()

    index = [_UNVISITED] * n
    lowlink = [0] * n
    on_stack = [False] * n
    stack = list[int]()
    components = list[list[int]]()
    counter = 0

    with m.timed():
        for root in range(n):
            if index[root] != _UNVISITED:
                continue

            # Each frame is [vertex, position of the next out-edge to inspect]
            frames: list[list[int]] = []

            index[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack[root] = True
            m.dfs_visits += 1
            frames.append([root, 0])

            while frames:
                frame = frames[-1]
                v, pos = frame
                out_edges = adj[v]

                if pos < len(out_edges):
                    frame[1] = pos + 1
                    m.dfs_edges += 1
                    w = out_edges[pos].to
                    if index[w] == _UNVISITED:
                        index[w] = lowlink[w] = counter
                        counter += 1
                        stack.append(w)
                        on_stack[w] = True
                        m.dfs_visits += 1
                        frames.append([w, 0])
                    elif on_stack[w]:
                        lowlink[v] = min(lowlink[v], index[w])
                    continue

                # All out-edges of v done: v is finished
                frames.pop()
                if lowlink[v] == index[v]:
                    component = list[int]()
                    while True:
                        w = stack.pop()
                        on_stack[w] = False
                        component.append(w)
                        if w == v:
                            break
                    components.append(component)
                if frames:
                    parent = frames[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[v])

    comp_id = [0] * n
    for cid, component in enumerate(components):
        for v in component:
            comp_id[v] = cid

    logger.debug(f"Found {len(components)} SCCs in graph with {n} vertices")
    return SCCResult(components=components, comp_id=comp_id)
