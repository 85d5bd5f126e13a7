"""Adjacency-list graph shared by every algorithm."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

import networkx as nx

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

__all__ = ["Edge", "Graph"]


class Edge(NamedTuple):
    """Outgoing edge stored in a vertex's adjacency list."""

    to: int
    weight: int

    def __str__(self) -> str:
        return f"->{self.to}(w={self.weight})"


class Graph:
    """Directed or undirected weighted graph over vertices 0..n-1.

    Undirected graphs store both directions at insertion time, so the
    adjacency is always a directed view. Endpoints, weights and duplicates
    are not validated; callers (e.g. the loader) are responsible for that.
    """

    _n: int
    _directed: bool
    _adj: list[list[Edge]]

    def __init__(self, n: int, directed: bool = True) -> None:
        self._n = n
        self._directed = directed
        self._adj = [list[Edge]() for _ in range(n)]

    @classmethod
    def from_edges(
        cls, n: int, edges: Iterable[tuple[int, int, int]], directed: bool = True
    ) -> Graph:
        """Build a graph from (u, v, w) triples in order."""
        graph = cls(n, directed)
        for u, v, w in edges:
            graph.add_edge(u, v, w)
        return graph

    @property
    def n(self) -> int:
        return self._n

    @property
    def directed(self) -> bool:
        return self._directed

    @property
    def edge_count(self) -> int:
        """Number of stored directed edges (undirected edges count twice)."""
        return sum(len(edges) for edges in self._adj)

    def add_edge(self, u: int, v: int, w: int) -> None:
        self._adj[u].append(Edge(v, w))
        if not self._directed:
            self._adj[v].append(Edge(u, w))

    def neighbors(self, u: int) -> list[Edge]:
        return self._adj[u]

    def adjacency(self) -> list[list[Edge]]:
        return self._adj

    def edges(self) -> Iterator[tuple[int, int, int]]:
        """Yield stored edges as (u, v, w) in vertex then adjacency order."""
        for u, out_edges in enumerate(self._adj):
            for edge in out_edges:
                yield u, edge.to, edge.weight

    def to_networkx(self) -> nx.MultiDiGraph[int]:
        """Convert the stored adjacency to a NetworkX multigraph.

        Parallel edges survive as separate keys; each carries a ``weight``
        attribute.
        """
        g: nx.MultiDiGraph[int] = nx.MultiDiGraph()
        g.add_nodes_from(range(self._n))
        for u, v, w in self.edges():
            g.add_edge(u, v, weight=w)
        return g

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return f"Graph(n={self._n}, {kind}, edges={self.edge_count})"
