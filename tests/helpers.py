"""Graph builders and assertions shared by tests."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import networkx as nx

from critpath.graph import Graph

if TYPE_CHECKING:
    from collections.abc import Sequence


def random_graph(seed: int, n: int, m: int, max_weight: int = 9) -> Graph:
    """Random directed multigraph with self-loops allowed."""
    rng = random.Random(seed)
    graph = Graph(n)
    for _ in range(m):
        graph.add_edge(rng.randrange(n), rng.randrange(n), rng.randint(0, max_weight))
    return graph


def random_dag(seed: int, n: int, m: int, max_weight: int = 9) -> Graph:
    """Random DAG: edges only go from a lower to a higher position of a shuffled ranking."""
    rng = random.Random(seed)
    ranking = list(range(n))
    rng.shuffle(ranking)
    graph = Graph(n)
    for _ in range(m):
        a, b = sorted(rng.sample(range(n), 2))
        graph.add_edge(ranking[a], ranking[b], rng.randint(0, max_weight))
    return graph


def assert_topological(order: Sequence[int], graph: Graph) -> None:
    """Order is a permutation of the vertices with every edge pointing forward."""
    assert sorted(order) == list(range(graph.n))
    position = {v: i for i, v in enumerate(order)}
    for u, v, _ in graph.edges():
        assert position[u] < position[v], f"edge {u}->{v} points backwards in {order}"


def path_weight(graph: Graph, path: Sequence[int], pick: str = "min") -> int:
    """Sum of weights along path, choosing the min or max parallel edge per hop."""
    total = 0
    choose = min if pick == "min" else max
    for u, v in zip(path, path[1:], strict=False):
        weights = [e.weight for e in graph.neighbors(u) if e.to == v]
        assert weights, f"{u}->{v} is not an edge"
        total += choose(weights)
    return total


def nx_sccs(graph: Graph) -> set[frozenset[int]]:
    """Reference SCC partition from NetworkX."""
    return {frozenset(c) for c in nx.strongly_connected_components(graph.to_networkx())}
