"""Operation counters and timing for the graph algorithms.

Instrumentation is write-only from the algorithms' side: they increment
counters and time themselves, and never read a value back.
"""

from __future__ import annotations

import contextlib
import time
from typing import TYPE_CHECKING, TypedDict

if TYPE_CHECKING:
    from collections.abc import Generator


class MetricsSummary(TypedDict):
    """Snapshot of one Metrics instance."""

    dfs_visits: int
    dfs_edges: int
    topo_pushes: int
    topo_pops: int
    relaxations: int
    elapsed_ms: float


class Metrics:
    """Operation counters and elapsed time for one algorithm run.

    Pass an instance as the ``metrics`` argument of any algorithm; omit it
    to run uninstrumented.
    """

    dfs_visits: int
    dfs_edges: int
    topo_pushes: int
    topo_pops: int
    relaxations: int
    elapsed_ns: int

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Zero all counters and the timer."""
        self.dfs_visits = 0
        self.dfs_edges = 0
        self.topo_pushes = 0
        self.topo_pops = 0
        self.relaxations = 0
        self.elapsed_ns = 0

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    @contextlib.contextmanager
    def timed(self) -> Generator[None]:
        """Add the wall time spent inside the block to ``elapsed_ns``.

        Usage:
            with metrics.timed():
                ...
        """
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self.elapsed_ns += time.perf_counter_ns() - start

    def summary(self) -> MetricsSummary:
        return MetricsSummary(
            dfs_visits=self.dfs_visits,
            dfs_edges=self.dfs_edges,
            topo_pushes=self.topo_pushes,
            topo_pops=self.topo_pops,
            relaxations=self.relaxations,
            elapsed_ms=self.elapsed_ms,
        )

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v}" for k, v in self.summary().items())
        return f"Metrics({fields})"

