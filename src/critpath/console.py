from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

from critpath import paths
from critpath.analysis import StageName

if TYPE_CHECKING:
    from critpath.analysis import AnalysisReport
    from critpath.graph import Graph
    from critpath.metrics import Metrics
    from critpath.scc import SCCResult

# ANSI color codes
_COLORS = {
    "reset": "\033[0m",
    "bold": "\033[1m",
    "dim": "\033[2m",
    "green": "\033[32m",
    "cyan": "\033[36m",
}

INF_LABEL = "INF"


def _supports_color(stream: TextIO) -> bool:
    """Check if terminal supports color output."""
    if not hasattr(stream, "isatty"):
        return False
    if not stream.isatty():
        return False
    # Check for NO_COLOR environment variable
    return not os.environ.get("NO_COLOR")


def format_vertices(vertices: list[int]) -> str:
    return "[" + ", ".join(str(v) for v in vertices) + "]"


def format_distance(dist: int | None) -> str:
    return INF_LABEL if dist is None else str(dist)


class Console:
    """Text reporter for analysis results."""

    stream: TextIO
    use_color: bool
    precision: int

    def __init__(
        self,
        stream: TextIO | None = None,
        color: bool | None = None,
        precision: int = 3,
    ) -> None:
        """Initialize console.

        Args:
            stream: Output stream (default: sys.stdout)
            color: Force color on/off (default: auto-detect)
            precision: Decimal places for millisecond timings
        """
        self.stream = stream or sys.stdout
        self.use_color = color if color is not None else _supports_color(self.stream)
        self.precision = precision

    def _color(self, text: str, *codes: str) -> str:
        """Apply color codes to text."""
        if not self.use_color:
            return text
        prefix = "".join(_COLORS.get(c, "") for c in codes)
        return f"{prefix}{text}{_COLORS['reset']}"

    def _print(self, line: str = "") -> None:
        print(line, file=self.stream, flush=True)

    def _ms(self, metrics: Metrics) -> str:
        return f"{metrics.elapsed_ms:.{self.precision}f} ms"

    def section(self, title: str, *, first: bool = False) -> None:
        """Print a section header."""
        if not first:
            self._print()
        self._print(self._color(f"=== {title} ===", "cyan", "bold"))

    def components(self, result: SCCResult, metrics: Metrics | None = None) -> None:
        """Print each SCC with its size."""
        self.section("Strongly Connected Components (SCC)", first=True)
        for cid, component in enumerate(result.components):
            self._print(f"Component {cid} (size={len(component)}): {format_vertices(component)}")
        if metrics is not None:
            self._print(
                self._color(
                    f"Tarjan: dfsVisits={metrics.dfs_visits}, dfsEdges={metrics.dfs_edges}, "
                    + f"time={self._ms(metrics)}",
                    "dim",
                )
            )

    def condensation(self, dag: Graph) -> None:
        """Print the condensation adjacency, one component per line."""
        self.section("Condensation DAG")
        for u, out_edges in enumerate(dag.adjacency()):
            targets = " ".join(f"C{e.to}(w={e.weight})" for e in out_edges)
            self._print(f"C{u} -> {targets}".rstrip())

    def topological_order(
        self,
        order: list[int],
        components: list[list[int]] | None = None,
        metrics: Metrics | None = None,
    ) -> None:
        """Print a component order and, if given, the vertices behind it."""
        self.section("Topological order of components")
        self._print(format_vertices(order))
        if components is not None:
            self._print("Derived order of original vertices:")
            for c in order:
                self._print(f"Component {c} -> {format_vertices(components[c])}")
        if metrics is not None:
            self._print(
                self._color(
                    f"Kahn: pushes={metrics.topo_pushes}, pops={metrics.topo_pops}, "
                    + f"time={self._ms(metrics)}",
                    "dim",
                )
            )

    def distances(
        self,
        result: paths.PathResult,
        metrics: Metrics | None = None,
        show_paths: bool = True,
    ) -> None:
        """Print dist[] for every vertex and optionally the path to each reached one."""
        kind = "longest" if result.longest else "shortest"
        for v, d in enumerate(result.dist):
            text = format_distance(d)
            self._print(f"dist[{v}] = {self._color(text, 'dim') if d is None else text}")
        if metrics is not None:
            self._print(
                self._color(
                    f"Relaxations ({kind}) = {metrics.relaxations}, time={self._ms(metrics)}",
                    "dim",
                )
            )
        if show_paths:
            name = kind.capitalize()
            for v in result.reachable():
                path = format_vertices(paths.reconstruct_path(v, result))
                self._print(f"{name} path to component {v}: {path}")

    def critical(self, target: int, length: int, path: list[int]) -> None:
        """Print the critical path and its length."""
        self._print(f"Critical path (components): {self._color(format_vertices(path), 'bold')}")
        self._print(f"Critical path length = {self._color(str(length), 'green', 'bold')}")
        self._print(f"Critical target = component {target}")

    def report(self, report: AnalysisReport, show_paths: bool = True) -> None:
        """Print the full analysis, section by section."""
        self.components(report.scc, report.metrics[StageName.SCC])
        self.condensation(report.condensation)
        self.topological_order(
            report.order, report.scc.components, report.metrics[StageName.TOPO]
        )

        self.section("Shortest paths on condensation DAG")
        self._print(f"Source vertex = {report.source}, component = {report.source_component}")
        self.distances(report.shortest, report.metrics[StageName.SHORTEST], show_paths=show_paths)

        self.section("Longest paths (critical path) on condensation DAG")
        self.critical(report.critical_target, report.critical_length, report.critical_path)
        longest_metrics = report.metrics[StageName.LONGEST]
        self._print(
            self._color(
                f"Relaxations (longest) = {longest_metrics.relaxations}, "
                + f"time={self._ms(longest_metrics)}",
                "dim",
            )
        )

