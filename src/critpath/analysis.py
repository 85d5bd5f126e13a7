"""Full pipeline: SCCs -> condensation -> topological order -> DAG paths."""

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import TYPE_CHECKING, Any

from critpath import condensation, paths, scc, topo
from critpath.metrics import Metrics

if TYPE_CHECKING:
    from critpath.graph import Graph
    from critpath.paths import PathResult
    from critpath.scc import SCCResult

logger = logging.getLogger(__name__)

__all__ = ["StageName", "AnalysisReport", "analyze"]


class StageName(enum.StrEnum):
    """Pipeline stage names, in execution order."""

    SCC = "scc"
    CONDENSATION = "condensation"
    TOPO = "topo"
    SHORTEST = "shortest"
    LONGEST = "longest"


@dataclasses.dataclass(frozen=True)
class AnalysisReport:
    """Everything computed for one graph and source vertex.

    Path results are expressed over condensation vertices (components).
    """

    graph: Graph
    source: int
    scc: SCCResult
    condensation: Graph
    order: list[int]
    shortest: PathResult
    longest: PathResult
    critical_target: int
    critical_path: list[int]
    metrics: dict[StageName, Metrics]

    @property
    def source_component(self) -> int:
        return self.scc.comp_id[self.source]

    @property
    def critical_length(self) -> int:
        length = self.longest.dist[self.critical_target]
        assert length is not None, "critical target must be reached"
        return length

    def shortest_paths_by_target(self) -> dict[int, list[int]]:
        """Shortest component path to every reached component."""
        return {
            target: paths.reconstruct_path(target, self.shortest)
            for target in self.shortest.reachable()
        }

    def expanded_order(self) -> list[list[int]]:
        """Original vertices grouped by component, components in topological order."""
        return [list(self.scc.components[c]) for c in self.order]

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable view of the report."""
        return {
            "n": self.graph.n,
            "directed": self.graph.directed,
            "source": self.source,
            "source_component": self.source_component,
            "components": self.scc.components,
            "comp_id": self.scc.comp_id,
            "condensation": [
                {"u": u, "v": v, "w": w} for u, v, w in self.condensation.edges()
            ],
            "topological_order": self.order,
            "shortest": {
                "dist": self.shortest.dist,
                "parent": self.shortest.parent,
                "paths": {str(t): p for t, p in self.shortest_paths_by_target().items()},
            },
            "longest": {
                "dist": self.longest.dist,
                "parent": self.longest.parent,
            },
            "critical": {
                "target": self.critical_target,
                "length": self.critical_length,
                "path": self.critical_path,
            },
            "metrics": {str(name): m.summary() for name, m in self.metrics.items()},
        }


def analyze(graph: Graph, source: int) -> AnalysisReport:
    """Run every stage on ``graph`` with paths measured from ``source``.

    Each stage gets its own Metrics instance. The topological order is
    computed once and reused by both path passes, so their metrics only
    count relaxations.

    Args:
        graph: Input graph (any shape; cycles are condensed away).
        source: Original vertex to measure paths from.
    """
    stage_metrics = {name: Metrics() for name in StageName}

    scc_result = scc.find_sccs(graph, stage_metrics[StageName.SCC])

    dag = condensation.build_condensation(
        graph, scc_result.comp_id, scc_result.count, stage_metrics[StageName.CONDENSATION]
    )

    order = topo.topological_sort(dag, stage_metrics[StageName.TOPO])
    logger.debug(f"topo: {order}")

    source_comp = scc_result.comp_id[source]
    shortest = paths.shortest_paths(
        dag, source_comp, stage_metrics[StageName.SHORTEST], order=order
    )
    longest = paths.longest_paths(dag, source_comp, stage_metrics[StageName.LONGEST], order=order)
    target = paths.find_critical_target(longest)
    logger.debug(f"critical target: component {target}")

    return AnalysisReport(
        graph=graph,
        source=source,
        scc=scc_result,
        condensation=dag,
        order=order,
        shortest=shortest,
        longest=longest,
        critical_target=target,
        critical_path=paths.reconstruct_path(target, longest),
        metrics=stage_metrics,
    )
