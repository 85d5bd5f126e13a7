from __future__ import annotations

import io
from typing import TYPE_CHECKING

import pytest

from critpath import analysis, console, paths, scc
from critpath.graph import Graph
from critpath.metrics import Metrics

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def plain(out: io.StringIO) -> console.Console:
    return console.Console(stream=out, color=False)


# =============================================================================
# Formatting helpers
# =============================================================================


def test_format_vertices() -> None:
    assert console.format_vertices([]) == "[]"
    assert console.format_vertices([3, 1, 2]) == "[3, 1, 2]"


def test_format_distance() -> None:
    assert console.format_distance(None) == "INF"
    assert console.format_distance(0) == "0"
    assert console.format_distance(-4) == "-4"


def test_color_disabled_for_non_tty(out: io.StringIO) -> None:
    assert console.Console(stream=out).use_color is False


def test_no_color_env_disables_color(
    monkeypatch: pytest.MonkeyPatch, mocker: MockerFixture
) -> None:
    stream = mocker.Mock()
    stream.isatty.return_value = True
    monkeypatch.setenv("NO_COLOR", "1")
    assert console.Console(stream=stream).use_color is False
    monkeypatch.delenv("NO_COLOR")
    assert console.Console(stream=stream).use_color is True


def test_forced_color_wraps_text(out: io.StringIO) -> None:
    console.Console(stream=out, color=True).section("Title", first=True)
    assert "\033[" in out.getvalue()
    assert "=== Title ===" in out.getvalue()


# =============================================================================
# Sections
# =============================================================================


def test_section_separates_with_blank_line(plain: console.Console, out: io.StringIO) -> None:
    plain.section("A", first=True)
    plain.section("B")
    assert out.getvalue() == "=== A ===\n\n=== B ===\n"


def test_components(plain: console.Console, out: io.StringIO) -> None:
    graph = Graph.from_edges(3, [(0, 1, 1), (1, 0, 1)])
    metrics = Metrics()
    result = scc.find_sccs(graph, metrics)

    plain.components(result, metrics)

    text = out.getvalue()
    assert text.startswith("=== Strongly Connected Components (SCC) ===\n")
    assert "(size=2): [1, 0]" in text
    assert "(size=1): [2]" in text
    assert "Tarjan: dfsVisits=3, dfsEdges=2, time=" in text
    assert " ms\n" in text


def test_condensation_lines(plain: console.Console, out: io.StringIO) -> None:
    dag = Graph.from_edges(3, [(0, 1, 2), (0, 2, 7)])
    plain.condensation(dag)
    lines = out.getvalue().splitlines()
    assert lines[-3:] == ["C0 -> C1(w=2) C2(w=7)", "C1 ->", "C2 ->"]


def test_topological_order_with_components(plain: console.Console, out: io.StringIO) -> None:
    metrics = Metrics()
    metrics.topo_pushes = 2
    metrics.topo_pops = 2
    plain.topological_order([1, 0], [[5, 4], [3]], metrics)

    text = out.getvalue()
    assert "[1, 0]\nDerived order of original vertices:\n" in text
    assert "Component 1 -> [3]\nComponent 0 -> [5, 4]\n" in text
    assert "Kahn: pushes=2, pops=2" in text


def test_distances_show_inf_and_paths(plain: console.Console, out: io.StringIO) -> None:
    graph = Graph.from_edges(3, [(0, 1, 5)])
    result = paths.shortest_paths(graph, 0)

    plain.distances(result)

    text = out.getvalue()
    assert "dist[0] = 0\ndist[1] = 5\ndist[2] = INF\n" in text
    assert "Shortest path to component 1: [0, 1]" in text
    assert "component 2:" not in text


def test_distances_without_paths(plain: console.Console, out: io.StringIO) -> None:
    result = paths.longest_paths(Graph.from_edges(2, [(0, 1, 1)]), 0)
    plain.distances(result, Metrics(), show_paths=False)

    text = out.getvalue()
    assert "Relaxations (longest) = 0" in text
    assert "path to component" not in text


def test_precision_controls_timings(out: io.StringIO) -> None:
    metrics = Metrics()
    metrics.elapsed_ns = 1_234_567
    console.Console(stream=out, color=False, precision=1).topological_order([0], metrics=metrics)
    assert "time=1.2 ms" in out.getvalue()


def test_critical(plain: console.Console, out: io.StringIO) -> None:
    plain.critical(4, 9, [0, 2, 3, 4])
    assert out.getvalue() == (
        "Critical path (components): [0, 2, 3, 4]\n"
        "Critical path length = 9\n"
        "Critical target = component 4\n"
    )


# =============================================================================
# Full report
# =============================================================================


def test_report_sections_in_order(
    plain: console.Console, out: io.StringIO, two_cycle_graph: Graph
) -> None:
    plain.report(analysis.analyze(two_cycle_graph, 0))
    text = out.getvalue()

    headers = [
        "=== Strongly Connected Components (SCC) ===",
        "=== Condensation DAG ===",
        "=== Topological order of components ===",
        "=== Shortest paths on condensation DAG ===",
        "=== Longest paths (critical path) on condensation DAG ===",
    ]
    positions = [text.index(h) for h in headers]
    assert positions == sorted(positions)
    assert "Critical path length = 3" in text
    assert "Relaxations (longest) = " in text


def test_report_source_line(plain: console.Console, out: io.StringIO, sample_dag: Graph) -> None:
    report = analysis.analyze(sample_dag, 0)
    plain.report(report, show_paths=False)
    assert f"Source vertex = 0, component = {report.source_component}" in out.getvalue()
    assert "Shortest path to component" not in out.getvalue()
