from __future__ import annotations

import json
import logging
import pathlib
import sys
from collections.abc import Callable, Generator
from typing import Any

import click.testing
import pytest

from critpath.config import io as config_io
from critpath.graph import Graph

# Add tests directory to sys.path so helpers.py can be imported
_tests_dir = pathlib.Path(__file__).parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))

# Writes a graph document to a JSON file and returns its path
GraphWriter = Callable[..., pathlib.Path]

# Edges of the reference DAG used across tests (u, v, w)
SAMPLE_DAG_EDGES = [(0, 1, 2), (0, 2, 5), (1, 2, 1), (1, 3, 2), (2, 3, 1), (3, 4, 3)]
# Two 2-cycles (0,1) and (2,3) chained into the path 3 -> 4 -> 5
TWO_CYCLE_EDGES = [(0, 1, 1), (1, 0, 1), (2, 3, 1), (3, 2, 1), (1, 2, 1), (3, 4, 1), (4, 5, 1)]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    """Keep user and working-directory config files out of every test.

    HOME points at an empty directory and the working directory is a fresh
    tmp dir, so only config written by the test itself is picked up.
    """
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv(config_io.CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(work)
    return work


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None]:
    """Drop handlers and level set on the root logger by CLI invocations."""
    root = logging.getLogger()
    before = set(root.handlers)
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def runner() -> click.testing.CliRunner:
    """Create a CLI runner for testing."""
    return click.testing.CliRunner()


@pytest.fixture
def sample_dag() -> Graph:
    """Five-vertex DAG with shortest distances [0, 2, 3, 4, 7] from vertex 0."""
    return Graph.from_edges(5, SAMPLE_DAG_EDGES)


@pytest.fixture
def two_cycle_graph() -> Graph:
    """Two 2-cycles (0,1) and (2,3) chained into the path 3 -> 4 -> 5."""
    return Graph.from_edges(6, TWO_CYCLE_EDGES)


@pytest.fixture
def write_graph(tmp_path: pathlib.Path) -> GraphWriter:
    """Factory writing a graph file: write_graph(n, edges, **extra) -> path."""

    def _write(
        n: int,
        edges: list[tuple[int, int, int]],
        name: str = "graph.json",
        **extra: Any,
    ) -> pathlib.Path:
        doc: dict[str, Any] = {
            "n": n,
            "edges": [{"u": u, "v": v, "w": w} for u, v, w in edges],
            **extra,
        }
        path = tmp_path / name
        path.write_text(json.dumps(doc))
        return path

    return _write
