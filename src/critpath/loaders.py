"""JSON graph file loader.

File format::

    {
        "directed": true,
        "n": 5,
        "edges": [{"u": 0, "v": 1, "w": 2}, ...],
        "source": 0,
        "weight_model": "edge"
    }

``directed`` defaults to true, ``edges`` to an empty list; ``source`` and
``weight_model`` are optional. Unknown keys are ignored.
"""

from __future__ import annotations

import dataclasses
import logging
import pathlib
from typing import Annotated, Self

import pydantic

from critpath import exceptions
from critpath.graph import Graph

logger = logging.getLogger(__name__)

__all__ = ["EdgeSpec", "GraphSpec", "LoadedGraph", "load_graph", "parse_graph"]

# Limit on validation errors listed in one GraphLoadError message
_MAX_REPORTED_ERRORS = 5


class EdgeSpec(pydantic.BaseModel):
    """One weighted edge u -> v."""

    u: Annotated[int, pydantic.Field(ge=0)]
    v: Annotated[int, pydantic.Field(ge=0)]
    w: int


class GraphSpec(pydantic.BaseModel):
    """Schema of a graph file."""

    model_config = pydantic.ConfigDict(extra="ignore")

    directed: bool = True
    n: Annotated[int, pydantic.Field(ge=1, description="Number of vertices (0..n-1)")]
    edges: list[EdgeSpec] = pydantic.Field(default_factory=list)
    source: Annotated[int, pydantic.Field(ge=0)] | None = None
    weight_model: str | None = None

    @pydantic.model_validator(mode="after")
    def check_indices(self) -> Self:
        """Ensure every edge endpoint and the source are valid vertices."""
        for i, edge in enumerate(self.edges):
            for end in (edge.u, edge.v):
                if end >= self.n:
                    raise ValueError(f"edges[{i}] endpoint {end} out of range for n={self.n}")
        if self.source is not None and self.source >= self.n:
            raise ValueError(f"source {self.source} out of range for n={self.n}")
        return self

    def to_graph(self) -> Graph:
        return Graph.from_edges(
            self.n, ((e.u, e.v, e.w) for e in self.edges), directed=self.directed
        )


@dataclasses.dataclass(frozen=True)
class LoadedGraph:
    """A graph together with the source vertex chosen for path queries."""

    graph: Graph
    source: int
    weight_model: str | None = None
    path: pathlib.Path | None = None


def _format_validation_error(e: pydantic.ValidationError) -> str:
    errors = e.errors()
    lines = list[str]()
    for err in errors[:_MAX_REPORTED_ERRORS]:
        loc = ".".join(str(part) for part in err["loc"]) or "(root)"
        lines.append(f"  {loc}: {err['msg']}")
    if len(errors) > _MAX_REPORTED_ERRORS:
        lines.append(f"  ... and {len(errors) - _MAX_REPORTED_ERRORS} more")
    return "\n".join(lines)


def parse_graph(
    text: str | bytes,
    default_source: int = 0,
    path: pathlib.Path | None = None,
    source: int | None = None,
) -> LoadedGraph:
    """Parse graph JSON into a LoadedGraph.

    The source vertex is ``source`` if given, else the document's own, else
    ``default_source``. Only the one chosen is range-checked.

    Args:
        text: JSON document.
        default_source: Source used when neither an override nor the
            document names one.
        path: Origin of the document, used in messages only.
        source: Override for the document's source.

    Raises:
        GraphLoadError: If the JSON is malformed, violates the schema, or the
            resulting source is out of range.
    """
    origin = str(path) if path is not None else "<input>"
    try:
        spec = GraphSpec.model_validate_json(text)
    except pydantic.ValidationError as e:
        raise exceptions.GraphLoadError(
            f"Invalid graph in {origin}:\n{_format_validation_error(e)}"
        ) from e

    if source is None:
        source = spec.source if spec.source is not None else default_source
    if not 0 <= source < spec.n:
        raise exceptions.GraphLoadError(
            f"Invalid graph in {origin}: source {source} out of range for n={spec.n}"
        )

    logger.info(
        f"Loaded graph: n={spec.n}, edges={len(spec.edges)}, weight_model={spec.weight_model}"
    )
    return LoadedGraph(
        graph=spec.to_graph(),
        source=source,
        weight_model=spec.weight_model,
        path=path,
    )


def load_graph(
    path: str | pathlib.Path,
    default_source: int = 0,
    source: int | None = None,
) -> LoadedGraph:
    """Read and validate a graph file; see parse_graph for source selection.

    Raises:
        GraphLoadError: If the file cannot be read or its content is invalid.
    """
    path = pathlib.Path(path)
    try:
        text = path.read_bytes()
    except FileNotFoundError:
        raise exceptions.GraphLoadError(f"Graph file not found: {path}") from None
    except PermissionError:
        raise exceptions.GraphLoadError(f"Permission denied reading {path}") from None
    except OSError as e:
        raise exceptions.GraphLoadError(f"Error reading {path}: {e}") from e
    return parse_graph(text, default_source=default_source, path=path, source=source)
