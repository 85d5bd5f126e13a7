from typing import override

# Cap on how many blocked vertices are listed in a cycle error message
_MAX_LISTED_VERTICES = 10


class CritpathError(Exception):
    """Base exception for critpath errors."""

    def format_user_message(self) -> str:
        """Format a user-friendly error message."""
        return str(self)

    def get_suggestion(self) -> str | None:
        """Return actionable suggestion for resolving the error."""
        return None


class GraphError(CritpathError):
    """Base class for graph algorithm errors."""

    pass


class CyclicGraphError(GraphError):
    """Raised when a graph that must be acyclic contains a cycle.

    Carries the vertices that could not be ordered: every vertex on a cycle,
    plus everything reachable only through one.
    """

    _vertex_count: int
    _blocked: list[int]

    def __init__(self, vertex_count: int, blocked: list[int]) -> None:
        self._vertex_count = vertex_count
        self._blocked = blocked
        ordered = vertex_count - len(blocked)
        super().__init__(
            f"Graph is not a DAG: only {ordered} of {vertex_count} vertices could be ordered"
        )

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def blocked(self) -> list[int]:
        """Vertices left with a non-zero in-degree, in index order."""
        return list(self._blocked)

    @override
    def format_user_message(self) -> str:
        msg = str(self)
        if self._blocked:
            shown = ", ".join(str(v) for v in self._blocked[:_MAX_LISTED_VERTICES])
            if len(self._blocked) > _MAX_LISTED_VERTICES:
                shown += f", ... ({len(self._blocked)} total)"
            msg += f"\n  Vertices on or behind a cycle: {shown}"
        return msg

    @override
    def get_suggestion(self) -> str:
        return "Condense the graph first (e.g. 'critpath topo' without --raw) to order its SCCs"

    @override
    def __reduce__(self) -> tuple[type, tuple[int, list[int]]]:
        return (self.__class__, (self._vertex_count, self._blocked))


class GraphLoadError(CritpathError):
    """Raised when a graph file cannot be read or fails validation."""

    @override
    def get_suggestion(self) -> str:
        return "Run 'critpath schema' to see the expected graph file format"


class ConfigError(CritpathError):
    """Raised when the configuration file is unreadable or invalid."""

    pass
