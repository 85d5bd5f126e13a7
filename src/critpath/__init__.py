from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API: the core data structure and algorithms. Collaborators
# (loaders, analysis, console, render, cli) are reached via their modules.

if TYPE_CHECKING:
    from critpath.condensation import build_condensation as build_condensation
    from critpath.condensation import condense as condense
    from critpath.exceptions import CyclicGraphError as CyclicGraphError
    from critpath.graph import Graph as Graph
    from critpath.metrics import Metrics as Metrics
    from critpath.paths import find_critical_target as find_critical_target
    from critpath.paths import longest_paths as longest_paths
    from critpath.paths import reconstruct_path as reconstruct_path
    from critpath.paths import shortest_paths as shortest_paths
    from critpath.scc import find_sccs as find_sccs
    from critpath.topo import topological_sort as topological_sort

# Lazy import mapping for runtime
_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "build_condensation": ("critpath.condensation", "build_condensation"),
    "condense": ("critpath.condensation", "condense"),
    "CyclicGraphError": ("critpath.exceptions", "CyclicGraphError"),
    "Graph": ("critpath.graph", "Graph"),
    "Metrics": ("critpath.metrics", "Metrics"),
    "find_critical_target": ("critpath.paths", "find_critical_target"),
    "longest_paths": ("critpath.paths", "longest_paths"),
    "reconstruct_path": ("critpath.paths", "reconstruct_path"),
    "shortest_paths": ("critpath.paths", "shortest_paths"),
    "find_sccs": ("critpath.scc", "find_sccs"),
    "topological_sort": ("critpath.topo", "topological_sort"),
}


def __getattr__(name: str) -> object:
    """Lazily import public API members on first access."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        import importlib

        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        # Cache in module globals for subsequent access
        globals()[name] = value
        return value
    raise AttributeError(f"module 'critpath' has no attribute {name!r}")


__all__ = list(_LAZY_IMPORTS)
