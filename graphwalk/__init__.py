# graphwalk/__init__.py
"""graphwalk: integer-id graphs and a fringe-driven traversal engine."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "core": "graphwalk.core",
    "algorithms": "graphwalk.algorithms",
    "adapters": "graphwalk.adapters",
    "networkx": "graphwalk.adapters.networkx_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Topology store
    "Graph": ("graphwalk.core.graph", "Graph"),
    "DirectedGraph": ("graphwalk.core.graph", "DirectedGraph"),
    "UndirectedGraph": ("graphwalk.core.graph", "UndirectedGraph"),
    "LabeledGraph": ("graphwalk.core.labeled", "LabeledGraph"),
    "GraphDiff": ("graphwalk.core._GraphDiff", "GraphDiff"),
    # Errors
    "GraphError": ("graphwalk.core.exceptions", "GraphError"),
    "InvalidVertexError": ("graphwalk.core.exceptions", "InvalidVertexError"),
    "NoPathError": ("graphwalk.core.exceptions", "NoPathError"),
    # Traversal engine
    "Traversal": ("graphwalk.algorithms.traversal", "Traversal"),
    "BreadthFirstTraversal": ("graphwalk.algorithms.traversal", "BreadthFirstTraversal"),
    "DepthFirstTraversal": ("graphwalk.algorithms.traversal", "DepthFirstTraversal"),
    "FifoFringe": ("graphwalk.algorithms.fringe", "FifoFringe"),
    "LifoFringe": ("graphwalk.algorithms.fringe", "LifoFringe"),
    "PriorityFringe": ("graphwalk.algorithms.fringe", "PriorityFringe"),
    "ShortestPaths": ("graphwalk.algorithms.shortest_paths", "ShortestPaths"),
    # NetworkX adapter (optional dependency)
    "to_nx": ("graphwalk.adapters.networkx_adapter", "to_nx"),
    "from_nx": ("graphwalk.adapters.networkx_adapter", "from_nx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("graphwalk")
except PackageNotFoundError:
    __version__ = "0.0.0"
