from .fringe import FifoFringe, Fringe, LifoFringe, PriorityFringe
from .shortest_paths import ShortestPaths
from .traversal import BreadthFirstTraversal, DepthFirstTraversal, Traversal

__all__ = [
    "BreadthFirstTraversal",
    "DepthFirstTraversal",
    "FifoFringe",
    "Fringe",
    "LifoFringe",
    "PriorityFringe",
    "ShortestPaths",
    "Traversal",
]
