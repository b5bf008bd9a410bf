from .exceptions import GraphError, InvalidVertexError, NoPathError
from .graph import DirectedGraph, Graph, IterationView, UndirectedGraph
from .labeled import LabeledGraph

__all__ = [
    "DirectedGraph",
    "Graph",
    "GraphError",
    "InvalidVertexError",
    "IterationView",
    "LabeledGraph",
    "NoPathError",
    "UndirectedGraph",
]
