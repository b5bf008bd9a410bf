class GraphError(Exception):
    """Base class for errors raised by graphwalk."""


class InvalidVertexError(GraphError, ValueError):
    """A vertex id that is not live in the graph was used where membership is required."""

    def __init__(self, vertex, message=None):
        self.vertex = vertex
        super().__init__(message or f"vertex {vertex!r} not from graph")


class NoPathError(GraphError, LookupError):
    """No path from the source reaches the requested vertex."""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"no path from {source} to {target}")
