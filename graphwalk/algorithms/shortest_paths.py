import math

import numpy as np

from ..core.exceptions import NoPathError
from .fringe import PriorityFringe
from .traversal import Traversal


class ShortestPaths:
    """Shortest paths through an edge-weighted graph (Dijkstra, or A* with a heuristic).

    The search is a :class:`Traversal` over a :class:`PriorityFringe` ordered
    by ``distance(v) + estimated_distance(v)``; visiting a vertex relaxes its
    outgoing edges. With a destination the search stops as soon as the
    destination leaves the fringe, so distances of vertices never reached
    stay at infinity.

    Edge weights come from ``weight`` or from overriding :meth:`edge_weight`;
    the heuristic from ``heuristic`` or from overriding
    :meth:`estimated_distance`. Weights must be non-negative and the heuristic
    admissible (never above the true remaining distance); neither is checked.

    Parameters
    --
    G : Graph
    source : int
        Live start vertex.
    dest : int, default 0
        Destination vertex, 0 for none.
    weight : callable, optional
        ``weight(u, v) -> float`` for the edge ``(u, v)``.
    heuristic : callable, optional
        ``heuristic(v) -> float`` estimate of the distance from ``v`` to ``dest``.

    Raises
    --
    InvalidVertexError
        If ``source`` is not live.
    ValueError
        If no edge weight is available.

    Examples
    --
    >>> G = DirectedGraph()
    >>> a, b = G.add_vertices(2)
    >>> G.add_edge(a, b)
    1
    >>> sp = ShortestPaths(G, a, b, weight=lambda u, v: 2.5)
    >>> sp.set_paths()
    >>> sp.path_to(), sp.distance(b)
    ([1, 2], 2.5)

    """

    def __init__(self, G, source, dest=0, *, weight=None, heuristic=None):
        G.check_my_vertex(source)
        self._G = G
        self._source = source
        self._dest = dest or 0

        if weight is not None:
            self.edge_weight = weight
        elif type(self).edge_weight is ShortestPaths.edge_weight:
            raise ValueError("ShortestPaths needs a weight function or an edge_weight override")
        if heuristic is not None:
            self.estimated_distance = heuristic

        self._traversal = None
        self._reset_tables()

    def _reset_tables(self):
        n = self._G.max_vertex() + 1
        self._dist = np.full(n, np.inf, dtype=np.float64)
        self._pred = np.zeros(n, dtype=np.int64)

    def set_paths(self):
        """Run the search from the source.

        Must be called before ``distance``, ``predecessor`` and ``path_to``
        give meaningful answers. Calling it again starts over.
        """
        self._reset_tables()
        self._set_distance(self._source, 0.0)
        fringe = PriorityFringe(lambda v: self.distance(v) + self.estimated_distance(v))
        self._traversal = Traversal(self._G, fringe, visit=self._relax)
        self._traversal.traverse(self._source)

    def _relax(self, v):
        if v == self._dest:
            return False
        fringe = self._traversal.fringe
        dv = self.distance(v)
        for to in self._G.successors(v):
            candidate = dv + self.edge_weight(v, to)
            if candidate < self.distance(to):
                self._set_distance(to, candidate)
                self._set_predecessor(to, v)
                # A closed vertex whose distance improved must be expanded again.
                if self._traversal.marked(to):
                    self._traversal.unmark(to)
                fringe.push(to)
        return True

    # Accessors

    def get_source(self) -> int:
        return self._source

    def get_dest(self) -> int:
        """Destination vertex, or 0 if there is none."""
        return self._dest

    @property
    def source(self) -> int:
        return self._source

    @property
    def dest(self) -> int:
        return self._dest

    def distance(self, v) -> float:
        """Current shortest-known distance to ``v``; infinity if unknown or not in the graph."""
        if not self._G.contains(v) or v >= len(self._dist):
            return math.inf
        return float(self._dist[v])

    def _set_distance(self, v, w):
        self._dist[v] = w

    def predecessor(self, v) -> int:
        """Predecessor of ``v`` on its shortest path, or 0 if none."""
        if not self._G.contains(v) or v >= len(self._pred):
            return 0
        return int(self._pred[v])

    def _set_predecessor(self, v, u):
        self._pred[v] = u

    def distances(self) -> dict:
        """``{vertex: distance}`` for every vertex with a finite distance."""
        return {v: self.distance(v) for v in self._G.vertices() if math.isfinite(self.distance(v))}

    def edge_weight(self, u, v) -> float:
        """Weight of the edge ``(u, v)``."""
        raise NotImplementedError

    def estimated_distance(self, v) -> float:
        """Heuristic distance from ``v`` to the destination; 0 by default."""
        return 0.0

    def path_to(self, v=None) -> list[int]:
        """Vertices from the source to ``v`` along a shortest path.

        Parameters
        --
        v : int, optional
            Target vertex; defaults to the destination.

        Returns
        ---
        list[int]
            Starts at the source and ends at ``v``.

        Raises
        --
        ValueError
            If ``v`` is omitted and there is no destination.
        InvalidVertexError
            If ``v`` is not in the graph.
        NoPathError
            If ``v`` was not reached from the source.

        """
        if v is None:
            if not self._dest:
                raise ValueError("no destination vertex; pass the target explicitly")
            v = self._dest
        self._G.check_my_vertex(v)

        path = [v]
        while v != self._source:
            v = self.predecessor(v)
            if v == 0:
                raise NoPathError(self._source, path[0])
            path.append(v)
        path.reverse()
        return path
