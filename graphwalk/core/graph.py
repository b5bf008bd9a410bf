from ._CacheManager import CacheManager
from ._History import History
from ._IndexManager import IndexManager
from .exceptions import InvalidVertexError


class IterationView:
    """Lazy, restartable view over a graph sequence.

    Each ``iter()`` starts a fresh pass over the live state of the graph.
    """

    __slots__ = ("_factory", "_size", "_contains")

    def __init__(self, factory, size, contains=None):
        self._factory = factory
        self._size = size
        self._contains = contains

    def __iter__(self):
        return iter(self._factory())

    def __len__(self):
        return self._size()

    def __contains__(self, item):
        if self._contains is not None:
            return self._contains(item)
        return any(item == x for x in self)

    def __repr__(self):
        return f"{type(self).__name__}({list(self)!r})"


class Graph(History):
    """Unlabeled graph over positive integer vertex ids.

    Vertex ids are recycled: a removed id becomes free and the lowest free id
    is handed out by the next ``add_vertex``. Edge ids come from a counter that
    starts at 1 and never goes back, so they reflect creation order even after
    removals. Self-edges are allowed; parallel edges are not (``add_edge`` on
    an existing edge returns its id).

    Use :class:`DirectedGraph`, :class:`UndirectedGraph` or
    :meth:`Graph.create`. The two variants differ only in how edge direction
    affects membership, degree counting and the predecessor relation.

    Parameters
    --
    history : bool, default True
        Record mutations in the in-memory history log.

    Notes
    -
    - 0 is never a valid vertex or edge id and is returned as the "absent"
      sentinel by lookups that can miss (``edge_id``, ``successor``,
      ``predecessor``).
    - Operations that require a live vertex raise :class:`InvalidVertexError`.
    - Adjacency is kept per vertex in creation order, so successors and
      predecessors come back in the order their edges were added.

    """

    _DIRECTED = None

    def __init__(self, history: bool = True):
        if self._DIRECTED is None:
            raise TypeError("Graph is abstract; use DirectedGraph, UndirectedGraph or Graph.create()")

        self.idx = IndexManager(self)
        self.cache = CacheManager(self)

        self._edges = {}  # edge_id -> (source, target), creation order
        self._edge_index = {}  # endpoint key -> edge_id
        self._out = {}  # vertex -> {edge_id: successor}
        self._in = {}  # vertex -> {edge_id: predecessor}; directed only

        self._init_history(history)

    @classmethod
    def create(cls, directed: bool = True, **kwargs):
        """Build an empty directed or undirected graph.

        Parameters
        --
        directed : bool, default True
        **kwargs
            Forwarded to the graph constructor.

        Returns
        ---
        DirectedGraph | UndirectedGraph

        """
        return DirectedGraph(**kwargs) if directed else UndirectedGraph(**kwargs)

    def is_directed(self) -> bool:
        return self._DIRECTED

    def _key(self, u, v):
        if self._DIRECTED or u <= v:
            return (u, v)
        return (v, u)

    # Counters

    def vertex_size(self) -> int:
        """Number of live vertices."""
        return self.idx.vertex_count()

    def max_vertex(self) -> int:
        """Greatest live vertex id, or 0 when the graph is empty."""
        return self.idx.max_vertex()

    def edge_size(self) -> int:
        """Number of edges."""
        return len(self._edges)

    # Membership

    def contains(self, u, v=None) -> bool:
        """Test for a live vertex ``u``, or for the edge ``(u, v)`` when ``v`` is given.

        For undirected graphs ``contains(u, v) == contains(v, u)``.
        """
        if v is None:
            return self.idx.slot_is_live(u)
        if not (self.idx.slot_is_live(u) and self.idx.slot_is_live(v)):
            return False
        return self._key(u, v) in self._edge_index

    def check_my_vertex(self, v):
        """Raise :class:`InvalidVertexError` unless ``v`` is a live vertex."""
        if not self.idx.slot_is_live(v):
            raise InvalidVertexError(v)

    # Vertices

    def add_vertex(self) -> int:
        """Allocate a new vertex and return its id.

        The lowest free id is reused first; otherwise the id is
        ``max_vertex() + 1``.
        """
        v = self.idx.allocate_vertex()
        self._out[v] = {}
        if self._DIRECTED:
            self._in[v] = {}
        return v

    def add_vertices(self, n: int) -> list[int]:
        """Allocate ``n`` vertices; returns their ids in allocation order."""
        return [self.add_vertex() for _ in range(int(n))]

    def remove_vertex(self, v):
        """Remove vertex ``v`` and every edge touching it.

        No-op when ``v`` is not live. When ``v`` was the max id, ``max_vertex``
        drops to the next-highest live id.
        """
        if not self.idx.slot_is_live(v):
            return
        for eid in self.incident_edges(v):
            self._drop_edge(eid)
        del self._out[v]
        self._in.pop(v, None)
        self.idx.release_vertex(v)

    def vertices(self):
        """Live vertex ids, ascending.

        Returns
        ---
        IterationView
            Lazy and restartable; reflects the graph at iteration time.

        """
        return IterationView(self.idx.iter_live, self.vertex_size, self.contains)

    # Edges

    def add_edge(self, u, v) -> int:
        """Add the edge ``(u, v)`` and return its id.

        Parameters
        --
        u, v : int
            Live vertex ids. ``u == v`` adds a self-edge.

        Returns
        ---
        int
            The id of the new edge, or of the existing one when ``(u, v)``
            (or ``(v, u)`` in an undirected graph) is already present.

        Raises
        --
        InvalidVertexError
            If either endpoint is not live.

        """
        self.check_my_vertex(u)
        self.check_my_vertex(v)
        key = self._key(u, v)
        existing = self._edge_index.get(key)
        if existing is not None:
            return existing

        eid = self.idx.allocate_edge()
        self._edges[eid] = (u, v)
        self._edge_index[key] = eid
        self._out[u][eid] = v
        if self._DIRECTED:
            self._in[v][eid] = u
        elif u != v:
            self._out[v][eid] = u
        return eid

    def remove_edge(self, u, v):
        """Remove the edge ``(u, v)`` if present.

        In an undirected graph this also matches an edge stored as ``(v, u)``.
        """
        if not self.contains(u, v):
            return
        self._drop_edge(self._edge_index[self._key(u, v)])

    def _drop_edge(self, eid):
        u, v = self._edges.pop(eid)
        del self._edge_index[self._key(u, v)]
        del self._out[u][eid]
        if self._DIRECTED:
            del self._in[v][eid]
        elif u != v:
            del self._out[v][eid]

    def edge_id(self, u, v) -> int:
        """Id of the edge ``(u, v)``, or 0 if there is no such edge."""
        if not self.contains(u, v):
            return 0
        return self._edge_index[self._key(u, v)]

    def edges(self):
        """All edges as ``(source, target)`` pairs in creation order.

        Returns
        ---
        IterationView

        """
        return IterationView(
            lambda: (tuple(e) for e in self._edges.values()),
            self.edge_size,
            lambda e: self.contains(*e),
        )

    def edge_list(self):
        """Materialize ``(source, target, edge_id)`` triples in creation order.

        Returns
        ---
        list[tuple[int, int, int]]

        """
        return [(u, v, eid) for eid, (u, v) in self._edges.items()]

    def incident_edges(self, v) -> list[int]:
        """Ids of every edge touching ``v`` (either direction), ascending."""
        if not self.idx.slot_is_live(v):
            return []
        if self._DIRECTED:
            return sorted(self._out[v].keys() | self._in[v].keys())
        return list(self._out[v])

    # Adjacency

    def successors(self, v) -> list[int]:
        """Successors of ``v`` in edge creation order; empty if ``v`` is not live."""
        if not self.idx.slot_is_live(v):
            return []
        return list(self._out[v].values())

    def predecessors(self, v) -> list[int]:
        raise NotImplementedError

    def successor(self, v, k) -> int:
        """The ``k``-th successor of ``v`` (0-indexed), or 0 if there is none."""
        return self._nth(self.successors(v), k)

    def predecessor(self, v, k) -> int:
        """The ``k``-th predecessor of ``v`` (0-indexed), or 0 if there is none."""
        return self._nth(self.predecessors(v), k)

    @staticmethod
    def _nth(seq, k):
        if 0 <= k < len(seq):
            return seq[k]
        return 0

    def out_degree(self, v) -> int:
        """Number of edges leaving ``v``; 0 when ``v`` is not live."""
        if not self.idx.slot_is_live(v):
            return 0
        return len(self._out[v])

    def in_degree(self, v) -> int:
        raise NotImplementedError

    def degree(self, v) -> int:
        """Synonym for ``out_degree``, meant for undirected graphs."""
        return self.out_degree(v)

    # Whole-graph operations

    def clear(self):
        """Remove every vertex and edge.

        The edge id counter is not reset; ids handed out before ``clear``
        are never issued again.
        """
        self._edges.clear()
        self._edge_index.clear()
        self._out.clear()
        self._in.clear()
        self.idx.reset()
        self.cache.invalidate()

    def __len__(self):
        return self.vertex_size()

    def __contains__(self, v):
        return self.contains(v)

    def __iter__(self):
        return iter(self.vertices())

    def __repr__(self):
        return (
            f"{type(self).__name__}(vertices={self.vertex_size()}, "
            f"edges={self.edge_size()}, max_vertex={self.max_vertex()})"
        )


class DirectedGraph(Graph):
    """Directed graph; ``predecessors`` is the exact inverse of ``successors``."""

    _DIRECTED = True

    def predecessors(self, v) -> list[int]:
        """Sources of edges into ``v``, in edge creation order."""
        if not self.idx.slot_is_live(v):
            return []
        return list(self._in[v].values())

    def in_degree(self, v) -> int:
        """Number of edges entering ``v``; 0 when ``v`` is not live."""
        if not self.idx.slot_is_live(v):
            return 0
        return len(self._in[v])


class UndirectedGraph(Graph):
    """Undirected graph. In- and out-edges are not distinguished.

    ``(u, v)`` and ``(v, u)`` name the same edge; every incident edge counts
    toward the degree once, a self-edge included.
    """

    _DIRECTED = False

    def predecessors(self, v) -> list[int]:
        return self.successors(v)

    def in_degree(self, v) -> int:
        return self.out_degree(v)
