from numbers import Integral

from .fringe import FifoFringe, LifoFringe


class Traversal:
    """Generalized fringe-driven traversal of a graph.

    At any time there is a collection of untraversed vertices, the fringe.
    Traversal repeatedly removes a vertex from the fringe, visits it, and adds
    its untraversed successors to the fringe. The fringe container decides the
    search order; the hooks decide what happens on each vertex.

    Hooks can be overridden in a subclass or passed as callables:

    - ``visit(v)``: called once when ``v`` is first marked. Returning ``False``
      stops the traversal immediately, leaving fringe and marks as they are.
    - ``should_post_visit(v)``: whether ``v`` gets a post-visit once it comes
      off the fringe again (after its successors, for a LIFO fringe).
    - ``post_visit(v)``: called at most once per vertex; ``False`` stops.
    - ``reverse_successors(v)``: schedule the successors of ``v`` in reverse
      adjacency order.
    - ``process_successor(u, v)``: whether successor ``v`` of ``u`` is offered
      to the fringe; by default iff ``v`` is unmarked.

    Marks persist across calls to :meth:`traverse`, so a traversal can be
    interrupted and resumed. :meth:`clear` forgets them.

    Parameters
    --
    G : Graph
        Graph being traversed. It must not be mutated while a traversal runs.
    fringe : Fringe
        Anything with ``push``, ``pop`` and ``len``.

    """

    def __init__(
        self,
        G,
        fringe,
        *,
        visit=None,
        post_visit=None,
        should_post_visit=None,
        reverse_successors=None,
        process_successor=None,
    ):
        self._G = G
        self._fringe = fringe
        self._marked = set()
        self._postvisited = set()

        # Callables given here shadow the overridable methods below.
        if visit is not None:
            self.visit = visit
        if post_visit is not None:
            self.post_visit = post_visit
        if should_post_visit is not None:
            self.should_post_visit = should_post_visit
        if reverse_successors is not None:
            self.reverse_successors = reverse_successors
        if process_successor is not None:
            self.process_successor = process_successor

    @property
    def graph(self):
        return self._G

    @property
    def fringe(self):
        return self._fringe

    def clear(self):
        """Unmark all vertices and forget post-visits."""
        self._marked.clear()
        self._postvisited.clear()

    def traverse(self, v0) -> bool:
        """Add ``v0`` to the fringe and run the traversal.

        Parameters
        --
        v0 : int | Iterable[int]
            Start vertex or vertices. Each must be live.

        Returns
        ---
        bool
            False if a hook stopped the traversal, True once the fringe ran dry.

        Raises
        --
        InvalidVertexError
            If a start vertex is not in the graph.

        """
        starts = [v0] if isinstance(v0, Integral) else list(v0)
        for v in starts:
            self._G.check_my_vertex(v)
        for v in starts:
            self._fringe.push(v)

        fringe = self._fringe
        while len(fringe):
            v = fringe.pop()
            if v not in self._marked:
                self.mark(v)
                if self.visit(v) is False:
                    return False
                fringe.push(v)
                successors = self._G.successors(v)
                if self.reverse_successors(v):
                    successors = reversed(successors)
                for w in successors:
                    if self.process_successor(v, w):
                        fringe.push(w)
            elif v not in self._postvisited and self.should_post_visit(v):
                self._postvisited.add(v)
                if self.post_visit(v) is False:
                    return False
        return True

    def marked(self, v) -> bool:
        """True iff ``v`` has been marked in this session."""
        return v in self._marked

    def mark(self, v):
        """Mark vertex ``v``; ids not in the graph are ignored."""
        if self._G.contains(v):
            self._marked.add(v)

    def unmark(self, v):
        """Reopen ``v`` so that it is visited again when next popped."""
        self._marked.discard(v)
        self._postvisited.discard(v)

    def post_visited(self, v) -> bool:
        return v in self._postvisited

    # Hooks

    def visit(self, v):
        """Perform a visit on ``v``. Return False to stop the traversal."""
        return True

    def should_post_visit(self, v):
        return False

    def post_visit(self, v):
        """Revisit ``v`` after its successors. Return False to stop the traversal."""
        return True

    def reverse_successors(self, v):
        return False

    def process_successor(self, u, v):
        return not self.marked(v)


class BreadthFirstTraversal(Traversal):
    """Breadth-first traversal; vertices are visited in order of hop distance."""

    def __init__(self, G, **hooks):
        super().__init__(G, FifoFringe(), **hooks)


class DepthFirstTraversal(Traversal):
    """Depth-first traversal with post-visits.

    Every vertex is post-visited once all vertices reachable through it have
    been visited. Successors are pushed in reverse so the first successor in
    adjacency order is explored first.
    """

    def __init__(self, G, **hooks):
        super().__init__(G, LifoFringe(), **hooks)

    def should_post_visit(self, v):
        return True

    def reverse_successors(self, v):
        return True
