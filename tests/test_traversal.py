import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from graphwalk.algorithms.fringe import FifoFringe, LifoFringe  # noqa: E402
from graphwalk.algorithms.traversal import (  # noqa: E402
    BreadthFirstTraversal,
    DepthFirstTraversal,
    Traversal,
)
from graphwalk.core.exceptions import InvalidVertexError  # noqa: E402
from graphwalk.core.graph import UndirectedGraph  # noqa: E402


class Recorder(Traversal):
    """Traversal that records visits and post-visits through overridden hooks."""

    def __init__(self, G, fringe, stop_at=None, post=False):
        super().__init__(G, fringe)
        self.visited = []
        self.posted = []
        self.stop_at = stop_at
        self.post = post

    def visit(self, v):
        self.visited.append(v)
        return v != self.stop_at

    def should_post_visit(self, v):
        return self.post

    def post_visit(self, v):
        self.posted.append(v)
        return True


class TestBreadthFirst:
    def test_visit_order(self, diamond):
        order = []
        t = BreadthFirstTraversal(diamond, visit=order.append)
        assert t.traverse(1) is True
        assert order == [1, 2, 3, 4, 5]
        assert all(t.marked(v) for v in diamond.vertices())
        assert not any(t.post_visited(v) for v in diamond.vertices())

    def test_reverse_successors(self, diamond):
        order = []
        t = BreadthFirstTraversal(diamond, visit=order.append, reverse_successors=lambda v: True)
        t.traverse(1)
        assert order == [1, 3, 2, 4, 5]

    def test_only_reachable_vertices(self, diamond):
        order = []
        BreadthFirstTraversal(diamond, visit=order.append).traverse(4)
        assert order == [4, 5]

    def test_undirected_follows_both_ends(self):
        G = UndirectedGraph()
        G.add_vertices(4)
        G.add_edge(2, 1)
        G.add_edge(3, 2)
        G.add_edge(4, 3)
        order = []
        BreadthFirstTraversal(G, visit=order.append).traverse(4)
        assert order == [4, 3, 2, 1]

    def test_process_successor_filters_fringe(self, diamond):
        order = []
        t = BreadthFirstTraversal(
            diamond,
            visit=order.append,
            process_successor=lambda u, v: v != 3,
        )
        t.traverse(1)
        assert order == [1, 2, 4, 5]


class TestDepthFirst:
    def test_preorder_and_postorder(self, diamond):
        pre, post = [], []
        t = DepthFirstTraversal(diamond, visit=pre.append, post_visit=post.append)
        t.traverse(1)
        assert pre == [1, 2, 4, 5, 3]
        assert post == [5, 4, 2, 3, 1]
        assert all(t.post_visited(v) for v in diamond.vertices())

    def test_post_visit_only_once(self, diamond):
        diamond.add_edge(5, 1)  # cycle back to the root
        post = []
        DepthFirstTraversal(diamond, post_visit=post.append).traverse(1)
        assert sorted(post) == [1, 2, 3, 4, 5]
        assert len(post) == 5

    def test_post_visit_can_stop(self, diamond):
        post = []

        def stop_after_four(v):
            post.append(v)
            return v != 4

        t = DepthFirstTraversal(diamond, post_visit=stop_after_four)
        assert t.traverse(1) is False
        assert post == [5, 4]


class TestTraversalSession:
    def test_stop_leaves_state_as_is(self, diamond):
        t = Recorder(diamond, FifoFringe(), stop_at=3)
        assert t.traverse(1) is False
        assert t.visited == [1, 2, 3]
        assert t.marked(3)
        assert not t.marked(4)
        assert len(t.fringe) > 0

    def test_resume_after_stop(self, diamond):
        t = Recorder(diamond, FifoFringe(), stop_at=3)
        t.traverse(1)
        assert t.traverse(1) is True
        assert t.visited == [1, 2, 3, 4, 5]

    def test_marks_persist_until_clear(self, diamond):
        t = Recorder(diamond, FifoFringe())
        t.traverse(1)
        t.traverse(1)
        assert t.visited == [1, 2, 3, 4, 5]
        t.clear()
        assert not t.marked(1)
        t.traverse(4)
        assert t.visited == [1, 2, 3, 4, 5, 4, 5]

    def test_unmark_reopens_vertex(self, diamond):
        t = Recorder(diamond, FifoFringe())
        t.traverse(1)
        t.unmark(5)
        t.traverse(5)
        assert t.visited[-1] == 5
        assert t.visited.count(5) == 2

    def test_multiple_start_vertices(self, diamond):
        extra = diamond.add_vertex()
        t = Recorder(diamond, FifoFringe())
        t.traverse([extra, 4])
        assert t.visited == [extra, 4, 5]

    def test_post_visit_on_lifo_subclass(self, diamond):
        t = Recorder(diamond, LifoFringe(), post=True)
        t.traverse(1)
        # without reversed successors the last successor is explored first
        assert t.visited == [1, 3, 4, 5, 2]
        assert t.posted == [5, 4, 3, 2, 1]

    def test_start_vertex_must_be_live(self, diamond):
        t = BreadthFirstTraversal(diamond)
        with pytest.raises(InvalidVertexError):
            t.traverse(9)
        with pytest.raises(InvalidVertexError):
            t.traverse([1, 0])
        assert len(t.fringe) == 0

    def test_mark_ignores_unknown_vertex(self, diamond):
        t = Traversal(diamond, FifoFringe())
        t.mark(42)
        assert not t.marked(42)
        assert t.graph is diamond
