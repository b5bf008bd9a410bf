"""Shared fixtures and helpers for graph and search tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from graphwalk.core.graph import DirectedGraph, UndirectedGraph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def diamond():
    """Directed 1->2, 1->3, 2->4, 3->4, 4->5."""
    G = DirectedGraph()
    G.add_vertices(5)
    for u, v in [(1, 2), (1, 3), (2, 4), (3, 4), (4, 5)]:
        G.add_edge(u, v)
    return G


@pytest.fixture
def scenario_a():
    """Directed 1..5 with 1->2, 2->3, 3->4, 4->5, 1->3, all weight 1."""
    G = DirectedGraph()
    G.add_vertices(5)
    for u, v in [(1, 2), (2, 3), (3, 4), (4, 5), (1, 3)]:
        G.add_edge(u, v)
    return G


@pytest.fixture
def scenario_b():
    """Chain 1->...->8 of weight 1 plus a shortcut 2->8 of weight 8."""
    G = DirectedGraph()
    G.add_vertices(8)
    weights = {}
    for u in range(1, 8):
        G.add_edge(u, u + 1)
        weights[(u, u + 1)] = 1.0
    G.add_edge(2, 8)
    weights[(2, 8)] = 8.0
    return G, weights


@pytest.fixture
def grid3():
    """Undirected 3x3 grid; returns (graph, {vertex: (row, col)})."""
    G = UndirectedGraph()
    coords = {}
    ids = {}
    for r in range(3):
        for c in range(3):
            v = G.add_vertex()
            coords[v] = (r, c)
            ids[(r, c)] = v
    for (r, c), v in ids.items():
        if (r + 1, c) in ids:
            G.add_edge(v, ids[(r + 1, c)])
        if (r, c + 1) in ids:
            G.add_edge(v, ids[(r, c + 1)])
    return G, coords


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


# ======================================================================
# HELPERS
# ======================================================================


def assert_live_invariants(G):
    """vertex_size / max_vertex agree with the live ids."""
    live = list(G.vertices())
    assert G.vertex_size() == len(live), "vertex_size differs from live count"
    assert G.max_vertex() == (max(live) if live else 0), "max_vertex is not the greatest live id"
    assert live == sorted(live), "vertices() is not ascending"


def assert_edges_consistent(G):
    """Every edge has live endpoints and shows up in adjacency both ways."""
    for u, v, eid in G.edge_list():
        assert G.contains(u) and G.contains(v), f"edge {eid} has a dead endpoint"
        assert G.edge_id(u, v) == eid
        assert v in G.successors(u)
        assert u in G.predecessors(v)
        if not G.is_directed():
            assert G.contains(v, u)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
