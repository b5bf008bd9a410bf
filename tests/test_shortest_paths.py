import math
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from graphwalk.algorithms.shortest_paths import ShortestPaths  # noqa: E402
from graphwalk.core.exceptions import InvalidVertexError, NoPathError  # noqa: E402
from graphwalk.core.graph import DirectedGraph  # noqa: E402


def unit(u, v):
    return 1.0


def weighted_graph(edges, n=None):
    """Directed graph from ``[(u, v, w), ...]``; returns (G, weight function)."""
    G = DirectedGraph()
    n = n or max(max(u, v) for u, v, _ in edges)
    G.add_vertices(n)
    weights = {}
    for u, v, w in edges:
        G.add_edge(u, v)
        weights[(u, v)] = w
    return G, lambda u, v: weights[(u, v)]


class TestDijkstra:
    def test_scenario_a(self, scenario_a):
        sp = ShortestPaths(scenario_a, 1, 5, weight=unit)
        sp.set_paths()
        assert sp.path_to() == [1, 3, 4, 5]
        assert sp.distance(5) == 3.0
        assert sp.predecessor(3) == 1
        assert sp.predecessor(1) == 0

    def test_relaxation_beats_first_discovery(self, scenario_b):
        G, weights = scenario_b
        sp = ShortestPaths(G, 1, 8, weight=lambda u, v: weights[(u, v)])
        sp.set_paths()
        assert sp.path_to() == [1, 2, 3, 4, 5, 6, 7, 8]
        assert sp.distance(8) == 7.0

    def test_unexplored_vertices_stay_infinite(self):
        G, w = weighted_graph([(1, 2, 1.0), (2, 3, 1.0), (1, 4, 10.0), (4, 5, 1.0)])
        sp = ShortestPaths(G, 1, 3, weight=w)
        sp.set_paths()
        assert sp.path_to() == [1, 2, 3]
        assert sp.distance(3) == 2.0
        assert sp.distance(4) == 10.0
        assert math.isinf(sp.distance(5))
        assert sp.predecessor(5) == 0
        assert sp.distances() == {1: 0.0, 2: 1.0, 3: 2.0, 4: 10.0}

    def test_without_destination_reaches_everything(self):
        G, w = weighted_graph([(1, 2, 1.0), (2, 3, 1.0), (1, 4, 10.0), (4, 5, 1.0)])
        sp = ShortestPaths(G, 1, weight=w)
        sp.set_paths()
        assert sp.get_dest() == 0
        assert sp.distance(5) == 11.0
        assert sp.path_to(5) == [1, 4, 5]
        with pytest.raises(ValueError):
            sp.path_to()

    def test_path_to_source(self, scenario_a):
        sp = ShortestPaths(scenario_a, 2, weight=unit)
        sp.set_paths()
        assert sp.path_to(2) == [2]
        assert sp.distance(2) == 0.0

    def test_unreachable_vertex(self, scenario_a):
        sp = ShortestPaths(scenario_a, 3, weight=unit)
        sp.set_paths()
        assert math.isinf(sp.distance(1))
        with pytest.raises(NoPathError) as exc:
            sp.path_to(1)
        assert exc.value.source == 3
        assert exc.value.target == 1

    def test_invalid_vertices(self, scenario_a):
        with pytest.raises(InvalidVertexError):
            ShortestPaths(scenario_a, 9, weight=unit)
        sp = ShortestPaths(scenario_a, 1, weight=unit)
        sp.set_paths()
        with pytest.raises(InvalidVertexError):
            sp.path_to(0)
        assert math.isinf(sp.distance(42))
        assert sp.predecessor(42) == 0

    def test_weight_is_required(self, scenario_a):
        with pytest.raises(ValueError):
            ShortestPaths(scenario_a, 1)

    def test_subclass_hooks(self, scenario_b):
        G, weights = scenario_b

        class ChainPaths(ShortestPaths):
            def edge_weight(self, u, v):
                return weights[(u, v)]

        sp = ChainPaths(G, 1, 8)
        assert sp.source == 1 and sp.dest == 8
        sp.set_paths()
        assert sp.distance(8) == 7.0

    def test_set_paths_starts_over(self, scenario_a):
        sp = ShortestPaths(scenario_a, 1, 3, weight=unit)
        sp.set_paths()
        scenario_a.remove_edge(1, 3)
        sp.set_paths()
        assert sp.path_to() == [1, 2, 3]
        assert sp.distance(3) == 2.0

    def test_zero_weight_edges(self):
        G, w = weighted_graph([(1, 2, 0.0), (2, 3, 0.0), (1, 3, 1.0)])
        sp = ShortestPaths(G, 1, 3, weight=w)
        sp.set_paths()
        assert sp.path_to() == [1, 2, 3]
        assert sp.distance(3) == 0.0


class TestAStar:
    def test_manhattan_grid(self, grid3):
        G, coords = grid3
        target = next(v for v, rc in coords.items() if rc == (2, 2))

        def manhattan(v):
            r, c = coords[v]
            return abs(2 - r) + abs(2 - c)

        sp = ShortestPaths(G, 1, target, weight=unit, heuristic=manhattan)
        sp.set_paths()
        path = sp.path_to()
        assert sp.distance(target) == 4.0
        assert len(path) == 5
        assert path[0] == 1 and path[-1] == target
        for u, v in zip(path, path[1:]):
            assert G.contains(u, v)

    def test_improved_closed_vertex_is_reopened(self):
        # 2 looks expensive to the heuristic, so 3 is closed first via the long edge.
        G, w = weighted_graph([(1, 2, 1.0), (1, 3, 4.0), (2, 3, 1.0), (3, 4, 5.0)])
        h = {1: 0.0, 2: 6.0, 3: 0.0, 4: 0.0}
        sp = ShortestPaths(G, 1, 4, weight=w, heuristic=h.__getitem__)
        sp.set_paths()
        assert sp.path_to() == [1, 2, 3, 4]
        assert sp.distance(4) == 7.0

    def test_estimated_distance_override(self, scenario_a):
        class Guided(ShortestPaths):
            def estimated_distance(self, v):
                return (5 - v) / 2

        sp = Guided(scenario_a, 1, 5, weight=unit)
        sp.set_paths()
        assert sp.path_to() == [1, 3, 4, 5]


class TestAgainstNetworkx:
    def test_random_graph_distances(self):
        nx = pytest.importorskip("networkx")
        import random

        rng = random.Random(3)
        G = DirectedGraph()
        G.add_vertices(30)
        weights = {}
        for _ in range(120):
            u, v = rng.randint(1, 30), rng.randint(1, 30)
            if G.contains(u, v):
                continue
            G.add_edge(u, v)
            weights[(u, v)] = float(rng.randint(1, 9))

        ref = nx.DiGraph()
        ref.add_nodes_from(range(1, 31))
        for (u, v), w in weights.items():
            ref.add_edge(u, v, weight=w)

        sp = ShortestPaths(G, 1, weight=lambda u, v: weights[(u, v)])
        sp.set_paths()
        expected = nx.single_source_dijkstra_path_length(ref, 1)
        assert sp.distances() == {v: float(d) for v, d in expected.items()}
        for v in expected:
            path = sp.path_to(v)
            assert sum(weights[(a, b)] for a, b in zip(path, path[1:])) == expected[v]
