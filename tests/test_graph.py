"""Tests for the graph runners on the sample graph.

Shortest paths are cross-checked against an independent brute-force
enumeration of simple paths.
"""
import unittest

from algorithms import get_algorithm
from algorithms.paths import reconstruct
from algorithms.step import Tracer
from structures import EdgeState, Graph, NodeState, StructureError


def drain(key, graph, **params):
    info = get_algorithm(key)
    tr = Tracer(graph, None, info.counters)
    gen = info.fn(tr, graph, **params)
    steps = []
    while True:
        try:
            steps.append(next(gen))
        except StopIteration as stop:
            return steps, stop.value, tr


def simple_paths(graph, start, end):
    """Every simple path start → end (the sample graph is small enough)."""
    out = []

    def walk(node, path):
        if node == end:
            out.append(list(path))
            return
        for nbr, _ in graph.neighbours(node):
            if nbr not in path:
                path.append(nbr)
                walk(nbr, path)
                path.pop()

    walk(start, [start])
    return out


def weight(graph, path):
    return sum(graph.edge_between(a, b).weight for a, b in zip(path, path[1:]))


class TestSampleGraph(unittest.TestCase):

    def test_shape(self):
        g = Graph.sample()
        self.assertEqual(len(g.nodes), 8)
        self.assertEqual(len(g.edges), 11)
        self.assertEqual((g.start, g.end), (0, 7))
        self.assertIs(g.nodes[0].state, NodeState.START)
        self.assertIs(g.nodes[7].state, NodeState.END)

    def test_edges_are_undirected(self):
        g = Graph.sample()
        self.assertIs(g.edge_between(0, 3), g.edge_between(3, 0))


class TestBFS(unittest.TestCase):

    def test_finds_a_hop_minimal_path(self):
        g = Graph.sample()
        steps, result, tr = drain("bfs", g)
        self.assertTrue(result.found)
        self.assertEqual(result.path[0], 0)
        self.assertEqual(result.path[-1], 7)
        fewest = min(len(p) for p in simple_paths(Graph.sample(), 0, 7))
        self.assertEqual(len(result.path), fewest)
        self.assertEqual(len(result.path) - 1, 3)
        self.assertTrue(steps[-1].is_final)

    def test_path_is_drawn_on_the_final_step(self):
        g = Graph.sample()
        steps, result, _ = drain("bfs", g)
        final = steps[-1].data
        on_path = {n["id"] for n in final["nodes"] if n["state"] == NodeState.PATH.value}
        self.assertEqual(on_path, set(result.path))
        path_edges = [e for e in final["edges"] if e["state"] == EdgeState.PATH.value]
        self.assertEqual(len(path_edges), len(result.path) - 1)

    def test_visits_each_node_at_most_once(self):
        _, result, tr = drain("bfs", Graph.sample())
        self.assertEqual(len(result.visited), len(set(result.visited)))
        self.assertEqual(tr.counters["visits"], len(result.visited))

    def test_unreachable_end(self):
        g = Graph.sample()
        g.create_node(8, 500, 400)
        _, result, _ = drain("bfs", g, start=0, end=8)
        self.assertFalse(result.found)
        self.assertEqual(result.path, [])
        self.assertEqual(len(result.visited), 8)


class TestDFS(unittest.TestCase):

    def test_reaches_the_end(self):
        g = Graph.sample()
        _, result, _ = drain("dfs", g)
        self.assertTrue(result.found)
        self.assertEqual((result.path[0], result.path[-1]), (0, 7))
        for a, b in zip(result.path, result.path[1:]):
            self.assertIsNotNone(g.edge_between(a, b))

    def test_start_equals_end(self):
        _, result, _ = drain("dfs", Graph.sample(), start=3, end=3)
        self.assertEqual(result.path, [3])


class TestDijkstra(unittest.TestCase):

    def test_weight_minimal_path(self):
        g = Graph.sample()
        _, result, tr = drain("dijkstra", g)
        best = min(weight(g, p) for p in simple_paths(g, 0, 7))
        self.assertEqual(result.cost, best)
        self.assertEqual(result.cost, 10)
        self.assertEqual(result.path, [0, 3, 4, 5, 7])
        self.assertGreater(tr.counters["relaxations"], 0)

    def test_every_pair_from_node_zero(self):
        for end in range(1, 8):
            with self.subTest(end=end):
                g = Graph.sample()
                _, result, _ = drain("dijkstra", g, start=0, end=end)
                best = min(weight(g, p) for p in simple_paths(g, 0, end))
                self.assertEqual(result.cost, best)
                self.assertEqual(weight(g, result.path), result.cost)

    def test_distances_overlay_uses_none_for_infinity(self):
        steps, _, _ = drain("dijkstra", Graph.sample())
        first = steps[0].overlay["distances"]
        self.assertEqual(first["0"], 0)
        self.assertIsNone(first["7"])


class TestReconstruct(unittest.TestCase):

    def test_reconstruct(self):
        self.assertEqual(reconstruct({1: 0, 2: 1}, 0, 2), [0, 1, 2])
        self.assertEqual(reconstruct({}, 0, 2), [])
        self.assertEqual(reconstruct({}, 4, 4), [4])


class TestGraphEditing(unittest.TestCase):

    def test_next_id(self):
        g = Graph()
        self.assertEqual(g.next_id(), 0)
        self.assertEqual(Graph.sample().next_id(), 8)

    def test_connect_rules(self):
        g = Graph()
        for nid in range(3):
            g.create_node(nid, 100 * nid, 100)
        edge = g.connect(0, 1, 3)
        self.assertIs(g.edge_between(1, 0), edge)
        for a, b in ((1, 0), (0, 1), (2, 2), (0, 5)):
            with self.subTest(a=a, b=b):
                with self.assertRaises(StructureError):
                    g.connect(a, b, 1)
        self.assertEqual(len(g.edges), 1)

    def test_endpoints_must_differ(self):
        g = Graph.sample()
        g.set_start(3)
        self.assertEqual(g.nodes[3].state, NodeState.START)
        self.assertEqual(g.nodes[0].state, NodeState.DEFAULT)
        with self.assertRaises(StructureError):
            g.set_end(3)
        with self.assertRaises(StructureError):
            g.set_start(42)

    def test_clear(self):
        g = Graph.sample()
        g.clear()
        self.assertEqual(len(g), 0)
        self.assertEqual(g.edges, [])
        self.assertIsNone(g.start)
        self.assertEqual(g.neighbours(0), [])


if __name__ == "__main__":
    unittest.main()
