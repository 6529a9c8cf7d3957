import random

import networkx as nx
import pytest

from pathfinder.errors import UnknownNode
from pathfinder.graph_store import GraphStore
from pathfinder.shortest_path import PathResult, display_label, shortest_path


def build_store(nodes, edges):
    store = GraphStore()
    for n in nodes:
        store.add_node(n)
    for a, b, w in edges:
        store.add_edge(a, b, w)
    return store


def test_four_node_example():
    store = build_store([1, 2, 3, 4], [(1, 2, 4), (2, 3, 1), (1, 3, 10), (3, 4, 2)])
    result = shortest_path(store, 1, 4)
    assert result == PathResult(path=(1, 2, 3, 4), total_weight=7)


def test_direction_does_not_matter():
    store = build_store([1, 2, 3, 4], [(1, 2, 4), (2, 3, 1), (1, 3, 10), (3, 4, 2)])
    result = shortest_path(store, 4, 1)
    assert result.path == (4, 3, 2, 1)
    assert result.total_weight == 7


def test_disjoint_components_have_no_path():
    store = build_store(["a", "b", "c", "d"], [("a", "b", 1), ("c", "d", 1)])
    assert shortest_path(store, "a", "d") is None


def test_isolated_target():
    store = build_store(["a", "b"], [])
    assert shortest_path(store.snapshot(), "a", "b") is None


def test_source_equals_target():
    store = build_store(["a", "b"], [("a", "b", 3)])
    assert shortest_path(store, "a", "a") == PathResult(path=("a",), total_weight=0)


def test_unknown_node():
    store = build_store(["a"], [])
    with pytest.raises(UnknownNode):
        shortest_path(store, "a", "zzz")


def test_matches_networkx_on_random_graphs():
    rng = random.Random(1234)
    for _ in range(25):
        count = rng.randint(2, 25)
        nodes = [f"node{i}" for i in range(1, count + 1)]
        store = build_store(nodes, [])
        G = nx.Graph()
        G.add_nodes_from(nodes)
        for _ in range(rng.randint(0, count * 2)):
            a, b = rng.sample(nodes, 2)
            if not store.has_edge(a, b):
                w = rng.randint(1, 10)
                store.add_edge(a, b, w)
                G.add_edge(a, b, weight=w)

        source, target = rng.choice(nodes), rng.choice(nodes)
        result = shortest_path(store, source, target)
        if nx.has_path(G, source, target):
            expected = nx.dijkstra_path_length(G, source, target, weight="weight")
            assert result is not None
            assert result.total_weight == expected
            assert result.path[0] == source and result.path[-1] == target
            # Path must follow real edges and add up to the reported weight
            assert sum(store.get_edge(u, v).weight for u, v in result.edge_pairs()) == expected
        else:
            assert result is None


class TestPathResult:

    def test_contains_edge_is_order_insensitive(self):
        result = PathResult(path=("a", "b", "c"), total_weight=3)
        assert result.contains_edge("b", "a")
        assert result.contains_edge("b", "c")
        assert not result.contains_edge("a", "c")
        assert result.contains_node("c")

    def test_describe_strips_prefix(self):
        result = PathResult(path=("node1", "node12", "hub"), total_weight=5)
        assert result.describe() == "1 → 12 → hub (weight 5)"

    def test_display_label(self):
        assert display_label("node3") == "3"
        assert display_label("nodeX") == "nodeX"
        assert display_label(42) == "42"
