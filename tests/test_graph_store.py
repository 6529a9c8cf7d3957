"""
Tests for the undirected graph store: symmetry, duplicate rejection and
weight validation.
"""

import pytest

from pathfinder.errors import (
    DuplicateEdge,
    DuplicateId,
    EdgeNotFound,
    InvalidWeight,
    SelfLoop,
    UnknownNode,
)
from pathfinder.graph_store import GraphStore


@pytest.fixture
def store():
    s = GraphStore()
    for node_id in ("a", "b", "c", "d"):
        s.add_node(node_id)
    return s


class TestNodes:

    def test_add_node_keeps_position(self):
        s = GraphStore()
        node = s.add_node("node1", (10.0, -5.5))
        assert node.position == (10.0, -5.5)
        assert s.positions() == {"node1": (10.0, -5.5)}

    def test_add_node_without_position(self):
        s = GraphStore()
        node = s.add_node(7)
        assert node.position is None
        assert 7 in s
        assert s.positions() == {}

    def test_duplicate_id_rejected(self, store):
        with pytest.raises(DuplicateId):
            store.add_node("a")
        assert len(store) == 4

    def test_next_node_id_uses_highest_suffix(self):
        s = GraphStore()
        assert s.next_node_id() == "node1"
        s.add_node("node1")
        s.add_node("node7")
        s.add_node("other3")
        assert s.next_node_id() == "node8"

    def test_next_node_id_ignores_non_numeric(self, store):
        assert store.next_node_id() == "node1"


class TestEdges:

    def test_undirected_removal_both_orders(self, store):
        store.add_edge("a", "b", 3)
        store.remove_edge("b", "a")
        assert not store.has_edge("a", "b")

        store.add_edge("a", "b", 3)
        store.remove_edge("a", "b")
        assert not store.has_edge("b", "a")

    def test_neighbors_symmetric(self, store):
        store.add_edge("a", "b", 4)
        store.add_edge("c", "a", 2)
        assert ("b", 4) in store.neighbors("a")
        assert ("a", 4) in store.neighbors("b")
        assert ("c", 2) in store.neighbors("a")
        assert ("a", 2) in store.neighbors("c")
        assert store.neighbors("d") == []

    def test_neighbors_unknown_node(self, store):
        with pytest.raises(UnknownNode):
            store.neighbors("zzz")

    @pytest.mark.parametrize("first,second", [(("a", "b"), ("a", "b")), (("a", "b"), ("b", "a"))])
    def test_duplicate_edge_rejected(self, store, first, second):
        store.add_edge(*first, 1)
        with pytest.raises(DuplicateEdge):
            store.add_edge(*second, 9)
        assert store.get_edge("a", "b").weight == 1
        assert len(store.edges) == 1

    def test_unknown_endpoint(self, store):
        with pytest.raises(UnknownNode):
            store.add_edge("a", "missing", 1)
        assert store.edges == []

    def test_self_loop(self, store):
        with pytest.raises(SelfLoop):
            store.add_edge("a", "a", 1)

    @pytest.mark.parametrize("weight", [0, -5, 2.5, "3", True, None])
    def test_add_edge_invalid_weight(self, store, weight):
        with pytest.raises(InvalidWeight):
            store.add_edge("a", "b", weight)
        assert not store.has_edge("a", "b")

    def test_remove_missing_edge_twice(self, store):
        store.add_edge("a", "b", 1)
        store.remove_edge("a", "b")
        with pytest.raises(EdgeNotFound):
            store.remove_edge("a", "b")
        with pytest.raises(EdgeNotFound):
            store.remove_edge("b", "a")
        assert store.edges == []

    def test_set_weight_preserves_endpoints(self, store):
        store.add_edge("a", "b", 1)
        edge = store.set_weight("b", "a", 6)
        assert (edge.source, edge.target, edge.weight) == ("a", "b", 6)
        assert edge.connects("b", "a")
        assert store.neighbors("b") == [("a", 6)]

    @pytest.mark.parametrize("weight", [0, -5])
    def test_set_weight_positivity(self, store, weight):
        store.add_edge("a", "b", 4)
        with pytest.raises(InvalidWeight):
            store.set_weight("a", "b", weight)
        assert store.get_edge("a", "b").weight == 4

    def test_set_weight_missing_edge(self, store):
        with pytest.raises(EdgeNotFound):
            store.set_weight("a", "c", 3)

    def test_get_missing_edge_returns_none(self, store):
        assert store.get_edge("a", "c") is None
        assert store.get_edge("a", "missing") is None

    def test_error_default_message(self):
        assert EdgeNotFound().message == EdgeNotFound.default_message
        assert EdgeNotFound("gone").message == "gone"

    def test_snapshot_is_detached(self, store):
        store.add_edge("a", "b", 2)
        snap = store.snapshot()
        store.set_weight("a", "b", 9)
        store.add_edge("c", "d", 1)
        assert snap.edges == (("a", "b", 2),)
        assert snap.node_ids == ("a", "b", "c", "d")

    def test_clear(self, store):
        store.add_edge("a", "b", 2)
        store.clear()
        assert len(store) == 0
        assert store.edges == []
