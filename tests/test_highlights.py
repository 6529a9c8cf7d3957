import pytest

from pathfinder.highlights import HighlightRegistry
from pathfinder.shortest_path import PathResult


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(clock):
    return HighlightRegistry(delay=15, clock=clock)


def test_edge_highlight_expires_after_delay(registry, clock):
    registry.highlight_edge("a", "b")
    assert registry.is_edge_highlighted("b", "a")
    clock.advance(14.9)
    assert registry.is_edge_highlighted("a", "b")
    clock.advance(0.2)
    assert not registry.is_edge_highlighted("a", "b")


def test_independent_expiry(registry, clock):
    registry.highlight_edge("a", "b")
    clock.advance(10)
    registry.highlight_edge("a", "c")
    registry.highlight_node("c")
    clock.advance(6)
    assert registry.active_edges() == [frozenset({"a", "c"})]
    assert registry.active_nodes() == {"c"}
    clock.advance(10)
    assert len(registry) == 0


def test_expire_counts_and_is_idempotent(registry, clock):
    registry.highlight_edge("a", "b")
    registry.highlight_node("a")
    clock.advance(20)
    assert registry.expire() == 2
    assert registry.expire() == 0


def test_forget_edge(registry):
    registry.highlight_edge("a", "b")
    registry.forget_edge("b", "a")
    assert not registry.is_edge_highlighted("a", "b")
    registry.forget_edge("x", "y")


def test_clear_drops_everything_before_timer(registry):
    registry.highlight_edge("a", "b")
    registry.set_path(PathResult(path=("a", "b"), total_weight=1))
    registry.clear()
    assert registry.path is None
    assert len(registry) == 0


def test_path_expires_after_delay(registry, clock):
    result = PathResult(path=("a", "b"), total_weight=1)
    registry.set_path(result)
    clock.advance(14.9)
    assert registry.path is result
    clock.advance(0.2)
    assert registry.expire() == 1
    assert registry.path is None
    assert registry.expire() == 0


def test_path_read_drops_expired_path(registry, clock):
    registry.set_path(PathResult(path=("a", "b"), total_weight=1))
    clock.advance(1000)
    assert registry.path is None


def test_new_path_restarts_deadline(registry, clock):
    registry.set_path(PathResult(path=("a", "b"), total_weight=1))
    clock.advance(10)
    replacement = PathResult(path=("a", "c"), total_weight=3)
    registry.set_path(replacement)
    clock.advance(10)
    assert registry.path is replacement


def test_clear_path(registry):
    registry.set_path(PathResult(path=("a", "b"), total_weight=1))
    registry.clear_path()
    assert registry.path is None
    assert registry.expire() == 0
