"""
Transient highlight registry.

Keeps "recently changed" nodes and edges, and the shortest-path result on
display, for a fixed delay. Expiry is lazy: entries are dropped when read
after their deadline, or in bulk by expire(), which the UI calls from a
periodic timer.
"""

import logging
import time
from typing import Callable, Dict, Hashable, List, Optional, Set, Tuple

from pathfinder.graph_store import NodeId, edge_key
from pathfinder.shortest_path import PathResult

logger = logging.getLogger(__name__)

HighlightKey = Tuple[str, Hashable]


class HighlightRegistry:
    """
    Time-limited emphasis on nodes, edges and the displayed path.

    Each registration carries its own deadline, so several edges added in
    quick succession fade out independently.
    """

    def __init__(self, delay: float = 15.0, clock: Callable[[], float] = time.monotonic):
        self.delay = delay
        self._clock = clock
        self._expiry: Dict[HighlightKey, float] = {}
        self._path: Optional[PathResult] = None
        self._path_deadline: Optional[float] = None

    @property
    def path(self) -> Optional[PathResult]:
        """The displayed shortest path, or None once its deadline has passed."""
        self._expire_path(self._clock())
        return self._path

    # --- Registration ---

    def highlight_node(self, node_id: NodeId) -> None:
        self._register(("node", node_id))

    def highlight_edge(self, a: NodeId, b: NodeId) -> None:
        self._register(("edge", edge_key(a, b)))

    def forget_edge(self, a: NodeId, b: NodeId) -> None:
        self._expiry.pop(("edge", edge_key(a, b)), None)

    def set_path(self, result: PathResult) -> None:
        self._path = result
        self._path_deadline = self._clock() + self.delay

    def clear_path(self) -> None:
        self._path = None
        self._path_deadline = None

    def clear(self) -> None:
        """Drop every highlight and the displayed path immediately."""
        self._expiry.clear()
        self.clear_path()

    def _register(self, key: HighlightKey) -> None:
        self._expiry[key] = self._clock() + self.delay

    # --- Reads (lazy expiry) ---

    def is_node_highlighted(self, node_id: NodeId) -> bool:
        return self._is_live(("node", node_id))

    def is_edge_highlighted(self, a: NodeId, b: NodeId) -> bool:
        return self._is_live(("edge", edge_key(a, b)))

    def active_nodes(self) -> Set[NodeId]:
        self.expire()
        return {value for kind, value in self._expiry if kind == "node"}

    def active_edges(self) -> List[frozenset]:
        self.expire()
        return [value for kind, value in self._expiry if kind == "edge"]

    def __len__(self) -> int:
        self.expire()
        return len(self._expiry)

    def expire(self) -> int:
        """
        Remove every entry past its deadline; return how many were removed.

        The displayed path counts as one entry.
        """
        now = self._clock()
        expired = [key for key, deadline in self._expiry.items() if deadline <= now]
        for key in expired:
            del self._expiry[key]
        removed = len(expired) + self._expire_path(now)
        if removed:
            logger.debug(f"Expired {removed} highlight(s)")
        return removed

    def _expire_path(self, now: float) -> int:
        if self._path is None or self._path_deadline > now:
            return 0
        self.clear_path()
        return 1

    def _is_live(self, key: HighlightKey) -> bool:
        deadline = self._expiry.get(key)
        if deadline is None:
            return False
        if deadline <= self._clock():
            del self._expiry[key]
            return False
        return True
