"""
Graph store for Pathfinder.

Owns the canonical node and edge collections of an undirected, weighted
graph. Edges are keyed by the unordered pair of their endpoints, so
(a, b) and (b, a) always address the same edge.

Every mutation is atomic: it either applies its single change or raises a
GraphError subclass and leaves the store untouched.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Hashable, List, Optional, Tuple

from pathfinder.errors import (
    DuplicateEdge,
    DuplicateId,
    EdgeNotFound,
    InvalidWeight,
    SelfLoop,
    UnknownNode,
)

logger = logging.getLogger(__name__)

NodeId = Hashable

NODE_ID_PREFIX = "node"


@dataclass
class Node:
    """A graph node with an optional fixed 2-D position."""
    id: NodeId
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        if self.x is None or self.y is None:
            return None
        return (self.x, self.y)


@dataclass
class Edge:
    """An undirected weighted edge. source/target only record insertion order."""
    source: NodeId
    target: NodeId
    weight: int

    @property
    def key(self) -> FrozenSet[NodeId]:
        return edge_key(self.source, self.target)

    def connects(self, a: NodeId, b: NodeId) -> bool:
        return self.key == edge_key(a, b)

    def other(self, node_id: NodeId) -> NodeId:
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        raise UnknownNode(f"{node_id} is not an endpoint of this edge")


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable copy of the graph contents at one instant."""
    node_ids: Tuple[NodeId, ...]
    edges: Tuple[Tuple[NodeId, NodeId, int], ...]

    def adjacency(self) -> Dict[NodeId, List[Tuple[NodeId, int]]]:
        adjacency: Dict[NodeId, List[Tuple[NodeId, int]]] = {n: [] for n in self.node_ids}
        for a, b, weight in self.edges:
            adjacency[a].append((b, weight))
            adjacency[b].append((a, weight))
        return adjacency


def edge_key(a: NodeId, b: NodeId) -> FrozenSet[NodeId]:
    """Canonical key for the unordered pair {a, b}."""
    return frozenset((a, b))


def check_weight(weight) -> int:
    """Return weight if it is a positive integer, else raise InvalidWeight."""
    if isinstance(weight, bool) or not isinstance(weight, int) or weight <= 0:
        raise InvalidWeight(f"Weight must be a positive whole number, got {weight!r}")
    return weight


class GraphStore:
    """
    In-memory undirected weighted graph.

    Nodes keep their insertion order; the path engine scans them in that
    order when picking the next node to visit.
    """

    def __init__(self):
        self._nodes: Dict[NodeId, Node] = {}
        self._edges: Dict[FrozenSet[NodeId], Edge] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    # --- Queries ---

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: NodeId) -> Optional[Node]:
        return self._nodes.get(node_id)

    def has_edge(self, a: NodeId, b: NodeId) -> bool:
        return edge_key(a, b) in self._edges

    def get_edge(self, a: NodeId, b: NodeId) -> Optional[Edge]:
        return self._edges.get(edge_key(a, b))

    def neighbors(self, node_id: NodeId) -> List[Tuple[NodeId, int]]:
        """Return (peer_id, weight) for every edge incident to node_id."""
        if node_id not in self._nodes:
            raise UnknownNode(f"Node {node_id} does not exist")
        return [
            (edge.other(node_id), edge.weight)
            for edge in self._edges.values()
            if node_id in edge.key
        ]

    def positions(self) -> Dict[NodeId, Tuple[float, float]]:
        return {n.id: n.position for n in self._nodes.values() if n.position is not None}

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(
            node_ids=tuple(self._nodes),
            edges=tuple((e.source, e.target, e.weight) for e in self._edges.values()),
        )

    def next_node_id(self, prefix: str = NODE_ID_PREFIX) -> str:
        """
        Return the next unused id of the form '<prefix><n>'.

        n is one more than the largest numeric suffix among ids that
        already use the prefix, or 1 when there are none.
        """
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")
        highest = 0
        for node_id in self._nodes:
            match = pattern.match(str(node_id))
            if match:
                highest = max(highest, int(match.group(1)))
        return f"{prefix}{highest + 1}"

    # --- Mutations ---

    def add_node(self, node_id: NodeId, position: Optional[Tuple[float, float]] = None) -> Node:
        if node_id in self._nodes:
            raise DuplicateId(f"Node {node_id} already exists")
        x, y = position if position is not None else (None, None)
        node = Node(id=node_id, x=x, y=y)
        self._nodes[node_id] = node
        logger.debug(f"Added node {node_id} at {position}")
        return node

    def add_edge(self, a: NodeId, b: NodeId, weight: int) -> Edge:
        for node_id in (a, b):
            if node_id not in self._nodes:
                raise UnknownNode(f"Node {node_id} does not exist")
        if a == b:
            raise SelfLoop(f"Cannot connect {a} to itself")
        if edge_key(a, b) in self._edges:
            raise DuplicateEdge(f"{a} and {b} are already connected")
        check_weight(weight)
        edge = Edge(source=a, target=b, weight=weight)
        self._edges[edge.key] = edge
        logger.debug(f"Added edge {a}-{b} weight={weight}")
        return edge

    def remove_edge(self, a: NodeId, b: NodeId) -> Edge:
        edge = self._edges.pop(edge_key(a, b), None)
        if edge is None:
            raise EdgeNotFound(f"No edge connects {a} and {b}")
        logger.debug(f"Removed edge {a}-{b}")
        return edge

    def set_weight(self, a: NodeId, b: NodeId, weight: int) -> Edge:
        edge = self._edges.get(edge_key(a, b))
        if edge is None:
            raise EdgeNotFound(f"No edge connects {a} and {b}")
        check_weight(weight)
        edge.weight = weight
        logger.debug(f"Set weight of {a}-{b} to {weight}")
        return edge

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()
