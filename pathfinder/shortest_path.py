"""
Shortest-path engine.

Classic Dijkstra over the undirected graph held in a GraphSnapshot. The
next node to settle is found by scanning every unvisited node in insertion
order, which is O(V^2) overall and fine for the few hundred nodes the
editor targets. Ties go to the first node encountered; callers should not
rely on that.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from pathfinder.errors import UnknownNode
from pathfinder.graph_store import NODE_ID_PREFIX, GraphSnapshot, GraphStore, NodeId, edge_key


@dataclass(frozen=True)
class PathResult:
    """A source-to-target node sequence and its total weight."""
    path: Tuple[NodeId, ...]
    total_weight: int

    def edge_pairs(self) -> List[Tuple[NodeId, NodeId]]:
        return list(zip(self.path, self.path[1:]))

    def contains_node(self, node_id: NodeId) -> bool:
        return node_id in self.path

    def contains_edge(self, a: NodeId, b: NodeId) -> bool:
        key = edge_key(a, b)
        return any(edge_key(u, v) == key for u, v in self.edge_pairs())

    def describe(self, prefix: str = NODE_ID_PREFIX) -> str:
        """Human readable form, e.g. '1 → 2 → 3 (weight 7)'."""
        labels = [display_label(n, prefix) for n in self.path]
        return f"{' → '.join(labels)} (weight {self.total_weight})"


def display_label(node_id: NodeId, prefix: str = NODE_ID_PREFIX) -> str:
    """Strip the generated-id prefix for display ('node12' -> '12')."""
    text = str(node_id)
    if prefix and text.startswith(prefix) and text[len(prefix):].isdigit():
        return text[len(prefix):]
    return text


def shortest_path(graph: Union[GraphSnapshot, GraphStore],
                  source: NodeId, target: NodeId) -> Optional[PathResult]:
    """
    Compute a minimum-weight path from source to target.

    Args:
        graph: A snapshot, or a store to snapshot now
        source: Start node id (must exist)
        target: End node id (must exist)

    Returns:
        PathResult, or None when target is unreachable from source
    """
    snapshot = graph.snapshot() if isinstance(graph, GraphStore) else graph
    adjacency = snapshot.adjacency()
    for node_id in (source, target):
        if node_id not in adjacency:
            raise UnknownNode(f"Node {node_id} does not exist")

    distances: Dict[NodeId, float] = {n: math.inf for n in snapshot.node_ids}
    previous: Dict[NodeId, Optional[NodeId]] = {n: None for n in snapshot.node_ids}
    distances[source] = 0
    unvisited = dict.fromkeys(snapshot.node_ids)

    while unvisited:
        current = None
        min_distance = math.inf
        for node_id in unvisited:
            if distances[node_id] < min_distance:
                min_distance = distances[node_id]
                current = node_id

        if current is None or current == target:
            break
        del unvisited[current]

        for neighbor, weight in adjacency[current]:
            if neighbor not in unvisited:
                continue
            candidate = distances[current] + weight
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                previous[neighbor] = current

    if distances[target] == math.inf:
        return None

    path = []
    node = target
    while node is not None:
        path.append(node)
        node = previous[node]
    path.reverse()
    return PathResult(path=tuple(path), total_weight=distances[target])
