"""
Node placement and initial graph generation.

The editor never lets a force simulation move nodes: every node gets a fixed
position when it is created. Placement is organic - a ring of hub nodes with
the rest scattered around them - and keeps a minimum spacing between nodes.
"""

import logging
import math
import random
from typing import Dict, Optional, Tuple

import networkx as nx

from pathfinder.errors import GraphError
from pathfinder.graph_store import GraphStore, NodeId

logger = logging.getLogger(__name__)

MIN_WEIGHT = 1
MAX_WEIGHT = 10

# Distance multipliers from a hub for scattered nodes
HUB_RADII = (0.6, 0.8, 1.0)

LONG_DISTANCE_CONNECTIONS = 10
MAX_PLACEMENT_ATTEMPTS = 200
ORIGIN = (0.0, 0.0)


def random_weight(rng: Optional[random.Random] = None) -> int:
    """Uniform integer edge weight in [MIN_WEIGHT, MAX_WEIGHT]."""
    return (rng or random).randint(MIN_WEIGHT, MAX_WEIGHT)


def _distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class OrganicLayout:
    """Places nodes on a hub ring or scattered around an existing hub."""

    def __init__(self, rng: Optional[random.Random] = None, radius: float = 300.0,
                 min_distance: float = 50.0, hub_count: int = 5):
        self.rng = rng or random.Random()
        self.radius = radius
        self.min_distance = min_distance
        self.hub_count = hub_count

    def place(self, node_id: NodeId,
              positions: Dict[NodeId, Tuple[float, float]]) -> Tuple[float, float]:
        """Return an (x, y) for node_id given the positions already taken."""
        existing = list(positions.values())
        if len(existing) < self.hub_count:
            angle = 2 * math.pi * len(existing) / self.hub_count
            return (self.radius * 0.4 * math.cos(angle), self.radius * 0.4 * math.sin(angle))

        hubs = existing[:self.hub_count]
        candidate = hubs[0]
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            candidate = self._scatter(self.rng.choice(hubs))
            if all(_distance(candidate, p) >= self.min_distance for p in existing):
                return candidate
        logger.debug(f"No free spot for {node_id} after {MAX_PLACEMENT_ATTEMPTS} attempts")
        return candidate

    def _scatter(self, hub: Tuple[float, float]) -> Tuple[float, float]:
        multiplier = self.rng.choice(HUB_RADII)
        angle = self.rng.random() * 2 * math.pi
        distance = self.radius * multiplier * (0.3 + self.rng.random() * 0.7)
        offset = (self.rng.random() - 0.5) * 50
        return (hub[0] + distance * math.cos(angle) + offset,
                hub[1] + distance * math.sin(angle) + offset)


def _try_add_edge(store: GraphStore, a: NodeId, b: NodeId, rng: random.Random) -> bool:
    try:
        store.add_edge(a, b, random_weight(rng))
    except GraphError:
        return False
    return True


def _connect_components(store: GraphStore, rng: random.Random) -> int:
    """Bridge every stray component to the largest one with its closest pair."""
    G = nx.Graph()
    G.add_nodes_from(n.id for n in store.nodes)
    G.add_edges_from((e.source, e.target) for e in store.edges)
    components = sorted(nx.connected_components(G), key=len, reverse=True)
    if len(components) <= 1:
        return 0

    positions = store.positions()
    order = {n.id: i for i, n in enumerate(store.nodes)}
    main = set(components[0])
    bridges = 0
    for component in components[1:]:
        a, b = min(
            ((u, v) for u in sorted(component, key=order.get) for v in sorted(main, key=order.get)),
            key=lambda pair: _distance(positions.get(pair[0], ORIGIN), positions.get(pair[1], ORIGIN)),
        )
        if _try_add_edge(store, a, b, rng):
            bridges += 1
        main |= component
    return bridges


def generate_initial_graph(store: GraphStore, node_count: int = 50,
                           rng: Optional[random.Random] = None,
                           layout: Optional[OrganicLayout] = None) -> GraphStore:
    """
    Populate an empty store with node1..nodeN and organic connections.

    Each node is linked to its 2-4 nearest neighbours, a handful of random
    long-distance edges are added, and any stray component is bridged to
    the main one.
    """
    rng = rng or random.Random()
    layout = layout or OrganicLayout(rng=rng)

    for i in range(1, node_count + 1):
        node_id = f"node{i}"
        store.add_node(node_id, layout.place(node_id, store.positions()))

    nodes = store.nodes
    for node in nodes:
        ranked = sorted(
            (other for other in nodes if other.id != node.id),
            key=lambda other: _distance(node.position, other.position),
        )
        connect_count = 2 + rng.randrange(3)
        for other in ranked[:connect_count]:
            _try_add_edge(store, node.id, other.id, rng)

    if len(nodes) > 1:
        for _ in range(LONG_DISTANCE_CONNECTIONS):
            a, b = rng.choice(nodes), rng.choice(nodes)
            if a.id != b.id:
                _try_add_edge(store, a.id, b.id, rng)

    bridges = _connect_components(store, rng)
    logger.info(f"Generated graph: {len(store)} nodes, {len(store.edges)} edges ({bridges} bridges)")
    return store
