"""
Edit Session - Single source of truth for interactive editing state.

The session is a small state machine with one active mode at a time:

- ADDING_EDGE / REMOVING_EDGE / MODIFYING_WEIGHT / FINDING_PATH pick a
  source node, then a target node, then act on the pair. After a success
  the source stays selected so the user can chain further targets.
- SELECTING_PEERS_FOR_NEW_NODE collects the neighbours a new node will be
  connected to; confirm_selection() inserts it.

Store failures never escape: they are recorded on the state as a mode-local
error and the current step is kept. The session only ever looks at its own
scratch fields to decide what a pick means, never at rendering state.
"""

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple, Type

from pathfinder.errors import (
    EdgeNotFound,
    GraphError,
    InvalidWeight,
    NoPathExists,
    NoPeersSelected,
    UnknownNode,
)
from pathfinder.graph_store import GraphStore, NodeId
from pathfinder.highlights import HighlightRegistry
from pathfinder.layout import OrganicLayout, generate_initial_graph, random_weight
from pathfinder.shortest_path import display_label, shortest_path

logger = logging.getLogger(__name__)


class Mode(Enum):
    IDLE = "idle"
    SELECTING_PEERS_FOR_NEW_NODE = "add_node"
    ADDING_EDGE = "add_edge"
    REMOVING_EDGE = "remove_edge"
    MODIFYING_WEIGHT = "modify_weight"
    FINDING_PATH = "find_path"


_PAIR_ACTIONS = {
    Mode.ADDING_EDGE: "connect",
    Mode.REMOVING_EDGE: "disconnect",
    Mode.MODIFYING_WEIGHT: "edit the edge to",
    Mode.FINDING_PATH: "find a path to",
}


@dataclass(frozen=True)
class EditState:
    """Immutable snapshot of the current edit state."""
    mode: Mode = Mode.IDLE
    source_id: Optional[NodeId] = None
    target_id: Optional[NodeId] = None
    pending_input: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[Type[GraphError]] = None
    notice: Optional[str] = None
    pending_node_id: Optional[NodeId] = None
    pending_position: Optional[Tuple[float, float]] = None
    chosen_peers: Tuple[NodeId, ...] = ()

    @classmethod
    def idle(cls) -> "EditState":
        return cls()

    @property
    def is_active(self) -> bool:
        return self.mode is not Mode.IDLE

    @property
    def prompt(self) -> str:
        """Short instruction for the current step."""
        if self.mode is Mode.IDLE:
            return "Choose an action"
        if self.mode is Mode.SELECTING_PEERS_FOR_NEW_NODE:
            label = display_label(self.pending_node_id)
            return f"Pick the nodes to connect node {label} to, then confirm"
        if self.source_id is None:
            return "Pick the source node"
        if self.mode is Mode.MODIFYING_WEIGHT and self.pending_input is not None:
            return "Enter the new weight"
        return f"Pick a node to {_PAIR_ACTIONS[self.mode]} from {display_label(self.source_id)}"


def parse_weight(text) -> int:
    """Parse user text as a positive integer weight, else raise InvalidWeight."""
    cleaned = "" if text is None else str(text).strip()
    if not cleaned.isascii() or not cleaned.isdigit() or int(cleaned) <= 0:
        raise InvalidWeight(f"'{cleaned}' is not a positive whole number")
    return int(cleaned)


class EditSession:
    """Drives node picks and mode changes against a GraphStore."""

    def __init__(self, store: GraphStore, highlights: HighlightRegistry,
                 layout: Optional[OrganicLayout] = None,
                 rng: Optional[random.Random] = None,
                 weight_fn: Optional[Callable[[], int]] = None):
        self.store = store
        self.highlights = highlights
        self._rng = rng or random.Random()
        self.layout = layout or OrganicLayout(rng=self._rng)
        self._weight_fn = weight_fn or (lambda: random_weight(self._rng))
        self._state = EditState.idle()
        self._on_state_change: Optional[Callable[[EditState], None]] = None

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._state.mode

    def set_on_state_change(self, callback: Callable[[EditState], None]):
        self._on_state_change = callback

    # --- Mode entry ---

    def begin_add_node(self) -> EditState:
        pending_id = self.store.next_node_id()
        position = self.layout.place(pending_id, self.store.positions())
        return self._enter(Mode.SELECTING_PEERS_FOR_NEW_NODE,
                           pending_node_id=pending_id, pending_position=position)

    def begin_add_edge(self) -> EditState:
        return self._enter(Mode.ADDING_EDGE)

    def begin_remove_edge(self) -> EditState:
        return self._enter(Mode.REMOVING_EDGE)

    def begin_modify_weight(self) -> EditState:
        return self._enter(Mode.MODIFYING_WEIGHT)

    def begin_find_path(self) -> EditState:
        return self._enter(Mode.FINDING_PATH)

    def begin(self, mode: Mode) -> EditState:
        """Enter mode by enum value; IDLE behaves like cancel()."""
        entry = {
            Mode.IDLE: self.cancel,
            Mode.SELECTING_PEERS_FOR_NEW_NODE: self.begin_add_node,
            Mode.ADDING_EDGE: self.begin_add_edge,
            Mode.REMOVING_EDGE: self.begin_remove_edge,
            Mode.MODIFYING_WEIGHT: self.begin_modify_weight,
            Mode.FINDING_PATH: self.begin_find_path,
        }
        return entry[mode]()

    def _enter(self, mode: Mode, **fields) -> EditState:
        self.highlights.clear()
        logger.debug(f"Entering {mode.name}")
        return self._set(EditState(mode=mode, **fields))

    # --- Picks ---

    def on_node_picked(self, node_id: NodeId) -> EditState:
        state = self._state
        if state.mode is Mode.IDLE:
            return state
        if not self.store.has_node(node_id):
            return self._fail(UnknownNode(f"Node {node_id} does not exist"))
        if state.mode is Mode.SELECTING_PEERS_FOR_NEW_NODE:
            return self.toggle_peer(node_id)
        if state.source_id is None:
            return self._update(source_id=node_id)
        if node_id == state.source_id:
            return state

        handlers = {
            Mode.ADDING_EDGE: self._pick_add_edge,
            Mode.REMOVING_EDGE: self._pick_remove_edge,
            Mode.MODIFYING_WEIGHT: self._pick_modify_weight,
            Mode.FINDING_PATH: self._pick_find_path,
        }
        return handlers[state.mode](state.source_id, node_id)

    def _pick_add_edge(self, source: NodeId, target: NodeId) -> EditState:
        try:
            edge = self.store.add_edge(source, target, self._weight_fn())
        except GraphError as e:
            return self._fail(e, target_id=None)
        self.highlights.clear_path()
        self.highlights.highlight_edge(source, target)
        logger.info(f"Added edge {source}-{target} (weight {edge.weight})")
        return self._update(
            target_id=target,
            notice=f"Added edge {display_label(source)}–{display_label(target)} (weight {edge.weight})",
        )

    def _pick_remove_edge(self, source: NodeId, target: NodeId) -> EditState:
        try:
            self.store.remove_edge(source, target)
        except GraphError as e:
            return self._fail(e, target_id=None)
        self.highlights.clear_path()
        self.highlights.forget_edge(source, target)
        logger.info(f"Removed edge {source}-{target}")
        return self._update(
            target_id=target,
            notice=f"Removed edge {display_label(source)}–{display_label(target)}",
        )

    def _pick_modify_weight(self, source: NodeId, target: NodeId) -> EditState:
        edge = self.store.get_edge(source, target)
        if edge is None:
            return self._fail(EdgeNotFound(f"No edge connects {source} and {target}"),
                              target_id=None, pending_input=None)
        return self._update(target_id=target, pending_input=str(edge.weight))

    def _pick_find_path(self, source: NodeId, target: NodeId) -> EditState:
        result = shortest_path(self.store.snapshot(), source, target)
        if result is None:
            self.highlights.clear_path()
            return self._fail(NoPathExists(), target_id=None)
        self.highlights.set_path(result)
        logger.info(f"Shortest path {source}->{target}: {list(result.path)} weight={result.total_weight}")
        return self._update(target_id=target, notice=f"Shortest path: {result.describe()}")

    # --- Weight editing ---

    def submit_weight(self, text: str) -> EditState:
        state = self._state
        if state.mode is not Mode.MODIFYING_WEIGHT:
            return state
        # a committed weight needs a fresh target pick before the next commit
        if state.target_id is None or state.pending_input is None:
            return self._fail(EdgeNotFound("Pick two connected nodes before entering a weight"))
        try:
            value = parse_weight(text)
            self.store.set_weight(state.source_id, state.target_id, value)
        except GraphError as e:
            return self._fail(e)
        self.highlights.clear_path()
        self.highlights.highlight_edge(state.source_id, state.target_id)
        logger.info(f"Set weight {state.source_id}-{state.target_id} to {value}")
        return self._update(
            pending_input=None,
            notice=f"Weight of {display_label(state.source_id)}–{display_label(state.target_id)} set to {value}",
        )

    # --- New node peer selection ---

    def toggle_peer(self, node_id: NodeId) -> EditState:
        state = self._state
        if state.mode is not Mode.SELECTING_PEERS_FOR_NEW_NODE:
            return state
        if not self.store.has_node(node_id):
            return self._fail(UnknownNode(f"Node {node_id} does not exist"))
        if node_id in state.chosen_peers:
            peers = tuple(p for p in state.chosen_peers if p != node_id)
        else:
            peers = state.chosen_peers + (node_id,)
        return self._update(chosen_peers=peers)

    def confirm_selection(self) -> Optional[NodeId]:
        """Insert the pending node connected to every chosen peer; return its id."""
        state = self._state
        if state.mode is not Mode.SELECTING_PEERS_FOR_NEW_NODE:
            return None
        if not state.chosen_peers:
            self._fail(NoPeersSelected())
            return None

        node_id = state.pending_node_id
        try:
            self.store.add_node(node_id, state.pending_position)
        except GraphError as e:
            self._fail(e)
            return None

        self.highlights.clear_path()
        self.highlights.highlight_node(node_id)
        for peer in state.chosen_peers:
            self.store.add_edge(node_id, peer, self._weight_fn())
            self.highlights.highlight_edge(node_id, peer)
        logger.info(f"Added node {node_id} connected to {list(state.chosen_peers)}")
        self._set(replace(EditState.idle(),
                          notice=f"Added node {display_label(node_id)}"))
        return node_id

    def cancel_selection(self) -> EditState:
        if self._state.mode is not Mode.SELECTING_PEERS_FOR_NEW_NODE:
            return self._state
        return self._set(EditState.idle())

    # --- Cancel / reset ---

    def cancel(self) -> EditState:
        state = self._state
        if state.mode is Mode.IDLE:
            return state
        if state.mode is Mode.FINDING_PATH:
            self.highlights.clear_path()
        return self._set(EditState.idle())

    def regenerate(self, node_count: int) -> EditState:
        """Replace the whole graph with a freshly generated one."""
        self.store.clear()
        self.highlights.clear()
        generate_initial_graph(self.store, node_count=node_count, rng=self._rng, layout=self.layout)
        return self._set(EditState.idle())

    # --- Internals ---

    def _update(self, **changes) -> EditState:
        """Apply a successful step: clears any previous error."""
        changes.setdefault("error", None)
        changes.setdefault("error_kind", None)
        changes.setdefault("notice", None)
        return self._set(replace(self._state, **changes))

    def _fail(self, error: GraphError, **changes) -> EditState:
        logger.debug(f"{self._state.mode.name}: {error.message}")
        return self._set(replace(self._state, error=error.message,
                                 error_kind=type(error), notice=None, **changes))

    def _set(self, state: EditState) -> EditState:
        self._state = state
        if self._on_state_change:
            self._on_state_change(state)
        return state
