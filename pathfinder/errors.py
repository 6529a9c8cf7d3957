"""
Error types for graph editing.

Every failure here is recoverable and meant to be shown to the user. The
graph store raises them; the edit session catches them and records the
message on its state.
"""

from typing import Optional


class GraphError(Exception):
    """Base class for recoverable graph editing failures."""

    default_message = "Graph operation failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class DuplicateId(GraphError):
    default_message = "A node with this id already exists"


class UnknownNode(GraphError):
    default_message = "Node does not exist"


class SelfLoop(GraphError):
    default_message = "An edge cannot connect a node to itself"


class DuplicateEdge(GraphError):
    default_message = "These nodes are already connected"


class EdgeNotFound(GraphError):
    default_message = "No edge connects these nodes"


class InvalidWeight(GraphError):
    default_message = "Weight must be a positive whole number"


class NoPeersSelected(GraphError):
    default_message = "Pick at least one node to connect the new node to"


class NoPathExists(GraphError):
    """Never raised; marks a 'no path' outcome recorded by the edit session."""
    default_message = "No path exists between these nodes"
