"""
Interactive editing system for the Pathfinder graph.

This package provides the pick-driven editing workflow:
- EditSession: Mode state machine (add node/edge, remove edge, modify weight, find path)
- EditState: Immutable snapshot of the session read by the renderer
- edit_handlers: Event handlers for app.py integration

Usage:
    from pathfinder.edit import EditSession, EditState, Mode
    from pathfinder.edit.handlers import setup_edit_handlers
"""

from pathfinder.edit.controller import EditSession, EditState, Mode, parse_weight

__all__ = [
    'EditSession',
    'EditState',
    'Mode',
    'parse_weight',
]
