"""
Edit Handlers - Event handlers for interactive editing in app.py

This module keeps the event plumbing between NiceGUI widgets and the
EditSession out of app.py, so the page function only does layout.
"""

import logging
from typing import Any, Callable, Dict

from pathfinder.chart_builder import normalize_click_payload, resolve_node_id_from_payload
from pathfinder.edit.controller import EditSession, Mode

logger = logging.getLogger(__name__)


def setup_edit_handlers(
    session: EditSession,
    refresh_chart_ui: Callable[[], None],
    notify: Callable[..., Any],
) -> Dict[str, Callable]:
    """
    Set up all edit mode event handlers.

    Args:
        session: EditSession driving the graph store
        refresh_chart_ui: Function to redraw the chart and status panel
        notify: Function used to show toasts (ui.notify in the app)

    Returns:
        Dict with handler functions for binding to UI events
    """

    def report(state):
        if state.error:
            notify(state.error, type='warning', position='bottom', timeout=2000)
        elif state.notice:
            notify(state.notice, type='positive', position='bottom', timeout=1500)

    def handle_chart_click(event):
        """Forward a chart click on a node to the session."""
        raw = event.args if hasattr(event, 'args') else event
        payload = normalize_click_payload(raw)
        node_id = resolve_node_id_from_payload(payload, session.store)
        if node_id is None:
            return
        before = session.state
        try:
            state = session.on_node_picked(node_id)
        except Exception as e:
            logger.exception(f"Pick of {node_id} failed")
            notify(f'Edit failed: {e}', type='negative', position='bottom')
            return
        if state is not before:
            report(state)
            refresh_chart_ui()

    def handle_mode(mode: Mode):
        """Return a click handler that enters mode."""
        def enter():
            session.begin(mode)
            refresh_chart_ui()
        return enter

    def handle_submit_weight(text: str):
        state = session.submit_weight(text)
        report(state)
        refresh_chart_ui()

    def handle_confirm():
        node_id = session.confirm_selection()
        report(session.state)
        if node_id is not None:
            logger.info(f"Confirmed new node {node_id}")
        refresh_chart_ui()

    def handle_cancel():
        if session.mode is Mode.SELECTING_PEERS_FOR_NEW_NODE:
            session.cancel_selection()
        else:
            session.cancel()
        refresh_chart_ui()

    def handle_regenerate(node_count: int):
        session.regenerate(node_count)
        notify(f'Generated {len(session.store)} nodes', position='bottom', timeout=1000)
        refresh_chart_ui()

    def handle_tick():
        """Periodic timer: redraw only when a highlight actually expired."""
        if session.highlights.expire():
            refresh_chart_ui()

    return {
        'handle_chart_click': handle_chart_click,
        'handle_mode': handle_mode,
        'handle_submit_weight': handle_submit_weight,
        'handle_confirm': handle_confirm,
        'handle_cancel': handle_cancel,
        'handle_regenerate': handle_regenerate,
        'handle_tick': handle_tick,
    }
