"""
Main NiceGUI application for Pathfinder.

Builds a random weighted graph, renders it with ui.echart and provides the
toolbar for the edit modes (add node, add/remove edge, modify weight, find
shortest path). All editing goes through EditSession; this file only lays
out widgets and forwards events.
"""

import logging
import random
import sys

from dotenv import load_dotenv
from nicegui import ui

load_dotenv()

from pathfinder.chart_builder import REQUESTED_EVENT_KEYS, build_echart_options, edge_rows
from pathfinder.config import get_settings
from pathfinder.edit import EditSession, Mode
from pathfinder.edit.constants import HIGHLIGHT_TICK_SECONDS
from pathfinder.edit.handlers import setup_edit_handlers
from pathfinder.graph_store import GraphStore
from pathfinder.highlights import HighlightRegistry
from pathfinder.layout import OrganicLayout, generate_initial_graph

logger = logging.getLogger(__name__)

settings = get_settings()

MODE_BUTTONS = [
    ('Add Node', Mode.SELECTING_PEERS_FOR_NEW_NODE, 'grey-8'),
    ('Add Edge', Mode.ADDING_EDGE, 'positive'),
    ('Remove Edge', Mode.REMOVING_EDGE, 'negative'),
    ('Modify Weight', Mode.MODIFYING_WEIGHT, 'warning'),
    ('Find Shortest Path', Mode.FINDING_PATH, 'primary'),
]


# UI Construction - encapsulated in page function to avoid global state issues
@ui.page('/')
def main_page():
    ui.dark_mode().enable()
    ui.query('body').style('margin: 0; padding: 0; overflow: hidden;')

    # --- Graph & session (one per page) ---
    rng = random.Random(settings.seed)
    layout = OrganicLayout(rng=rng)
    store = GraphStore()
    generate_initial_graph(store, node_count=settings.node_count, rng=rng, layout=layout)
    highlights = HighlightRegistry(delay=settings.highlight_seconds)
    session = EditSession(store, highlights, layout=layout, rng=rng)

    # We use a container for mutable widget refs to be accessible in closures
    state = {
        'chart': None,
        'status_label': None,
        'error_label': None,
        'path_label': None,
        'weight_row': None,
        'weight_input': None,
        'selection_row': None,
        'edge_table': None,
    }

    def refresh_chart_ui():
        edit_state = session.state
        chart = state['chart']
        if chart:
            chart.options.clear()
            chart.options.update(build_echart_options(store, edit_state, highlights))
            chart.update()

        state['status_label'].text = edit_state.prompt
        state['error_label'].text = edit_state.error or ''
        path = highlights.path
        state['path_label'].text = f'Shortest path: {path.describe()}' if path else ''
        state['path_label'].set_visibility(path is not None)

        awaiting_weight = edit_state.mode is Mode.MODIFYING_WEIGHT and edit_state.pending_input is not None
        state['weight_row'].set_visibility(awaiting_weight)
        if awaiting_weight and state['weight_input'].value != edit_state.pending_input:
            state['weight_input'].value = edit_state.pending_input
        state['selection_row'].set_visibility(edit_state.mode is Mode.SELECTING_PEERS_FOR_NEW_NODE)

        state['edge_table'].rows = edge_rows(store)
        state['edge_table'].update()

    edit_handlers = setup_edit_handlers(session, refresh_chart_ui, ui.notify)

    # --- Layout Construction ---

    # 1. Full Screen Chart
    state['chart'] = ui.echart(build_echart_options(store, session.state, highlights))
    state['chart'].style('width: 100vw; height: 100vh; position: absolute; top: 0; left: 0; z-index: 0;')
    state['chart'].on('chart:click', edit_handlers['handle_chart_click'], REQUESTED_EVENT_KEYS)

    # 2. Toolbar
    with ui.card().classes('fixed left-4 top-4 z-10 bg-slate-900/90 gap-2'):
        with ui.row().classes('gap-2'):
            for label, mode, color in MODE_BUTTONS:
                ui.button(label, on_click=edit_handlers['handle_mode'](mode)).props(f'color={color} dense')
            ui.button('Cancel', on_click=edit_handlers['handle_cancel']).props('flat dense')

        state['status_label'] = ui.label(session.state.prompt).classes('text-sm text-gray-300')
        state['error_label'] = ui.label('').classes('text-sm text-red-400')

        with ui.row().classes('items-center gap-2') as weight_row:
            state['weight_input'] = ui.input('New weight').props('dense outlined').classes('w-32')
            ui.button('Apply', on_click=lambda: edit_handlers['handle_submit_weight'](
                state['weight_input'].value)).props('dense color=warning')
        state['weight_input'].on('keydown.enter', lambda: edit_handlers['handle_submit_weight'](
            state['weight_input'].value))
        state['weight_row'] = weight_row

        with ui.row().classes('items-center gap-2') as selection_row:
            ui.button('Confirm', on_click=edit_handlers['handle_confirm']).props('dense color=positive')
            ui.button('Cancel selection', on_click=edit_handlers['handle_cancel']).props('dense flat')
        state['selection_row'] = selection_row

        with ui.row().classes('items-center gap-2'):
            node_count = ui.number('Nodes', value=settings.node_count, min=2, max=300, step=1) \
                .props('dense outlined').classes('w-24')
            ui.button('Regenerate', on_click=lambda: edit_handlers['handle_regenerate'](
                int(node_count.value or settings.node_count))).props('dense flat')

    # 3. Path / edge panel
    with ui.card().classes('fixed right-4 top-4 w-72 max-h-[90vh] overflow-y-auto z-10 bg-slate-900/90'):
        state['path_label'] = ui.label('').classes('text-sm text-blue-300 font-bold')
        ui.label('Edges').classes('text-xs text-gray-400')
        state['edge_table'] = ui.table(
            columns=[
                {'name': 'source', 'label': 'From', 'field': 'source'},
                {'name': 'target', 'label': 'To', 'field': 'target'},
                {'name': 'weight', 'label': 'Weight', 'field': 'weight', 'sortable': True},
            ],
            rows=edge_rows(store),
            pagination=15,
        ).props('dense flat').classes('w-full')

    # Highlights fade out on their own
    ui.timer(HIGHLIGHT_TICK_SECONDS, edit_handlers['handle_tick'])

    refresh_chart_ui()


if __name__ in {"__main__", "__mp_main__"}:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')
    ui.run(
        title='Pathfinder',
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
    )
