"""
ECharts options builder for Pathfinder graph visualization.

This module converts the graph store, the current edit state and the
highlight registry into ECharts-compatible options. It only reads them;
nothing here mutates editor state.
"""

from typing import Any, Dict, List, Optional

import networkx as nx

from pathfinder.edit.constants import (
    BACKGROUND_COLOR,
    EDGE_COLOR,
    EDGE_WIDTH,
    HIGHLIGHT_COLOR,
    HIGHLIGHT_EDGE_WIDTH,
    NODE_COLOR,
    NODE_SIZE,
    PATH_EDGE_COLOR,
    PATH_EDGE_WIDTH,
    PATH_NODE_COLOR,
    PATH_NODE_SIZE,
    PEER_NODE_BORDER,
    PENDING_NODE_COLOR,
    SOURCE_NODE_BORDER,
    WEIGHT_LABEL_COLOR,
)
from pathfinder.edit.controller import EditState, Mode
from pathfinder.graph_store import GraphStore
from pathfinder.highlights import HighlightRegistry
from pathfinder.shortest_path import display_label


# Event keys we request from ECharts click events
REQUESTED_EVENT_KEYS = ['componentType', 'name', 'seriesType', 'value', 'dataType']

PENDING_NODE_NAME = '__pending__'


def build_echart_options(
    store: GraphStore,
    state: Optional[EditState] = None,
    highlights: Optional[HighlightRegistry] = None,
) -> Dict[str, Any]:
    """
    Build ECharts options from the graph store.

    Args:
        store: Graph to draw
        state: Current edit state (source/peer outlines, pending node)
        highlights: Recent changes and the displayed shortest path

    Returns:
        ECharts options dict ready for ui.echart()
    """
    state = state or EditState.idle()
    path = highlights.path if highlights else None
    recent_nodes = highlights.active_nodes() if highlights else set()
    recent_edges = set(highlights.active_edges()) if highlights else set()

    # Degree only drives node size
    G = nx.Graph()
    G.add_nodes_from(n.id for n in store.nodes)
    G.add_edges_from((e.source, e.target) for e in store.edges)

    e_nodes = []
    for node in store.nodes:
        nid = node.id
        in_path = path is not None and path.contains_node(nid)
        color = PATH_NODE_COLOR if in_path else NODE_COLOR
        size = (PATH_NODE_SIZE if in_path else NODE_SIZE) + min(G.degree(nid), 6)

        border_color = 'transparent'
        border_width = 0
        if nid in recent_nodes:
            border_color, border_width = HIGHLIGHT_COLOR, 3
        if nid in state.chosen_peers:
            border_color, border_width = PEER_NODE_BORDER, 4
        if nid in (state.source_id, state.target_id):
            border_color, border_width = SOURCE_NODE_BORDER, 4

        x, y = node.position or (0.0, 0.0)
        e_nodes.append({
            'id': str(nid),
            'name': str(nid),
            'value': display_label(nid),
            'x': x,
            'y': y,
            'symbol': 'circle',
            'symbolSize': size,
            'itemStyle': {'color': color, 'borderColor': border_color, 'borderWidth': border_width},
            'label': {
                'show': True,
                'formatter': display_label(nid),
                'position': 'inside',
                'color': '#ffffff',
                'fontWeight': 'bold' if in_path else 'normal',
            },
        })

    if state.mode is Mode.SELECTING_PEERS_FOR_NEW_NODE and state.pending_position:
        x, y = state.pending_position
        e_nodes.append({
            'id': PENDING_NODE_NAME,
            'name': PENDING_NODE_NAME,
            'value': display_label(state.pending_node_id),
            'x': x,
            'y': y,
            'symbol': 'circle',
            'symbolSize': NODE_SIZE,
            'itemStyle': {'color': PENDING_NODE_COLOR, 'opacity': 0.6,
                          'borderColor': HIGHLIGHT_COLOR, 'borderWidth': 2, 'borderType': 'dashed'},
            'label': {'show': True, 'formatter': display_label(state.pending_node_id), 'position': 'inside'},
        })

    e_links = []
    for edge in store.edges:
        in_path = path is not None and path.contains_edge(edge.source, edge.target)
        is_recent = edge.key in recent_edges
        if in_path:
            line_style = {'color': PATH_EDGE_COLOR, 'width': PATH_EDGE_WIDTH, 'opacity': 1.0,
                          'shadowColor': PATH_EDGE_COLOR, 'shadowBlur': 10}
        elif is_recent:
            line_style = {'color': HIGHLIGHT_COLOR, 'width': HIGHLIGHT_EDGE_WIDTH, 'opacity': 1.0,
                          'shadowColor': HIGHLIGHT_COLOR, 'shadowBlur': 8}
        else:
            line_style = {'color': EDGE_COLOR, 'width': EDGE_WIDTH, 'opacity': 0.9}
        line_style['curveness'] = 0

        e_links.append({
            'source': str(edge.source),
            'target': str(edge.target),
            'value': edge.weight,
            'lineStyle': line_style,
            'symbol': ['none', 'none'],
            'label': {
                'show': True,
                'formatter': str(edge.weight),
                'color': PATH_EDGE_COLOR if in_path else WEIGHT_LABEL_COLOR,
                'backgroundColor': BACKGROUND_COLOR,
                'padding': 2,
                'fontWeight': 'bold' if in_path else 'normal',
            },
            'tooltip': {'formatter': f'Weight: {edge.weight}'},
        })

    return {
        'backgroundColor': BACKGROUND_COLOR,
        'tooltip': {},
        'animation': False,
        'series': [{
            'type': 'graph',
            'layout': 'none',
            'roam': True,
            'data': e_nodes,
            'links': e_links,
            'emphasis': {'focus': 'adjacency'},
        }]
    }


def normalize_click_payload(raw_payload: Any) -> Dict[str, Any]:
    """Normalize NiceGUI chart click payloads into a dictionary for easier parsing."""
    if isinstance(raw_payload, dict):
        return raw_payload
    if isinstance(raw_payload, (list, tuple)):
        return {
            REQUESTED_EVENT_KEYS[i]: raw_payload[i]
            for i in range(min(len(raw_payload), len(REQUESTED_EVENT_KEYS)))
        }
    if isinstance(raw_payload, str):
        return {'name': raw_payload}
    return {}


def resolve_node_id_from_payload(payload: Dict[str, Any], store: GraphStore) -> Optional[Any]:
    """Return a node id from a normalized payload by validating against the store."""
    if not isinstance(payload, dict):
        return None
    if payload.get('componentType', 'series') != 'series':
        return None
    if payload.get('dataType') == 'edge':
        return None

    name = payload.get('name')
    if name is None or name == PENDING_NODE_NAME:
        return None

    if store.has_node(name):
        return name
    # ECharts stringifies ids; map back to the stored id
    for node in store.nodes:
        if str(node.id) == str(name):
            return node.id
    return None


def edge_rows(store: GraphStore) -> List[Dict[str, Any]]:
    """Flat rows for the edge table in the side panel."""
    return [
        {'source': display_label(e.source), 'target': display_label(e.target), 'weight': e.weight}
        for e in sorted(store.edges, key=lambda e: (str(e.source), str(e.target)))
    ]
