"""
Shared constants for the editing UI.

Colors are used by the chart builder; keep them in sync with the legend
rendered in app.py.
"""

# Node colors
NODE_COLOR = '#1f77b4'
PATH_NODE_COLOR = '#2196F3'
SOURCE_NODE_BORDER = '#ffffff'
PEER_NODE_BORDER = '#4CAF50'
PENDING_NODE_COLOR = '#9e9e9e'

# Edge colors
EDGE_COLOR = '#555555'
PATH_EDGE_COLOR = '#4CAF50'
HIGHLIGHT_COLOR = '#ffd700'
WEIGHT_LABEL_COLOR = '#ffd700'

BACKGROUND_COLOR = '#1a1a1a'

# Sizes in pixels
NODE_SIZE = 20
PATH_NODE_SIZE = 26
EDGE_WIDTH = 1
PATH_EDGE_WIDTH = 4
HIGHLIGHT_EDGE_WIDTH = 3

# How often the UI checks for expired highlights (seconds)
HIGHLIGHT_TICK_SECONDS = 1.0
