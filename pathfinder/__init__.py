"""
Pathfinder - interactive weighted graph editor with shortest-path queries.

The core (graph store, path engine, edit session, highlights) is plain Python;
the NiceGUI page in app.py only reads it and forwards user events.
"""

__version__ = "0.1.0"
