"""
graph/
-----
Core data layer for the graph and grid algorithms.  Public API:

    from graph import Graph, Edge, Grid
"""

from graph.edge  import Edge
from graph.graph import Graph
from graph.grid  import Grid

__all__ = [
    "Edge",
    "Graph",
    "Grid",
]
