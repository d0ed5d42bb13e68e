"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Vertex, Edge
    from graph import GraphValidationError
"""

from graph.vertex import Vertex
from graph.edge   import Edge
from graph.graph  import Graph, GraphValidationError

__all__ = [
    "Vertex",
    "Edge",
    "Graph",
    "GraphValidationError",
]
