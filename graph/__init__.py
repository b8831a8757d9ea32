"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, NodeState
    from graph import LayoutGenerator
"""

from graph.node   import Node, NodeState
from graph.graph  import Graph
from graph.layout import LayoutGenerator

__all__ = [
    "Node",      "NodeState",
    "Graph",
    "LayoutGenerator",
]
