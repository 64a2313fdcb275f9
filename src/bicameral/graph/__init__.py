"""Graph module - Node view data structures and conversion.

Exports:
- GraphNode / Position: Node representation
- GraphEdge / DanglingEdge: Edges and edge validation
- MutationEntry / MutationLog: Change-request records for undo
- Whiteboard: Owner of graph state
- to_graph / to_text: Text <-> graph conversion
"""

from bicameral.graph.converter import ConvertedGraph, order_nodes, to_graph, to_text
from bicameral.graph.GraphNode import GraphNode, Position
from bicameral.graph.mutations import MutationEntry, MutationLog
from bicameral.graph.relations import DanglingEdge, GraphEdge, find_dangling_edges
from bicameral.graph.whiteboard import Whiteboard

__all__ = [
    "ConvertedGraph",
    "DanglingEdge",
    "GraphEdge",
    "GraphNode",
    "MutationEntry",
    "MutationLog",
    "Position",
    "Whiteboard",
    "find_dangling_edges",
    "order_nodes",
    "to_graph",
    "to_text",
]
