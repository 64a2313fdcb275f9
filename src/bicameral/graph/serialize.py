"""Graph Serialization - Exchange format for the drawing surface.

Nodes are written in the shape node-canvas libraries expect::

    {"id": "node_1", "type": "custom",
     "position": {"x": 300.0, "y": 300.0},
     "data": {"label": "...", "color": "#F1F0FB", "fontSize": "medium",
              "fontFamily": "sans-serif", "originalIndex": 0}}

``originalIndex`` is omitted for nodes created on the whiteboard.
"""

from __future__ import annotations

from typing import Any, Iterable

from bicameral.classifier import Category
from bicameral.graph.GraphNode import GraphNode, Position
from bicameral.graph.relations import GraphEdge

NODE_TYPE = "custom"


def serialize_node(node: GraphNode) -> dict[str, Any]:
    """Serialize a GraphNode to a JSON-compatible dict."""
    data: dict[str, Any] = {
        "label": node.label,
        "color": node.color,
        "fontSize": node.font_size,
        "fontFamily": node.font_family,
    }
    if node.original_index is not None:
        data["originalIndex"] = node.original_index

    return {
        "id": node.id,
        "type": NODE_TYPE,
        "position": node.position.to_dict(),
        "data": data,
    }


def serialize_edge(edge: GraphEdge) -> dict[str, Any]:
    return edge.to_dict()


def serialize_graph(nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> dict[str, Any]:
    """Serialize a node/edge set to a JSON-compatible dict."""
    return {
        "nodes": [serialize_node(n) for n in nodes],
        "edges": [serialize_edge(e) for e in edges],
    }


def deserialize_node(data: dict[str, Any]) -> GraphNode:
    """Build a GraphNode from serialize_node() output.

    Raises:
        ValueError: If the node has no id or a malformed position.
    """
    if not isinstance(data, dict) or not data.get("id"):
        raise ValueError(f"Node is missing an id: {data!r}")

    payload = data.get("data") or {}
    position = data.get("position") or {}
    try:
        pos = Position(float(position.get("x", 0.0)), float(position.get("y", 0.0)))
    except (TypeError, ValueError) as e:
        raise ValueError(f"Node {data['id']} has an invalid position: {position!r}") from e

    original_index = payload.get("originalIndex")
    return GraphNode(
        id=str(data["id"]),
        label=str(payload.get("label") or ""),
        color=payload.get("color") or Category.DEFAULT.color,
        font_size=payload.get("fontSize") or "medium",
        font_family=payload.get("fontFamily") or "sans-serif",
        original_index=int(original_index) if original_index is not None else None,
        position=pos,
    )


def deserialize_edge(data: dict[str, Any]) -> GraphEdge:
    """Build a GraphEdge from serialize_edge() output.

    Raises:
        ValueError: If source or target is missing.
    """
    if not isinstance(data, dict) or not data.get("source") or not data.get("target"):
        raise ValueError(f"Edge needs a source and a target: {data!r}")
    edge_id = data.get("id") or f"edge_{data['source']}-{data['target']}"
    return GraphEdge(id=str(edge_id), source=str(data["source"]), target=str(data["target"]))


def deserialize_graph(data: dict[str, Any]) -> tuple[list[GraphNode], list[GraphEdge]]:
    """Inverse of serialize_graph().

    Raises:
        ValueError: If the payload is not a graph dict.
    """
    if not isinstance(data, dict):
        raise ValueError("Graph payload must be an object with 'nodes' and 'edges'")
    nodes = [deserialize_node(n) for n in data.get("nodes") or []]
    edges = [deserialize_edge(e) for e in data.get("edges") or []]
    return nodes, edges
