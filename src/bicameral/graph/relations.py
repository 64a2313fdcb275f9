"""Relations - Edges between whiteboard nodes.

Edges are visual connective tissue only. Reconstructing text never
consults them, so a graph with dangling or missing edges still converts
back to text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from bicameral.graph.GraphNode import GraphNode


@dataclass(frozen=True)
class GraphEdge:
    """A directed edge between two node ids.

    Attributes:
        id: Unique identifier within the graph.
        source: ID of the source node.
        target: ID of the target node.
    """

    id: str
    source: str
    target: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "source": self.source, "target": self.target}


@dataclass(frozen=True)
class DanglingEdge:
    """An edge whose endpoint does not name an existing node.

    Attributes:
        edge_id: ID of the offending edge.
        missing_id: Endpoint id that has no node.
        end: Which endpoint is missing ("source" or "target").
    """

    edge_id: str
    missing_id: str
    end: str

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"{self.edge_id}: {self.end} {self.missing_id} (missing)"


def find_dangling_edges(
    nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]
) -> list[DanglingEdge]:
    """Report every edge endpoint that references a missing node.

    Args:
        nodes: The graph's nodes.
        edges: The graph's edges.

    Returns:
        One DanglingEdge per missing endpoint, in edge order.
    """
    node_ids = {node.id for node in nodes}
    dangling: list[DanglingEdge] = []
    for edge in edges:
        if edge.source not in node_ids:
            dangling.append(DanglingEdge(edge.id, edge.source, "source"))
        if edge.target not in node_ids:
            dangling.append(DanglingEdge(edge.id, edge.target, "target"))
    return dangling
