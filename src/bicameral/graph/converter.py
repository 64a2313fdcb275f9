"""Text <-> graph conversion.

Forward conversion turns each non-blank paragraph into a node, colored
by the content classifier and laid out by one of three fixed layouts:

- 1 node:  centered on the anchor
- 2 nodes: mirrored left/right of the anchor, one edge
- 3+ nodes: evenly spaced on a circle, chained edges plus a closing edge

Backward conversion ignores edges. Nodes are ordered by the paragraph
index recorded at forward conversion, or by canvas position when any
node lacks one.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, NamedTuple

from bicameral.classifier import classify
from bicameral.document import TextDocument
from bicameral.graph.GraphNode import GraphNode, Position
from bicameral.graph.relations import GraphEdge

logger = logging.getLogger(__name__)

ANCHOR = Position(400.0, 300.0)
SINGLE_NODE_OFFSET = 100.0
PAIR_OFFSET = 150.0
MIN_RADIUS = 150.0
MAX_RADIUS = 250.0
RADIUS_PER_NODE = 20.0

# Vertical distance under which two nodes count as the same row
ROW_EPSILON = 10.0

DEFAULT_FONT_SIZE = "medium"
DEFAULT_FONT_FAMILY = "sans-serif"


class ConvertedGraph(NamedTuple):
    """Result of forward conversion."""

    nodes: list[GraphNode]
    edges: list[GraphEdge]

    @property
    def is_empty(self) -> bool:
        """True when there was nothing to convert."""
        return not self.nodes


def circle_radius(count: int) -> float:
    """Radius of the ring layout for count nodes."""
    return min(MAX_RADIUS, max(MIN_RADIUS, count * RADIUS_PER_NODE))


def layout_positions(count: int, anchor: Position = ANCHOR) -> list[Position]:
    """Deterministic positions for count nodes.

    Args:
        count: Number of nodes to place.
        anchor: Center of the layout.

    Returns:
        One Position per node, in input order.
    """
    if count <= 0:
        return []
    if count == 1:
        return [Position(anchor.x - SINGLE_NODE_OFFSET, anchor.y)]
    if count == 2:
        return [
            Position(anchor.x - PAIR_OFFSET, anchor.y),
            Position(anchor.x + PAIR_OFFSET, anchor.y),
        ]

    radius = circle_radius(count)
    positions = []
    for i in range(count):
        angle = (i / count) * math.pi * 2
        positions.append(
            Position(anchor.x + radius * math.cos(angle), anchor.y + radius * math.sin(angle))
        )
    return positions


def _layout_edges(node_ids: list[str]) -> list[GraphEdge]:
    edges = [
        GraphEdge(id=f"edge_{i}", source=node_ids[i - 1], target=node_ids[i])
        for i in range(1, len(node_ids))
    ]
    if len(node_ids) > 2:
        edges.append(GraphEdge(id="edge_loop", source=node_ids[-1], target=node_ids[0]))
    return edges


def to_graph(
    document: TextDocument | str,
    font_size: str | None = None,
    font_family: str | None = None,
) -> ConvertedGraph:
    """Build a node/edge graph from a text document.

    Blank paragraphs are dropped; each surviving node records the index
    of the paragraph it came from.

    Args:
        document: The document (or newline-joined text) to convert.
        font_size: Font size carried onto every node.
        font_family: Font family carried onto every node.

    Returns:
        ConvertedGraph; empty when the document has no non-blank lines.
    """
    document = TextDocument.coerce(document)
    lines = [
        (index, paragraph.strip())
        for index, paragraph in enumerate(document.paragraphs)
        if paragraph.strip()
    ]
    if not lines:
        logger.debug("No non-empty lines to convert")
        return ConvertedGraph([], [])

    positions = layout_positions(len(lines))
    nodes = [
        GraphNode(
            id=f"node_{n + 1}",
            label=text,
            color=classify(text).color,
            font_size=font_size or DEFAULT_FONT_SIZE,
            font_family=font_family or DEFAULT_FONT_FAMILY,
            original_index=index,
            position=position,
        )
        for n, ((index, text), position) in enumerate(zip(lines, positions))
    ]
    edges = _layout_edges([node.id for node in nodes])

    logger.debug("Generated %d nodes and %d edges", len(nodes), len(edges))
    return ConvertedGraph(nodes, edges)


def order_nodes(nodes: Iterable[GraphNode]) -> list[GraphNode]:
    """Return nodes in reading order.

    When every node has an original_index the nodes are sorted by it.
    Otherwise nodes are grouped into rows (top-most first; a node joins
    the current row when its y is within ROW_EPSILON of the row's first
    node) and each row is read left to right.
    """
    nodes = list(nodes)
    if all(node.has_provenance for node in nodes):
        return sorted(nodes, key=lambda n: n.original_index)

    by_height = sorted(nodes, key=lambda n: (n.position.y, n.position.x, n.id))
    ordered: list[GraphNode] = []
    row: list[GraphNode] = []
    row_top = 0.0
    for node in by_height:
        if row and node.position.y - row_top >= ROW_EPSILON:
            ordered.extend(sorted(row, key=_row_key))
            row = []
        if not row:
            row_top = node.position.y
        row.append(node)
    ordered.extend(sorted(row, key=_row_key))
    return ordered


def _row_key(node: GraphNode) -> tuple[float, float, str]:
    return (node.position.x, node.position.y, node.id)


def to_text(
    nodes: Iterable[GraphNode],
    edges: Iterable[GraphEdge] | None = None,
) -> TextDocument:
    """Reconstruct a text document from graph nodes.

    Edges are accepted for symmetry with to_graph but never consulted,
    so dangling edges are harmless here.

    Args:
        nodes: Graph nodes.
        edges: Graph edges (ignored).

    Returns:
        TextDocument with one paragraph per non-blank node label.
    """
    return TextDocument(tuple(node.label for node in order_nodes(nodes) if not node.is_blank))
