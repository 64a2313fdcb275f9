"""Whiteboard - owner of graph state for the node view.

The drawing surface sends change requests (add, move, relabel, connect,
delete); the Whiteboard validates and applies them, records a
MutationEntry for each, and can undo them in reverse order. Node fields
are never mutated by anyone else.
"""

from __future__ import annotations

from typing import Callable, Iterable

from bicameral.classifier import Category, classify
from bicameral.document import TextDocument
from bicameral.graph.converter import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE, to_text
from bicameral.graph.GraphNode import GraphNode, Position
from bicameral.graph.mutations import MutationEntry, MutationLog
from bicameral.graph.relations import DanglingEdge, GraphEdge, find_dangling_edges

NEW_NODE_LABEL = "New thought"


class Whiteboard:
    """Mutable node/edge graph with an undoable change-request API.

    Args:
        nodes: Initial nodes (usually from to_graph()).
        edges: Initial edges.

    Raises:
        ValueError: If two nodes or two edges share an id.
    """

    def __init__(
        self,
        nodes: Iterable[GraphNode] = (),
        edges: Iterable[GraphEdge] = (),
    ) -> None:
        self._nodes: list[GraphNode] = []
        self._index: dict[str, GraphNode] = {}
        self._edges: list[GraphEdge] = []
        self._mutation_log = MutationLog()

        for node in nodes:
            if node.id in self._index:
                raise ValueError(f"Duplicate node id '{node.id}'")
            self._nodes.append(node)
            self._index[node.id] = node

        edge_ids: set[str] = set()
        for edge in edges:
            if edge.id in edge_ids:
                raise ValueError(f"Duplicate edge id '{edge.id}'")
            edge_ids.add(edge.id)
            self._edges.append(edge)

    # ─────────────────────────────────────────────────────────────────
    # Read access
    # ─────────────────────────────────────────────────────────────────

    @property
    def nodes(self) -> list[GraphNode]:
        return list(self._nodes)

    @property
    def edges(self) -> list[GraphEdge]:
        return list(self._edges)

    @property
    def mutation_log(self) -> MutationLog:
        return self._mutation_log

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def find_node(self, node_id: str) -> GraphNode | None:
        return self._index.get(node_id)

    def find_edge(self, edge_id: str) -> GraphEdge | None:
        for edge in self._edges:
            if edge.id == edge_id:
                return edge
        return None

    def dangling_edges(self) -> list[DanglingEdge]:
        return find_dangling_edges(self._nodes, self._edges)

    def to_text(self) -> TextDocument:
        """Reconstruct the text document from the current nodes."""
        return to_text(self._nodes, self._edges)

    # ─────────────────────────────────────────────────────────────────
    # Change requests
    # ─────────────────────────────────────────────────────────────────

    def add_node(
        self,
        label: str = NEW_NODE_LABEL,
        x: float = 0.0,
        y: float = 0.0,
        category: Category | str | None = None,
        font_size: str = DEFAULT_FONT_SIZE,
        font_family: str = DEFAULT_FONT_FAMILY,
    ) -> MutationEntry:
        """Create a node directly on the whiteboard.

        The node has no original_index, so text reconstruction falls
        back to position ordering once it exists.

        Args:
            label: Node text.
            x: Canvas x coordinate.
            y: Canvas y coordinate.
            category: Explicit category (toolbar "add idea" etc.); when
                omitted the label is classified.
            font_size: Font size key.
            font_family: Font family.

        Returns:
            MutationEntry recording the operation.
        """
        color = Category(category).color if category is not None else classify(label).color
        node = GraphNode(
            id=self._next_node_id(),
            label=label,
            color=color,
            font_size=font_size,
            font_family=font_family,
            position=Position(float(x), float(y)),
        )

        entry = MutationEntry(
            operation="add_node",
            target_id=node.id,
            before_state={},
            after_state=node.snapshot(),
        )
        self._nodes.append(node)
        self._index[node.id] = node
        self._mutation_log.append(entry)
        return entry

    def move_node(self, node_id: str, x: float, y: float) -> MutationEntry:
        """Move a node to a new canvas position.

        Raises:
            KeyError: If node_id is not found.
        """
        node = self._require_node(node_id)
        entry = MutationEntry(
            operation="move_node",
            target_id=node_id,
            before_state={"position": node.position.to_dict()},
            after_state={"position": {"x": float(x), "y": float(y)}},
        )
        node.position = Position(float(x), float(y))
        self._mutation_log.append(entry)
        return entry

    def request_label_change(self, node_id: str, label: str) -> MutationEntry:
        """Replace a node's label. The node keeps its color.

        Raises:
            KeyError: If node_id is not found.
        """
        node = self._require_node(node_id)
        entry = MutationEntry(
            operation="relabel_node",
            target_id=node_id,
            before_state={"label": node.label},
            after_state={"label": label},
        )
        node.label = label
        self._mutation_log.append(entry)
        return entry

    def connect(self, source: str, target: str) -> MutationEntry:
        """Add an edge between two existing nodes.

        Raises:
            KeyError: If either endpoint is not found.
            ValueError: For self-loops or an existing source->target edge.
        """
        self._require_node(source)
        self._require_node(target)
        if source == target:
            raise ValueError(f"Cannot connect '{source}' to itself")
        for edge in self._edges:
            if edge.source == source and edge.target == target:
                raise ValueError(f"Edge '{source}' -> '{target}' already exists")

        edge = GraphEdge(id=self._next_edge_id(source, target), source=source, target=target)
        entry = MutationEntry(
            operation="add_edge",
            target_id=edge.id,
            before_state={},
            after_state=edge.to_dict(),
        )
        self._edges.append(edge)
        self._mutation_log.append(entry)
        return entry

    def delete_edge(self, edge_id: str) -> MutationEntry:
        """Remove an edge.

        Raises:
            KeyError: If edge_id is not found.
        """
        edge = self.find_edge(edge_id)
        if edge is None:
            raise KeyError(f"Edge '{edge_id}' not found")

        position = self._edges.index(edge)
        entry = MutationEntry(
            operation="delete_edge",
            target_id=edge_id,
            before_state={"edge": edge.to_dict(), "position": position},
            after_state={},
        )
        self._edges.remove(edge)
        self._mutation_log.append(entry)
        return entry

    def delete_node(self, node_id: str) -> MutationEntry:
        """Remove a node together with every edge that touches it.

        Raises:
            KeyError: If node_id is not found.
        """
        node = self._require_node(node_id)
        position = self._nodes.index(node)
        incident = [
            (i, edge)
            for i, edge in enumerate(self._edges)
            if edge.source == node_id or edge.target == node_id
        ]

        entry = MutationEntry(
            operation="delete_node",
            target_id=node_id,
            before_state={
                "node": node.snapshot(),
                "position": position,
                "edges": [(i, edge.to_dict()) for i, edge in incident],
            },
            after_state={},
        )
        self._nodes.remove(node)
        del self._index[node_id]
        self._edges = [
            edge for edge in self._edges if edge.source != node_id and edge.target != node_id
        ]
        self._mutation_log.append(entry)
        return entry

    # ─────────────────────────────────────────────────────────────────
    # Undo
    # ─────────────────────────────────────────────────────────────────

    def undo_last(self) -> MutationEntry | None:
        """Undo the most recent mutation.

        Returns:
            The undone MutationEntry, or None if the log is empty.
        """
        entry = self._mutation_log.pop()
        if entry:
            self._apply_undo(entry)
        return entry

    def _apply_undo(self, entry: MutationEntry) -> None:
        handlers: dict[str, Callable[[MutationEntry], None]] = {
            "add_node": self._undo_add_node,
            "move_node": self._undo_move_node,
            "relabel_node": self._undo_relabel_node,
            "add_edge": self._undo_add_edge,
            "delete_edge": self._undo_delete_edge,
            "delete_node": self._undo_delete_node,
        }
        handler = handlers.get(entry.operation)
        if handler is not None:
            handler(entry)

    def _undo_add_node(self, entry: MutationEntry) -> None:
        node = self._index.pop(entry.target_id, None)
        if node is not None:
            self._nodes.remove(node)

    def _undo_move_node(self, entry: MutationEntry) -> None:
        node = self._index.get(entry.target_id)
        if node is not None:
            before = entry.before_state["position"]
            node.position = Position(before["x"], before["y"])

    def _undo_relabel_node(self, entry: MutationEntry) -> None:
        node = self._index.get(entry.target_id)
        if node is not None:
            node.label = entry.before_state["label"]

    def _undo_add_edge(self, entry: MutationEntry) -> None:
        self._edges = [edge for edge in self._edges if edge.id != entry.target_id]

    def _undo_delete_edge(self, entry: MutationEntry) -> None:
        data = entry.before_state["edge"]
        self._edges.insert(entry.before_state["position"], GraphEdge(**data))

    def _undo_delete_node(self, entry: MutationEntry) -> None:
        node = GraphNode.from_snapshot(entry.before_state["node"])
        self._nodes.insert(entry.before_state["position"], node)
        self._index[node.id] = node
        for position, data in entry.before_state["edges"]:
            self._edges.insert(position, GraphEdge(**data))

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    def _require_node(self, node_id: str) -> GraphNode:
        node = self._index.get(node_id)
        if node is None:
            raise KeyError(f"Node '{node_id}' not found")
        return node

    def _next_node_id(self) -> str:
        n = len(self._nodes) + 1
        while f"node_{n}" in self._index:
            n += 1
        return f"node_{n}"

    def _next_edge_id(self, source: str, target: str) -> str:
        existing = {edge.id for edge in self._edges}
        base = f"edge_{source}-{target}"
        candidate = base
        n = 2
        while candidate in existing:
            candidate = f"{base}-{n}"
            n += 1
        return candidate
