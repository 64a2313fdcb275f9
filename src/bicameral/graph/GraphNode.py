"""GraphNode - Node representation for the whiteboard graph.

This module provides the core data structures for the node view:
- Position: Canvas coordinate of a node
- GraphNode: A labeled, colored node with paragraph provenance
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

from bicameral.classifier import Category


@dataclass
class Position:
    """Canvas coordinate (origin top-left, y grows downward)."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class GraphNode:
    """A node in the whiteboard graph.

    Nodes are owned by the graph that holds them. The drawing surface
    never edits fields directly; it sends change requests to the
    Whiteboard, which applies them and records a MutationEntry.

    Attributes:
        id: Unique identifier within the graph.
        label: The paragraph text shown on the node.
        color: Background color (one of the category colors).
        font_size: Font size key carried over from the text view.
        font_family: Font family carried over from the text view.
        original_index: Paragraph position this node was created from,
            or None for nodes created directly on the whiteboard.
        position: Canvas position.
        uuid: Stable 32-char hex string for surface referencing.
    """

    id: str
    label: str = ""
    color: str = Category.DEFAULT.color
    font_size: str = "medium"
    font_family: str = "sans-serif"
    original_index: int | None = None
    position: Position = field(default_factory=Position)
    uuid: str = field(default_factory=lambda: uuid4().hex)

    @property
    def has_provenance(self) -> bool:
        """True if this node remembers its source paragraph."""
        return self.original_index is not None

    @property
    def is_blank(self) -> bool:
        return not self.label.strip()

    def snapshot(self) -> dict[str, Any]:
        """Return the mutable fields as a plain dict (for undo records)."""
        return {
            "id": self.id,
            "label": self.label,
            "color": self.color,
            "font_size": self.font_size,
            "font_family": self.font_family,
            "original_index": self.original_index,
            "position": self.position.to_dict(),
            "uuid": self.uuid,
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> GraphNode:
        """Rebuild a node from snapshot() output."""
        position = data.get("position") or {}
        kwargs: dict[str, Any] = {
            "id": data["id"],
            "label": data.get("label", ""),
            "color": data.get("color", Category.DEFAULT.color),
            "font_size": data.get("font_size", "medium"),
            "font_family": data.get("font_family", "sans-serif"),
            "original_index": data.get("original_index"),
            "position": Position(float(position.get("x", 0.0)), float(position.get("y", 0.0))),
        }
        if data.get("uuid"):
            kwargs["uuid"] = data["uuid"]
        return cls(**kwargs)
