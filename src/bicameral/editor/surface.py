"""Editable surface - the node tree a text view renders into.

A deliberately small tree with the parts of a browser DOM the
reconciler relies on:
- SurfaceNode: parent/child/sibling links, text_content, contains()
- TextNode / LineBreak: leaves
- Element: tag, ordered CSS classes and inline style
- EditableSurface: the editable root, with focus and a Selection

Node identity matters: the reconciler's focused path must leave the
existing paragraph objects in place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


class SurfaceNode:
    """Base tree node."""

    def __init__(self) -> None:
        self.parent: SurfaceNode | None = None
        self._children: list[SurfaceNode] = []

    @property
    def child_nodes(self) -> tuple[SurfaceNode, ...]:
        return tuple(self._children)

    def iter_children(self) -> Iterator[SurfaceNode]:
        yield from self._children

    @property
    def first_child(self) -> SurfaceNode | None:
        return self._children[0] if self._children else None

    @property
    def previous_sibling(self) -> SurfaceNode | None:
        if self.parent is None:
            return None
        siblings = self.parent._children
        i = siblings.index(self)
        return siblings[i - 1] if i > 0 else None

    @property
    def next_sibling(self) -> SurfaceNode | None:
        if self.parent is None:
            return None
        siblings = self.parent._children
        i = siblings.index(self)
        return siblings[i + 1] if i + 1 < len(siblings) else None

    @property
    def text_content(self) -> str:
        return "".join(child.text_content for child in self._children)

    def append_child(self, child: SurfaceNode) -> SurfaceNode:
        """Append child, detaching it from any previous parent."""
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)
        return child

    def remove_child(self, child: SurfaceNode) -> SurfaceNode:
        """Detach child.

        Raises:
            ValueError: If child is not a child of this node.
        """
        self._children.remove(child)
        child.parent = None
        return child

    def clear_children(self) -> None:
        """Detach every child (their own subtrees stay intact)."""
        for child in self._children:
            child.parent = None
        self._children = []

    def contains(self, node: SurfaceNode | None) -> bool:
        """True if node is this node or one of its descendants."""
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False


class TextNode(SurfaceNode):
    """A run of text."""

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    @property
    def text_content(self) -> str:
        return self.data

    def append_child(self, child: SurfaceNode) -> SurfaceNode:
        raise TypeError("Text nodes cannot have children")

    def __repr__(self) -> str:
        return f"TextNode({self.data!r})"


class LineBreak(SurfaceNode):
    """Placeholder that keeps an empty paragraph one line tall."""

    tag = "br"

    @property
    def text_content(self) -> str:
        return ""

    def append_child(self, child: SurfaceNode) -> SurfaceNode:
        raise TypeError("Line breaks cannot have children")

    def __repr__(self) -> str:
        return "LineBreak()"


class Element(SurfaceNode):
    """A container with a tag, CSS classes and inline style.

    Args:
        tag: Element tag name.
    """

    def __init__(self, tag: str = "div") -> None:
        super().__init__()
        self.tag = tag
        self.classes: list[str] = []
        self.style: dict[str, str] = {}

    @property
    def class_name(self) -> str:
        return " ".join(self.classes)

    def add_class(self, name: str) -> None:
        if name and name not in self.classes:
            self.classes.append(name)

    def remove_class(self, name: str) -> None:
        if name in self.classes:
            self.classes.remove(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def set_text(self, text: str) -> None:
        """Replace all children with a single text node."""
        self.clear_children()
        if text:
            self.append_child(TextNode(text))

    def __repr__(self) -> str:
        return f"Element({self.tag!r}, {self.text_content!r})"


@dataclass
class Range:
    """A selection range between two (container, offset) points.

    Raises:
        ValueError: If a container is missing or an offset is negative.
    """

    start_container: SurfaceNode
    start_offset: int
    end_container: SurfaceNode
    end_offset: int

    def __post_init__(self) -> None:
        if self.start_container is None or self.end_container is None:
            raise ValueError("Range endpoints need a container")
        if self.start_offset < 0 or self.end_offset < 0:
            raise ValueError(
                f"Range offsets must be non-negative ({self.start_offset}, {self.end_offset})"
            )

    @property
    def collapsed(self) -> bool:
        return self.start_container is self.end_container and self.start_offset == self.end_offset


class Selection:
    """The caret/selection, holding at most one Range."""

    def __init__(self) -> None:
        self._ranges: list[Range] = []

    @property
    def range_count(self) -> int:
        return len(self._ranges)

    def get_range_at(self, index: int) -> Range:
        """Raises IndexError when there is no such range."""
        return self._ranges[index]

    def add_range(self, range_: Range) -> None:
        self._ranges = [range_]

    def remove_all_ranges(self) -> None:
        self._ranges = []

    def collapse(self, node: SurfaceNode, offset: int = 0) -> None:
        """Place a caret at (node, offset)."""
        self.add_range(Range(node, offset, node, offset))

    @property
    def anchor_node(self) -> SurfaceNode | None:
        return self._ranges[0].start_container if self._ranges else None


class EditableSurface(Element):
    """Root of an editable text view.

    Holds the focus flag and the selection, the two pieces of live
    state the reconciler must not disturb while the user is typing.
    """

    def __init__(self) -> None:
        super().__init__("div")
        self.selection = Selection()
        self._focused = False

    @property
    def has_focus(self) -> bool:
        return self._focused

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    def paragraph(self, index: int) -> SurfaceNode | None:
        """Return the paragraph container at index, or None."""
        if 0 <= index < len(self._children):
            return self._children[index]
        return None
