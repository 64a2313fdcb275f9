"""Selection helpers for an editable surface.

Saving records both selection endpoints plus the text of the paragraph
each endpoint sat in. Restoring prefers the original node, then a
paragraph with the same text, then the paragraph at a fallback index.
Losing the caret is a degraded but safe outcome, so restore failures
are logged and reported as False rather than raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bicameral.editor.surface import EditableSurface, Range, SurfaceNode

logger = logging.getLogger(__name__)


@dataclass
class SavedSelection:
    """Selection endpoints captured before the surface is mutated.

    Attributes:
        start_container: Node holding the selection start.
        start_offset: Offset within start_container.
        end_container: Node holding the selection end.
        end_offset: Offset within end_container.
        start_paragraph_text: Text of the paragraph around the start.
        end_paragraph_text: Text of the paragraph around the end.
    """

    start_container: SurfaceNode
    start_offset: int
    end_container: SurfaceNode
    end_offset: int
    start_paragraph_text: str | None = None
    end_paragraph_text: str | None = None


def enclosing_paragraph(surface: EditableSurface, node: SurfaceNode | None) -> SurfaceNode | None:
    """Walk up from node to its direct child-of-surface ancestor."""
    while node is not None and node.parent is not surface:
        node = node.parent
    return node


def save_selection(surface: EditableSurface) -> SavedSelection | None:
    """Capture the selection if it lies inside the surface.

    Returns:
        SavedSelection, or None when there is no selection or it is
        outside the surface.
    """
    selection = surface.selection
    if selection.range_count == 0 or not surface.contains(selection.anchor_node):
        return None

    range_ = selection.get_range_at(0)
    start_paragraph = enclosing_paragraph(surface, range_.start_container)
    end_paragraph = enclosing_paragraph(surface, range_.end_container)
    return SavedSelection(
        start_container=range_.start_container,
        start_offset=range_.start_offset,
        end_container=range_.end_container,
        end_offset=range_.end_offset,
        start_paragraph_text=start_paragraph.text_content if start_paragraph else None,
        end_paragraph_text=end_paragraph.text_content if end_paragraph else None,
    )


def _find_closest_node(
    surface: EditableSurface,
    original: SurfaceNode,
    paragraph_text: str | None,
    fallback_index: int,
) -> SurfaceNode | None:
    if surface.contains(original):
        return original

    paragraphs = surface.child_nodes
    if paragraph_text is not None:
        for paragraph in paragraphs:
            if paragraph.text_content == paragraph_text:
                return paragraph.first_child or paragraph

    if not paragraphs:
        return None
    fallback = paragraphs[min(max(fallback_index, 0), len(paragraphs) - 1)]
    return fallback.first_child or fallback


def restore_selection(
    saved: SavedSelection | None,
    surface: EditableSurface,
    fallback_index: int = 0,
) -> bool:
    """Re-apply a saved selection after the surface was mutated.

    Offsets are clamped to the target node's text length.

    Args:
        saved: Output of save_selection().
        surface: The (possibly rebuilt) surface.
        fallback_index: Paragraph to use when neither the original node
            nor a paragraph with matching text can be found.

    Returns:
        True if a selection was applied.
    """
    if saved is None:
        return False

    try:
        start = _find_closest_node(
            surface, saved.start_container, saved.start_paragraph_text, fallback_index
        )
        end = _find_closest_node(
            surface, saved.end_container, saved.end_paragraph_text, fallback_index
        )
        if start is None or end is None:
            return False

        new_range = Range(
            start_container=start,
            start_offset=min(saved.start_offset, len(start.text_content)),
            end_container=end,
            end_offset=min(saved.end_offset, len(end.text_content)),
        )
        surface.selection.remove_all_ranges()
        surface.selection.add_range(new_range)
        return True
    except Exception as e:
        logger.warning("Could not restore selection: %s", e)
        return False


def find_current_paragraph_index(surface: EditableSurface) -> int:
    """Index of the paragraph that holds the selection start (0 if none)."""
    selection = surface.selection
    if selection.range_count == 0:
        return 0

    paragraph = enclosing_paragraph(surface, selection.get_range_at(0).start_container)
    if paragraph is None:
        return 0

    index = 0
    sibling = paragraph.previous_sibling
    while sibling is not None:
        index += 1
        sibling = sibling.previous_sibling
    return index
