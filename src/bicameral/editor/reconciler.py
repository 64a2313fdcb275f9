"""Reconciler - keep an editable surface in step with the paragraph model.

Two code paths, chosen by whether the surface holds focus:

- not focused: full rebuild, one container per paragraph
- focused:     style patch only; text and node identity are left alone
               so the caret the user is typing at survives

The selection is captured before either path runs and restored after.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from bicameral.document import (
    FONT_SIZE_CLASSES,
    Alignment,
    FontSize,
    ParagraphStyle,
    TextDocument,
)
from bicameral.editor.selection import (
    find_current_paragraph_index,
    restore_selection,
    save_selection,
)
from bicameral.editor.surface import EditableSurface, Element, LineBreak

logger = logging.getLogger(__name__)

PARAGRAPH_TAG = "div"
PARAGRAPH_MIN_HEIGHT = "1em"
PARAGRAPH_PADDING = "0.25em 0"


@dataclass
class ReconcileOutcome:
    """What a reconcile pass did.

    Attributes:
        rebuilt: True for the full-rebuild path, False for the style patch.
        selection_saved: A selection inside the surface was captured.
        selection_restored: The captured selection was re-applied.
    """

    rebuilt: bool
    selection_saved: bool
    selection_restored: bool


def build_paragraph(content: str, alignment: Alignment, font_size: FontSize) -> Element:
    """Create one paragraph container.

    Blank paragraphs get a LineBreak placeholder so they stay clickable.
    """
    div = Element(PARAGRAPH_TAG)
    div.style["text-align"] = alignment.value
    div.style["min-height"] = PARAGRAPH_MIN_HEIGHT
    div.style["padding"] = PARAGRAPH_PADDING
    div.add_class(FONT_SIZE_CLASSES[font_size])

    if content.strip() == "":
        div.append_child(LineBreak())
    else:
        div.set_text(content)
    return div


def update_editable_content(
    surface: EditableSurface,
    paragraphs: Iterable[str],
    style: ParagraphStyle,
    is_focused: bool,
) -> None:
    """Apply the model to the surface using the rebuild or patch path."""
    if not is_focused:
        _rebuild(surface, paragraphs, style)
    else:
        _patch_styles(surface, style)


def _rebuild(surface: EditableSurface, paragraphs: Iterable[str], style: ParagraphStyle) -> None:
    surface.clear_children()
    for index, paragraph in enumerate(paragraphs):
        surface.append_child(
            build_paragraph(paragraph, style.alignment_for(index), style.font_size_for(index))
        )


def _patch_styles(surface: EditableSurface, style: ParagraphStyle) -> None:
    size_classes = FONT_SIZE_CLASSES.values()
    for index, child in enumerate(surface.child_nodes):
        if not isinstance(child, Element):
            continue
        child.style["text-align"] = style.alignment_for(index).value
        for cls in size_classes:
            child.remove_class(cls)
        child.add_class(FONT_SIZE_CLASSES[style.font_size_for(index)])


class Reconciler:
    """Synchronizes a TextDocument + ParagraphStyle onto a surface.

    Also tracks which paragraph holds the caret; toolbar alignment and
    size changes apply to that paragraph.

    Args:
        surface: The editable surface to manage.
    """

    def __init__(self, surface: EditableSurface) -> None:
        self.surface = surface
        self.current_paragraph = 0

    def reconcile(self, document: TextDocument, style: ParagraphStyle) -> ReconcileOutcome:
        """Update the surface to show document with style.

        Args:
            document: Paragraphs to display. An empty document is shown
                as one blank, clickable paragraph.
            style: Alignment and font size per paragraph.

        Returns:
            ReconcileOutcome describing the pass.
        """
        saved = save_selection(self.surface)
        is_focused = self.surface.has_focus

        update_editable_content(self.surface, document.paragraphs or ("",), style, is_focused)

        restored = False
        if saved is not None:
            restored = restore_selection(saved, self.surface, self.current_paragraph)
            if not restored:
                logger.debug("Selection not restored after reconcile")

        return ReconcileOutcome(
            rebuilt=not is_focused,
            selection_saved=saved is not None,
            selection_restored=restored,
        )

    def update_current_paragraph(self) -> int:
        """Recompute the caret's paragraph index and remember it."""
        self.current_paragraph = find_current_paragraph_index(self.surface)
        return self.current_paragraph

    def on_click(self) -> int:
        return self.update_current_paragraph()

    def on_key_up(self) -> int:
        return self.update_current_paragraph()

    def on_focus(self) -> int:
        self.surface.focus()
        return self.update_current_paragraph()

    def on_blur(self) -> None:
        self.surface.blur()

    def read_document(self) -> TextDocument:
        """Read the surface back into a document (one paragraph per child)."""
        return TextDocument(tuple(child.text_content for child in self.surface.child_nodes))

    def handle_input(self) -> TextDocument:
        """Handle an input event: read the text and refresh the caret index."""
        document = self.read_document()
        self.update_current_paragraph()
        return document
