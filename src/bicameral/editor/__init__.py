"""Editor module - editable surface model and reconciliation.

Exports:
- EditableSurface / Element / TextNode / LineBreak / Range / Selection
- SavedSelection / save_selection / restore_selection
- find_current_paragraph_index
- Reconciler / ReconcileOutcome / build_paragraph / update_editable_content
"""

from bicameral.editor.reconciler import (
    ReconcileOutcome,
    Reconciler,
    build_paragraph,
    update_editable_content,
)
from bicameral.editor.selection import (
    SavedSelection,
    find_current_paragraph_index,
    restore_selection,
    save_selection,
)
from bicameral.editor.surface import (
    EditableSurface,
    Element,
    LineBreak,
    Range,
    Selection,
    SurfaceNode,
    TextNode,
)

__all__ = [
    "EditableSurface",
    "Element",
    "LineBreak",
    "Range",
    "ReconcileOutcome",
    "Reconciler",
    "SavedSelection",
    "Selection",
    "SurfaceNode",
    "TextNode",
    "build_paragraph",
    "find_current_paragraph_index",
    "restore_selection",
    "save_selection",
    "update_editable_content",
]
