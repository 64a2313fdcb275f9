"""Editor session - one document, both views, optional change tracking.

The session is the single owner of the mutable state (document,
paragraph style, whiteboard, ledger). Every public method corresponds to
one discrete user event and runs to completion before returning.
"""

from __future__ import annotations

import copy
import time
from typing import Any

from bicameral.config import DEFAULT_CONFIG
from bicameral.document import Alignment, FontSize, ParagraphStyle, TextDocument
from bicameral.editor.reconciler import ReconcileOutcome, Reconciler
from bicameral.editor.surface import EditableSurface
from bicameral.graph.whiteboard import Whiteboard
from bicameral.modes import EditorMode, ModeHandler, ModeSwitchResult
from bicameral.notifications import NotificationLog
from bicameral.tracking.ledger import Change, ChangeLedger
from bicameral.tracking.tracker import ChangeTracker, Clock


class EditorSession:
    """Binds the text view, the whiteboard and the change tracker.

    Args:
        config: Effective configuration (DEFAULT_CONFIG when omitted).
        surface: Editable surface to render into (a new one by default).
        clock: Monotonic clock driving the idle debounce.
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        surface: EditableSurface | None = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.config = config if config is not None else copy.deepcopy(DEFAULT_CONFIG)
        tracking = self.config.get("tracking", {})

        self.document = TextDocument()
        self.style = ParagraphStyle.from_config(self.config)
        self.surface = surface if surface is not None else EditableSurface()
        self.reconciler = Reconciler(self.surface)
        self.notifications = NotificationLog()
        self.modes = ModeHandler(self.notifications)
        self.tracker = ChangeTracker(
            idle_window_ms=int(tracking.get("idle_window_ms", 1000)),
            clock=clock,
            enabled=bool(tracking.get("enabled", False)),
        )
        self.author = str(tracking.get("author", "Current User"))

    # ─────────────────────────────────────────────────────────────────
    # State
    # ─────────────────────────────────────────────────────────────────

    @property
    def mode(self) -> EditorMode:
        return self.modes.mode

    @property
    def whiteboard(self) -> Whiteboard:
        return self.modes.whiteboard

    @property
    def ledger(self) -> ChangeLedger:
        return self.tracker.ledger

    @property
    def current_paragraph(self) -> int:
        return self.reconciler.current_paragraph

    def status(self) -> dict[str, Any]:
        """Summary of the session for status displays."""
        return {
            "mode": self.mode.value,
            "paragraphs": len(self.document),
            "current_paragraph": self.current_paragraph,
            "tracking": self.tracker.enabled,
            "changes": self.ledger.count_by_status(),
            "nodes": self.whiteboard.node_count(),
            "edges": self.whiteboard.edge_count(),
        }

    # ─────────────────────────────────────────────────────────────────
    # Text view events
    # ─────────────────────────────────────────────────────────────────

    def render(self) -> ReconcileOutcome:
        """Push the document and style onto the surface."""
        return self.reconciler.reconcile(self.document, self.style)

    def _rebuild(self) -> ReconcileOutcome:
        # A focused surface only receives style patches, so whole-text
        # replacement has to drop focus to get its paragraphs rebuilt.
        self.reconciler.on_blur()
        return self.render()

    def set_text(self, text: TextDocument | str, author: str | None = None) -> ReconcileOutcome:
        """Replace the document (programmatic edit or paste)."""
        self.document = TextDocument.coerce(text)
        self.tracker.on_text_changed(self.document, author or self.author)
        return self._rebuild()

    def handle_input(self, author: str | None = None) -> TextDocument:
        """The user typed into the surface; read it back into the model."""
        document = self.reconciler.handle_input()
        if document != self.document:
            self.document = document
            self.tracker.on_text_changed(document, author or self.author)
        return document

    def align_current_paragraph(self, alignment: Alignment | str) -> ReconcileOutcome:
        self.style.set_alignment(self.current_paragraph, alignment)
        return self.render()

    def size_current_paragraph(self, size: FontSize | str) -> ReconcileOutcome:
        self.style.set_font_size(self.current_paragraph, size)
        return self.render()

    def set_font_size(self, size: FontSize | str) -> ReconcileOutcome:
        """Change the document-wide fallback font size."""
        self.style.font_size = FontSize(size)
        return self.render()

    def set_font_family(self, family: str) -> ReconcileOutcome:
        self.style.font_family = family
        return self.render()

    # ─────────────────────────────────────────────────────────────────
    # Modes
    # ─────────────────────────────────────────────────────────────────

    def switch_mode(self, new_mode: EditorMode | str) -> ModeSwitchResult:
        """Switch views; on refusal nothing in the session changes."""
        result = self.modes.switch_mode(new_mode, self.document, self.style)
        if not result.switched:
            return result

        if result.mode is EditorMode.WHITEBOARD:
            self.tracker.cancel_pending()
        else:
            if result.style is not None:
                self.style = result.style
            self.set_text(result.document)
        return result

    # ─────────────────────────────────────────────────────────────────
    # Change tracking
    # ─────────────────────────────────────────────────────────────────

    def set_tracking(self, enabled: bool) -> None:
        self.tracker.set_enabled(enabled)

    def tick(self) -> Change | None:
        """Give the idle debounce a chance to fire."""
        if self.mode is not EditorMode.NORMAL:
            return None
        change = self.tracker.tick()
        if change is not None:
            self.notifications.info("change.proposed", f"Change proposed by {change.author}")
        return change

    def accept_change(self, change_id: str) -> Change | None:
        change = self.tracker.accept(change_id)
        if change is None:
            self.notifications.error("change.unknown", f"Change {change_id} not found")
            return None
        self.notifications.success("change.accepted", "Change accepted")
        return change

    def reject_change(self, change_id: str) -> TextDocument | None:
        """Reject a change and restore the text it replaced."""
        snapshot = self.tracker.reject(change_id)
        if self.ledger.get(change_id) is None:
            self.notifications.error("change.unknown", f"Change {change_id} not found")
            return None
        if snapshot is None:
            self.notifications.info("change.rejected", "No earlier version to restore")
            return None

        self.document = snapshot
        self._rebuild()
        self.notifications.success("change.rejected", "Change rejected and text restored")
        return snapshot

    def comment_change(self, change_id: str, text: str) -> Change | None:
        change = self.tracker.comment(change_id, text)
        if change is None:
            self.notifications.error("change.unknown", f"Change {change_id} not found")
            return None
        self.notifications.success("change.commented", "Comment added")
        return change

    def close(self) -> None:
        """Unmount: cancel any pending proposal."""
        self.tracker.close()
