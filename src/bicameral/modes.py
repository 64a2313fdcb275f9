"""Mode handler - switch between the text view and the whiteboard view.

Every switch is all-or-nothing. If conversion yields nothing (blank
text, an empty whiteboard) or fails outright, the mode does not change
and the previous state is kept; the outcome is reported as a
ModeSwitchResult plus a notice, never as an exception.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from bicameral.document import ParagraphStyle, TextDocument
from bicameral.graph.converter import to_graph
from bicameral.graph.whiteboard import Whiteboard
from bicameral.notifications import NotificationLog

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    """Which view is active."""

    NORMAL = "normal"
    WHITEBOARD = "whiteboard"


class SwitchStatus(Enum):
    """Outcome of a mode switch request."""

    SWITCHED = "switched"
    UNCHANGED = "unchanged"  # already in the requested mode
    NO_CONTENT = "no_content"
    FAILED = "failed"


@dataclass
class ModeSwitchResult:
    """Result of ModeHandler.switch_mode().

    Attributes:
        status: What happened.
        mode: The active mode after the request.
        message: Human-readable explanation.
        document: Reconstructed text when switching back to normal.
        style: Paragraph style saved when the whiteboard was entered.
    """

    status: SwitchStatus
    mode: EditorMode
    message: str = ""
    document: TextDocument | None = None
    style: ParagraphStyle | None = None

    @property
    def switched(self) -> bool:
        return self.status is SwitchStatus.SWITCHED


class ModeHandler:
    """Owns the active mode and the whiteboard built from the text.

    Args:
        notifier: Where outcome notices go (a private log by default).
    """

    def __init__(self, notifier: NotificationLog | None = None) -> None:
        self.notifier = notifier if notifier is not None else NotificationLog()
        self.mode = EditorMode.NORMAL
        self.whiteboard = Whiteboard()
        self.saved_style: ParagraphStyle | None = None

    def switch_mode(
        self,
        new_mode: EditorMode | str,
        document: TextDocument,
        style: ParagraphStyle,
    ) -> ModeSwitchResult:
        """Request a switch to new_mode.

        Args:
            new_mode: Target mode.
            document: Current text (used when entering the whiteboard).
            style: Current paragraph style (saved for the way back).

        Returns:
            ModeSwitchResult; only SWITCHED changes any state.
        """
        new_mode = EditorMode(new_mode)
        if new_mode is self.mode:
            return ModeSwitchResult(SwitchStatus.UNCHANGED, self.mode)

        if new_mode is EditorMode.WHITEBOARD:
            return self._enter_whiteboard(document, style)
        return self._leave_whiteboard()

    def _enter_whiteboard(self, document: TextDocument, style: ParagraphStyle) -> ModeSwitchResult:
        if document.is_blank:
            return self._no_content("No content to display in whiteboard. Please add some text first.")

        try:
            graph = to_graph(document, style.font_size.value, style.font_family)
        except Exception as e:
            logger.exception("Error converting to whiteboard")
            return self._failed(f"An error occurred while creating the whiteboard: {e}")

        if graph.is_empty:
            return self._no_content("Failed to create whiteboard content. Please try again.")

        self.whiteboard = Whiteboard(graph.nodes, graph.edges)
        self.saved_style = style.copy()
        self.mode = EditorMode.WHITEBOARD
        message = "Whiteboard mode enabled - node colors reflect content type"
        self.notifier.success("conversion.succeeded", message)
        return ModeSwitchResult(SwitchStatus.SWITCHED, self.mode, message)

    def _leave_whiteboard(self) -> ModeSwitchResult:
        try:
            document = self.whiteboard.to_text()
        except Exception as e:
            logger.exception("Error converting to text")
            return self._failed(f"An error occurred while creating the text content: {e}")

        if document.is_blank:
            return self._no_content("No content found in whiteboard to convert to text.")

        self.mode = EditorMode.NORMAL
        message = "Normal mode enabled"
        self.notifier.success("conversion.succeeded", message)
        return ModeSwitchResult(
            SwitchStatus.SWITCHED,
            self.mode,
            message,
            document=document,
            style=self.saved_style.copy() if self.saved_style else None,
        )

    def _no_content(self, message: str) -> ModeSwitchResult:
        self.notifier.error("conversion.no_content", message)
        return ModeSwitchResult(SwitchStatus.NO_CONTENT, self.mode, message)

    def _failed(self, message: str) -> ModeSwitchResult:
        self.notifier.error("conversion.failed", message)
        return ModeSwitchResult(SwitchStatus.FAILED, self.mode, message)
