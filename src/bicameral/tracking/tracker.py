"""Change tracker - turns settled edits into ledger proposals.

Edits arrive one keystroke at a time. The tracker waits until the text
has been idle for a fixed window (last-write-wins debounce) before it
asks the ledger for a proposal, so changes are never created per
keystroke.

Everything runs on the caller's thread: the host event loop calls
``tick()`` and the debouncer fires when its deadline has passed.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from bicameral.document import TextDocument
from bicameral.tracking.ledger import Change, ChangeLedger

logger = logging.getLogger(__name__)

DEFAULT_IDLE_WINDOW_MS = 1000

Clock = Callable[[], float]


class IdleDebouncer:
    """Single pending callback with a restartable deadline.

    Args:
        window_ms: Idle window in milliseconds.
        clock: Monotonic clock returning seconds.
    """

    def __init__(self, window_ms: int = DEFAULT_IDLE_WINDOW_MS, clock: Clock = time.monotonic):
        self.window_ms = window_ms
        self._clock = clock
        self._callback: Callable[[], object] | None = None
        self._deadline: float | None = None

    @property
    def pending(self) -> bool:
        return self._callback is not None

    def schedule(self, callback: Callable[[], object]) -> None:
        """(Re)start the window; any previously scheduled callback is dropped."""
        self._callback = callback
        self._deadline = self._clock() + self.window_ms / 1000.0

    def cancel(self) -> None:
        self._callback = None
        self._deadline = None

    def poll(self) -> object:
        """Fire the callback if the window has elapsed.

        Returns:
            The callback's return value, or None if nothing fired.
        """
        if self._callback is None or self._deadline is None:
            return None
        if self._clock() < self._deadline:
            return None
        callback = self._callback
        self.cancel()
        return callback()


class ChangeTracker:
    """Feeds settled text edits into a ChangeLedger.

    The first non-empty text seen becomes the baseline; later edits are
    compared against it. After a proposal the baseline moves to the
    proposed text; after a reject it moves back to the restored snapshot.

    Args:
        ledger: Ledger receiving proposals (a new one by default).
        idle_window_ms: Debounce window.
        clock: Monotonic clock (injectable for tests).
        enabled: Whether tracking starts enabled.
    """

    def __init__(
        self,
        ledger: ChangeLedger | None = None,
        idle_window_ms: int = DEFAULT_IDLE_WINDOW_MS,
        clock: Clock = time.monotonic,
        enabled: bool = False,
    ) -> None:
        self.ledger = ledger if ledger is not None else ChangeLedger()
        self._debouncer = IdleDebouncer(idle_window_ms, clock)
        self._enabled = enabled
        self._baseline = TextDocument()
        self._current = TextDocument()
        self._author = ""

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def baseline(self) -> TextDocument:
        return self._baseline

    @property
    def has_pending_proposal(self) -> bool:
        return self._debouncer.pending

    def set_enabled(self, enabled: bool) -> None:
        """Turn tracking on or off; turning it off drops any pending proposal."""
        self._enabled = enabled
        if not enabled:
            self._debouncer.cancel()

    def cancel_pending(self) -> None:
        """Drop the pending proposal, if any."""
        self._debouncer.cancel()

    def close(self) -> None:
        """Release the tracker (cancels the pending proposal)."""
        self.cancel_pending()

    def on_text_changed(self, text: TextDocument | str, author: str) -> None:
        """Record an edit and restart the idle window when appropriate.

        Args:
            text: The full current text.
            author: Who made the edit.
        """
        self._current = TextDocument.coerce(text)
        self._author = author

        if self._baseline.is_empty and not self._current.is_empty:
            self._baseline = self._current

        self._debouncer.cancel()
        if self._enabled and not self._baseline.is_empty and self._current != self._baseline:
            self._debouncer.schedule(self._settle)

    def tick(self) -> Change | None:
        """Advance the debounce; returns the Change proposed, if any."""
        result = self._debouncer.poll()
        return result if isinstance(result, Change) else None

    def _settle(self) -> Change | None:
        change = self.ledger.propose_change(self._baseline, self._current, self._author)
        if change is not None:
            logger.debug("Proposed change %s (%d chars)", change.id, len(change.text))
            self._baseline = self._current
        return change

    def accept(self, change_id: str) -> Change | None:
        return self.ledger.accept(change_id)

    def reject(self, change_id: str) -> TextDocument | None:
        """Reject a change; the baseline rolls back to the returned snapshot."""
        snapshot = self.ledger.reject(change_id)
        if snapshot is not None:
            self._debouncer.cancel()
            self._baseline = snapshot
            self._current = snapshot
        return snapshot

    def comment(self, change_id: str, text: str) -> Change | None:
        return self.ledger.comment(change_id, text)
