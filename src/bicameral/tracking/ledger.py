"""Change ledger - lifecycle of proposed changes with undo-on-reject.

Each proposal stores the document as it was before the change in a
SnapshotHistory. Accepting a change discards that snapshot; rejecting it
hands the snapshot back so the caller can restore the document.

State machine per change::

    pending -> accepted   (terminal)
    pending -> rejected   (terminal)

Operations on unknown ids return None and leave the ledger untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import uuid4

from bicameral.document import TextDocument
from bicameral.tracking.differ import DocumentLike, diff_paragraphs


class ChangeStatus(Enum):
    """Review status of a change."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not ChangeStatus.PENDING


@dataclass
class Change:
    """A proposed, reviewable edit.

    Attributes:
        id: Unique change ID (UUID4 string).
        text: The changed paragraphs, newline-joined.
        author: Who made the edit.
        timestamp: When the change was proposed.
        comment: Reviewer comment (editable in any status).
        status: Review status.
    """

    text: str
    author: str
    id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    comment: str = ""
    status: ChangeStatus = ChangeStatus.PENDING

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.id[:8]}] {self.status.value} by {self.author}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "id": self.id,
            "text": self.text,
            "author": self.author,
            "timestamp": self.timestamp.isoformat(),
            "comment": self.comment,
            "status": self.status.value,
        }


class SnapshotHistory:
    """Document state before each unresolved change, keyed by change id."""

    def __init__(self) -> None:
        self._snapshots: dict[str, TextDocument] = {}

    def record(self, change_id: str, snapshot: TextDocument) -> None:
        """Store the pre-change snapshot.

        Raises:
            ValueError: If a snapshot is already recorded for change_id.
        """
        if change_id in self._snapshots:
            raise ValueError(f"Snapshot for change '{change_id}' already recorded")
        self._snapshots[change_id] = snapshot

    def get(self, change_id: str) -> TextDocument | None:
        return self._snapshots.get(change_id)

    def pop(self, change_id: str) -> TextDocument | None:
        """Remove and return the snapshot, or None if there is none."""
        return self._snapshots.pop(change_id, None)

    def ids(self) -> list[str]:
        return list(self._snapshots)

    def __contains__(self, change_id: object) -> bool:
        return change_id in self._snapshots

    def __len__(self) -> int:
        return len(self._snapshots)


class ChangeLedger:
    """Holds every change and the snapshots needed to undo pending ones.

    Example:
        >>> ledger = ChangeLedger()
        >>> change = ledger.propose_change("a\\nb", "a\\nc", author="ada")
        >>> change.text
        'c'
        >>> ledger.reject(change.id).to_text()
        'a\\nb'
    """

    def __init__(self) -> None:
        self._changes: list[Change] = []
        self._index: dict[str, Change] = {}
        self._history = SnapshotHistory()

    @property
    def history(self) -> SnapshotHistory:
        return self._history

    @property
    def changes(self) -> list[Change]:
        """All changes, newest first."""
        return list(reversed(self._changes))

    def iter_changes(self) -> Iterator[Change]:
        """Iterate over changes in the order they were proposed."""
        yield from self._changes

    def get(self, change_id: str) -> Change | None:
        return self._index.get(change_id)

    def pending(self) -> list[Change]:
        return [c for c in self._changes if c.status is ChangeStatus.PENDING]

    def count_by_status(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ChangeStatus}
        for change in self._changes:
            counts[change.status.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self._changes)

    def propose_change(
        self,
        old: DocumentLike,
        new: DocumentLike,
        author: str,
        timestamp: datetime | None = None,
    ) -> Change | None:
        """Create a pending change if old and new differ.

        Callers should only propose once the text has been idle for the
        debounce window, not on every keystroke.

        Args:
            old: Document before the edit (stored for undo).
            new: Document after the edit.
            author: Who made the edit.
            timestamp: Proposal time (default: now).

        Returns:
            The new Change, or None when the diff is empty.
        """
        text = diff_paragraphs(old, new)
        if not text:
            return None

        change = Change(text=text, author=author)
        if timestamp is not None:
            change.timestamp = timestamp

        self._history.record(change.id, TextDocument.coerce(old))
        self._changes.append(change)
        self._index[change.id] = change
        return change

    def accept(self, change_id: str) -> Change | None:
        """Accept a pending change and drop its snapshot.

        Accepting an already-accepted change is a no-op; a rejected
        change stays rejected.

        Returns:
            The change, or None if change_id is unknown.
        """
        change = self._index.get(change_id)
        if change is None:
            return None
        if change.status is ChangeStatus.PENDING:
            change.status = ChangeStatus.ACCEPTED
            self._history.pop(change_id)
        return change

    def reject(self, change_id: str) -> TextDocument | None:
        """Reject a pending change and hand back its pre-change snapshot.

        Returns:
            The document as it was before the change, or None if the id
            is unknown, already resolved, or has no snapshot on record.
        """
        change = self._index.get(change_id)
        if change is None or change.status.is_terminal:
            return None
        change.status = ChangeStatus.REJECTED
        return self._history.pop(change_id)

    def comment(self, change_id: str, text: str) -> Change | None:
        """Set the comment on a change in any status.

        Returns:
            The change, or None if change_id is unknown.
        """
        change = self._index.get(change_id)
        if change is None:
            return None
        change.comment = text
        return change
