"""Tracking module - paragraph diffs and reviewable changes.

Exports:
- diff_paragraphs / iter_changed_paragraphs: Positional paragraph diff
- Change / ChangeStatus: A proposed edit and its review status
- SnapshotHistory / ChangeLedger: Change lifecycle with undo-on-reject
- IdleDebouncer / ChangeTracker: Idle-window proposal of settled edits
"""

from bicameral.tracking.differ import diff_paragraphs, iter_changed_paragraphs
from bicameral.tracking.ledger import Change, ChangeLedger, ChangeStatus, SnapshotHistory
from bicameral.tracking.tracker import ChangeTracker, IdleDebouncer

__all__ = [
    "Change",
    "ChangeLedger",
    "ChangeStatus",
    "ChangeTracker",
    "IdleDebouncer",
    "SnapshotHistory",
    "diff_paragraphs",
    "iter_changed_paragraphs",
]
