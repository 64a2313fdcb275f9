"""Notifications - observable outcome events for the presentation layer.

The core never waits on a notification. It appends a Notice to the log
and calls each subscriber; what a subscriber shows (a toast, a status
line) is its own business.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable


class NoticeLevel(Enum):
    """Severity of a notice."""

    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass(frozen=True)
class Notice:
    """A single outcome event.

    Attributes:
        level: Severity.
        event: Dotted event name, e.g. "conversion.succeeded".
        message: Text suitable for display.
        timestamp: When the event happened.
    """

    level: NoticeLevel
    event: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level.value,
            "event": self.event,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


Subscriber = Callable[[Notice], None]


class NotificationLog:
    """Append-only list of notices with optional subscribers."""

    def __init__(self) -> None:
        self._notices: list[Notice] = []
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def emit(self, level: NoticeLevel, event: str, message: str) -> Notice:
        notice = Notice(level=level, event=event, message=message)
        self._notices.append(notice)
        for callback in self._subscribers:
            callback(notice)
        return notice

    def success(self, event: str, message: str) -> Notice:
        return self.emit(NoticeLevel.SUCCESS, event, message)

    def info(self, event: str, message: str) -> Notice:
        return self.emit(NoticeLevel.INFO, event, message)

    def error(self, event: str, message: str) -> Notice:
        return self.emit(NoticeLevel.ERROR, event, message)

    def iter_notices(self) -> Iterator[Notice]:
        yield from self._notices

    def events(self) -> list[str]:
        """Event names in order of occurrence."""
        return [n.event for n in self._notices]

    def last(self) -> Notice | None:
        return self._notices[-1] if self._notices else None

    def clear(self) -> None:
        self._notices.clear()

    def __len__(self) -> int:
        return len(self._notices)
