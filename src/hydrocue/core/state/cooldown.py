"""Notification state: last-notified timestamps per recipient.

Consistency contract: in-memory, per-process, best-effort, non-durable.
State is lost on restart or cold start, and two instances do not share it,
so concurrent requests for one recipient on different instances can both
pass the cooldown check and both send. Entries are never evicted; the
deployment serves a single recipient.
"""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationStateStore(Protocol):
    """Abstract interface for the cooldown state."""

    def last_notified(self, recipient: str) -> datetime | None:
        """Timestamp of the last sent nudge, or None if never notified."""
        ...

    def mark_notified(self, recipient: str, when: datetime) -> None:
        """Record that a nudge was sent to ``recipient`` at ``when``."""
        ...


class InMemoryNotificationStore:
    """Dict-backed store guarded by a lock."""

    def __init__(self) -> None:
        self._last: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def last_notified(self, recipient: str) -> datetime | None:
        with self._lock:
            return self._last.get(recipient)

    def mark_notified(self, recipient: str, when: datetime) -> None:
        with self._lock:
            self._last[recipient] = when

    def __len__(self) -> int:
        with self._lock:
            return len(self._last)
