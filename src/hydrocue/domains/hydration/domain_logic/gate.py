"""Time-based preconditions evaluated before any goal computation."""

from __future__ import annotations

from datetime import datetime, timedelta


def in_quiet_hours(now: datetime, quiet_start_hour: int = 23, quiet_end_hour: int = 7) -> bool:
    """Whether ``now`` falls in the quiet window.

    A window whose start is after its end wraps midnight (23 -> 7 covers
    23:00-06:59). A start at or before the end is a same-day window, and
    equal bounds mean no quiet hours at all. This intentionally departs from
    the single ``hour >= start or hour < end`` test, under which any start
    at or before the end (13 -> 15, or 7 -> 7) would make every hour
    quiet.
    """
    hour = now.hour
    if quiet_start_hour > quiet_end_hour:
        return hour >= quiet_start_hour or hour < quiet_end_hour
    return quiet_start_hour <= hour < quiet_end_hour


def cooldown_active(
    now: datetime,
    last_notified: datetime | None,
    min_interval_minutes: float = 30,
) -> bool:
    """True while the previous nudge is younger than ``min_interval_minutes``.

    Never-notified recipients are always clear.
    """
    if last_notified is None:
        return False
    return now - last_notified < timedelta(minutes=min_interval_minutes)
