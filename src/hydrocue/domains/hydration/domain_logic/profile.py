"""Profile normalization: raw, partially-populated configuration -> Profile.

Nothing in here raises for missing or malformed optional fields; every
absent value falls back to a documented default.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping

from hydrocue.domains.hydration.domain_logic.hydration_models import (
    BASELINE_ML_PER_KG,
    DEFAULT_ACTIVITY,
    DEFAULT_NAME,
    DEFAULT_SLEEP,
    DEFAULT_WAKE,
    DEFAULT_WEIGHT_KG,
    ActivityLevel,
    Profile,
)
from hydrocue.domains.hydration.domain_logic.numeric import clamp, to_number

# Checked in order; the first hit wins.
_ENUM_WORDS: tuple[tuple[str, ActivityLevel], ...] = (
    ("heavy", "Heavy"),
    ("moderate", "Moderate"),
    ("sedentary", "Sedentary"),
    ("light", "Light"),
)
_HEAVY_KEYWORDS = re.compile(r"run|gym|match|intense|cycle")
_MODERATE_KEYWORDS = re.compile(r"walk|jog|yoga|swim")

_HM_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def normalize_activity(text: Any) -> ActivityLevel:
    """Map a free-text activity description onto one of the four levels.

    Examples: ``"Heavy"`` -> Heavy, ``"gym + cycling"`` -> Heavy,
    ``"evening walk"`` -> Moderate, ``"desk day"`` -> Light.
    """
    if text is None:
        return DEFAULT_ACTIVITY
    lowered = str(text).lower()
    for word, level in _ENUM_WORDS:
        if word in lowered:
            return level
    if _HEAVY_KEYWORDS.search(lowered):
        return "Heavy"
    if _MODERATE_KEYWORDS.search(lowered):
        return "Moderate"
    return DEFAULT_ACTIVITY


def parse_hm(text: Any, default: tuple[int, int], now: datetime) -> datetime:
    """Parse a 24-hour ``H:MM``/``HH:MM`` string onto the calendar date of ``now``.

    Out-of-range hours and minutes are clamped (``"25:70"`` -> 23:59).
    Invalid or absent strings yield ``default`` on the same date.
    """
    match = _HM_PATTERN.match(text) if isinstance(text, str) else None
    if match is None:
        hour, minute = default
    else:
        hour = int(clamp(int(match.group(1)), 0, 23))
        minute = int(clamp(int(match.group(2)), 0, 59))
    return now.replace(hour=hour, minute=minute, second=0, microsecond=0)


def _conditions(raw: Any) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(",")
    elif isinstance(raw, (list, tuple, set, frozenset)):
        items = raw
    else:
        return frozenset()
    return frozenset(str(c).strip().lower() for c in items if str(c).strip())


def _resolve_activity(
    raw: Mapping[str, Any],
    now: datetime,
    activity_by_weekday: Mapping[int, str] | None,
) -> ActivityLevel:
    explicit = raw.get("activity_level")
    if explicit not in (None, ""):
        return normalize_activity(explicit)
    if activity_by_weekday:
        today = activity_by_weekday.get(now.weekday())
        if today:
            return normalize_activity(today)
    return DEFAULT_ACTIVITY


def build_profile(
    raw: Mapping[str, Any] | None,
    now: datetime,
    *,
    activity_by_weekday: Mapping[int, str] | None = None,
) -> Profile:
    """Build a complete Profile from raw configuration.

    Args:
        raw: Configuration mapping; any key may be missing.
        now: The instant of the decision cycle. Wake and sleep are anchored
            to its calendar date and timezone. When bedtime is past midnight
            and ``now`` is before it, the waking day is the one that started
            yesterday.
        activity_by_weekday: Optional Mon(0)..Sun(6) activity descriptions,
            used when ``raw`` carries no explicit ``activity_level``.
    """
    raw = raw or {}

    weight = to_number(raw.get("weight_kg"))
    if weight is None or weight <= 0 or not math.isfinite(BASELINE_ML_PER_KG * weight):
        weight = DEFAULT_WEIGHT_KG

    minutes = to_number(raw.get("daily_activity_minutes"))
    if minutes is not None and minutes < 0:
        minutes = None

    wake = parse_hm(raw.get("wake_time"), DEFAULT_WAKE, now)
    sleep = parse_hm(raw.get("sleep_time"), DEFAULT_SLEEP, now)
    if sleep <= wake:
        # Bedtime past midnight: the waking day spans two calendar dates.
        if now < sleep:
            wake -= timedelta(days=1)
        else:
            sleep += timedelta(days=1)

    name = raw.get("name")
    age = to_number(raw.get("age"))

    return Profile(
        name=str(name) if name else DEFAULT_NAME,
        weight_kg=weight,
        activity_level=_resolve_activity(raw, now, activity_by_weekday),
        wake=wake,
        sleep=sleep,
        age=age if age and age > 0 else None,
        height_cm=to_number(raw.get("height_cm")),
        daily_activity_minutes=minutes,
        medical_conditions=_conditions(raw.get("medical_conditions")),
        clinician_limit_ml=to_number(raw.get("clinician_limit_ml")),
        temp_c=to_number(raw.get("temp_c")),
        humidity_pct=to_number(raw.get("humidity_pct")),
    )
