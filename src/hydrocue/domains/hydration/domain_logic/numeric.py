"""Small numeric helpers shared by the hydration engine."""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a value to [lo, hi]."""
    return max(lo, min(value, hi))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity.

    ``round()`` uses banker's rounding (``round(2.5) == 2``), which would shift
    goals and targets by a millilitre on exact halves.
    """
    return int(math.floor(value + 0.5))


def to_number(val, default: float | None = None) -> float | None:
    """Safely convert to float, returning default for None, bools, NaN or junk."""
    if val is None or isinstance(val, bool):
        return default
    try:
        number = float(val)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number
