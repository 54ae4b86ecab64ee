"""Inbound reading validation."""

from __future__ import annotations

from typing import Any

from hydrocue.core.errors import ReadingValidationError
from hydrocue.domains.hydration.domain_logic.hydration_models import Reading
from hydrocue.domains.hydration.domain_logic.numeric import clamp, to_number


def parse_reading(body: Any) -> tuple[Reading, dict[str, Any]]:
    """Validate a webhook body into a Reading plus optional profile overrides.

    ``ml`` and ``pct`` are required and must be numeric. ``pct`` is clamped to
    [0, 100] and ``ml`` floored at 0 to absorb sensor overshoot. ``cm`` is
    carried along when numeric; ``ts`` is ignored.

    Raises:
        ReadingValidationError: body is not an object or ``ml``/``pct`` are
            missing or non-numeric.
    """
    if not isinstance(body, dict):
        raise ReadingValidationError("missing pct/ml")
    if body.get("ml") is None or body.get("pct") is None:
        raise ReadingValidationError("missing pct/ml")

    ml = to_number(body.get("ml"))
    pct = to_number(body.get("pct"))
    if ml is None or pct is None:
        raise ReadingValidationError("missing pct/ml")

    reading = Reading(
        ml=max(0.0, ml),
        pct=clamp(pct, 0.0, 100.0),
        cm=to_number(body.get("cm")),
    )
    overrides = body.get("profile")
    return reading, overrides if isinstance(overrides, dict) else {}
