"""Intraday pacing: how much of the daily goal should be gone by a given instant."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal

from hydrocue.domains.hydration.domain_logic.hydration_models import (
    AFTERNOON_END,
    FIXED_PHASE_FRACTIONS,
    MORNING_END,
    PHASE_FRACTIONS,
    Profile,
)

PacingMode = Literal["activity", "fixed"]

_MIN_DURATION = timedelta(milliseconds=1)


class PacingSchedule:
    """Piecewise-linear cumulative curve over the wake -> sleep window.

    The window is split by wall-clock time at 33% and 80%. Each phase
    carries a share of the goal; the curve is 0 at wake, 1 at sleep, and
    linear within each phase.
    """

    def __init__(
        self,
        wake: datetime,
        sleep: datetime,
        morning: float,
        afternoon: float,
    ) -> None:
        self.wake = wake
        self.sleep = sleep
        self.morning = morning
        self.afternoon = afternoon
        self.evening = 1 - (morning + afternoon)

        duration = max(_MIN_DURATION, sleep - wake)
        self.morning_end = wake + duration * MORNING_END
        self.afternoon_end = wake + duration * AFTERNOON_END

    @classmethod
    def for_profile(cls, profile: Profile, mode: PacingMode = "activity") -> PacingSchedule:
        if mode == "fixed":
            morning, afternoon = FIXED_PHASE_FRACTIONS
        else:
            morning, afternoon = PHASE_FRACTIONS.get(
                profile.activity_level, FIXED_PHASE_FRACTIONS
            )
        return cls(profile.wake, profile.sleep, morning, afternoon)

    def fraction_at(self, when: datetime) -> float:
        """Fraction of the daily goal expected consumed by ``when``, in [0, 1]."""
        if when <= self.wake:
            return 0.0
        if when >= self.sleep:
            return 1.0
        if when <= self.morning_end:
            f = (when - self.wake) / (self.morning_end - self.wake)
            return f * self.morning
        if when <= self.afternoon_end:
            f = (when - self.morning_end) / (self.afternoon_end - self.morning_end)
            return self.morning + f * self.afternoon
        f = (when - self.afternoon_end) / (self.sleep - self.afternoon_end)
        return self.morning + self.afternoon + f * self.evening
