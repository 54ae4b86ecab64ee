"""Hydration domain models and constants."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Literal

ActivityLevel = Literal["Sedentary", "Light", "Moderate", "Heavy"]
SkipReason = Literal["quiet_hours", "interval", "on_track_or_done"]

ACTIVITY_LEVELS: tuple[ActivityLevel, ...] = ("Sedentary", "Light", "Moderate", "Heavy")

# ---------------------------------------------------------------------------
# Profile defaults
# ---------------------------------------------------------------------------

DEFAULT_NAME = "friend"
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_ACTIVITY: ActivityLevel = "Light"
DEFAULT_WAKE = (7, 0)
DEFAULT_SLEEP = (23, 0)

# ---------------------------------------------------------------------------
# Goal calculator constants
# ---------------------------------------------------------------------------

BASELINE_ML_PER_KG = 35
ACTIVITY_BLOCK_MINUTES = 30
BLOCK_ADDEND_ML: dict[str, int] = {"Sedentary": 0, "Light": 200, "Moderate": 400, "Heavy": 600}
FLAT_ADDEND_ML: dict[str, int] = {"Sedentary": 0, "Light": 400, "Moderate": 800, "Heavy": 1200}
HOT_TEMP_C = 30
HUMID_PCT = 70
ENVIRONMENT_ADDEND_ML = 300
CAPPED_CONDITIONS = frozenset({"ckd", "hf"})
MEDICAL_SOFT_CAP_ML = 2000
GOAL_MIN_ML = 1200
GOAL_MAX_ML = 4000

# ---------------------------------------------------------------------------
# Pacing constants
# ---------------------------------------------------------------------------

MORNING_END = 0.33
AFTERNOON_END = 0.80
# (morning, afternoon); evening is the remainder
PHASE_FRACTIONS: dict[str, tuple[float, float]] = {
    "Heavy": (0.25, 0.55),
    "Moderate": (0.30, 0.50),
    "Light": (0.35, 0.45),
    "Sedentary": (0.35, 0.45),
}
FIXED_PHASE_FRACTIONS = (0.35, 0.45)

# ---------------------------------------------------------------------------
# Decision constants
# ---------------------------------------------------------------------------

BEHIND_TOLERANCE_ML = 50
VERY_LOW_PCT = 40
SIP_GAP_DIVISOR = 3
SIP_BOUNDS_ML: dict[str, tuple[int, int]] = {
    "Heavy": (200, 300),
    "Moderate": (180, 250),
    "Light": (150, 220),
    "Sedentary": (150, 220),
}

# AI plan rails, applied before the regular goal rails
AI_GOAL_BOUNDS_ML = (800, 6000)
AI_SIP_BOUNDS_ML = (120, 300)
AI_REASON_MAX_CHARS = 140


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Profile:
    """Fully normalized user profile for one decision cycle."""

    name: str
    weight_kg: float
    activity_level: ActivityLevel
    wake: datetime
    sleep: datetime
    age: float | None = None
    height_cm: float | None = None
    daily_activity_minutes: float | None = None
    medical_conditions: frozenset[str] = field(default_factory=frozenset)
    clinician_limit_ml: float | None = None
    temp_c: float | None = None
    humidity_pct: float | None = None

    def as_context(self) -> dict[str, Any]:
        """JSON-friendly view used in LLM prompts."""
        return {
            "name": self.name,
            "age": self.age,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "activity_level": self.activity_level,
            "daily_activity_minutes": self.daily_activity_minutes,
            "medical_conditions": sorted(self.medical_conditions),
            "clinician_limit_ml": self.clinician_limit_ml,
            "temp_c": self.temp_c,
            "humidity_pct": self.humidity_pct,
            "wake_time": self.wake.strftime("%H:%M"),
            "sleep_time": self.sleep.strftime("%H:%M"),
        }


@dataclass(frozen=True)
class Reading:
    """A single sensor sample from the bottle."""

    ml: float
    pct: float
    cm: float | None = None


@dataclass
class HydrationPlan:
    """Outcome of one decision cycle."""

    goal_ml: int
    target_ml_now: int
    remaining_ml: int
    next_sip_ml: int
    should_notify: bool
    reason: str = ""
    source: Literal["rules", "ai"] = "rules"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
