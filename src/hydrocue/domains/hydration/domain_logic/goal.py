"""Daily hydration goal.

All formulas are deterministic; the result is always an integer
millilitre target within [GOAL_MIN_ML, GOAL_MAX_ML].
"""

from __future__ import annotations

from typing import Literal

from hydrocue.domains.hydration.domain_logic.hydration_models import (
    ACTIVITY_BLOCK_MINUTES,
    BASELINE_ML_PER_KG,
    BLOCK_ADDEND_ML,
    CAPPED_CONDITIONS,
    ENVIRONMENT_ADDEND_ML,
    FLAT_ADDEND_ML,
    GOAL_MAX_ML,
    GOAL_MIN_ML,
    HOT_TEMP_C,
    HUMID_PCT,
    MEDICAL_SOFT_CAP_ML,
    Profile,
)
from hydrocue.domains.hydration.domain_logic.numeric import clamp, round_half_up

GoalMode = Literal["auto", "blocks", "flat"]


def resolve_goal_mode(profile: Profile, mode: GoalMode = "auto") -> Literal["blocks", "flat"]:
    """``auto`` scales by activity minutes when known, else uses the flat addend."""
    if mode == "auto":
        return "flat" if profile.daily_activity_minutes is None else "blocks"
    if mode == "blocks" and profile.daily_activity_minutes is None:
        return "flat"
    return mode


def activity_addend_ml(profile: Profile, mode: GoalMode = "auto") -> int:
    """Extra millilitres for the day's activity."""
    if resolve_goal_mode(profile, mode) == "flat":
        return FLAT_ADDEND_ML.get(profile.activity_level, FLAT_ADDEND_ML["Light"])
    blocks = max(0, round_half_up(profile.daily_activity_minutes / ACTIVITY_BLOCK_MINUTES))
    return blocks * BLOCK_ADDEND_ML.get(profile.activity_level, BLOCK_ADDEND_ML["Light"])


def environment_addend_ml(profile: Profile) -> int:
    hot = profile.temp_c is not None and profile.temp_c >= HOT_TEMP_C
    humid = profile.humidity_pct is not None and profile.humidity_pct >= HUMID_PCT
    return ENVIRONMENT_ADDEND_ML if hot or humid else 0


def apply_goal_rails(goal_ml: float, profile: Profile) -> int:
    """Apply the medical cap, then the absolute [1200, 4000] clamp.

    A clinician limit always wins; without one, flagged conditions
    (CKD, heart failure) get a soft cap.
    """
    if profile.clinician_limit_ml is not None:
        goal_ml = min(goal_ml, profile.clinician_limit_ml)
    elif profile.medical_conditions & CAPPED_CONDITIONS:
        goal_ml = min(goal_ml, MEDICAL_SOFT_CAP_ML)
    return int(clamp(round_half_up(goal_ml), GOAL_MIN_ML, GOAL_MAX_ML))


def compute_goal_ml(profile: Profile, mode: GoalMode = "auto") -> int:
    """Compute the day's total hydration target in millilitres.

    Steps: weight baseline (35 ml/kg), activity addend (per-30-minute blocks
    or flat per level), +300 ml for heat/humidity, medical cap, final clamp.
    """
    goal = round_half_up(BASELINE_ML_PER_KG * profile.weight_kg)
    goal += activity_addend_ml(profile, mode)
    goal += environment_addend_ml(profile)
    return apply_goal_rails(goal, profile)
