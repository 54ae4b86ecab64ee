"""Rule-based notify/skip decision and sip sizing."""

from __future__ import annotations

from datetime import datetime

from hydrocue.domains.hydration.domain_logic.goal import GoalMode, compute_goal_ml
from hydrocue.domains.hydration.domain_logic.hydration_models import (
    BEHIND_TOLERANCE_ML,
    SIP_BOUNDS_ML,
    SIP_GAP_DIVISOR,
    VERY_LOW_PCT,
    ActivityLevel,
    HydrationPlan,
    Profile,
    Reading,
)
from hydrocue.domains.hydration.domain_logic.numeric import clamp, round_half_up
from hydrocue.domains.hydration.domain_logic.pacing import PacingMode, PacingSchedule


def remaining_ml(goal_ml: int, ml: float) -> float:
    return max(0, goal_ml - ml)


def recommend_sip_ml(target_ml_now: int, ml: float, activity_level: ActivityLevel) -> int:
    """Roughly a third of the pacing shortfall, bounded per activity level."""
    lo, hi = SIP_BOUNDS_ML.get(activity_level, SIP_BOUNDS_ML["Light"])
    gap = max(0, target_ml_now - ml)
    return int(clamp(round_half_up(gap / SIP_GAP_DIVISOR), lo, hi))


def decide(
    reading: Reading,
    goal_ml: int,
    target_ml_now: int,
    activity_level: ActivityLevel,
) -> HydrationPlan:
    """Decide whether to nudge, given a goal and the pacing target for now.

    Notify iff the user is behind pace (beyond the tolerance band) or the
    bottle is very low, and some of the goal remains.
    """
    remaining = remaining_ml(goal_ml, reading.ml)
    behind = reading.ml + BEHIND_TOLERANCE_ML < target_ml_now
    very_low = reading.pct < VERY_LOW_PCT
    should_notify = (behind or very_low) and remaining > 0

    if not should_notify:
        reason = "goal reached" if remaining <= 0 else "on track"
    elif behind:
        reason = "behind pace"
    else:
        reason = "bottle running low"

    return HydrationPlan(
        goal_ml=goal_ml,
        target_ml_now=target_ml_now,
        remaining_ml=round_half_up(remaining),
        next_sip_ml=recommend_sip_ml(target_ml_now, reading.ml, activity_level),
        should_notify=should_notify,
        reason=reason,
        source="rules",
    )


def plan_for_reading(
    profile: Profile,
    reading: Reading,
    now: datetime,
    *,
    goal_mode: GoalMode = "auto",
    pacing_mode: PacingMode = "activity",
) -> HydrationPlan:
    """Full rule-based cycle: goal -> pacing target -> decision."""
    goal_ml = compute_goal_ml(profile, goal_mode)
    schedule = PacingSchedule.for_profile(profile, pacing_mode)
    target_ml_now = round_half_up(goal_ml * schedule.fraction_at(now))
    return decide(reading, goal_ml, target_ml_now, profile.activity_level)
