"""Reminder message templates."""

from __future__ import annotations

from hydrocue.domains.hydration.domain_logic.hydration_models import (
    HydrationPlan,
    Profile,
    Reading,
)
from hydrocue.domains.hydration.domain_logic.numeric import round_half_up


def _behind_ml(plan: HydrationPlan, reading: Reading) -> int:
    return max(0, round_half_up(plan.target_ml_now - reading.ml))


def build_rule_message(profile: Profile, plan: HydrationPlan, reading: Reading) -> str:
    ml = round_half_up(reading.ml)
    behind = _behind_ml(plan, reading)
    if behind > 0:
        status = f"You're behind {behind} ml (pace {ml}/{plan.goal_ml} ml)."
    else:
        status = (
            f"Your bottle is down to {round_half_up(reading.pct)}% "
            f"(pace {ml}/{plan.goal_ml} ml)."
        )
    return (
        f"\U0001f4a7 Hey {profile.name}! {status} "
        f"Drink ~{plan.next_sip_ml} ml now. Remaining today: {plan.remaining_ml} ml."
    )


def build_ai_message(profile: Profile, plan: HydrationPlan, reading: Reading) -> str:
    reason = plan.reason or "Hydration check."
    return (
        f"\U0001f4a7 Hey {profile.name}! {reason} "
        f"Behind {_behind_ml(plan, reading)} ml (pace {round_half_up(reading.ml)}/{plan.goal_ml} ml). "
        f"Drink ~{plan.next_sip_ml} ml now. Remaining: {plan.remaining_ml} ml."
    )


def build_message(profile: Profile, plan: HydrationPlan, reading: Reading) -> str:
    if plan.source == "ai":
        return build_ai_message(profile, plan, reading)
    return build_rule_message(profile, plan, reading)
