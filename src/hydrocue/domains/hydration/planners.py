"""Decision sources: where a HydrationPlan comes from.

``RuleBasedPlanner`` is the deterministic engine. ``AIPlanner`` asks an LLM
for the plan, sanitizes it, and falls back to the rule-based engine on any
failure. ``MessageRephraser`` optionally rewrites the outgoing nudge.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hydrocue.core.llm.client import HydrationLLMClient

from hydrocue.core.llm.response import LLMResponseError, require_fields
from hydrocue.domains.hydration.domain_logic.decision import plan_for_reading, remaining_ml
from hydrocue.domains.hydration.domain_logic.goal import GoalMode, apply_goal_rails
from hydrocue.domains.hydration.domain_logic.hydration_models import (
    AI_GOAL_BOUNDS_ML,
    AI_REASON_MAX_CHARS,
    AI_SIP_BOUNDS_ML,
    HydrationPlan,
    Profile,
    Reading,
)
from hydrocue.domains.hydration.domain_logic.numeric import clamp, round_half_up, to_number
from hydrocue.domains.hydration.domain_logic.pacing import PacingMode

logger = logging.getLogger(__name__)

_PLAN_FIELDS = ("daily_goal_ml", "target_ml_by_now", "should_notify", "next_sip_ml")
_FALSY_STRINGS = {"", "false", "no", "0", "off", "none", "null"}


@runtime_checkable
class DecisionSource(Protocol):
    """Produces a plan for one reading."""

    name: str

    async def plan(self, profile: Profile, reading: Reading, now: datetime) -> HydrationPlan: ...


class RuleBasedPlanner:
    """Deterministic goal, pacing and decision engine."""

    name = "rules"

    def __init__(self, goal_mode: GoalMode = "auto", pacing_mode: PacingMode = "activity") -> None:
        self.goal_mode = goal_mode
        self.pacing_mode = pacing_mode

    async def plan(self, profile: Profile, reading: Reading, now: datetime) -> HydrationPlan:
        return plan_for_reading(
            profile,
            reading,
            now,
            goal_mode=self.goal_mode,
            pacing_mode=self.pacing_mode,
        )


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSY_STRINGS
    return bool(value)


def _required_int(data: dict[str, Any], key: str) -> int:
    number = to_number(data.get(key))
    if number is None:
        raise LLMResponseError(f"non-numeric {key}: {data.get(key)!r}")
    return round_half_up(number)


def sanitize_ai_plan(data: dict[str, Any], profile: Profile, reading: Reading) -> HydrationPlan:
    """Turn an untrusted LLM plan into a valid HydrationPlan.

    The goal is first held to the AI rails, then to the same medical cap and
    absolute clamp the rule engine uses. Target is held to [0, goal], the sip
    to the AI sip rails, and the reason truncated.

    Raises:
        LLMResponseError: a required field is missing or non-numeric.
    """
    require_fields(data, _PLAN_FIELDS)

    goal = int(clamp(_required_int(data, "daily_goal_ml"), *AI_GOAL_BOUNDS_ML))
    goal = apply_goal_rails(goal, profile)
    target = int(clamp(_required_int(data, "target_ml_by_now"), 0, goal))
    sip = int(clamp(_required_int(data, "next_sip_ml"), *AI_SIP_BOUNDS_ML))
    remaining = remaining_ml(goal, reading.ml)

    return HydrationPlan(
        goal_ml=goal,
        target_ml_now=target,
        remaining_ml=round_half_up(remaining),
        next_sip_ml=sip,
        should_notify=_coerce_bool(data["should_notify"]) and remaining > 0,
        reason=str(data.get("short_reason") or "")[:AI_REASON_MAX_CHARS],
        source="ai",
    )


class AIPlanner:
    """LLM-decided plan with the rule-based engine as a strict fallback."""

    name = "ai"

    def __init__(self, llm_client: HydrationLLMClient, fallback: RuleBasedPlanner) -> None:
        self.llm_client = llm_client
        self.fallback = fallback

    async def plan(self, profile: Profile, reading: Reading, now: datetime) -> HydrationPlan:
        try:
            raw = await self.llm_client.request_plan(
                profile.as_context(),
                {"ml_now": reading.ml, "pct_now": reading.pct, "cm_now": reading.cm},
                now,
            )
            return sanitize_ai_plan(raw, profile, reading)
        except Exception as exc:
            logger.warning("AI planner failed, using rule-based plan: %s", exc)
            return await self.fallback.plan(profile, reading, now)


class MessageRephraser:
    """Optional LLM rewrite of the outgoing text; keeps the original on failure."""

    def __init__(self, llm_client: HydrationLLMClient) -> None:
        self.llm_client = llm_client

    async def rephrase(self, text: str) -> str:
        try:
            rewritten = await self.llm_client.rephrase(text)
        except Exception as exc:
            logger.warning("Message rephrase failed, sending template text: %s", exc)
            return text
        return rewritten or text
