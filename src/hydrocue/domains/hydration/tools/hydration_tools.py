"""MCP tools for inspecting the hydration engine without sending anything."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from hydrocue.domains.hydration.pipeline import ReminderPipeline

from hydrocue.core.errors import ReadingValidationError
from hydrocue.domains.hydration.domain_logic.goal import GoalMode, resolve_goal_mode
from hydrocue.domains.hydration.readings import parse_reading

logger = logging.getLogger(__name__)


def register_hydration_tools(
    mcp: FastMCP,
    pipeline: ReminderPipeline,
    goal_mode: GoalMode = "auto",
) -> None:
    """Register read-only hydration tools on the MCP server."""

    @mcp.tool
    async def hydration_plan(
        ml: float,
        pct: float,
        cm: float | None = None,
        profile: dict | None = None,
    ) -> str:
        """Compute today's goal, pacing target and sip advice for a reading.

        Does not apply quiet hours or cooldown, sends nothing, and leaves the
        notification state untouched.

        Args:
            ml: Millilitres consumed so far today.
            pct: Current bottle fill percentage (0-100).
            cm: Optional raw distance sensor value (unused by the engine).
            profile: Optional profile overrides (weight_kg, activity_level, ...).
        """
        try:
            reading, overrides = parse_reading(
                {"ml": ml, "pct": pct, "cm": cm, "profile": profile or {}}
            )
        except ReadingValidationError as exc:
            return json.dumps({"status": "error", "error": str(exc)})

        resolved, plan = await pipeline.preview(reading, overrides)
        logger.info("hydration_plan preview: goal=%d target=%d", plan.goal_ml, plan.target_ml_now)
        return json.dumps({
            "status": "ok",
            "plan": plan.to_dict(),
            "profile": resolved.as_context(),
            "goal_mode": resolve_goal_mode(resolved, goal_mode),
            "decision_source": pipeline.decision_source.name,
        })

    @mcp.tool
    async def notification_status() -> str:
        """Report the last nudge time, remaining cooldown and quiet-hours state."""
        return json.dumps(pipeline.cooldown_status())
