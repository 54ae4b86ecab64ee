"""Reminder pipeline: one reading in, at most one nudge out.

Gate order is fixed: quiet hours, then cooldown, then the decision source.
The cooldown timestamp is written only after the send call returns, so a
failed send never starts a cooldown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Literal, Mapping
from zoneinfo import ZoneInfo

from hydrocue.core.messaging.sender import MessageSender
from hydrocue.core.state.cooldown import NotificationStateStore
from hydrocue.domains.hydration.domain_logic.gate import cooldown_active, in_quiet_hours
from hydrocue.domains.hydration.domain_logic.hydration_models import (
    HydrationPlan,
    Profile,
    Reading,
    SkipReason,
)
from hydrocue.domains.hydration.domain_logic.profile import build_profile
from hydrocue.domains.hydration.messages import build_message
from hydrocue.domains.hydration.planners import DecisionSource, MessageRephraser

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def make_clock(timezone: str = "") -> Clock:
    """Clock in the configured IANA timezone, or server local time when blank."""
    if timezone:
        tz = ZoneInfo(timezone)
        return lambda: datetime.now(tz)
    return lambda: datetime.now().astimezone()


@dataclass
class PipelineResult:
    """What happened to one reading."""

    notified: bool
    skipped: SkipReason | None = None
    plan: HydrationPlan | None = None
    message: str | None = None

    def to_response(self) -> dict[str, Any]:
        """JSON body for the webhook."""
        if self.notified and self.plan is not None:
            return {
                "ok": True,
                "notified": True,
                "goal_ml": self.plan.goal_ml,
                "target_ml_now": self.plan.target_ml_now,
                "next_sip_ml": self.plan.next_sip_ml,
                "source": self.plan.source,
            }
        body: dict[str, Any] = {"ok": True, "skipped": self.skipped}
        if self.plan is not None:
            body["plan"] = self.plan.to_dict()
        return body


class ReminderPipeline:
    """Configurable reading -> decision -> nudge pipeline."""

    def __init__(
        self,
        *,
        recipient: str,
        sender: MessageSender,
        store: NotificationStateStore,
        decision_source: DecisionSource,
        rephraser: MessageRephraser | None = None,
        profile_defaults: Mapping[str, Any] | None = None,
        activity_by_weekday: Mapping[int, str] | None = None,
        quiet_start_hour: int = 23,
        quiet_end_hour: int = 7,
        min_interval_min: float = 30,
        clock: Clock | None = None,
    ) -> None:
        self.recipient = recipient
        self.sender = sender
        self.store = store
        self.decision_source = decision_source
        self.rephraser = rephraser
        self.profile_defaults = dict(profile_defaults or {})
        self.activity_by_weekday = dict(activity_by_weekday or {})
        self.quiet_start_hour = quiet_start_hour
        self.quiet_end_hour = quiet_end_hour
        self.min_interval_min = min_interval_min
        self.clock = clock if clock is not None else make_clock()

    def build_profile(self, overrides: Mapping[str, Any] | None, now: datetime) -> Profile:
        raw = {**self.profile_defaults, **{k: v for k, v in (overrides or {}).items() if v is not None}}
        return build_profile(raw, now, activity_by_weekday=self.activity_by_weekday)

    async def handle(
        self,
        reading: Reading,
        profile_overrides: Mapping[str, Any] | None = None,
    ) -> PipelineResult:
        """Run one reading through the gates and, if warranted, send a nudge."""
        now = self.clock()

        if in_quiet_hours(now, self.quiet_start_hour, self.quiet_end_hour):
            logger.info("Skipping reading: quiet hours (hour=%d)", now.hour)
            return PipelineResult(notified=False, skipped="quiet_hours")

        last = self.store.last_notified(self.recipient)
        if cooldown_active(now, last, self.min_interval_min):
            logger.info("Skipping reading: cooldown active since %s", last.isoformat())
            return PipelineResult(notified=False, skipped="interval")

        profile = self.build_profile(profile_overrides, now)
        plan = await self.decision_source.plan(profile, reading, now)

        if not plan.should_notify or plan.remaining_ml <= 0:
            logger.info(
                "On track or done: ml=%g pct=%g target=%d goal=%d source=%s",
                reading.ml,
                reading.pct,
                plan.target_ml_now,
                plan.goal_ml,
                plan.source,
            )
            return PipelineResult(notified=False, skipped="on_track_or_done", plan=plan)

        text = build_message(profile, plan, reading)
        if self.rephraser is not None:
            text = await self.rephraser.rephrase(text)

        await self.sender.send(self.recipient, text)
        self.store.mark_notified(self.recipient, now)
        logger.info(
            "Nudge sent: sip=%dml target=%d goal=%d source=%s",
            plan.next_sip_ml,
            plan.target_ml_now,
            plan.goal_ml,
            plan.source,
        )
        return PipelineResult(notified=True, plan=plan, message=text)

    async def preview(
        self,
        reading: Reading,
        profile_overrides: Mapping[str, Any] | None = None,
    ) -> tuple[Profile, HydrationPlan]:
        """Compute a plan without gates, sending or touching cooldown state."""
        now = self.clock()
        profile = self.build_profile(profile_overrides, now)
        return profile, await self.decision_source.plan(profile, reading, now)

    def cooldown_status(self) -> dict[str, Any]:
        now = self.clock()
        last = self.store.last_notified(self.recipient)
        remaining_s = 0.0
        if cooldown_active(now, last, self.min_interval_min):
            remaining_s = self.min_interval_min * 60 - (now - last).total_seconds()
        return {
            "last_notified": last.isoformat() if last else None,
            "cooldown_active": remaining_s > 0,
            "cooldown_remaining_s": round(max(0.0, remaining_s), 1),
            "min_interval_min": self.min_interval_min,
            "quiet_hours_now": in_quiet_hours(now, self.quiet_start_hour, self.quiet_end_hour),
        }
