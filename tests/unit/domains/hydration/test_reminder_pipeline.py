"""Tests for the reminder pipeline: gate order, sending, cooldown writes."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from conftest import FixedClock, at
from hydrocue.core.llm.client import HydrationLLMClient
from hydrocue.core.llm.providers.mock import MockProvider
from hydrocue.core.messaging.mock import MockSender
from hydrocue.domains.hydration.domain_logic.hydration_models import Reading
from hydrocue.domains.hydration.pipeline import PipelineResult, ReminderPipeline, make_clock
from hydrocue.domains.hydration.planners import MessageRephraser, RuleBasedPlanner

RECIPIENT = "42"


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _pipeline(clock, store, sender, **kwargs) -> ReminderPipeline:
    return ReminderPipeline(
        recipient=RECIPIENT,
        sender=sender,
        store=store,
        decision_source=RuleBasedPlanner(),
        profile_defaults={"weight_kg": 70, "activity_level": "Light"},
        clock=clock,
        **kwargs,
    )


BEHIND = Reading(ml=1000, pct=80)
ON_TRACK = Reading(ml=1420, pct=80)


class TestNotify:
    def test_behind_pace_sends_and_records(self, clock, store, sender):
        result = _run(_pipeline(clock, store, sender).handle(BEHIND))

        assert result.notified is True
        assert result.plan.goal_ml == 2850
        assert result.plan.next_sip_ml == 154
        assert sender.sent == [(RECIPIENT, result.message)]
        assert result.message == (
            "\U0001f4a7 Hey friend! You're behind 461 ml (pace 1000/2850 ml). "
            "Drink ~154 ml now. Remaining today: 1850 ml."
        )
        assert store.last_notified(RECIPIENT) == clock.now

    def test_response_body(self, clock, store, sender):
        result = _run(_pipeline(clock, store, sender).handle(BEHIND))
        assert result.to_response() == {
            "ok": True,
            "notified": True,
            "goal_ml": 2850,
            "target_ml_now": 1461,
            "next_sip_ml": 154,
            "source": "rules",
        }

    def test_very_low_bottle_message(self, clock, store, sender):
        result = _run(_pipeline(clock, store, sender).handle(Reading(ml=1500, pct=25)))
        assert result.notified is True
        assert "down to 25%" in result.message

    def test_profile_overrides_merge_over_defaults(self, clock, store, sender):
        pipeline = _pipeline(clock, store, sender)
        result = _run(pipeline.handle(BEHIND, {"weight_kg": 10, "activity_level": "Sedentary"}))
        assert result.plan.goal_ml == 1200

    def test_rephraser_rewrites_text(self, clock, store, sender):
        rephraser = MessageRephraser(HydrationLLMClient(MockProvider("Grab ~154 ml now!")))
        result = _run(_pipeline(clock, store, sender, rephraser=rephraser).handle(BEHIND))
        assert sender.sent == [(RECIPIENT, "Grab ~154 ml now!")]
        assert result.message == "Grab ~154 ml now!"


class TestSkips:
    def test_on_track(self, clock, store, sender):
        result = _run(_pipeline(clock, store, sender).handle(ON_TRACK))
        assert result.skipped == "on_track_or_done"
        assert sender.sent == []
        assert store.last_notified(RECIPIENT) is None
        body = result.to_response()
        assert body["skipped"] == "on_track_or_done"
        assert body["plan"]["target_ml_now"] == 1461

    def test_second_call_within_interval(self, clock, store, sender):
        pipeline = _pipeline(clock, store, sender)
        first = _run(pipeline.handle(BEHIND))
        clock.advance(10)
        second = _run(pipeline.handle(Reading(ml=0, pct=0)))

        assert first.notified is True
        assert second.skipped == "interval"
        assert second.to_response() == {"ok": True, "skipped": "interval"}
        assert len(sender.sent) == 1

    def test_eligible_again_after_interval(self, clock, store, sender):
        pipeline = _pipeline(clock, store, sender)
        _run(pipeline.handle(BEHIND))
        clock.advance(31)
        assert _run(pipeline.handle(BEHIND)).notified is True
        assert store.last_notified(RECIPIENT) == clock.now
        assert len(sender.sent) == 2

    @pytest.mark.parametrize("hour", [23, 6])
    def test_quiet_hours(self, store, sender, hour):
        result = _run(_pipeline(FixedClock(at(hour)), store, sender).handle(Reading(ml=0, pct=0)))
        assert result.skipped == "quiet_hours"
        assert sender.sent == []

    def test_quiet_hours_checked_before_cooldown(self, store, sender):
        clock = FixedClock(at(22, 50))
        pipeline = _pipeline(clock, store, sender)
        assert _run(pipeline.handle(BEHIND)).notified is True
        clock.advance(20)  # 23:10, still inside the cooldown
        assert _run(pipeline.handle(BEHIND)).skipped == "quiet_hours"

    def test_custom_interval(self, clock, store, sender):
        pipeline = _pipeline(clock, store, sender, min_interval_min=5)
        _run(pipeline.handle(BEHIND))
        clock.advance(6)
        assert _run(pipeline.handle(BEHIND)).notified is True


class TestSendFailure:
    def test_failed_send_propagates_and_skips_cooldown(self, clock, store):
        sender = MockSender(fail_with=httpx.ConnectError("telegram unreachable"))
        with pytest.raises(httpx.ConnectError):
            _run(_pipeline(clock, store, sender).handle(BEHIND))
        assert store.last_notified(RECIPIENT) is None


class TestPreviewAndStatus:
    def test_preview_ignores_gates(self, store, sender):
        clock = FixedClock(at(23, 30))
        pipeline = _pipeline(clock, store, sender)
        store.mark_notified(RECIPIENT, clock.now)
        profile, plan = _run(pipeline.preview(BEHIND))
        assert profile.activity_level == "Light"
        assert plan.goal_ml == 2850
        assert sender.sent == []

    def test_cooldown_status(self, clock, store, sender):
        pipeline = _pipeline(clock, store, sender)
        assert pipeline.cooldown_status()["last_notified"] is None
        _run(pipeline.handle(BEHIND))
        clock.advance(10)
        status = pipeline.cooldown_status()
        assert status["cooldown_active"] is True
        assert status["cooldown_remaining_s"] == pytest.approx(20 * 60)
        assert status["quiet_hours_now"] is False


def test_make_clock_with_timezone():
    now = make_clock("Europe/Berlin")()
    assert now.tzinfo is not None
    assert now.utcoffset() is not None


def test_skip_result_without_plan():
    assert PipelineResult(notified=False, skipped="quiet_hours").to_response() == {
        "ok": True,
        "skipped": "quiet_hours",
    }
