"""Tests for inbound reading validation and message templates."""

from __future__ import annotations

import pytest

from conftest import make_profile
from hydrocue.core.errors import HydroCueError, ReadingValidationError
from hydrocue.domains.hydration.domain_logic.hydration_models import HydrationPlan, Reading
from hydrocue.domains.hydration.messages import build_message
from hydrocue.domains.hydration.readings import parse_reading


class TestParseReading:
    def test_minimal_body(self):
        reading, overrides = parse_reading({"ml": 350, "pct": 62})
        assert reading == Reading(ml=350, pct=62, cm=None)
        assert overrides == {}

    def test_cm_ts_and_profile(self):
        reading, overrides = parse_reading(
            {"ml": "350", "pct": 62.5, "cm": 11.2, "ts": 1760000000, "profile": {"weight_kg": 80}}
        )
        assert reading.ml == 350
        assert reading.cm == 11.2
        assert overrides == {"weight_kg": 80}

    def test_out_of_range_values_clamped(self):
        reading, _ = parse_reading({"ml": -20, "pct": 104})
        assert (reading.ml, reading.pct) == (0, 100)

    def test_zero_values_are_present(self):
        reading, _ = parse_reading({"ml": 0, "pct": 0})
        assert (reading.ml, reading.pct) == (0, 0)

    @pytest.mark.parametrize("body", [None, [], "ml=1", {}, {"ml": 10}, {"pct": 50}, {"ml": None, "pct": 5}])
    def test_missing_fields(self, body):
        with pytest.raises(ReadingValidationError, match="missing pct/ml"):
            parse_reading(body)

    def test_non_numeric_fields(self):
        with pytest.raises(ReadingValidationError, match="missing pct/ml"):
            parse_reading({"ml": "lots", "pct": 50})

    def test_error_hierarchy(self):
        assert issubclass(ReadingValidationError, HydroCueError)

    def test_non_object_profile_ignored(self):
        _, overrides = parse_reading({"ml": 1, "pct": 1, "profile": "athlete"})
        assert overrides == {}


class TestMessages:
    def _plan(self, **kwargs):
        base = dict(goal_ml=2850, target_ml_now=1461, remaining_ml=1850, next_sip_ml=154, should_notify=True)
        base.update(kwargs)
        return HydrationPlan(**base)

    def test_rule_message(self):
        text = build_message(make_profile(name="Sam"), self._plan(), Reading(ml=1000, pct=80))
        assert text == (
            "\U0001f4a7 Hey Sam! You're behind 461 ml (pace 1000/2850 ml). "
            "Drink ~154 ml now. Remaining today: 1850 ml."
        )

    def test_ai_message_uses_reason(self):
        plan = self._plan(source="ai", reason="Warm afternoon.")
        text = build_message(make_profile(), plan, Reading(ml=1000, pct=80))
        assert text.startswith("\U0001f4a7 Hey friend! Warm afternoon. Behind 461 ml")
        assert text.endswith("Remaining: 1850 ml.")

    def test_ai_message_default_reason(self):
        plan = self._plan(source="ai", reason="")
        assert "Hydration check." in build_message(make_profile(), plan, Reading(ml=1000, pct=80))
