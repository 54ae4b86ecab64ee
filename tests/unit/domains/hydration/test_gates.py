"""Unit tests for quiet-hours and cooldown gates."""

from __future__ import annotations

from datetime import timedelta

import pytest

from conftest import at
from hydrocue.domains.hydration.domain_logic.gate import cooldown_active, in_quiet_hours


class TestQuietHours:
    @pytest.mark.parametrize("hour", [23, 0, 3, 6])
    def test_quiet(self, hour):
        assert in_quiet_hours(at(hour)) is True

    @pytest.mark.parametrize("hour", [7, 12, 22])
    def test_awake(self, hour):
        assert in_quiet_hours(at(hour)) is False

    def test_last_minute_before_quiet(self):
        assert in_quiet_hours(at(22, 59)) is False

    def test_custom_wrapping_window(self):
        assert in_quiet_hours(at(21), quiet_start_hour=21, quiet_end_hour=6) is True
        assert in_quiet_hours(at(6), quiet_start_hour=21, quiet_end_hour=6) is False

    def test_same_day_window(self):
        assert in_quiet_hours(at(14), quiet_start_hour=13, quiet_end_hour=15) is True
        assert in_quiet_hours(at(15), quiet_start_hour=13, quiet_end_hour=15) is False
        assert in_quiet_hours(at(12), quiet_start_hour=13, quiet_end_hour=15) is False

    @pytest.mark.parametrize("hour", [0, 7, 12, 23])
    def test_equal_bounds_disable_quiet_hours(self, hour):
        assert in_quiet_hours(at(hour), quiet_start_hour=7, quiet_end_hour=7) is False


class TestCooldown:
    def test_never_notified_is_clear(self):
        assert cooldown_active(at(12), None) is False

    def test_inside_interval(self):
        assert cooldown_active(at(12), at(12) - timedelta(minutes=29)) is True

    def test_interval_elapsed(self):
        assert cooldown_active(at(12), at(11, 30)) is False

    def test_custom_interval(self):
        last = at(11, 30)
        assert cooldown_active(at(12), last, min_interval_minutes=45) is True
        assert cooldown_active(at(12), last, min_interval_minutes=15) is False
