"""Shared test fixtures for HydroCue tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "mock")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "")
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setenv("BOT_TOKEN", "")
    monkeypatch.setenv("CHAT_ID", "")
    monkeypatch.setenv("DECISION_SOURCE", "rules")
    monkeypatch.setenv("REPHRASE_MESSAGES", "false")

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from hydrocue.core.messaging.mock import MockSender  # noqa: E402
from hydrocue.core.state.cooldown import InMemoryNotificationStore  # noqa: E402
from hydrocue.domains.hydration.domain_logic.hydration_models import Profile  # noqa: E402
from hydrocue.domains.hydration.domain_logic.profile import build_profile  # noqa: E402

# Wednesday. Settings' weekday defaults make this a "Moderate" day.
TEST_DATE = (2026, 10, 14)


def at(hour: int, minute: int = 0, *, day: tuple[int, int, int] = TEST_DATE) -> datetime:
    """A UTC instant on the test date."""
    return datetime(*day, hour, minute, tzinfo=timezone.utc)


class FixedClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: float) -> None:
        self.now += timedelta(minutes=minutes)


def make_profile(now: datetime | None = None, **raw: Any) -> Profile:
    """Normalized profile on the test date; keyword args are raw profile fields."""
    return build_profile(raw, now or at(12))


@pytest.fixture
def clock() -> FixedClock:
    """Mid-afternoon on the test date, outside quiet hours."""
    return FixedClock(at(15))


@pytest.fixture
def store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def sender() -> MockSender:
    return MockSender()
