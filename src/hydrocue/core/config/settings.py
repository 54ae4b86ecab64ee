"""Application settings loaded from environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """HydroCue server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Loopback by default: the webhook has no auth layer.
    hydrocue_host: str = "127.0.0.1"
    hydrocue_port: int = 8001
    hydrocue_log_level: str = "info"
    hydrocue_allow_insecure_bind: bool = False

    # Messaging (Telegram Bot API)
    bot_token: str = ""
    chat_id: str = ""
    telegram_api_base: str = "https://api.telegram.org"
    http_timeout_s: float = 10.0

    # Profile defaults
    name: str = "friend"
    age: float | None = None
    height_cm: float | None = None
    weight_kg: float = 70
    activity_level: str = ""
    activity_mon: str = "Moderate"
    activity_tue: str = "Moderate"
    activity_wed: str = "Moderate"
    activity_thu: str = "Moderate"
    activity_fri: str = "Moderate"
    activity_sat: str = "Light"
    activity_sun: str = "Light"
    daily_activity_minutes: float | None = None
    medical_conditions: str = ""  # comma-separated, e.g. "ckd,hf"
    clinician_limit_ml: float | None = None
    temp_c: float | None = None
    humidity_pct: float | None = None
    wake_time: str = "07:00"
    sleep_time: str = "23:00"

    # Reminder policy
    quiet_start_hour: int = 23
    quiet_end_hour: int = 7
    min_interval_min: float = 30
    timezone: str = ""  # IANA name; empty means server local time

    # Engine modes
    goal_mode: Literal["auto", "blocks", "flat"] = "auto"
    pacing_mode: Literal["activity", "fixed"] = "activity"
    decision_source: Literal["rules", "ai"] = "rules"
    rephrase_messages: bool = False

    # LLM collaborator
    llm_provider: Literal["anthropic", "openai", "mock"] = "openai"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    def activity_by_weekday(self) -> dict[int, str]:
        """Activity descriptions keyed by ``datetime.weekday()`` (0=Monday)."""
        return {
            0: self.activity_mon,
            1: self.activity_tue,
            2: self.activity_wed,
            3: self.activity_thu,
            4: self.activity_fri,
            5: self.activity_sat,
            6: self.activity_sun,
        }

    def profile_defaults(self) -> dict:
        """Raw profile mapping handed to the profile normalizer."""
        conditions = [c.strip() for c in self.medical_conditions.split(",") if c.strip()]
        return {
            "name": self.name,
            "age": self.age,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "activity_level": self.activity_level or None,
            "daily_activity_minutes": self.daily_activity_minutes,
            "medical_conditions": conditions,
            "clinician_limit_ml": self.clinician_limit_ml,
            "temp_c": self.temp_c,
            "humidity_pct": self.humidity_pct,
            "wake_time": self.wake_time,
            "sleep_time": self.sleep_time,
        }


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
