"""LLM client: the bridge between the hydration planners and a provider."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from hydrocue.core.llm.provider import LLMProvider, ProviderResponse
from hydrocue.core.llm.response import clean_message_text, parse_json_object
from hydrocue.core.llm.system_prompt import (
    PLANNER_SYSTEM_PROMPT,
    REPHRASE_SYSTEM_PROMPT,
    build_planner_user_message,
)

logger = logging.getLogger(__name__)


class HydrationLLMClient:
    """Calls the configured provider for plans and message rephrasing.

    Both methods raise on any failure; callers own the fallback.
    """

    def __init__(self, provider: LLMProvider) -> None:
        self.provider = provider

    async def request_plan(
        self,
        profile: dict[str, Any],
        reading: dict[str, Any],
        now: datetime,
    ) -> dict[str, Any]:
        """Ask for a raw (unsanitized) hydration plan as a JSON object."""
        response = await self.provider.generate(
            system_message=PLANNER_SYSTEM_PROMPT,
            user_message=build_planner_user_message(profile, reading, now),
            max_tokens=300,
            temperature=0.2,
            json_output=True,
        )
        self._log_usage("plan", response)
        return parse_json_object(response.content)

    async def rephrase(self, text: str) -> str:
        """Return a rephrased nudge, or an empty string if the model gave nothing."""
        response = await self.provider.generate(
            system_message=REPHRASE_SYSTEM_PROMPT,
            user_message=text,
            max_tokens=120,
            temperature=0.7,
        )
        self._log_usage("rephrase", response)
        return clean_message_text(response.content)

    @staticmethod
    def _log_usage(kind: str, response: ProviderResponse) -> None:
        logger.info(
            "LLM %s call: model=%s, tokens=%d+%d, latency=%.0fms",
            kind,
            response.model,
            response.input_tokens,
            response.output_tokens,
            response.latency_ms,
        )
