"""Anthropic Claude provider."""

from __future__ import annotations

import time

from hydrocue.core.llm.provider import ProviderResponse

# Claude has no JSON response mode; prefilling the assistant turn with "{"
# keeps the reply a bare object.
_JSON_PREFILL = "{"


class AnthropicProvider:
    """Claude provider using the Anthropic SDK."""

    def __init__(self, api_key: str, model: str = "claude-sonnet-4-5-20250929") -> None:
        import anthropic

        self.client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 512,
        temperature: float = 0.3,
        json_output: bool = False,
    ) -> ProviderResponse:
        messages = [{"role": "user", "content": user_message}]
        if json_output:
            messages.append({"role": "assistant", "content": _JSON_PREFILL})

        start = time.monotonic()
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_message,
            messages=messages,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        content = response.content[0].text if response.content else ""
        if json_output:
            content = _JSON_PREFILL + content
        return ProviderResponse(
            content=content,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=self.model,
            latency_ms=elapsed_ms,
        )
