"""Mock LLM provider for testing."""

from __future__ import annotations

from hydrocue.core.llm.provider import ProviderResponse


class MockProvider:
    """Mock provider for testing: returns a canned response or raises."""

    def __init__(
        self,
        response_content: str = "Mock LLM response.",
        fail_with: Exception | None = None,
    ) -> None:
        self.response_content = response_content
        self.fail_with = fail_with
        self.last_system_message: str = ""
        self.last_user_message: str = ""
        self.last_json_output: bool = False
        self.call_count: int = 0

    async def generate(
        self,
        system_message: str,
        user_message: str,
        max_tokens: int = 512,
        temperature: float = 0.3,
        json_output: bool = False,
    ) -> ProviderResponse:
        self.last_system_message = system_message
        self.last_user_message = user_message
        self.last_json_output = json_output
        self.call_count += 1
        if self.fail_with is not None:
            raise self.fail_with
        return ProviderResponse(
            content=self.response_content,
            input_tokens=len(system_message.split()) + len(user_message.split()),
            output_tokens=len(self.response_content.split()),
            model="mock",
            latency_ms=0.0,
        )
