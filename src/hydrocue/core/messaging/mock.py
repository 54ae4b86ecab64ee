"""Mock message sender for testing and dry runs."""

from __future__ import annotations

from hydrocue.core.messaging.sender import SendResult


class MockSender:
    """Records every message instead of delivering it."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail_with = fail_with

    async def send(self, recipient: str, text: str) -> SendResult:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append((recipient, text))
        return SendResult(status=200, body='{"ok":true}', latency_ms=0.0)

    @property
    def call_count(self) -> int:
        return len(self.sent)
