"""Message sender protocol: outbound interface for reminder delivery."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class SendResult:
    """Outcome of one delivery attempt."""

    status: int
    body: str
    latency_ms: float

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@runtime_checkable
class MessageSender(Protocol):
    """Abstract interface for sending a plain-text message to a recipient."""

    async def send(self, recipient: str, text: str) -> SendResult: ...
