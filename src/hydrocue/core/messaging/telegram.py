"""Telegram Bot API sender."""

from __future__ import annotations

import logging
import time

import httpx

from hydrocue.core.messaging.sender import SendResult

logger = logging.getLogger(__name__)


class TelegramSender:
    """Sends messages through ``sendMessage`` of the Telegram Bot API.

    No retry. A non-2xx answer is logged and returned; transport errors
    (DNS, TLS, timeouts) propagate to the caller.
    """

    def __init__(
        self,
        bot_token: str,
        *,
        api_base: str = "https://api.telegram.org",
        timeout_s: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"{api_base.rstrip('/')}/bot{bot_token}/sendMessage"
        self._timeout = timeout_s
        self._transport = transport

    async def send(self, recipient: str, text: str) -> SendResult:
        start = time.monotonic()
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self._url, json={"chat_id": recipient, "text": text})
        elapsed_ms = (time.monotonic() - start) * 1000

        result = SendResult(status=response.status_code, body=response.text, latency_ms=elapsed_ms)
        if result.ok:
            logger.info("Telegram sendMessage ok: status=%d, latency=%.0fms", result.status, elapsed_ms)
        else:
            logger.warning(
                "Telegram sendMessage rejected: status=%d, body=%s", result.status, result.body[:200]
            )
        return result
