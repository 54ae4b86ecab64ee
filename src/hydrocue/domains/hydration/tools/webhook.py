"""Inbound webhook: ``POST /`` with a bottle reading."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from hydrocue.core.config.settings import Settings
    from hydrocue.domains.hydration.pipeline import ReminderPipeline

from hydrocue.core.errors import ConfigurationError, ReadingValidationError
from hydrocue.domains.hydration.readings import parse_reading

logger = logging.getLogger(__name__)

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def _check_configuration(settings: Settings) -> None:
    if not settings.bot_token or not settings.chat_id:
        raise ConfigurationError("missing BOT_TOKEN/CHAT_ID")


def register_reading_webhook(
    mcp: FastMCP,
    pipeline: ReminderPipeline,
    settings: Settings,
) -> None:
    """Register the device webhook as a custom HTTP route on the server."""

    @mcp.custom_route("/", methods=_ALL_METHODS)
    async def ingest_reading(request: Request) -> JSONResponse:
        if request.method != "POST":
            return JSONResponse({"error": "POST only"}, status_code=405)

        try:
            _check_configuration(settings)

            raw = await request.body()
            try:
                body = json.loads(raw) if raw else None
            except (json.JSONDecodeError, UnicodeDecodeError):
                return JSONResponse({"error": "invalid json"}, status_code=400)

            reading, overrides = parse_reading(body)
            result = await pipeline.handle(reading, overrides)
            return JSONResponse(result.to_response())

        except ReadingValidationError as exc:
            return JSONResponse({"error": str(exc)}, status_code=400)
        except ConfigurationError as exc:
            logger.error("Configuration error: %s", exc)
            return JSONResponse({"error": str(exc)}, status_code=500)
        except Exception as exc:
            logger.exception("Unhandled error while processing reading")
            return JSONResponse({"error": "server_error", "detail": str(exc)}, status_code=500)
