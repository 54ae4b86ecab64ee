"""HydroCue server entry point: ``python -m hydrocue.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from hydrocue.core.config.settings import get_settings
from hydrocue.core.server.app import create_app


def _is_loopback_host(host: str) -> bool:
    if host in {"localhost"}:
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        return False


def run() -> None:
    """Start the HydroCue server (webhook on ``/``, MCP on ``/mcp``)."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.hydrocue_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger = logging.getLogger(__name__)
    if not settings.hydrocue_allow_insecure_bind and not _is_loopback_host(settings.hydrocue_host):
        raise RuntimeError(
            "Refusing to bind HydroCue to a non-loopback host without an auth layer. "
            "Set HYDROCUE_ALLOW_INSECURE_BIND=true to override (unsafe)."
        )
    if not settings.bot_token or not settings.chat_id:
        logger.warning("BOT_TOKEN/CHAT_ID not set; readings will be answered with 500")
    logger.info(
        "Starting HydroCue on %s:%d",
        settings.hydrocue_host,
        settings.hydrocue_port,
    )

    mcp = create_app(settings_override=settings)
    mcp.run(
        transport="streamable-http",
        host=settings.hydrocue_host,
        port=settings.hydrocue_port,
    )


if __name__ == "__main__":
    run()
