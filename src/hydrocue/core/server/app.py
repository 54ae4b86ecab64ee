"""HydroCue server: application factory.

This module provides:
- create_app() for testability (tests inject a clock, sender, store, provider)
- Module-level `mcp` variable for FastMCP discovery
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from hydrocue.core.config.settings import Settings, get_settings
from hydrocue.core.llm.client import HydrationLLMClient
from hydrocue.core.llm.provider import LLMProvider, create_provider
from hydrocue.core.messaging.sender import MessageSender
from hydrocue.core.messaging.telegram import TelegramSender
from hydrocue.core.state.cooldown import InMemoryNotificationStore, NotificationStateStore
from hydrocue.domains.hydration.pipeline import Clock, ReminderPipeline, make_clock
from hydrocue.domains.hydration.planners import (
    AIPlanner,
    DecisionSource,
    MessageRephraser,
    RuleBasedPlanner,
)
from hydrocue.domains.hydration.tools.hydration_tools import register_hydration_tools
from hydrocue.domains.hydration.tools.webhook import register_reading_webhook

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def _resolve_llm_provider(settings: Settings) -> LLMProvider | None:
    """Pick the LLM provider, or None when no usable key is configured."""
    if settings.llm_provider == "mock":
        return create_provider("mock")
    if settings.llm_provider == "anthropic":
        api_key, model = settings.anthropic_api_key, settings.anthropic_model
    elif settings.llm_provider == "openai":
        api_key, model = settings.openai_api_key, settings.openai_model
    else:  # pragma: no cover
        raise ValueError(f"Unknown LLM provider: {settings.llm_provider!r}")

    if not api_key:
        logger.warning(
            "No API key configured for provider '%s'; AI features disabled",
            settings.llm_provider,
        )
        return None
    return create_provider(settings.llm_provider, api_key=api_key, model=model)


def create_app(
    *,
    settings_override: Settings | None = None,
    sender_override: MessageSender | None = None,
    store_override: NotificationStateStore | None = None,
    llm_provider_override: LLMProvider | None = None,
    clock_override: Clock | None = None,
) -> FastMCP:
    """Create and configure the HydroCue server.

    This is the main application factory. It:
    1. Creates the FastMCP server instance
    2. Builds the decision source (rules, or AI with rule fallback)
    3. Creates the message sender and the cooldown store
    4. Wires the reminder pipeline
    5. Registers the device webhook and the MCP tools
    """
    settings = settings_override if settings_override is not None else get_settings()

    # --- Server instance ---
    server = FastMCP(
        "HydroCue",
        instructions=(
            "Smart-bottle hydration reminder service. Receives bottle readings on "
            "POST /, paces the user's daily goal, and sends Telegram nudges. "
            "MCP tools expose read-only plan previews and cooldown state."
        ),
    )

    # --- Decision source ---
    rules = RuleBasedPlanner(goal_mode=settings.goal_mode, pacing_mode=settings.pacing_mode)
    needs_llm = settings.decision_source == "ai" or settings.rephrase_messages
    provider = llm_provider_override
    if provider is None and needs_llm:
        provider = _resolve_llm_provider(settings)
    llm_client = HydrationLLMClient(provider) if provider is not None else None

    decision_source: DecisionSource = rules
    if settings.decision_source == "ai":
        if llm_client is not None:
            decision_source = AIPlanner(llm_client, fallback=rules)
        else:
            logger.warning("DECISION_SOURCE=ai without an LLM; using rule-based planner")
    rephraser = (
        MessageRephraser(llm_client)
        if settings.rephrase_messages and llm_client is not None
        else None
    )
    logger.info(
        "Decision source: %s (goal_mode=%s, pacing_mode=%s, rephrase=%s)",
        decision_source.name,
        settings.goal_mode,
        settings.pacing_mode,
        rephraser is not None,
    )

    # --- Messaging and cooldown state ---
    sender = sender_override
    if sender is None:
        sender = TelegramSender(
            settings.bot_token,
            api_base=settings.telegram_api_base,
            timeout_s=settings.http_timeout_s,
        )
    store = store_override if store_override is not None else InMemoryNotificationStore()

    pipeline = ReminderPipeline(
        recipient=settings.chat_id,
        sender=sender,
        store=store,
        decision_source=decision_source,
        rephraser=rephraser,
        profile_defaults=settings.profile_defaults(),
        activity_by_weekday=settings.activity_by_weekday(),
        quiet_start_hour=settings.quiet_start_hour,
        quiet_end_hour=settings.quiet_end_hour,
        min_interval_min=settings.min_interval_min,
        clock=clock_override if clock_override is not None else make_clock(settings.timezone),
    )

    # --- Register tools ---
    @server.tool
    def health_check() -> dict:
        """Check server health and return basic status information."""
        return {
            "status": "ok",
            "server": "HydroCue",
            "version": VERSION,
            "decision_source": decision_source.name,
            "rephrase_messages": rephraser is not None,
            "credentials_configured": bool(settings.bot_token and settings.chat_id),
        }

    register_reading_webhook(server, pipeline, settings)
    register_hydration_tools(server, pipeline, goal_mode=settings.goal_mode)
    logger.info("Reading webhook and hydration tools registered")

    return server


# Module-level instance for FastMCP discovery.
# Lazy: only created when this attribute is accessed (not when tests import create_app).
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
