"""LLM provider implementations."""

from hydrocue.core.llm.providers.anthropic import AnthropicProvider
from hydrocue.core.llm.providers.mock import MockProvider
from hydrocue.core.llm.providers.openai import OpenAIProvider

__all__ = ["AnthropicProvider", "MockProvider", "OpenAIProvider"]
