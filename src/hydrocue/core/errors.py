"""Exception hierarchy for the reminder service."""

from __future__ import annotations


class HydroCueError(Exception):
    """Base exception for HydroCue errors."""


class ReadingValidationError(HydroCueError):
    """The inbound reading is missing required fields or is malformed."""


class ConfigurationError(HydroCueError):
    """Required configuration (credentials, recipient) is absent."""
