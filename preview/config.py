"""Environment-variable-based configuration for the preview tool."""

from __future__ import annotations

import logging
import os

from condition_engine.exceptions import ConfigurationError
from condition_engine.models.enums import DEFAULT_ETS_MINUTES

QUEUE_ETS_MINUTES: str = os.environ.get("QUEUE_ETS_MINUTES", str(DEFAULT_ETS_MINUTES))
PREVIEW_LOG_LEVEL: str = os.environ.get("PREVIEW_LOG_LEVEL", "INFO")
PREVIEW_OUTPUT_FORMAT: str = os.environ.get("PREVIEW_OUTPUT_FORMAT", "table")

OUTPUT_FORMATS = ("table", "json")


def ets_minutes() -> int:
    """Minutes per session, validated as a non-negative integer."""
    try:
        value = int(QUEUE_ETS_MINUTES)
    except ValueError:
        raise ConfigurationError("QUEUE_ETS_MINUTES", QUEUE_ETS_MINUTES) from None
    if value < 0:
        raise ConfigurationError("QUEUE_ETS_MINUTES", QUEUE_ETS_MINUTES)
    return value


def log_level() -> int:
    """Numeric logging level named by PREVIEW_LOG_LEVEL."""
    level = logging.getLevelName(PREVIEW_LOG_LEVEL.strip().upper())
    if not isinstance(level, int):
        raise ConfigurationError("PREVIEW_LOG_LEVEL", PREVIEW_LOG_LEVEL)
    return level


def output_format() -> str:
    fmt = PREVIEW_OUTPUT_FORMAT.strip().lower()
    if fmt not in OUTPUT_FORMATS:
        raise ConfigurationError("PREVIEW_OUTPUT_FORMAT", PREVIEW_OUTPUT_FORMAT)
    return fmt
