"""Custom exception hierarchy for the condition engine."""

from __future__ import annotations


class ConditionEngineError(Exception):
    """Base exception for all condition_engine errors."""


class PayloadError(ConditionEngineError):
    """A condition, config or patient payload could not be decoded."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(ConditionEngineError):
    """An environment setting has an invalid value."""

    def __init__(self, name: str, raw_value: str) -> None:
        super().__init__(f"Invalid value for {name}: {raw_value!r}")
        self.name = name
        self.raw_value = raw_value
