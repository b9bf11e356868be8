"""Placeholder renderer — fills message templates with patient and queue values.

Substitution is plain text replacement: tokens are case-sensitive, never
nested, and substituted values are not re-scanned for further tokens.

Supported tokens:
    {PN}   patient name
    {PQP}  patient queue position
    {CQP}  current queue position
    {ETR}  estimated time remaining (formatted)
    {DN}   department / queue name
    {CN}   clinic / queue name
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from condition_engine.math.eta import format_time_remaining
from condition_engine.models.enums import (
    CLINIC_NAME_TOKEN,
    CURRENT_POSITION_TOKEN,
    DEPARTMENT_NAME_TOKEN,
    PATIENT_NAME_TOKEN,
    PATIENT_POSITION_TOKEN,
    SUPPORTED_PLACEHOLDERS,
    TIME_REMAINING_TOKEN,
)

# Anything shaped like a placeholder, supported or not.
_PLACEHOLDER_PATTERN = re.compile(r"\{[A-Z]+\}")


@dataclass(frozen=True)
class PlaceholderValues:
    """Values available to a template. ``None`` renders as an empty string."""

    patient_name: str | None = None
    patient_position: int | None = None
    current_queue_position: int | None = None
    time_remaining: str | None = None
    queue_name: str | None = None

    def as_mapping(self) -> dict[str, str]:
        """Map each supported token to its rendered text."""
        return {
            PATIENT_NAME_TOKEN: self.patient_name or "",
            PATIENT_POSITION_TOKEN: _text(self.patient_position),
            CURRENT_POSITION_TOKEN: _text(self.current_queue_position),
            TIME_REMAINING_TOKEN: self.time_remaining or "",
            DEPARTMENT_NAME_TOKEN: self.queue_name or "",
            CLINIC_NAME_TOKEN: self.queue_name or "",
        }


@dataclass(frozen=True)
class TemplateValidation:
    """Which placeholders a template uses, and which are unknown."""

    valid: bool
    used_placeholders: tuple[str, ...] = field(default_factory=tuple)
    invalid_placeholders: tuple[str, ...] = field(default_factory=tuple)


def _text(value: int | None) -> str:
    return "" if value is None else str(value)


def build_placeholder_values(
    patient_name: str | None,
    patient_position: int,
    current_queue_position: int,
    offset: int,
    queue_name: str | None = None,
    ets_minutes: int | float | None = None,
) -> PlaceholderValues:
    """Compute every placeholder value for one patient."""
    return PlaceholderValues(
        patient_name=patient_name,
        patient_position=patient_position,
        current_queue_position=current_queue_position,
        time_remaining=format_time_remaining(offset, ets_minutes),
        queue_name=queue_name,
    )


def render_template(template: str, values: PlaceholderValues) -> str:
    """Substitute supported tokens in *template*.

    Unknown ``{XYZ}`` tokens are left untouched. A template with no tokens
    is returned unchanged.
    """
    mapping = values.as_mapping()
    return _PLACEHOLDER_PATTERN.sub(
        lambda match: mapping.get(match.group(0), match.group(0)), template
    )


def extract_placeholders(template: str) -> list[str]:
    """Return placeholder-shaped tokens in first-seen order, without repeats."""
    seen: list[str] = []
    for token in _PLACEHOLDER_PATTERN.findall(template):
        if token not in seen:
            seen.append(token)
    return seen


def validate_template(template: str) -> TemplateValidation:
    """Split the template's tokens into supported and unsupported ones."""
    used: list[str] = []
    invalid: list[str] = []
    for token in extract_placeholders(template):
        if token in SUPPORTED_PLACEHOLDERS:
            used.append(token)
        else:
            invalid.append(token)
    return TemplateValidation(
        valid=not invalid,
        used_placeholders=tuple(used),
        invalid_placeholders=tuple(invalid),
    )
