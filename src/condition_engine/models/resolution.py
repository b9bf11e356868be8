"""Resolution output — what the engine decided for one patient."""

from __future__ import annotations

from dataclasses import dataclass

from condition_engine.models.enums import ResolutionReason


@dataclass(frozen=True)
class MessageResolution:
    """The engine's verdict for a single patient.

    ``matched_condition_id`` is set only when a condition (including DEFAULT
    and UNCONDITIONED) produced the text; the global default template leaves
    it empty. ``resolved_template`` is present only when a message applies.
    """

    patient_id: str
    patient_position: int
    offset: int
    reason: ResolutionReason
    patient_name: str | None = None
    matched_condition_id: str | None = None
    resolved_template: str | None = None

    @property
    def has_message(self) -> bool:
        return self.resolved_template is not None


@dataclass(frozen=True)
class ResolveOptions:
    """Per-call tuning knobs for resolution."""

    estimated_time_per_session_minutes: int | None = None
