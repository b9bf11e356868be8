"""Resolution trace — full audit trail of how the engine picked a template."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from condition_engine.models.enums import ConditionOperator, ResolutionStage
from condition_engine.models.resolution import MessageResolution


class ConditionStatus(IntEnum):
    """What happened to a single condition during one resolution."""

    MATCHED = auto()
    BLANK_TEMPLATE = auto()
    NOT_MATCHED = auto()
    INACTIVE = auto()
    NOT_EVALUATED = auto()


@dataclass(frozen=True)
class ConditionResult:
    """Record of a single condition's evaluation during a resolve call."""

    condition_id: str
    operator: ConditionOperator
    status: ConditionStatus
    explanation: str = ""


@dataclass(frozen=True)
class ResolutionTrace:
    """Complete audit trail for a single engine.explain() call.

    Records every condition's outcome and the stage that terminated
    evaluation, so operators can see why a patient got a given message.
    """

    offset: int
    condition_results: tuple[ConditionResult, ...] = field(default_factory=tuple)
    deciding_stage: ResolutionStage = ResolutionStage.NO_MATCH
    final_resolution: MessageResolution | None = None

    def status_of(self, condition_id: str) -> ConditionStatus | None:
        """Return the recorded status for *condition_id*, if it was seen."""
        for result in self.condition_results:
            if result.condition_id == condition_id:
                return result.status
        return None
