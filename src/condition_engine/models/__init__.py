"""Data models for the condition engine."""

from condition_engine.models.condition import (
    MessageCondition,
    Patient,
    QueueMessageConfig,
    QueueSummary,
)
from condition_engine.models.conflict import (
    ConditionValidation,
    ConflictInfo,
    ConflictSummary,
    OffsetInterval,
    OverlapPair,
)
from condition_engine.models.decision_trace import (
    ConditionResult,
    ConditionStatus,
    ResolutionTrace,
)
from condition_engine.models.enums import (
    ConditionOperator,
    ConflictSeverity,
    ResolutionReason,
    ResolutionStage,
)
from condition_engine.models.resolution import MessageResolution, ResolveOptions

__all__ = [
    "ConditionOperator",
    "ConditionResult",
    "ConditionStatus",
    "ConditionValidation",
    "ConflictInfo",
    "ConflictSeverity",
    "ConflictSummary",
    "MessageCondition",
    "MessageResolution",
    "OffsetInterval",
    "OverlapPair",
    "Patient",
    "QueueMessageConfig",
    "QueueSummary",
    "ResolutionReason",
    "ResolutionStage",
    "ResolutionTrace",
    "ResolveOptions",
]
