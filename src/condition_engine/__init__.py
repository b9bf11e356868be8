"""Queue message condition engine.

Decides which message template applies to each patient in a clinic queue,
renders its placeholders, and flags ambiguous condition sets.
"""

from condition_engine.conflict_detection.detector import ConflictDetector
from condition_engine.engine import MessageEngine
from condition_engine.models import (
    ConditionOperator,
    ConflictInfo,
    MessageCondition,
    MessageResolution,
    Patient,
    QueueMessageConfig,
    ResolutionReason,
    ResolveOptions,
)

__all__ = [
    "ConditionOperator",
    "ConflictDetector",
    "ConflictInfo",
    "MessageCondition",
    "MessageEngine",
    "MessageResolution",
    "Patient",
    "QueueMessageConfig",
    "ResolutionReason",
    "ResolveOptions",
]
