"""Advisory conflict detection and editor-time validation for condition sets."""

from condition_engine.conflict_detection.detector import ConflictDetector
from condition_engine.conflict_detection.intervals import condition_to_interval, conditions_overlap
from condition_engine.conflict_detection.validation import (
    count_matching_patients,
    describe_condition,
    detect_range_gaps,
    is_condition_complete,
    matching_patients,
    validate_conditions,
)

__all__ = [
    "ConflictDetector",
    "condition_to_interval",
    "conditions_overlap",
    "count_matching_patients",
    "describe_condition",
    "detect_range_gaps",
    "is_condition_complete",
    "matching_patients",
    "validate_conditions",
]
