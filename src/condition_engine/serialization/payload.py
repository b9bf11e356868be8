"""camelCase payload codec for the admin console's condition and queue data.

Converts the JSON shapes exchanged with the surrounding application into
engine models and back. All functions are pure (no I/O).

Decoding is lenient where the engine is lenient: numeric fields are kept
raw so that a malformed value simply never matches. The operator set is
closed, so an unknown operator is a PayloadError.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from condition_engine.exceptions import PayloadError
from condition_engine.matchers.base import parse_number
from condition_engine.models.condition import MessageCondition, Patient, QueueMessageConfig
from condition_engine.models.conflict import ConflictInfo, ConflictSummary
from condition_engine.models.decision_trace import ResolutionTrace
from condition_engine.models.enums import ConditionOperator
from condition_engine.models.resolution import MessageResolution


def condition_from_dict(data: Mapping[str, Any]) -> MessageCondition:
    """Build a MessageCondition from its camelCase payload.

    Text fields are coerced to ``str``; only a literal ``true`` soft-deletes.
    """
    _require_mapping(data, "conditions")
    condition_id = _required_id(data, "id")
    return MessageCondition(
        id=condition_id,
        operator=parse_operator(data.get("operator")),
        priority=_optional_int(data.get("priority")),
        template=_optional_str(data.get("template")),
        value=data.get("value"),
        min_value=data.get("minValue"),
        max_value=data.get("maxValue"),
        enabled=data.get("enabled") is not False,
        is_deleted=data.get("isDeleted") is True,
        template_id=_optional_str(data.get("templateId")),
        name=_optional_str(data.get("name")),
    )


def config_from_dict(data: Mapping[str, Any]) -> QueueMessageConfig:
    """Build a QueueMessageConfig from its camelCase payload."""
    raw_conditions = data.get("conditions") or []
    if not isinstance(raw_conditions, list):
        raise PayloadError("'conditions' must be a list", field="conditions")
    return QueueMessageConfig(
        conditions=tuple(condition_from_dict(c) for c in raw_conditions),
        default_template=_optional_str(data.get("defaultTemplate")),
        queue_name=_optional_str(data.get("queueName")),
    )


def patient_from_dict(data: Mapping[str, Any]) -> Patient:
    """Build a Patient from ``{id, name, position}``."""
    _require_mapping(data, "patients")
    position = parse_number(data.get("position"))
    if position is None or not position.is_integer():
        raise PayloadError(
            f"Patient position must be an integer, got {data.get('position')!r}",
            field="position",
        )
    return Patient(
        id=_required_id(data, "id"),
        position=int(position),
        name=_optional_str(data.get("name")),
    )


def patients_from_list(items: Iterable[Mapping[str, Any]]) -> list[Patient]:
    return [patient_from_dict(item) for item in items]


def parse_operator(raw: Any) -> ConditionOperator:
    """Map a payload operator string onto the closed ConditionOperator set."""
    if isinstance(raw, ConditionOperator):
        return raw
    if not isinstance(raw, str):
        raise PayloadError(f"Operator must be a string, got {raw!r}", field="operator")
    try:
        return ConditionOperator(raw.strip().upper())
    except ValueError:
        raise PayloadError(f"Unknown condition operator: {raw!r}", field="operator") from None


def resolution_to_dict(resolution: MessageResolution) -> dict:
    """Convert a MessageResolution to its camelCase payload.

    ``matchedConditionId`` and ``resolvedTemplate`` are only present when set.
    """
    result: dict[str, Any] = {
        "patientId": resolution.patient_id,
        "patientName": resolution.patient_name,
        "patientPosition": resolution.patient_position,
        "offset": resolution.offset,
        "reason": resolution.reason.value,
    }
    if resolution.matched_condition_id is not None:
        result["matchedConditionId"] = resolution.matched_condition_id
    if resolution.resolved_template is not None:
        result["resolvedTemplate"] = resolution.resolved_template
    return result


def conflict_info_to_dict(info: ConflictInfo) -> dict:
    """Convert a ConflictInfo to the shape the warning banner expects."""
    return {
        "hasConflict": info.has_conflict,
        "conflictingIds": list(info.conflicting_ids),
        "message": info.message,
        "severity": info.severity.value,
        "hasDefaultConflict": info.has_default_conflict,
    }


def conflict_summary_to_dict(summary: ConflictSummary) -> dict:
    return {
        "hasOverlaps": summary.has_overlaps,
        "hasDefaultConflict": summary.has_default_conflict,
        "overlappingConditions": [
            {"id1": p.first_id, "id2": p.second_id, "description": p.description}
            for p in summary.overlapping_pairs
        ],
        "totalConflicts": summary.total_conflicts,
    }


def trace_to_dict(trace: ResolutionTrace) -> dict:
    """Convert a ResolutionTrace to a JSON-friendly dict for debugging views."""
    return {
        "offset": trace.offset,
        "decidingStage": trace.deciding_stage.name,
        "conditions": [
            {
                "conditionId": r.condition_id,
                "operator": r.operator.value,
                "status": r.status.name,
                "explanation": r.explanation,
            }
            for r in trace.condition_results
        ],
        "resolution": (
            resolution_to_dict(trace.final_resolution)
            if trace.final_resolution is not None
            else None
        ),
    }


def to_json_string(payload: Any, indent: int = 2) -> str:
    """Dump a payload as JSON, keeping Arabic text readable."""
    return json.dumps(payload, indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_mapping(data: Any, field: str) -> None:
    if not isinstance(data, Mapping):
        raise PayloadError(
            f"Each '{field}' entry must be an object, got {data!r}", field=field
        )


def _required_id(data: Mapping[str, Any], key: str) -> str:
    raw = data.get(key)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise PayloadError(f"Missing required field {key!r}", field=key)
    return str(raw)


def _optional_str(raw: Any) -> str | None:
    return None if raw is None else str(raw)


def _optional_int(raw: Any) -> int | None:
    """Parse an integer-valued field; anything else becomes None."""
    number = parse_number(raw)
    if number is None or not number.is_integer():
        return None
    return int(number)
