"""Serialization module — convert between engine models and camelCase payloads."""

from condition_engine.serialization.payload import (
    condition_from_dict,
    config_from_dict,
    conflict_info_to_dict,
    conflict_summary_to_dict,
    parse_operator,
    patient_from_dict,
    patients_from_list,
    resolution_to_dict,
    to_json_string,
    trace_to_dict,
)

__all__ = [
    "condition_from_dict",
    "config_from_dict",
    "conflict_info_to_dict",
    "conflict_summary_to_dict",
    "parse_operator",
    "patient_from_dict",
    "patients_from_list",
    "resolution_to_dict",
    "to_json_string",
    "trace_to_dict",
]
