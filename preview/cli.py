"""Preview which message each patient in a queue would receive.

Usage:
    python -m preview.cli --config queue.json --patients patients.csv --cqp 10
    python -m preview.cli --config queue.json --patients patients.json --cqp 10 --format json
    python -m preview.cli --config queue.json --patients patients.csv --cqp 10 --explain p7

The config file holds the camelCase queue payload (``conditions``,
``defaultTemplate``, ``queueName``). Patients come from a CSV with
``id,name,position`` columns or a JSON list of the same objects.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import pandas as pd

from condition_engine.conflict_detection.detector import ConflictDetector
from condition_engine.engine import MessageEngine
from condition_engine.exceptions import ConditionEngineError, PayloadError
from condition_engine.models.condition import Patient, QueueMessageConfig
from condition_engine.models.resolution import MessageResolution, ResolveOptions
from condition_engine.serialization import (
    config_from_dict,
    conflict_info_to_dict,
    patients_from_list,
    resolution_to_dict,
    to_json_string,
    trace_to_dict,
)

from preview import config

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def load_config(path: Path) -> QueueMessageConfig:
    """Load a queue message config from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise PayloadError("Queue config must be a JSON object")
    return config_from_dict(data)


def load_patients(path: Path) -> list[Patient]:
    """Load patients from a CSV (``id,name,position``) or JSON list."""
    if path.suffix.lower() == ".csv":
        frame = pd.read_csv(path, dtype={"id": str, "name": str})
        missing = {"id", "position"} - set(frame.columns)
        if missing:
            raise PayloadError(f"Patients CSV is missing column(s): {', '.join(sorted(missing))}")
        frame = frame.astype(object).where(pd.notna(frame), None)
        records: list[dict[str, Any]] = frame.to_dict(orient="records")
    else:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise PayloadError("Patients JSON must be a list")
    return patients_from_list(records)


def resolutions_table(resolutions: list[MessageResolution]) -> pd.DataFrame:
    """Tabulate resolutions for terminal display, one row per patient."""
    rows = [
        {
            "patient": r.patient_id,
            "name": r.patient_name or "",
            "position": r.patient_position,
            "offset": r.offset,
            "reason": r.reason.value,
            "condition": r.matched_condition_id or "",
            "message": r.resolved_template or "",
        }
        for r in resolutions
    ]
    return pd.DataFrame(
        rows,
        columns=["patient", "name", "position", "offset", "reason", "condition", "message"],
    )


def run_preview(
    queue_config: QueueMessageConfig,
    patients: list[Patient],
    current_queue_position: int,
    ets: int,
    output: str,
    explain_id: str | None = None,
) -> str:
    """Resolve every patient and render the report as text."""
    engine = MessageEngine()
    options = ResolveOptions(estimated_time_per_session_minutes=ets)

    conflicts = ConflictDetector().detect(queue_config.conditions)
    if conflicts.has_conflict:
        logger.warning("Condition conflicts: %s", conflicts.message)

    resolutions = engine.resolve_patients(queue_config, patients, current_queue_position, options)

    trace_payload = None
    if explain_id is not None:
        patient = next((p for p in patients if p.id == explain_id), None)
        if patient is None:
            raise PayloadError(f"No patient with id {explain_id!r}", field="explain")
        _, trace = engine.explain(
            queue_config, patient.id, patient.name, patient.position,
            current_queue_position, options,
        )
        trace_payload = trace_to_dict(trace)

    if output == "json":
        payload: dict[str, Any] = {
            "conflicts": conflict_info_to_dict(conflicts),
            "resolutions": [resolution_to_dict(r) for r in resolutions],
        }
        if trace_payload is not None:
            payload["trace"] = trace_payload
        return to_json_string(payload)

    lines: list[str] = []
    if conflicts.has_conflict:
        lines.append(f"WARNING: {conflicts.message}")
        lines.append(f"Conflicting conditions: {', '.join(conflicts.conflicting_ids)}")
        lines.append("")
    if resolutions:
        lines.append(resolutions_table(resolutions).to_string(index=False))
    else:
        lines.append("No patients.")
    if trace_payload is not None:
        lines.append("")
        lines.append(to_json_string(trace_payload))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Queue message resolution preview")
    parser.add_argument("--config", required=True, type=Path, help="Queue config JSON file")
    parser.add_argument("--patients", required=True, type=Path, help="Patients CSV or JSON file")
    parser.add_argument("--cqp", required=True, type=int, help="Current queue position")
    parser.add_argument("--ets", type=int, default=None, help="Minutes per session")
    parser.add_argument("--format", choices=config.OUTPUT_FORMATS, default=None)
    parser.add_argument("--explain", metavar="PATIENT_ID", help="Print the decision trace")
    args = parser.parse_args(argv)

    try:
        logging.basicConfig(
            level=config.log_level(),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        ets = args.ets if args.ets is not None else config.ets_minutes()
        output = args.format or config.output_format()
        queue_config = load_config(args.config)
        patients = load_patients(args.patients)
        report = run_preview(queue_config, patients, args.cqp, ets, output, args.explain)
    except (ConditionEngineError, OSError, ValueError) as exc:
        logger.error("Preview failed: %s", exc)
        return EXIT_INPUT_ERROR

    print(report)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
