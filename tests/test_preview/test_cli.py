"""Tests for the queue message preview CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from condition_engine.exceptions import PayloadError
from preview.cli import (
    EXIT_INPUT_ERROR,
    EXIT_OK,
    load_config,
    load_patients,
    main,
    resolutions_table,
    run_preview,
)

QUEUE_PAYLOAD = {
    "queueName": "عيادة الأسنان",
    "defaultTemplate": "مرحباً {PN}",
    "conditions": [
        {"id": "near", "priority": 1, "operator": "RANGE", "minValue": 1, "maxValue": 5,
         "template": "قريب: {PQP}"},
        {"id": "now", "priority": 2, "operator": "EQUAL", "value": 0,
         "template": "حان دورك يا {PN}"},
        {"id": "far", "priority": 3, "operator": "GREATER", "value": 5,
         "template": "أمامك {ETR}"},
    ],
}


def _write_json(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def queue_file(tmp_path: Path) -> Path:
    return _write_json(tmp_path / "queue.json", QUEUE_PAYLOAD)


@pytest.fixture
def patients_csv(tmp_path: Path) -> Path:
    path = tmp_path / "patients.csv"
    path.write_text(
        "id,name,position\n"
        "p8,سارة,8\n"
        "p10,أحمد,10\n"
        "p13,منى,13\n"
        "p22,,22\n",
        encoding="utf-8",
    )
    return path


class TestLoaders:
    def test_load_config(self, queue_file: Path) -> None:
        config = load_config(queue_file)
        assert config.queue_name == "عيادة الأسنان"
        assert [c.id for c in config.conditions] == ["near", "now", "far"]

    def test_config_must_be_object(self, tmp_path: Path) -> None:
        with pytest.raises(PayloadError):
            load_config(_write_json(tmp_path / "q.json", []))

    def test_load_patients_csv(self, patients_csv: Path) -> None:
        patients = load_patients(patients_csv)
        assert [p.id for p in patients] == ["p8", "p10", "p13", "p22"]
        assert patients[1].position == 10
        assert patients[3].name is None

    def test_csv_missing_position_column(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.csv"
        path.write_text("id,name\np1,x\n", encoding="utf-8")
        with pytest.raises(PayloadError):
            load_patients(path)

    def test_load_patients_json(self, tmp_path: Path) -> None:
        path = _write_json(tmp_path / "patients.json", [{"id": "p1", "name": "x", "position": 3}])
        assert load_patients(path)[0].position == 3

    def test_patients_json_must_be_list(self, tmp_path: Path) -> None:
        with pytest.raises(PayloadError):
            load_patients(_write_json(tmp_path / "patients.json", {"id": "p1"}))


class TestRunPreview:
    def test_json_report(self, clinic_config, waiting_room) -> None:
        report = json.loads(run_preview(clinic_config, waiting_room, 10, 15, "json"))
        by_id = {r["patientId"]: r for r in report["resolutions"]}
        assert report["conflicts"]["hasConflict"] is False
        assert by_id["p8"]["reason"] == "EXCLUDED"
        assert by_id["p10"]["resolvedTemplate"] == "حان دورك يا أحمد"
        assert by_id["p13"]["resolvedTemplate"] == "قريب: 13"
        assert by_id["p22"]["resolvedTemplate"] == "أمامك 3 ساعة"
        assert "trace" not in report

    def test_json_report_with_trace(self, clinic_config, waiting_room) -> None:
        report = json.loads(run_preview(clinic_config, waiting_room, 10, 15, "json", "p13"))
        assert report["trace"]["offset"] == 3
        assert report["trace"]["resolution"]["matchedConditionId"] == "near"

    def test_unknown_explain_id(self, clinic_config, waiting_room) -> None:
        with pytest.raises(PayloadError):
            run_preview(clinic_config, waiting_room, 10, 15, "table", "nobody")

    def test_table_flags_conflicts(self, condition_factory, waiting_room) -> None:
        from condition_engine.models.condition import QueueMessageConfig
        from condition_engine.models.enums import ConditionOperator

        config = QueueMessageConfig(
            conditions=(
                condition_factory("a", ConditionOperator.RANGE, priority=1, min_value=1, max_value=5),
                condition_factory("b", ConditionOperator.EQUAL, priority=2, value=3),
            ),
        )
        report = run_preview(config, waiting_room, 10, 15, "table")
        lines = report.splitlines()
        assert lines[0].startswith("WARNING: ")
        assert lines[1] == "Conflicting conditions: a, b"
        assert "p13" in report

    def test_empty_patient_list(self, clinic_config) -> None:
        assert run_preview(clinic_config, [], 10, 15, "table") == "No patients."


class TestResolutionsTable:
    def test_columns(self, engine, clinic_config, waiting_room) -> None:
        frame = resolutions_table(engine.resolve_patients(clinic_config, waiting_room, 10))
        assert list(frame.columns) == [
            "patient", "name", "position", "offset", "reason", "condition", "message",
        ]
        assert len(frame) == len(waiting_room)


class TestMain:
    def test_success(self, queue_file: Path, patients_csv: Path, capsys) -> None:
        code = main([
            "--config", str(queue_file), "--patients", str(patients_csv),
            "--cqp", "10", "--format", "json",
        ])
        assert code == EXIT_OK
        report = json.loads(capsys.readouterr().out)
        assert len(report["resolutions"]) == 4

    def test_missing_patients_file(self, queue_file: Path, tmp_path: Path) -> None:
        code = main([
            "--config", str(queue_file), "--patients", str(tmp_path / "none.csv"), "--cqp", "10",
        ])
        assert code == EXIT_INPUT_ERROR

    def test_unknown_operator(self, tmp_path: Path, patients_csv: Path) -> None:
        bad = _write_json(tmp_path / "bad.json", {"conditions": [{"id": "x", "operator": "BETWEEN"}]})
        code = main(["--config", str(bad), "--patients", str(patients_csv), "--cqp", "10"])
        assert code == EXIT_INPUT_ERROR


class TestMainRejectsMalformedEntries:
    def test_non_object_condition(self, tmp_path: Path, patients_csv: Path) -> None:
        bad = _write_json(tmp_path / "bad.json", {"conditions": [1]})
        code = main(["--config", str(bad), "--patients", str(patients_csv), "--cqp", "10"])
        assert code == EXIT_INPUT_ERROR

    def test_non_object_patient(self, queue_file: Path, tmp_path: Path) -> None:
        patients = _write_json(tmp_path / "patients.json", [{"id": "p1", "position": 3}, 7])
        code = main(["--config", str(queue_file), "--patients", str(patients), "--cqp", "1"])
        assert code == EXIT_INPUT_ERROR

    def test_numeric_queue_name(self, tmp_path: Path, patients_csv: Path, capsys) -> None:
        config = _write_json(
            tmp_path / "queue.json",
            {"queueName": 101, "defaultTemplate": "عيادة {DN}", "conditions": []},
        )
        code = main([
            "--config", str(config), "--patients", str(patients_csv),
            "--cqp", "10", "--format", "json",
        ])
        assert code == EXIT_OK
        report = json.loads(capsys.readouterr().out)
        by_id = {r["patientId"]: r for r in report["resolutions"]}
        assert by_id["p13"]["resolvedTemplate"] == "عيادة 101"
