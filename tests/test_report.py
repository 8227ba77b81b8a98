import json
import logging
from datetime import datetime
from pathlib import Path

from apiexpect.report import ReportExporter, build_summary, result_outcome


def test_build_summary():
    results = [
        {"result": "PASS", "test_name": "test_a"},
        {"result": "FAIL", "severity": "error", "test_name": "test_a"},
        {"result": "FAIL", "severity": "log", "test_name": "test_b"},
        {"result": "PASS"},
    ]
    summary = build_summary(results)
    assert summary == {
        "total": 4,
        "pass": 2,
        "fail": 1,
        "log": 1,
        "tests": {
            "test_a": {"pass": 1, "fail": 1, "log": 0},
            "test_b": {"pass": 0, "fail": 0, "log": 1},
        },
    }


def test_build_summary_empty():
    assert build_summary([]) == {"total": 0, "pass": 0, "fail": 0, "log": 0}


def test_result_outcome_without_severity_is_fail():
    assert result_outcome({"result": "FAIL"}) == "fail"


def test_file_name_is_sanitized():
    exporter = ReportExporter("out")
    name = exporter.file_name("demo suite/1", datetime(2024, 5, 1, 10, 0, 0, 42))
    assert name == "demosuite1_20240501_100000_000042.json"
    assert exporter.file_name("!!", datetime(2024, 5, 1)) == "suite_20240501_000000_000000.json"


def test_write(tmp_path, caplog):
    report = {
        "suite_name": "demo suite",
        "summary": {"total": 1, "pass": 1, "fail": 0, "log": 0},
        "results": [{"actual": Path("x")}],
    }
    exporter = ReportExporter(tmp_path / "reports")
    with caplog.at_level(logging.INFO, logger="apiexpect"):
        path = exporter.write(report)

    assert path.name.startswith("demosuite_")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["suite_name"] == "demo suite"
    assert data["summary"]["pass"] == 1
    assert data["results"][0]["actual"] == "x"
    assert "generated_at" in data
    assert "written to" in caplog.text
