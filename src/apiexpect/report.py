"""Assertion reports collected by ReportAssertionHandler.

A report is a plain dict: ``suite_name``, ``summary`` and one ``results``
entry per reported assertion. ReportExporter writes it as a JSON file.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from apiexpect.assertion import AssertionSeverity

logger = logging.getLogger(__name__)

_OUTCOMES = ("pass", "fail", "log")


def result_outcome(result: dict) -> str:
    """Classify a result as "pass", "fail" or "log" (a log-severity failure)."""
    if result.get("result") == "PASS":
        return "pass"
    if result.get("severity") == AssertionSeverity.LOG.value:
        return "log"
    return "fail"


def build_summary(results: list[dict]) -> dict:
    """Count outcomes overall and per test name.

    Log-severity failures do not fail a test, so they are counted under
    "log" and never under "fail".
    """
    summary: dict[str, Any] = {"total": len(results)}
    summary.update(dict.fromkeys(_OUTCOMES, 0))
    tests: dict[str, dict[str, int]] = {}
    for result in results:
        outcome = result_outcome(result)
        summary[outcome] += 1
        test_name = result.get("test_name")
        if test_name:
            counts = tests.setdefault(test_name, dict.fromkeys(_OUTCOMES, 0))
            counts[outcome] += 1
    if tests:
        summary["tests"] = tests
    return summary


class ReportExporter:
    """Writes reports into ``output_dir``, one timestamped JSON file each."""

    def __init__(self, output_dir: str | Path) -> None:
        self.output_dir = Path(output_dir)

    def file_name(self, suite_name: str, when: datetime) -> str:
        safe_name = "".join(ch for ch in suite_name if ch.isalnum() or ch in ("-", "_"))
        return f"{safe_name or 'suite'}_{when.strftime('%Y%m%d_%H%M%S_%f')}.json"

    def write(self, report: dict) -> Path:
        now = datetime.now()
        self.output_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.output_dir / self.file_name(str(report.get("suite_name", "suite")), now)

        payload: dict[str, Any] = dict(report)
        payload.setdefault("generated_at", now.isoformat())

        with file_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2, default=str)

        logger.info(
            "assertion report %r written to %s (%d results)",
            payload.get("suite_name"),
            file_path,
            len(payload.get("results", ())),
        )
        return file_path
