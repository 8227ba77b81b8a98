from __future__ import annotations

import logging
from typing import Any, Protocol

from apiexpect.assertion import AssertionContext, AssertionFailure, AssertionSeverity
from apiexpect.formatter import DefaultFormatter
from apiexpect.report import ReportExporter, build_summary


class AssertionHandler(Protocol):
    def success(self, context: AssertionContext) -> None: ...

    def failure(self, context: AssertionContext, failure: AssertionFailure) -> None: ...


class DefaultAssertionHandler:
    """Formats outcomes and hands error-severity failures to the reporter.

    Successes are logged at DEBUG and log-severity failures at INFO.
    """

    def __init__(self, formatter, reporter, logger: logging.Logger | None = None) -> None:
        self.formatter = formatter
        self.reporter = reporter
        self.logger = logger

    def success(self, context: AssertionContext) -> None:
        if self.logger is None or not self.logger.isEnabledFor(logging.DEBUG):
            return
        self.logger.debug(self.formatter.format_success(context))

    def failure(self, context: AssertionContext, failure: AssertionFailure) -> None:
        if failure.severity == AssertionSeverity.LOG:
            if self.logger is not None:
                self.logger.info(self.formatter.format_failure(context, failure))
            return
        self.reporter.error(self.formatter.format_failure(context, failure))


class MultiAssertionHandler:
    """Calls every handler in order."""

    def __init__(self, *handlers) -> None:
        self.handlers = list(handlers)

    def success(self, context: AssertionContext) -> None:
        for handler in self.handlers:
            handler.success(context)

    def failure(self, context: AssertionContext, failure: AssertionFailure) -> None:
        for handler in self.handlers:
            handler.failure(context, failure)


class ReportAssertionHandler:
    """Records one result dict per reported outcome.

    Combine with DefaultAssertionHandler through MultiAssertionHandler to keep
    failing tests while also exporting a report.
    """

    def __init__(self, formatter=None, *, record_success: bool = True) -> None:
        self.formatter = formatter or DefaultFormatter()
        self.record_success = record_success
        self.results: list[dict[str, Any]] = []

    def success(self, context: AssertionContext) -> None:
        if not self.record_success:
            return
        self.results.append(self._build_result(context, None))

    def failure(self, context: AssertionContext, failure: AssertionFailure) -> None:
        self.results.append(self._build_result(context, failure))

    def summary(self) -> dict:
        return build_summary(self.results)

    def report(self, suite_name: str = "suite") -> dict[str, Any]:
        return {
            "suite_name": suite_name,
            "summary": self.summary(),
            "results": list(self.results),
        }

    def export(self, output_dir, suite_name: str = "suite"):
        """Write report(suite_name) as JSON into ``output_dir`` and return the file path."""
        return ReportExporter(output_dir).write(self.report(suite_name))

    def _build_result(
        self, context: AssertionContext, failure: AssertionFailure | None
    ) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": None,
            "result": "PASS",
            "severity": None,
            "expected": None,
            "actual": None,
            "message": "",
            "path": self.formatter.format_path(context),
            "full_path": ".".join(context.path),
            "test_name": context.test_name,
            "request_name": context.request_name,
        }
        if failure is not None:
            result.update(
                type=failure.type.value,
                result="FAIL",
                severity=failure.severity.value if failure.severity else None,
                expected=self._sanitize_value(failure.expected),
                actual=self._sanitize_value(failure.actual),
                message="\n".join(failure.errors),
            )
        return result

    def _sanitize_value(self, value) -> Any:
        if value is None:
            return None
        return self.formatter.format_value(value.value)
