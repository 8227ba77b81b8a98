from __future__ import annotations

import difflib
import json
from typing import Any

from apiexpect.assertion import (
    AssertionContext,
    AssertionFailure,
    AssertionList,
    AssertionRange,
    AssertionType,
)

_DIFF_TYPES = {AssertionType.EQUAL, AssertionType.NOT_EQUAL}


class DefaultFormatter:
    """Renders assertion outcomes as plain text messages."""

    def __init__(self, *, show_diff: bool = True, indent: int = 2) -> None:
        self.show_diff = show_diff
        self.indent = indent

    def format_success(self, context: AssertionContext) -> str:
        return f"passed: {self.format_path(context)}"

    def format_failure(self, context: AssertionContext, failure: AssertionFailure) -> str:
        sections: list[str] = []
        if context.test_name:
            sections.append(self._section("test name", context.test_name))
        if context.request_name:
            sections.append(self._section("request name", context.request_name))
        sections.append(self._section("assertion", self.format_path(context)))
        sections.append(
            self._section(
                "errors",
                "\n".join(self._sanitize_message(error) for error in failure.errors),
            )
        )
        if failure.expected is not None:
            sections.append(self._section("expected", self.format_expected(failure)))
        if failure.actual is not None:
            sections.append(self._section("actual", self.format_value(failure.actual.value)))
        if failure.reference is not None:
            sections.append(self._section("reference", self.format_value(failure.reference.value)))
        if failure.delta is not None:
            sections.append(self._section("delta", self.format_value(failure.delta.value)))
        if self.show_diff and failure.type in _DIFF_TYPES:
            diff = self._diff(failure)
            if diff:
                sections.append(self._section("diff", diff))
        return "\n".join(sections)

    def format_path(self, context: AssertionContext) -> str:
        return ".".join(context.aliased_path)

    def format_expected(self, failure: AssertionFailure) -> str:
        value = failure.expected.value
        if isinstance(value, AssertionRange):
            return (
                f"[{self._stringify_for_message(value.min)}; "
                f"{self._stringify_for_message(value.max)}]"
            )
        if isinstance(value, AssertionList):
            return "\n".join(self.format_value(item) for item in value.values)
        if failure.type in (AssertionType.NOT_EQUAL, AssertionType.NOT_IN_RANGE):
            return "not " + self.format_value(value)
        return self.format_value(value)

    def format_value(self, value: Any) -> str:
        if isinstance(value, (dict, list, tuple)):
            try:
                return json.dumps(value, indent=self.indent, sort_keys=True, ensure_ascii=False)
            except (TypeError, ValueError):
                return repr(value)
        if isinstance(value, str):
            return json.dumps(value, ensure_ascii=False)
        return self._stringify_for_message(value)

    def _diff(self, failure: AssertionFailure) -> str:
        if failure.actual is None or failure.expected is None:
            return ""
        expected = failure.expected.value
        actual = failure.actual.value
        if not isinstance(expected, (dict, list)) or not isinstance(actual, (dict, list)):
            return ""
        lines = difflib.unified_diff(
            self.format_value(expected).splitlines(),
            self.format_value(actual).splitlines(),
            fromfile="expected",
            tofile="actual",
            lineterm="",
        )
        return "\n".join(lines)

    def _section(self, title: str, body: str) -> str:
        pad = " " * self.indent
        text = "\n".join(pad + line for line in body.split("\n"))
        return f"{title}:\n{text}\n"

    def _sanitize_message(self, message: str) -> str:
        if not message:
            return ""
        cleaned = self._normalize_line_breaks(str(message))
        lines = [line.strip() for line in cleaned.split("\n")]
        filtered = [line for line in lines if line]
        return "\n".join(filtered)

    def _normalize_line_breaks(self, text: str) -> str:
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        return normalized.replace("\t", " ")

    def _stringify_for_message(self, value: Any) -> str:
        if value is None:
            return "null"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
