from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionList, AssertionType, AssertionValue
from apiexpect.base import Matcher

_TRUE_STRINGS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_STRINGS = {"0", "f", "F", "FALSE", "false", "False"}

_EPOCH = datetime.fromtimestamp(0, timezone.utc)
_DATETIME_LAYOUTS = (
    "%A, %d-%b-%y %H:%M:%S %Z",
    "%a %b %d %H:%M:%S %Y",
    "%a %b %d %H:%M:%S %Z %Y",
    "%a %b %d %H:%M:%S %z %Y",
    "%d %b %y %H:%M %Z",
    "%d %b %y %H:%M %z",
)


def _parse_datetime(text: str, formats: tuple[str, ...]) -> datetime | None:
    if formats:
        return _parse_layouts(text, formats)
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass
    iso = text[:-1] + "+00:00" if text.endswith("Z") else text
    try:
        return datetime.fromisoformat(iso)
    except ValueError:
        pass
    return _parse_layouts(text, _DATETIME_LAYOUTS)


def _parse_layouts(text: str, layouts) -> datetime | None:
    for layout in layouts:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue
    return None


class String(Matcher):
    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed() or isinstance(value, str):
            return
        self._chain.fail(
            AssertionFailure(
                type=AssertionType.TYPE,
                actual=AssertionValue(value),
                errors=("expected: value is string",),
            )
        )
        self._value = ""

    def length(self):
        from apiexpect.number import Number

        with self._chain.enter("length()") as op:
            return Number(op, len(self._value))

    def is_empty(self) -> String:
        with self._chain.enter("is_empty()") as op:
            if not op.failed() and self._value != "":
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: string is empty",),
                    )
                )
        return self

    def not_empty(self) -> String:
        with self._chain.enter("not_empty()") as op:
            if not op.failed() and self._value == "":
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: string is non-empty",),
                    )
                )
        return self

    def is_equal(self, value: str) -> String:
        return self._check(
            "is_equal()", value, lambda s, v: s == v, AssertionType.EQUAL,
            "expected: strings are equal",
        )

    def not_equal(self, value: str) -> String:
        return self._check(
            "not_equal()", value, lambda s, v: s != v, AssertionType.NOT_EQUAL,
            "expected: strings are non-equal",
        )

    def is_equal_fold(self, value: str) -> String:
        return self._check(
            "is_equal_fold()", value, lambda s, v: s.casefold() == v.casefold(),
            AssertionType.EQUAL, "expected: strings are equal (if folded)",
        )

    def contains(self, value: str) -> String:
        return self._check(
            "contains()", value, lambda s, v: v in s, AssertionType.CONTAINS_SUBSET,
            "expected: string contains sub-string",
        )

    def not_contains(self, value: str) -> String:
        return self._check(
            "not_contains()", value, lambda s, v: v not in s, AssertionType.NOT_CONTAINS_SUBSET,
            "expected: string does not contain sub-string",
        )

    def has_prefix(self, value: str) -> String:
        return self._check(
            "has_prefix()", value, lambda s, v: s.startswith(v), AssertionType.CONTAINS_SUBSET,
            "expected: string has given prefix",
        )

    def has_suffix(self, value: str) -> String:
        return self._check(
            "has_suffix()", value, lambda s, v: s.endswith(v), AssertionType.CONTAINS_SUBSET,
            "expected: string has given suffix",
        )

    def is_match(self, pattern: str) -> String:
        return self._match("is_match()", pattern, True)

    def not_match(self, pattern: str) -> String:
        return self._match("not_match()", pattern, False)

    def not_equal_fold(self, value: str) -> String:
        return self._check(
            "not_equal_fold()", value, lambda s, v: s.casefold() != v.casefold(),
            AssertionType.NOT_EQUAL, "expected: strings are non-equal (if folded)",
        )

    def contains_fold(self, value: str) -> String:
        return self._check(
            "contains_fold()", value, lambda s, v: v.casefold() in s.casefold(),
            AssertionType.CONTAINS_SUBSET, "expected: string contains sub-string (if folded)",
        )

    def not_contains_fold(self, value: str) -> String:
        return self._check(
            "not_contains_fold()", value, lambda s, v: v.casefold() not in s.casefold(),
            AssertionType.NOT_CONTAINS_SUBSET,
            "expected: string does not contain sub-string (if folded)",
        )

    def not_has_prefix(self, value: str) -> String:
        return self._check(
            "not_has_prefix()", value, lambda s, v: not s.startswith(v),
            AssertionType.NOT_CONTAINS_SUBSET, "expected: string does not have given prefix",
        )

    def not_has_suffix(self, value: str) -> String:
        return self._check(
            "not_has_suffix()", value, lambda s, v: not s.endswith(v),
            AssertionType.NOT_CONTAINS_SUBSET, "expected: string does not have given suffix",
        )

    def has_prefix_fold(self, value: str) -> String:
        return self._check(
            "has_prefix_fold()", value, lambda s, v: s.casefold().startswith(v.casefold()),
            AssertionType.CONTAINS_SUBSET, "expected: string has given prefix (if folded)",
        )

    def not_has_prefix_fold(self, value: str) -> String:
        return self._check(
            "not_has_prefix_fold()", value,
            lambda s, v: not s.casefold().startswith(v.casefold()),
            AssertionType.NOT_CONTAINS_SUBSET,
            "expected: string does not have given prefix (if folded)",
        )

    def has_suffix_fold(self, value: str) -> String:
        return self._check(
            "has_suffix_fold()", value, lambda s, v: s.casefold().endswith(v.casefold()),
            AssertionType.CONTAINS_SUBSET, "expected: string has given suffix (if folded)",
        )

    def not_has_suffix_fold(self, value: str) -> String:
        return self._check(
            "not_has_suffix_fold()", value,
            lambda s, v: not s.casefold().endswith(v.casefold()),
            AssertionType.NOT_CONTAINS_SUBSET,
            "expected: string does not have given suffix (if folded)",
        )

    def is_ascii(self) -> String:
        with self._chain.enter("is_ascii()") as op:
            if not op.failed() and not self._value.isascii():
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(self._value),
                        errors=("expected: all string characters are ascii",),
                    )
                )
        return self

    def not_is_ascii(self) -> String:
        with self._chain.enter("not_is_ascii()") as op:
            if not op.failed() and self._value.isascii():
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_VALID,
                        actual=AssertionValue(self._value),
                        errors=("expected: at least one string character is not ascii",),
                    )
                )
        return self

    def in_list(self, *values: str) -> String:
        with self._chain.enter("in_list()") as op:
            if op.failed():
                return self
            if not values:
                self._fail_usage(op, "unexpected empty list argument")
                return self
            if any(not isinstance(value, str) for value in values):
                self._fail_usage(op, "unexpected non-string argument")
                return self
            if self._value not in values:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.BELONGS,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(AssertionList(values)),
                        errors=("expected: string is equal to one of the values",),
                    )
                )
        return self

    def as_number(self):
        """Parse the string as a decimal number."""
        from apiexpect.number import Number

        with self._chain.enter("as_number()") as op:
            if op.failed():
                return Number(op, 0.0)
            text = self._value.strip()
            try:
                number: Any = int(text)
            except ValueError:
                try:
                    number = float(text)
                except ValueError:
                    number = None
            if number is None or number != number:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(self._value),
                        errors=("expected: string can be parsed to number",),
                    )
                )
                return Number(op, 0.0)
            return Number(op, number)

    def as_boolean(self):
        from apiexpect.boolean import Boolean

        with self._chain.enter("as_boolean()") as op:
            if op.failed():
                return Boolean(op, False)
            if self._value in _TRUE_STRINGS:
                return Boolean(op, True)
            if self._value in _FALSE_STRINGS:
                return Boolean(op, False)
            op.fail(
                AssertionFailure(
                    type=AssertionType.VALID,
                    actual=AssertionValue(self._value),
                    errors=("expected: string can be parsed to boolean",),
                )
            )
            return Boolean(op, False)

    def as_datetime(self, *formats: str):
        """Parse the string as a datetime.

        With explicit ``formats`` (``strptime`` patterns) only those are tried.
        Otherwise HTTP dates, ISO 8601 and a few common layouts are accepted.
        """
        from apiexpect.date_time import DateTime

        with self._chain.enter("as_datetime()") as op:
            if op.failed():
                return DateTime(op, _EPOCH)
            parsed = _parse_datetime(self._value, formats)
            if parsed is None:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(self._value),
                        errors=(
                            "expected: string can be parsed to datetime with given format"
                            if len(formats) == 1
                            else "expected: string can be parsed to datetime with one of the formats",
                        ),
                    )
                )
                return DateTime(op, _EPOCH)
            return DateTime(op, parsed)

    def _check(self, name, value, predicate, kind, message) -> String:
        with self._chain.enter(name) as op:
            if op.failed():
                return self
            if not isinstance(value, str):
                self._fail_usage(op, "unexpected non-string argument")
                return self
            if not predicate(self._value, value):
                op.fail(
                    AssertionFailure(
                        type=kind,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(value),
                        errors=(message,),
                    )
                )
        return self

    def _match(self, name: str, pattern: str, should_match: bool) -> String:
        with self._chain.enter(name) as op:
            if op.failed():
                return self
            try:
                regex = re.compile(pattern)
            except re.error as exc:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(pattern),
                        errors=("expected: valid regular expression", str(exc)),
                    )
                )
                return self
            matched = regex.search(self._value) is not None
            if matched != should_match:
                op.fail(
                    AssertionFailure(
                        type=(
                            AssertionType.MATCH_REGEXP
                            if should_match
                            else AssertionType.NOT_MATCH_REGEXP
                        ),
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(pattern),
                        errors=(
                            "expected: string matches regular expression"
                            if should_match
                            else "expected: string does not match regular expression",
                        ),
                    )
                )
        return self
