from __future__ import annotations

from datetime import timedelta
from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue
from apiexpect.base import Ordered


class Duration(Ordered):
    """Time span (``datetime.timedelta``); the value may be unset (None)."""

    noun = "duration"

    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed() or value is None or isinstance(value, timedelta):
            return
        self._chain.fail(
            AssertionFailure(
                type=AssertionType.TYPE,
                actual=AssertionValue(value),
                errors=("expected: value is duration",),
            )
        )
        self._value = None

    def raw(self) -> timedelta:
        return self._value if self._value is not None else timedelta(0)

    def is_set(self) -> Duration:
        with self._chain.enter("is_set()") as op:
            if not op.failed():
                self._ready(op)
        return self

    def not_set(self) -> Duration:
        with self._chain.enter("not_set()") as op:
            if not op.failed() and self._value is not None:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NIL,
                        actual=AssertionValue(self._value),
                        errors=("expected: duration is not present",),
                    )
                )
        return self

    def seconds(self):
        from apiexpect.number import Number

        with self._chain.enter("seconds()") as op:
            if op.failed() or not self._ready(op):
                return Number(op, 0.0)
            return Number(op, self._value.total_seconds())

    def _ready(self, op) -> bool:
        if self._value is None:
            op.fail(
                AssertionFailure(
                    type=AssertionType.NOT_NIL,
                    actual=AssertionValue(None),
                    errors=("expected: duration is present",),
                )
            )
            return False
        return True

    def _coerce(self, op, value: Any) -> tuple[Any, bool]:
        if isinstance(value, timedelta):
            return value, True
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return timedelta(seconds=value), True
        self._fail_usage(op, "unexpected non-duration argument")
        return None, False
