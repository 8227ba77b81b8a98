from __future__ import annotations

from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue
from apiexpect.base import Matcher


class Boolean(Matcher):
    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed() or isinstance(value, bool):
            return
        self._chain.fail(
            AssertionFailure(
                type=AssertionType.TYPE,
                actual=AssertionValue(value),
                errors=("expected: value is boolean",),
            )
        )
        self._value = False

    def is_equal(self, value: bool) -> Boolean:
        with self._chain.enter("is_equal()") as op:
            if op.failed():
                return self
            if not isinstance(value, bool):
                self._fail_usage(op, "unexpected non-boolean argument")
                return self
            if self._value != value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(value),
                        errors=("expected: booleans are equal",),
                    )
                )
        return self

    def not_equal(self, value: bool) -> Boolean:
        with self._chain.enter("not_equal()") as op:
            if op.failed():
                return self
            if not isinstance(value, bool):
                self._fail_usage(op, "unexpected non-boolean argument")
                return self
            if self._value == value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(value),
                        errors=("expected: booleans are non-equal",),
                    )
                )
        return self

    def is_true(self) -> Boolean:
        with self._chain.enter("is_true()") as op:
            if op.failed():
                return self
            if self._value is not True:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(True),
                        errors=("expected: boolean is true",),
                    )
                )
        return self

    def is_false(self) -> Boolean:
        with self._chain.enter("is_false()") as op:
            if op.failed():
                return self
            if self._value is not False:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(False),
                        errors=("expected: boolean is false",),
                    )
                )
        return self
