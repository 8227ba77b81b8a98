from __future__ import annotations

from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionList, AssertionType, AssertionValue
from apiexpect.base import Matcher
from apiexpect.canon import canon_array, canon_map, canon_number, canon_value, values_equal


class Value(Matcher):
    """Arbitrary JSON-like value that can be inspected or cast to a typed wrapper.

    Example:
        value = Expect(reporter).value({"foo": 123})
        value.object().value("foo").number().is_equal(123)
    """

    def object(self):
        from apiexpect.object import Object

        with self._chain.enter("object()") as op:
            if op.failed():
                return Object(op, {})
            data, ok = canon_map(op, self._value)
            return Object(op, data if ok else {})

    def array(self):
        from apiexpect.array import Array

        with self._chain.enter("array()") as op:
            if op.failed():
                return Array(op, [])
            data, ok = canon_array(op, self._value)
            return Array(op, data if ok else [])

    def string(self):
        from apiexpect.string import String

        with self._chain.enter("string()") as op:
            if op.failed():
                return String(op, "")
            if not isinstance(self._value, str):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.TYPE,
                        actual=AssertionValue(self._value),
                        errors=("expected: value is string",),
                    )
                )
                return String(op, "")
            return String(op, self._value)

    def number(self):
        from apiexpect.number import Number

        with self._chain.enter("number()") as op:
            if op.failed():
                return Number(op, 0.0)
            data, ok = canon_number(op, self._value)
            return Number(op, data if ok else 0.0)

    def boolean(self):
        from apiexpect.boolean import Boolean

        with self._chain.enter("boolean()") as op:
            if op.failed():
                return Boolean(op, False)
            if not isinstance(self._value, bool):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.TYPE,
                        actual=AssertionValue(self._value),
                        errors=("expected: value is boolean",),
                    )
                )
                return Boolean(op, False)
            return Boolean(op, self._value)

    def is_null(self) -> Value:
        with self._chain.enter("is_null()") as op:
            if op.failed():
                return self
            data, ok = canon_value(op, self._value)
            if ok and data is not None:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NIL,
                        actual=AssertionValue(self._value),
                        errors=("expected: value is null",),
                    )
                )
        return self

    def not_null(self) -> Value:
        with self._chain.enter("not_null()") as op:
            if op.failed():
                return self
            data, ok = canon_value(op, self._value)
            if ok and data is None:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_NIL,
                        actual=AssertionValue(self._value),
                        errors=("expected: value is non-null",),
                    )
                )
        return self

    def is_equal(self, value: Any) -> Value:
        with self._chain.enter("is_equal()") as op:
            if op.failed():
                return self
            actual, ok = canon_value(op, self._value)
            if not ok:
                return self
            expected, ok = canon_value(op, value)
            if not ok:
                return self
            if not values_equal(actual, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(actual),
                        expected=AssertionValue(expected),
                        errors=("expected: values are equal",),
                    )
                )
        return self

    def not_equal(self, value: Any) -> Value:
        with self._chain.enter("not_equal()") as op:
            if op.failed():
                return self
            actual, ok = canon_value(op, self._value)
            if not ok:
                return self
            expected, ok = canon_value(op, value)
            if not ok:
                return self
            if values_equal(actual, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(actual),
                        expected=AssertionValue(expected),
                        errors=("expected: values are non-equal",),
                    )
                )
        return self

    def in_list(self, *values: Any) -> Value:
        with self._chain.enter("in_list()") as op:
            if op.failed():
                return self
            if not values:
                self._fail_usage(op, "unexpected empty list argument")
                return self
            actual, candidates, ok = self._canon_candidates(op, values)
            if ok and not any(values_equal(actual, item) for item in candidates):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.BELONGS,
                        actual=AssertionValue(actual),
                        expected=AssertionValue(AssertionList(candidates)),
                        errors=("expected: value is equal to one of the values",),
                    )
                )
        return self

    def not_in_list(self, *values: Any) -> Value:
        with self._chain.enter("not_in_list()") as op:
            if op.failed():
                return self
            if not values:
                self._fail_usage(op, "unexpected empty list argument")
                return self
            actual, candidates, ok = self._canon_candidates(op, values)
            if ok and any(values_equal(actual, item) for item in candidates):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_BELONGS,
                        actual=AssertionValue(actual),
                        expected=AssertionValue(AssertionList(candidates)),
                        errors=("expected: value is not equal to any of the values",),
                    )
                )
        return self

    def _canon_candidates(self, op, values: tuple) -> tuple[Any, list, bool]:
        actual, ok = canon_value(op, self._value)
        if not ok:
            return None, [], False
        candidates = []
        for value in values:
            item, ok = canon_value(op, value)
            if not ok:
                return None, [], False
            candidates.append(item)
        return actual, candidates, True
