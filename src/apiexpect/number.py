from __future__ import annotations

import math
from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionList, AssertionType, AssertionValue
from apiexpect.base import Ordered
from apiexpect.canon import canon_number


class Number(Ordered):
    """Canonical number (float, or exact int beyond 2**53).

    Arguments of every check may be of any numeric type; they are canonicalized
    before comparison, so ``is_equal(5)`` and ``is_equal(5.0)`` are the same check.
    """

    noun = "number"

    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed():
            return
        number, ok = canon_number(self._chain, value)
        self._value = number if ok else 0.0

    def in_delta(self, value: Any, delta: Any) -> Number:
        with self._chain.enter("in_delta()") as op:
            if op.failed():
                return self
            expected, allowed = self._canon_delta(op, value, delta)
            if allowed is not None and not abs(self._value - expected) <= allowed:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        delta=AssertionValue(allowed),
                        errors=("expected: numbers lie within delta",),
                    )
                )
        return self

    def not_in_delta(self, value: Any, delta: Any) -> Number:
        with self._chain.enter("not_in_delta()") as op:
            if op.failed():
                return self
            expected, allowed = self._canon_delta(op, value, delta)
            if allowed is not None and abs(self._value - expected) <= allowed:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        delta=AssertionValue(allowed),
                        errors=("expected: numbers do not lie within delta",),
                    )
                )
        return self

    def in_list(self, *values: Any) -> Number:
        with self._chain.enter("in_list()") as op:
            if op.failed():
                return self
            if not values:
                self._fail_usage(op, "unexpected empty list argument")
                return self
            candidates = []
            for value in values:
                number, ok = canon_number(op, value)
                if not ok:
                    return self
                candidates.append(number)
            if self._value not in candidates:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.BELONGS,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(AssertionList(candidates)),
                        errors=("expected: number is equal to one of the values",),
                    )
                )
        return self

    def is_integer(self) -> Number:
        with self._chain.enter("is_integer()") as op:
            if op.failed():
                return self
            value = self._value
            if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(value),
                        errors=("expected: number is integer",),
                    )
                )
        return self

    def _coerce(self, op, value: Any) -> tuple[Any, bool]:
        return canon_number(op, value)

    def _canon_delta(self, op, value: Any, delta: Any) -> tuple[Any, Any]:
        expected, ok = canon_number(op, value)
        if not ok:
            return None, None
        allowed, ok = canon_number(op, delta)
        if not ok:
            return None, None
        return expected, allowed
