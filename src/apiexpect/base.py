from __future__ import annotations

import operator
from typing import Any, Callable

from apiexpect.assertion import (
    AssertionFailure,
    AssertionRange,
    AssertionSeverity,
    AssertionType,
    AssertionValue,
)
from apiexpect.canon import canon_decode, canon_value
from apiexpect.jsonpath import json_path


class Matcher:
    """Common part of every wrapper: a chain node plus the inspected value."""

    def __init__(self, chain, value: Any) -> None:
        self._chain = chain.clone()
        self._value = value

    def raw(self) -> Any:
        return self._value

    def alias(self, name: str):
        """Show ``name`` instead of the full path in failure messages."""
        with self._chain.enter("alias(%r)", name):
            self._chain.set_alias(name)
        return self

    def decode(self, target: Any) -> Any:
        """Return the value decoded into ``target`` (a type such as int or a dataclass)."""
        with self._chain.enter("decode()") as op:
            if op.failed():
                return None
            result, _ok = canon_decode(op, self._value, target)
            return result

    def path(self, expression: str):
        """Return a Value for the result of a JSONPath expression."""
        from apiexpect.value import Value

        with self._chain.enter("path(%r)", expression) as op:
            if op.failed():
                return Value(op, None)
            data, ok = canon_value(op, self._value)
            if not ok:
                return Value(op, None)
            result, ok = json_path(op, data, expression)
            return Value(op, result if ok else None)

    def _fail_usage(self, op, message: str) -> None:
        op.fail(AssertionFailure(type=AssertionType.USAGE, errors=(message,)))


_ORDER_CHECKS = {
    "gt": (AssertionType.GT, operator.gt, "larger than"),
    "ge": (AssertionType.GE, operator.ge, "larger than or equal to"),
    "lt": (AssertionType.LT, operator.lt, "less than"),
    "le": (AssertionType.LE, operator.le, "less than or equal to"),
}


class Ordered(Matcher):
    """Matcher for totally ordered values (numbers, datetimes, durations).

    Subclasses set ``noun`` for messages and override ``_coerce`` to convert
    and validate arguments; ``_coerce`` records a failure when it returns
    ``ok`` false. ``_ready`` may record a failure when the wrapped value
    itself cannot be compared.
    """

    noun = "value"

    def is_equal(self, value: Any):
        with self._chain.enter("is_equal()") as op:
            if op.failed() or not self._ready(op):
                return self
            expected, ok = self._coerce(op, value)
            if ok and not self._value == expected:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=(f"expected: {self.noun}s are equal",),
                    )
                )
        return self

    def not_equal(self, value: Any):
        with self._chain.enter("not_equal()") as op:
            if op.failed() or not self._ready(op):
                return self
            expected, ok = self._coerce(op, value)
            if ok and self._value == expected:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=(f"expected: {self.noun}s are non-equal",),
                    )
                )
        return self

    def gt(self, value: Any):
        return self._compare("gt", value)

    def ge(self, value: Any):
        return self._compare("ge", value)

    def lt(self, value: Any):
        return self._compare("lt", value)

    def le(self, value: Any):
        return self._compare("le", value)

    def in_range(self, low: Any, high: Any):
        with self._chain.enter("in_range()") as op:
            if op.failed() or not self._ready(op):
                return self
            bounds = self._coerce_bounds(op, low, high)
            if bounds is not None and not bounds[0] <= self._value <= bounds[1]:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.IN_RANGE,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(AssertionRange(*bounds)),
                        errors=(f"expected: {self.noun} is within given range",),
                    )
                )
        return self

    def not_in_range(self, low: Any, high: Any):
        with self._chain.enter("not_in_range()") as op:
            if op.failed() or not self._ready(op):
                return self
            bounds = self._coerce_bounds(op, low, high)
            if bounds is not None and bounds[0] <= self._value <= bounds[1]:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_IN_RANGE,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(AssertionRange(*bounds)),
                        errors=(f"expected: {self.noun} is not within given range",),
                    )
                )
        return self

    def _ready(self, op) -> bool:
        return True

    def _coerce(self, op, value: Any) -> tuple[Any, bool]:
        return value, True

    def _compare(self, name: str, value: Any):
        kind, check, phrase = _ORDER_CHECKS[name]
        with self._chain.enter("%s()", name) as op:
            if op.failed() or not self._ready(op):
                return self
            expected, ok = self._coerce(op, value)
            if ok and not check(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=kind,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=(f"expected: {self.noun} is {phrase} given value",),
                    )
                )
        return self

    def _coerce_bounds(self, op, low: Any, high: Any) -> tuple[Any, Any] | None:
        low_value, ok = self._coerce(op, low)
        if not ok:
            return None
        high_value, ok = self._coerce(op, high)
        if not ok:
            return None
        return low_value, high_value


def predicate_chain(op, label: str, index: Any, *, isolated: bool) -> tuple[Any, list]:
    """Clone ``op`` for one predicate call.

    An isolated chain is a propagation root with log severity, so a failing
    predicate only tells the caller "no match" instead of failing the test.
    Its failures are collected into the returned list; use predicate_failed() to
    also catch failures recorded deeper in its subtree. A non-isolated
    chain keeps the callback inherited from ``op``.
    """
    scope = op.clone()
    scope.replace("%s[%r]", label, index)
    failures: list[bool] = []
    if isolated:
        scope.set_root()
        scope.set_severity(AssertionSeverity.LOG)
        scope.set_fail_callback(lambda: failures.append(True))
    return scope, failures


def predicate_failed(scope, failures: list) -> bool:
    return bool(failures) or scope.tree_failed()


def check_callable(matcher: Matcher, op, fn: Callable | None) -> bool:
    if fn is None:
        matcher._fail_usage(op, "unexpected None function argument")
        return False
    return True
