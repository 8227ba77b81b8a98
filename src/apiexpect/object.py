from __future__ import annotations

from typing import Any, Callable

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue
from apiexpect.base import Matcher, check_callable, predicate_chain, predicate_failed
from apiexpect.canon import canon_map, canon_value, values_equal


def _contains_subset(outer: Any, inner: Any) -> bool:
    if isinstance(outer, dict) and isinstance(inner, dict):
        return all(key in outer and _contains_subset(outer[key], value) for key, value in inner.items())
    return values_equal(outer, inner)


class Object(Matcher):
    """JSON object (dict with string keys).

    Example:
        obj = Expect(reporter).object({"foo": 123})
        obj.contains_key("foo").value("foo").number().is_equal(123)
    """

    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed():
            self._value = {}
            return
        data, ok = canon_map(self._chain, value)
        self._value = data if ok else {}

    def keys(self):
        from apiexpect.array import Array

        with self._chain.enter("keys()") as op:
            return Array(op, sorted(self._value))

    def values(self):
        from apiexpect.array import Array

        with self._chain.enter("values()") as op:
            return Array(op, [self._value[key] for key in sorted(self._value)])

    def value(self, key: str):
        from apiexpect.value import Value

        with self._chain.enter("value(%r)", key) as op:
            if op.failed():
                return Value(op, None)
            if key not in self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(key),
                        errors=("expected: map contains key",),
                    )
                )
                return Value(op, None)
            return Value(op, self._value[key])

    def iter(self) -> dict:
        """Return a dict mapping every key to a Value wrapper."""
        from apiexpect.value import Value

        with self._chain.enter("iter()") as op:
            if op.failed():
                return {}
            result = {}
            for key in sorted(self._value):
                child = op.clone()
                child.replace("iter[%r]", key)
                result[key] = Value(child, self._value[key])
            return result

    def length(self):
        from apiexpect.number import Number

        with self._chain.enter("length()") as op:
            return Number(op, len(self._value))

    def is_empty(self) -> Object:
        with self._chain.enter("is_empty()") as op:
            if not op.failed() and self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: map is empty",),
                    )
                )
        return self

    def not_empty(self) -> Object:
        with self._chain.enter("not_empty()") as op:
            if not op.failed() and not self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: map is non-empty",),
                    )
                )
        return self

    def is_equal(self, value: Any) -> Object:
        with self._chain.enter("is_equal()") as op:
            if op.failed():
                return self
            expected, ok = canon_map(op, value)
            if ok and not values_equal(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: maps are equal",),
                    )
                )
        return self

    def not_equal(self, value: Any) -> Object:
        with self._chain.enter("not_equal()") as op:
            if op.failed():
                return self
            expected, ok = canon_map(op, value)
            if ok and values_equal(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: maps are non-equal",),
                    )
                )
        return self

    def contains_key(self, key: str) -> Object:
        with self._chain.enter("contains_key()") as op:
            if not op.failed() and key not in self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(key),
                        errors=("expected: map contains key",),
                    )
                )
        return self

    def not_contains_key(self, key: str) -> Object:
        with self._chain.enter("not_contains_key()") as op:
            if not op.failed() and key in self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_CONTAINS_KEY,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(key),
                        errors=("expected: map does not contain key",),
                    )
                )
        return self

    def contains_value(self, value: Any) -> Object:
        with self._chain.enter("contains_value()") as op:
            if op.failed():
                return self
            expected, ok = canon_value(op, value)
            if ok and not any(values_equal(item, expected) for item in self._value.values()):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_ELEMENT,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: map contains element with given value",),
                    )
                )
        return self

    def not_contains_value(self, value: Any) -> Object:
        with self._chain.enter("not_contains_value()") as op:
            if op.failed():
                return self
            expected, ok = canon_value(op, value)
            if ok and any(values_equal(item, expected) for item in self._value.values()):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_CONTAINS_ELEMENT,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: map does not contain element with given value",),
                    )
                )
        return self

    def contains_subset(self, value: Any) -> Object:
        """Succeed if every key of ``value`` is present with a matching value.

        Nested objects are compared as subsets too; arrays must match exactly.
        """
        with self._chain.enter("contains_subset()") as op:
            if op.failed():
                return self
            expected, ok = canon_map(op, value)
            if ok and not _contains_subset(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_SUBSET,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: map contains sub-map",),
                    )
                )
        return self

    def not_contains_subset(self, value: Any) -> Object:
        with self._chain.enter("not_contains_subset()") as op:
            if op.failed():
                return self
            expected, ok = canon_map(op, value)
            if ok and _contains_subset(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_CONTAINS_SUBSET,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: map does not contain sub-map",),
                    )
                )
        return self

    def has_value(self, key: str, value: Any) -> Object:
        with self._chain.enter("has_value(%r)", key) as op:
            if op.failed():
                return self
            if key not in self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(key),
                        errors=("expected: map contains key",),
                    )
                )
                return self
            expected, ok = canon_value(op, value)
            if ok and not values_equal(self._value[key], expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value[key]),
                        expected=AssertionValue(expected),
                        errors=("expected: map value for given key is equal to given value",),
                    )
                )
        return self

    def not_has_value(self, key: str, value: Any) -> Object:
        with self._chain.enter("not_has_value(%r)", key) as op:
            if op.failed():
                return self
            if key not in self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(key),
                        errors=("expected: map contains key",),
                    )
                )
                return self
            expected, ok = canon_value(op, value)
            if ok and values_equal(self._value[key], expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value[key]),
                        expected=AssertionValue(expected),
                        errors=("expected: map value for given key is non-equal to given value",),
                    )
                )
        return self

    def every(self, fn: Callable[[str, Any], None]) -> Object:
        """Call ``fn(key, value)`` for every entry; failures inside fail this object."""
        from apiexpect.value import Value

        with self._chain.enter("every()") as op:
            if op.failed() or not check_callable(self, op, fn):
                return self
            for key in sorted(self._value):
                scope, _failures = predicate_chain(op, "every", key, isolated=False)
                fn(key, Value(scope, self._value[key]))
        return self

    def filter(self, fn: Callable[[str, Any], bool]) -> Object:
        """Return an Object with the entries for which ``fn`` returns true without failing."""
        from apiexpect.value import Value

        with self._chain.enter("filter()") as op:
            if op.failed():
                return Object(op, {})
            if not check_callable(self, op, fn):
                return Object(op, {})
            kept = {}
            for key in sorted(self._value):
                scope, failures = predicate_chain(op, "filter", key, isolated=True)
                matched = fn(key, Value(scope, self._value[key]))
                if matched and not predicate_failed(scope, failures):
                    kept[key] = self._value[key]
            return Object(op, kept)
