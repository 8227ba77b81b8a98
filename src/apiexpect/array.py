from __future__ import annotations

from typing import Any, Callable

from apiexpect.assertion import AssertionFailure, AssertionRange, AssertionType, AssertionValue
from apiexpect.base import Matcher, check_callable, predicate_chain, predicate_failed
from apiexpect.canon import canon_array, canon_value, values_equal


def _count(items: list, value: Any) -> int:
    return sum(1 for item in items if values_equal(item, value))


def _contains(items: list, value: Any) -> bool:
    return any(values_equal(item, value) for item in items)


def _same_multiset(items: list, expected: list) -> bool:
    return len(items) == len(expected) and all(
        _count(items, item) == _count(expected, item) for item in expected
    )


def _same_elements(items: list, expected: list) -> bool:
    return all(_contains(items, item) for item in expected) and all(
        _contains(expected, item) for item in items
    )


class Array(Matcher):
    """JSON array.

    Example:
        array = Expect(reporter).array([1, 2, 3])
        array.length().is_equal(3)
        array.contains_only(3, 2, 1)
    """

    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed():
            self._value = []
            return
        data, ok = canon_array(self._chain, value)
        self._value = data if ok else []

    def length(self):
        from apiexpect.number import Number

        with self._chain.enter("length()") as op:
            return Number(op, len(self._value))

    def value(self, index: int):
        from apiexpect.value import Value

        with self._chain.enter("value(%r)", index) as op:
            if op.failed():
                return Value(op, None)
            if not 0 <= index < len(self._value):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.IN_RANGE,
                        actual=AssertionValue(index),
                        expected=AssertionValue(AssertionRange(0, len(self._value) - 1)),
                        errors=("expected: valid element index",),
                    )
                )
                return Value(op, None)
            return Value(op, self._value[index])

    def first(self):
        return self._edge("first()", 0)

    def last(self):
        return self._edge("last()", -1)

    def iter(self) -> list:
        """Return a list with a Value wrapper for every element."""
        from apiexpect.value import Value

        with self._chain.enter("iter()") as op:
            if op.failed():
                return []
            result = []
            for index, item in enumerate(self._value):
                child = op.clone()
                child.replace("iter[%d]", index)
                result.append(Value(child, item))
            return result

    def is_empty(self) -> Array:
        with self._chain.enter("is_empty()") as op:
            if not op.failed() and self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: array is empty",),
                    )
                )
        return self

    def not_empty(self) -> Array:
        with self._chain.enter("not_empty()") as op:
            if not op.failed() and not self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: array is non-empty",),
                    )
                )
        return self

    def is_equal(self, value: Any) -> Array:
        with self._chain.enter("is_equal()") as op:
            if op.failed():
                return self
            expected, ok = canon_array(op, value)
            if ok and not values_equal(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: arrays are equal",),
                    )
                )
        return self

    def not_equal(self, value: Any) -> Array:
        with self._chain.enter("not_equal()") as op:
            if op.failed():
                return self
            expected, ok = canon_array(op, value)
            if ok and values_equal(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: arrays are non-equal",),
                    )
                )
        return self

    def is_equal_unordered(self, value: Any) -> Array:
        """Compare as multisets: same elements with the same counts, any order."""
        with self._chain.enter("is_equal_unordered()") as op:
            if op.failed():
                return self
            expected, ok = canon_array(op, value)
            if not ok:
                return self
            if not _same_multiset(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: arrays are equal (ignoring order)",),
                    )
                )
        return self

    def not_equal_unordered(self, value: Any) -> Array:
        with self._chain.enter("not_equal_unordered()") as op:
            if op.failed():
                return self
            expected, ok = canon_array(op, value)
            if ok and _same_multiset(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: arrays are non-equal (ignoring order)",),
                    )
                )
        return self

    def contains_all(self, *values: Any) -> Array:
        with self._chain.enter("contains_all()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            for item in expected:
                if not _contains(self._value, item):
                    op.fail(
                        AssertionFailure(
                            type=AssertionType.CONTAINS_ELEMENT,
                            actual=AssertionValue(self._value),
                            expected=AssertionValue(item),
                            reference=AssertionValue(expected),
                            errors=("expected: array contains all elements from reference array",),
                        )
                    )
                    break
        return self

    def not_contains_all(self, *values: Any) -> Array:
        with self._chain.enter("not_contains_all()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            if all(_contains(self._value, item) for item in expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_CONTAINS_SUBSET,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=(
                            "expected: array does not contain at least one element "
                            "from reference array",
                        ),
                    )
                )
        return self

    def contains_any(self, *values: Any) -> Array:
        with self._chain.enter("contains_any()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            if not any(_contains(self._value, item) for item in expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_ELEMENT,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: array contains at least one element from reference array",),
                    )
                )
        return self

    def not_contains_any(self, *values: Any) -> Array:
        with self._chain.enter("not_contains_any()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            for item in expected:
                if _contains(self._value, item):
                    op.fail(
                        AssertionFailure(
                            type=AssertionType.NOT_CONTAINS_ELEMENT,
                            actual=AssertionValue(self._value),
                            expected=AssertionValue(item),
                            reference=AssertionValue(expected),
                            errors=(
                                "expected: array does not contain any elements "
                                "from reference array",
                            ),
                        )
                    )
                    break
        return self

    def contains_only(self, *values: Any) -> Array:
        """Succeed if the array holds exactly the given elements, in any order.

        Duplicates are ignored on both sides.
        """
        with self._chain.enter("contains_only()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            if not _same_elements(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=("expected: array contains only elements from reference array",),
                    )
                )
        return self

    def not_contains_only(self, *values: Any) -> Array:
        with self._chain.enter("not_contains_only()") as op:
            expected = self._canon_args(op, values)
            if expected is None:
                return self
            if _same_elements(self._value, expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EQUAL,
                        actual=AssertionValue(self._value),
                        expected=AssertionValue(expected),
                        errors=(
                            "expected: array does not contain only elements "
                            "from reference array",
                        ),
                    )
                )
        return self

    def has_value(self, index: int, value: Any) -> Array:
        with self._chain.enter("has_value(%r)", index) as op:
            if op.failed():
                return self
            if not 0 <= index < len(self._value):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.IN_RANGE,
                        actual=AssertionValue(index),
                        expected=AssertionValue(AssertionRange(0, len(self._value) - 1)),
                        errors=("expected: valid element index",),
                    )
                )
                return self
            expected, ok = canon_value(op, value)
            if ok and not values_equal(self._value[index], expected):
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value[index]),
                        expected=AssertionValue(expected),
                        errors=("expected: array value at given index is equal to given value",),
                    )
                )
        return self

    def every(self, fn: Callable[[int, Any], None]) -> Array:
        """Call ``fn(index, value)`` for every element; failures inside fail this array."""
        from apiexpect.value import Value

        with self._chain.enter("every()") as op:
            if op.failed() or not check_callable(self, op, fn):
                return self
            for index, item in enumerate(self._value):
                scope, _failures = predicate_chain(op, "every", index, isolated=False)
                fn(index, Value(scope, item))
        return self

    def filter(self, fn: Callable[[int, Any], bool]) -> Array:
        """Return an Array with the elements for which ``fn`` returns true without failing."""
        with self._chain.enter("filter()") as op:
            if op.failed():
                return Array(op, [])
            if not check_callable(self, op, fn):
                return Array(op, [])
            kept = [item for index, item in enumerate(self._value) if self._matches(op, "filter", fn, index, item)]
            return Array(op, kept)

    def find(self, fn: Callable[[int, Any], bool]):
        """Return the first element for which ``fn`` returns true without failing."""
        from apiexpect.value import Value

        with self._chain.enter("find()") as op:
            if op.failed():
                return Value(op, None)
            if not check_callable(self, op, fn):
                return Value(op, None)
            for index, item in enumerate(self._value):
                if self._matches(op, "find", fn, index, item):
                    return Value(op, item)
            op.fail(
                AssertionFailure(
                    type=AssertionType.VALID,
                    actual=AssertionValue(self._value),
                    errors=("expected: at least one array element matches predicate",),
                )
            )
            return Value(op, None)

    def find_all(self, fn: Callable[[int, Any], bool]) -> list:
        """Return a Value for every matching element; an empty list is not a failure."""
        from apiexpect.value import Value

        with self._chain.enter("find_all()") as op:
            if op.failed() or not check_callable(self, op, fn):
                return []
            result = []
            for index, item in enumerate(self._value):
                if self._matches(op, "find_all", fn, index, item):
                    child = op.clone()
                    child.replace("find_all[%d]", index)
                    result.append(Value(child, item))
            return result

    def not_find(self, fn: Callable[[int, Any], bool]) -> Array:
        with self._chain.enter("not_find()") as op:
            if op.failed() or not check_callable(self, op, fn):
                return self
            for index, item in enumerate(self._value):
                if self._matches(op, "not_find", fn, index, item):
                    op.fail(
                        AssertionFailure(
                            type=AssertionType.NOT_CONTAINS_ELEMENT,
                            actual=AssertionValue(self._value),
                            expected=AssertionValue(item),
                            errors=("expected: none of the array elements match predicate",),
                        )
                    )
                    break
        return self

    def transform(self, fn: Callable[[int, Any], Any]) -> Array:
        """Return a new Array with ``fn(index, raw_value)`` applied to every element."""
        with self._chain.enter("transform()") as op:
            if op.failed():
                return Array(op, [])
            if not check_callable(self, op, fn):
                return Array(op, [])
            result = [fn(index, item) for index, item in enumerate(self._value)]
            data, ok = canon_array(op, result)
            return Array(op, data if ok else [])

    def _edge(self, name: str, index: int):
        from apiexpect.value import Value

        with self._chain.enter(name) as op:
            if op.failed():
                return Value(op, None)
            if not self._value:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.NOT_EMPTY,
                        actual=AssertionValue(self._value),
                        errors=("expected: array is non-empty",),
                    )
                )
                return Value(op, None)
            return Value(op, self._value[index])

    def _canon_args(self, op, values: tuple) -> list | None:
        if op.failed():
            return None
        if not values:
            self._fail_usage(op, "unexpected empty list argument")
            return None
        expected, ok = canon_array(op, list(values))
        return expected if ok else None

    def _matches(self, op, label: str, fn: Callable, index: int, item: Any) -> bool:
        from apiexpect.value import Value

        scope, failures = predicate_chain(op, label, index, isolated=True)
        matched = fn(index, Value(scope, item))
        return bool(matched) and not predicate_failed(scope, failures)
