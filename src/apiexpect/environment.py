from __future__ import annotations

from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue

_TRUE_STRINGS = {"1", "t", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "f", "false", "no", "n", "off"}


class Environment:
    """Key/value storage shared between the root chains of one Expect.

    Typed getters convert the stored value when possible. A missing key or an
    impossible conversion is reported as a failure and a zero value is returned.
    """

    def __init__(self, chain) -> None:
        self._chain = chain.clone()
        self._chain.set_alias("Environment()")
        self._data: dict[str, Any] = {}

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return sorted(self._data)

    def get(self, key: str) -> Any:
        with self._chain.enter("get(%r)", key) as op:
            value, _ok = self._lookup(op, key)
            return value

    def get_string(self, key: str) -> str:
        with self._chain.enter("get_string(%r)", key) as op:
            value, ok = self._lookup(op, key)
            if not ok:
                return ""
            if isinstance(value, bytes):
                return value.decode("utf-8", errors="replace")
            if isinstance(value, (str, int, float, bool)):
                return str(value)
            self._fail_cast(op, key, value, "string")
            return ""

    def get_int(self, key: str) -> int:
        with self._chain.enter("get_int(%r)", key) as op:
            value, ok = self._lookup(op, key)
            if not ok:
                return 0
            if isinstance(value, bool):
                return int(value)
            if isinstance(value, int):
                return value
            if isinstance(value, float) and value.is_integer():
                return int(value)
            if isinstance(value, str):
                try:
                    return int(value.strip())
                except ValueError:
                    pass
            self._fail_cast(op, key, value, "int")
            return 0

    def get_float(self, key: str) -> float:
        with self._chain.enter("get_float(%r)", key) as op:
            value, ok = self._lookup(op, key)
            if not ok:
                return 0.0
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
            if isinstance(value, str):
                try:
                    return float(value.strip())
                except ValueError:
                    pass
            self._fail_cast(op, key, value, "float")
            return 0.0

    def get_bool(self, key: str) -> bool:
        with self._chain.enter("get_bool(%r)", key) as op:
            value, ok = self._lookup(op, key)
            if not ok:
                return False
            if isinstance(value, bool):
                return value
            if isinstance(value, (int, float)):
                return value != 0
            if isinstance(value, str):
                text = value.strip().lower()
                if text in _TRUE_STRINGS:
                    return True
                if text in _FALSE_STRINGS:
                    return False
            self._fail_cast(op, key, value, "bool")
            return False

    def _lookup(self, op, key: str) -> tuple[Any, bool]:
        if key not in self._data:
            op.fail(
                AssertionFailure(
                    type=AssertionType.CONTAINS_KEY,
                    actual=AssertionValue(self.keys()),
                    expected=AssertionValue(key),
                    errors=("expected: environment contains key",),
                )
            )
            return None, False
        return self._data[key], True

    def _fail_cast(self, op, key: str, value: Any, kind: str) -> None:
        op.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=(f"expected: value of key {key!r} can be converted to {kind}",),
            )
        )
