"""Conversion of arbitrary input into canonical JSON-like values.

Canonical values are ``dict`` (string keys), ``list``, ``str``, ``bool``,
``None`` and numbers. A canonical number is a ``float``, except integers whose
magnitude exceeds 2**53: those cannot be represented exactly as floats and are
kept as exact ``int``. Python compares ``int`` and ``float`` exactly, so the two
forms still compare correctly with each other.

Every function takes the chain of the running assertion, returns a
``(result, ok)`` pair and records one failure on the chain when ``ok`` is false.
"""

from __future__ import annotations

import dataclasses
import json
import math
import numbers
import types
import typing
from collections.abc import Mapping, Sequence
from decimal import Decimal
from fractions import Fraction
from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue

EXACT_FLOAT_LIMIT = 2**53


def canon_number(chain, value: Any) -> tuple[Any, bool]:
    try:
        number, ok = _convert_number(value)
    except (OverflowError, ValueError) as exc:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: valid number", str(exc)),
            )
        )
        return None, False
    if not ok:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: valid number",),
            )
        )
        return None, False
    return number, True


def canon_value(chain, value: Any) -> tuple[Any, bool]:
    try:
        data = json.dumps(value, default=_json_default, allow_nan=False)
    except (TypeError, ValueError, OverflowError) as exc:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: marshalable value", str(exc)),
            )
        )
        return None, False

    try:
        out = json.loads(data, parse_int=_parse_int, parse_float=float)
    except ValueError as exc:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: value can be decoded", str(exc)),
            )
        )
        return None, False
    return out, True


def canon_array(chain, value: Any) -> tuple[list, bool]:
    data, ok = canon_value(chain, value)
    if not ok:
        return [], False
    if not isinstance(data, list):
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: valid array",),
            )
        )
        return [], False
    return data, True


def canon_map(chain, value: Any) -> tuple[dict, bool]:
    data, ok = canon_value(chain, value)
    if not ok:
        return {}, False
    if not isinstance(data, dict):
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: valid map",),
            )
        )
        return {}, False
    return data, True


def canon_decode(chain, value: Any, target: Any) -> tuple[Any, bool]:
    """Decode a value into ``target``, a type such as int, list or a dataclass."""
    if target is None:
        chain.fail(
            AssertionFailure(
                type=AssertionType.USAGE,
                errors=("unexpected None target argument",),
            )
        )
        return None, False

    data, ok = canon_value(chain, value)
    if not ok:
        return None, False

    try:
        return _decode_into(data, target), True
    except (TypeError, ValueError, NameError) as exc:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(value),
                errors=("expected: value can be decoded into target argument", str(exc)),
            )
        )
        return None, False


def values_equal(left: Any, right: Any) -> bool:
    """Deep equality of canonical values; booleans never equal numbers."""
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, dict):
        if not isinstance(right, dict) or left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)
    if isinstance(left, list):
        if not isinstance(right, list) or len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))
    if is_number(left) or is_number(right):
        return is_number(left) and is_number(right) and left == right
    return left == right


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _canon_int(value: int) -> int | float:
    if -EXACT_FLOAT_LIMIT <= value <= EXACT_FLOAT_LIMIT:
        return float(value)
    return value


def _parse_int(text: str) -> int | float:
    return _canon_int(int(text))


def _convert_number(value: Any) -> tuple[Any, bool]:
    if isinstance(value, bool):
        return None, False
    if isinstance(value, numbers.Integral):
        return _canon_int(int(value)), True
    if isinstance(value, Decimal):
        if value.is_nan():
            return None, False
        if value.is_infinite():
            return float(value), True
        if value == value.to_integral_value():
            return _canon_int(int(value)), True
        return float(value), True
    if isinstance(value, Fraction):
        if value.denominator == 1:
            return _canon_int(value.numerator), True
        return float(value), True
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number):
            return None, False
        return number, True
    return None, False


def _json_default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (Decimal, numbers.Real)):
        number, ok = _convert_number(value)
        if ok:
            return number
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode_into(data: Any, target: Any) -> Any:
    if target is Any or target is object:
        return data
    if target is None or target is type(None):
        if data is not None:
            raise TypeError(f"cannot decode {type(data).__name__} into None")
        return None

    origin = typing.get_origin(target)
    if origin is typing.Union or origin is types.UnionType:
        return _decode_union(data, typing.get_args(target))
    if origin is list:
        if not isinstance(data, list):
            raise TypeError(f"cannot decode {type(data).__name__} into list")
        (item_type,) = typing.get_args(target) or (Any,)
        return [_decode_into(item, item_type) for item in data]
    if origin is dict:
        if not isinstance(data, dict):
            raise TypeError(f"cannot decode {type(data).__name__} into dict")
        args = typing.get_args(target)
        value_type = args[1] if len(args) == 2 else Any
        return {key: _decode_into(item, value_type) for key, item in data.items()}

    if dataclasses.is_dataclass(target) and isinstance(target, type):
        return _decode_dataclass(data, target)
    if target is bool:
        if not isinstance(data, bool):
            raise TypeError(f"cannot decode {type(data).__name__} into bool")
        return data
    if target is int:
        if not is_number(data) or (isinstance(data, float) and not data.is_integer()):
            raise TypeError(f"cannot decode {data!r} into int")
        return int(data)
    if target is float:
        if not is_number(data):
            raise TypeError(f"cannot decode {type(data).__name__} into float")
        return float(data)
    if target is str:
        if not isinstance(data, str):
            raise TypeError(f"cannot decode {type(data).__name__} into str")
        return data
    if target is list:
        if not isinstance(data, list):
            raise TypeError(f"cannot decode {type(data).__name__} into list")
        return data
    if target is dict:
        if not isinstance(data, dict):
            raise TypeError(f"cannot decode {type(data).__name__} into dict")
        return data
    raise TypeError(f"unsupported target {target!r}")


def _decode_union(data: Any, args: tuple) -> Any:
    if data is None and type(None) in args:
        return None
    for arg in args:
        if arg is type(None):
            continue
        try:
            return _decode_into(data, arg)
        except (TypeError, ValueError):
            continue
    raise TypeError(f"cannot decode {data!r} into any of {args!r}")


def _decode_dataclass(data: Any, target: type) -> Any:
    if not isinstance(data, dict):
        raise TypeError(f"cannot decode {type(data).__name__} into {target.__name__}")
    hints = typing.get_type_hints(target)
    kwargs = {}
    for item in dataclasses.fields(target):
        if not item.init or item.name not in data:
            continue
        kwargs[item.name] = _decode_into(data[item.name], hints.get(item.name, Any))
    return target(**kwargs)
