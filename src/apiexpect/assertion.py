from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from apiexpect.errors import UsageError


class AssertionType(Enum):
    USAGE = "usage"
    OPERATION = "operation"
    TYPE = "type"
    NOT_TYPE = "not_type"
    VALID = "valid"
    NOT_VALID = "not_valid"
    NIL = "nil"
    NOT_NIL = "not_nil"
    EMPTY = "empty"
    NOT_EMPTY = "not_empty"
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IN_RANGE = "in_range"
    NOT_IN_RANGE = "not_in_range"
    MATCH_PATH = "match_path"
    NOT_MATCH_PATH = "not_match_path"
    MATCH_REGEXP = "match_regexp"
    NOT_MATCH_REGEXP = "not_match_regexp"
    CONTAINS_KEY = "contains_key"
    NOT_CONTAINS_KEY = "not_contains_key"
    CONTAINS_ELEMENT = "contains_element"
    NOT_CONTAINS_ELEMENT = "not_contains_element"
    CONTAINS_SUBSET = "contains_subset"
    NOT_CONTAINS_SUBSET = "not_contains_subset"
    BELONGS = "belongs"
    NOT_BELONGS = "not_belongs"


class AssertionSeverity(Enum):
    # Marks the test as failed.
    ERROR = "error"
    # Informational only; used for failures inside predicate callbacks.
    LOG = "log"


@dataclass(frozen=True)
class AssertionValue:
    value: Any


@dataclass(frozen=True)
class AssertionRange:
    min: Any
    max: Any


@dataclass(frozen=True)
class AssertionList:
    values: tuple

    def __init__(self, values) -> None:
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True)
class AssertionFailure:
    """Detailed information about one failed check.

    ``actual`` is the observed value. The meaning of ``expected`` depends on
    ``type``: the compared value, an ``AssertionRange``, an ``AssertionList``,
    a pattern, or the element that should be contained. ``reference`` holds the
    value the check originated from (e.g. the expected array when one of its
    elements is missing), and ``delta`` the allowed difference for approximate
    comparisons.
    """

    type: AssertionType
    errors: tuple[str, ...]
    actual: AssertionValue | None = None
    expected: AssertionValue | None = None
    reference: AssertionValue | None = None
    delta: AssertionValue | None = None
    severity: AssertionSeverity | None = None

    def __post_init__(self) -> None:
        if isinstance(self.errors, str):
            object.__setattr__(self, "errors", (self.errors,))
        else:
            object.__setattr__(self, "errors", tuple(self.errors))


@dataclass(frozen=True)
class AssertionContext:
    test_name: str = ""
    request_name: str = ""
    path: tuple[str, ...] = ()
    aliased_path: tuple[str, ...] = ()
    request: Any = None
    response: Any = None
    environment: Any = field(default=None, compare=False)


_OPTIONAL = "optional"
_REQUIRED = "required"
_DENIED = "denied"

_FIELD_TRAITS: dict[AssertionType, tuple[str, str]] = {}

for _kind in (AssertionType.USAGE, AssertionType.OPERATION):
    _FIELD_TRAITS[_kind] = (_DENIED, _DENIED)
for _kind in (
    AssertionType.TYPE,
    AssertionType.NOT_TYPE,
    AssertionType.VALID,
    AssertionType.NOT_VALID,
    AssertionType.NIL,
    AssertionType.NOT_NIL,
    AssertionType.EMPTY,
    AssertionType.NOT_EMPTY,
):
    _FIELD_TRAITS[_kind] = (_REQUIRED, _DENIED)
for _kind in (
    AssertionType.EQUAL,
    AssertionType.NOT_EQUAL,
    AssertionType.LT,
    AssertionType.LE,
    AssertionType.GT,
    AssertionType.GE,
    AssertionType.IN_RANGE,
    AssertionType.NOT_IN_RANGE,
    AssertionType.MATCH_PATH,
    AssertionType.NOT_MATCH_PATH,
    AssertionType.MATCH_REGEXP,
    AssertionType.NOT_MATCH_REGEXP,
    AssertionType.BELONGS,
    AssertionType.NOT_BELONGS,
):
    _FIELD_TRAITS[_kind] = (_REQUIRED, _REQUIRED)
for _kind in (
    AssertionType.CONTAINS_KEY,
    AssertionType.NOT_CONTAINS_KEY,
    AssertionType.CONTAINS_ELEMENT,
    AssertionType.NOT_CONTAINS_ELEMENT,
    AssertionType.CONTAINS_SUBSET,
    AssertionType.NOT_CONTAINS_SUBSET,
):
    _FIELD_TRAITS[_kind] = (_REQUIRED, _OPTIONAL)

_RANGE_TYPES = {AssertionType.IN_RANGE, AssertionType.NOT_IN_RANGE}
_LIST_TYPES = {AssertionType.BELONGS, AssertionType.NOT_BELONGS}


def validate_failure(failure: AssertionFailure) -> None:
    """Raise UsageError if the failure record is ill-formed."""
    if not isinstance(failure, AssertionFailure):
        raise UsageError(f"expected AssertionFailure, got {type(failure).__name__}")
    if not failure.errors:
        raise UsageError("AssertionFailure should have non-empty errors")
    for error in failure.errors:
        if not isinstance(error, str) or not error:
            raise UsageError("AssertionFailure errors should be non-empty strings")

    traits = _FIELD_TRAITS.get(failure.type)
    if traits is None:
        raise UsageError(f"unknown assertion type {failure.type!r}")
    actual_trait, expected_trait = traits
    _check_field(failure, "actual", failure.actual, actual_trait)
    _check_field(failure, "expected", failure.expected, expected_trait)

    if failure.type in _RANGE_TYPES:
        if not isinstance(failure.expected.value, AssertionRange):
            raise UsageError(
                f"AssertionFailure of type {failure.type.name} should have expected AssertionRange"
            )
    if failure.type in _LIST_TYPES:
        values = failure.expected.value
        if not isinstance(values, AssertionList):
            raise UsageError(
                f"AssertionFailure of type {failure.type.name} should have expected AssertionList"
            )
        if not values.values:
            raise UsageError("AssertionList should be non-empty")


def _check_field(failure: AssertionFailure, name: str, value: Any, trait: str) -> None:
    if value is not None and not isinstance(value, AssertionValue):
        raise UsageError(f"AssertionFailure.{name} should be AssertionValue")
    if trait == _REQUIRED and value is None:
        raise UsageError(f"AssertionFailure of type {failure.type.name} should have {name} field")
    if trait == _DENIED and value is not None:
        raise UsageError(f"AssertionFailure of type {failure.type.name} can't have {name} field")
