import pytest

from apiexpect.assertion import (
    AssertionFailure,
    AssertionList,
    AssertionRange,
    AssertionType,
    AssertionValue,
    validate_failure,
)
from apiexpect.errors import UsageError


def test_valid_failures_pass():
    validate_failure(AssertionFailure(type=AssertionType.USAGE, errors=("bad argument",)))
    validate_failure(
        AssertionFailure(
            type=AssertionType.IN_RANGE,
            actual=AssertionValue(5),
            expected=AssertionValue(AssertionRange(0, 3)),
            errors=("expected: in range",),
        )
    )
    validate_failure(
        AssertionFailure(
            type=AssertionType.CONTAINS_KEY,
            actual=AssertionValue({}),
            errors=("expected: map contains key",),
        )
    )


def test_errors_string_is_wrapped():
    failure = AssertionFailure(type=AssertionType.USAGE, errors="oops")
    assert failure.errors == ("oops",)


@pytest.mark.parametrize(
    "failure",
    [
        AssertionFailure(type=AssertionType.USAGE, errors=()),
        AssertionFailure(type=AssertionType.USAGE, errors=("",)),
        AssertionFailure(type=AssertionType.USAGE, actual=AssertionValue(1), errors=("x",)),
        AssertionFailure(type=AssertionType.EQUAL, actual=AssertionValue(1), errors=("x",)),
        AssertionFailure(type=AssertionType.TYPE, errors=("x",)),
        AssertionFailure(
            type=AssertionType.IN_RANGE,
            actual=AssertionValue(1),
            expected=AssertionValue(3),
            errors=("x",),
        ),
        AssertionFailure(
            type=AssertionType.BELONGS,
            actual=AssertionValue(1),
            expected=AssertionValue(AssertionList([])),
            errors=("x",),
        ),
        AssertionFailure(type="equal", actual=AssertionValue(1), errors=("x",)),
    ],
)
def test_invalid_failures_raise(failure):
    with pytest.raises(UsageError):
        validate_failure(failure)
