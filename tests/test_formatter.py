from apiexpect.assertion import (
    AssertionContext,
    AssertionFailure,
    AssertionList,
    AssertionRange,
    AssertionType,
    AssertionValue,
)
from apiexpect.formatter import DefaultFormatter


def _context(**kwargs):
    values = {"path": ("Value()", "is_equal()"), "aliased_path": ("Value()", "is_equal()")}
    values.update(kwargs)
    return AssertionContext(**values)


def test_format_failure_sections():
    formatter = DefaultFormatter()
    failure = AssertionFailure(
        type=AssertionType.EQUAL,
        actual=AssertionValue({"a": 1.0}),
        expected=AssertionValue({"a": 2.0}),
        errors=("expected: values are equal",),
    )
    message = formatter.format_failure(_context(test_name="test_demo"), failure)
    assert "test name:\n  test_demo" in message
    assert "assertion:\n  Value().is_equal()" in message
    assert "expected: values are equal" in message
    assert "diff:" in message


def test_format_path_uses_alias():
    formatter = DefaultFormatter()
    context = _context(aliased_path=("body",))
    assert formatter.format_path(context) == "body"
    assert formatter.format_success(context) == "passed: body"


def test_format_expected_range_and_list():
    formatter = DefaultFormatter(show_diff=False)
    range_failure = AssertionFailure(
        type=AssertionType.IN_RANGE,
        actual=AssertionValue(5.0),
        expected=AssertionValue(AssertionRange(1.0, 3.0)),
        errors=("x",),
    )
    assert formatter.format_expected(range_failure) == "[1; 3]"

    list_failure = AssertionFailure(
        type=AssertionType.BELONGS,
        actual=AssertionValue("c"),
        expected=AssertionValue(AssertionList(["a", "b"])),
        errors=("x",),
    )
    assert formatter.format_expected(list_failure) == '"a"\n"b"'


def test_format_value_scalars():
    formatter = DefaultFormatter()
    assert formatter.format_value(None) == "null"
    assert formatter.format_value(True) == "true"
    assert formatter.format_value(3.0) == "3"
    assert formatter.format_value(2.5) == "2.5"
    assert formatter.format_value("x") == '"x"'


def test_sanitize_message_strips_blank_lines():
    formatter = DefaultFormatter()
    assert formatter._sanitize_message("a\r\n\n\tb ") == "a\nb"
