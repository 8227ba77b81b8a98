from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter


def _expect():
    reporter = RecordingReporter()
    return Expect(reporter), reporter


def test_string_requires_str():
    expect, reporter = _expect()
    expect.string(5).is_equal("5")
    assert len(reporter.messages) == 1
    assert "expected: value is string" in reporter.messages[0]


def test_string_checks_pass():
    expect, reporter = _expect()
    text = expect.string("Hello World")
    text.is_equal("Hello World").not_equal("hello")
    text.is_equal_fold("hello world")
    text.contains("lo W").not_contains("xyz")
    text.has_prefix("Hello").has_suffix("World")
    text.is_match(r"^H\w+").not_match(r"\d")
    text.in_list("a", "Hello World")
    text.length().is_equal(11)
    text.not_empty()
    expect.string("").is_empty()
    assert not reporter.failed


def test_string_checks_fail():
    expect, reporter = _expect()
    text = expect.string("abc")
    text.is_equal("abd")
    text.has_prefix("x")
    text.is_match("[")
    text.is_equal(1)
    assert len(reporter.messages) == 4
    assert "expected: valid regular expression" in reporter.messages[2]
    assert "unexpected non-string argument" in reporter.messages[3]


def test_string_as_number():
    expect, reporter = _expect()
    expect.string("42").as_number().is_equal(42)
    expect.string(" 1.5 ").as_number().in_delta(1.5, 0.01)
    assert not reporter.failed

    expect.string("4x").as_number()
    assert "expected: string can be parsed to number" in reporter.messages[0]


def test_string_as_boolean():
    expect, reporter = _expect()
    expect.string("true").as_boolean().is_true()
    expect.string("F").as_boolean().is_false()
    assert not reporter.failed

    expect.string("yes").as_boolean()
    assert len(reporter.messages) == 1


def test_string_fold_and_negated_checks():
    expect, reporter = _expect()
    text = expect.string("Hello World")
    text.not_equal_fold("hello").contains_fold("LO w").not_contains_fold("xyz")
    text.not_has_prefix("World").not_has_suffix("Hello")
    text.has_prefix_fold("hELLO").has_suffix_fold("WORLD")
    text.not_has_prefix_fold("world").not_has_suffix_fold("HELLO")
    assert not reporter.failed

    text.not_equal_fold("HELLO WORLD")
    text.not_contains_fold("WORLD")
    text.not_has_prefix("Hell")
    text.not_has_suffix_fold("rld")
    text.has_prefix_fold("world")
    assert len(reporter.messages) == 5
    assert "expected: strings are non-equal (if folded)" in reporter.messages[0]
    assert "expected: string does not contain sub-string (if folded)" in reporter.messages[1]
    assert "expected: string does not have given prefix" in reporter.messages[2]


def test_string_is_ascii():
    expect, reporter = _expect()
    expect.string("plain text").is_ascii()
    expect.string("naïve").not_is_ascii()
    assert not reporter.failed

    expect.string("naïve").is_ascii()
    expect.string("abc").not_is_ascii()
    assert "expected: all string characters are ascii" in reporter.messages[0]
    assert "expected: at least one string character is not ascii" in reporter.messages[1]


def test_string_as_datetime_default_formats():
    expect, reporter = _expect()
    expect.string("Wed, 01 May 2024 10:00:00 GMT").as_datetime().hour().is_equal(10)
    expect.string("2024-05-01T10:00:00Z").as_datetime().zone().is_equal("UTC")
    expect.string("2024-05-01T10:00:00+02:00").as_datetime().as_utc().hour().is_equal(8)
    expect.string("Wed May  1 10:00:00 2024").as_datetime().day().is_equal(1)
    assert not reporter.failed

    expect.string("yesterday").as_datetime().year().is_equal(1970)
    assert len(reporter.messages) == 1
    assert "expected: string can be parsed to datetime" in reporter.messages[0]


def test_string_as_datetime_with_formats():
    expect, reporter = _expect()
    parsed = expect.string("01/05/2024").as_datetime("%Y-%m-%d", "%d/%m/%Y")
    parsed.month().is_equal(5)
    assert not reporter.failed

    expect.string("01/05/2024").as_datetime("%Y-%m-%d")
    assert "expected: string can be parsed to datetime with given format" in reporter.messages[0]
