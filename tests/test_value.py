from dataclasses import dataclass

from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter


def _expect():
    reporter = RecordingReporter()
    return Expect(reporter), reporter


def test_value_casts():
    expect, reporter = _expect()
    expect.value({"a": 1}).object().contains_key("a")
    expect.value([1, 2]).array().length().is_equal(2)
    expect.value("x").string().is_equal("x")
    expect.value(3).number().is_equal(3.0)
    expect.value(True).boolean().is_true()
    assert not reporter.failed


def test_value_cast_type_mismatch():
    expect, reporter = _expect()
    expect.value(1).string()
    assert len(reporter.messages) == 1
    assert "Value().string()" in reporter.messages[0]
    assert "expected: value is string" in reporter.messages[0]


def test_failed_cast_makes_following_checks_noop():
    expect, reporter = _expect()
    expect.value("text").number().is_equal(1).gt(5)
    assert len(reporter.messages) == 1


def test_value_null_checks():
    expect, reporter = _expect()
    expect.value(None).is_null()
    expect.value(0).not_null()
    assert not reporter.failed

    expect.value({}).is_null()
    assert len(reporter.messages) == 1


def test_value_equal_uses_canonical_form():
    expect, reporter = _expect()
    expect.value({"a": (1, 2)}).is_equal({"a": [1.0, 2.0]})
    expect.value(1).not_equal(True)
    assert not reporter.failed

    expect.value([1]).is_equal([2])
    assert "expected: values are equal" in reporter.messages[0]


def test_value_in_list():
    expect, reporter = _expect()
    expect.value(2).in_list(1, 2, 3)
    expect.value("x").not_in_list("a", "b")
    assert not reporter.failed

    expect.value(5).in_list(1, 2)
    expect.value(5).in_list()
    assert len(reporter.messages) == 2
    assert "unexpected empty list argument" in reporter.messages[1]


def test_value_path():
    expect, reporter = _expect()
    value = expect.value({"data": {"items": [{"id": 1}, {"id": 2}]}})
    value.path("$.data.items[1].id").number().is_equal(2)
    value.path("$.data.items[*].id").array().is_equal([1, 2])
    assert not reporter.failed

    value.path("$.data.missing")
    assert "expected: value matches given json path" in reporter.messages[0]


def test_value_decode():
    @dataclass
    class _Item:
        id: int

    expect, reporter = _expect()
    assert expect.value({"id": 3}).decode(_Item) == _Item(id=3)
    assert expect.value("x").decode(int) is None
    assert len(reporter.messages) == 1


def test_alias_replaces_path_in_message():
    expect, reporter = _expect()
    expect.value({"a": 1}).alias("payload").object().value("b")
    assert "assertion:\n  payload.object().value('b')" in reporter.messages[0]
