from datetime import timedelta

from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter


def _expect():
    reporter = RecordingReporter()
    return Expect(reporter), reporter


def test_duration_comparisons():
    expect, reporter = _expect()
    duration = expect.duration(timedelta(milliseconds=1500))
    duration.is_set().is_equal(timedelta(seconds=1.5)).is_equal(1.5)
    duration.not_equal(timedelta(seconds=2))
    duration.gt(1).ge(timedelta(milliseconds=1500))
    duration.lt(timedelta(seconds=2)).le(1.5)
    duration.in_range(1, 2).not_in_range(timedelta(seconds=3), 4)
    duration.seconds().is_equal(1.5)
    assert not reporter.failed

    duration.gt(2)
    duration.not_in_range(0, 10)
    assert len(reporter.messages) == 2
    assert "expected: duration is larger than given value" in reporter.messages[0]
    assert "expected: duration is not within given range" in reporter.messages[1]


def test_duration_unset():
    expect, reporter = _expect()
    duration = expect.duration(None)
    duration.not_set()
    assert duration.raw() == timedelta(0)
    assert not reporter.failed

    duration.is_set()
    duration.lt(1)
    assert len(reporter.messages) == 2
    assert "expected: duration is present" in reporter.messages[0]

    expect.duration(timedelta(seconds=1)).not_set()
    assert "expected: duration is not present" in reporter.messages[2]


def test_duration_bad_values():
    expect, reporter = _expect()
    expect.duration(12).is_set()
    assert len(reporter.messages) == 1
    assert "expected: value is duration" in reporter.messages[0]

    expect.duration(timedelta(seconds=1)).gt("soon")
    expect.duration(timedelta(seconds=1)).lt(True)
    assert "unexpected non-duration argument" in reporter.messages[1]
    assert "unexpected non-duration argument" in reporter.messages[2]
