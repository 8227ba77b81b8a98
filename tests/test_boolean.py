from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter


def test_boolean_checks():
    reporter = RecordingReporter()
    expect = Expect(reporter)
    expect.boolean(True).is_true().is_equal(True).not_equal(False)
    expect.boolean(False).is_false()
    assert not reporter.failed

    expect.boolean(True).is_false()
    expect.boolean(False).is_equal(1)
    expect.boolean(1)
    assert len(reporter.messages) == 3
    assert "unexpected non-boolean argument" in reporter.messages[1]
    assert "expected: value is boolean" in reporter.messages[2]
