import logging

import pytest

from apiexpect import Config, Expect, MultiAssertionHandler, RecordingReporter, ReportAssertionHandler
from apiexpect.assertion import AssertionSeverity
from apiexpect.formatter import DefaultFormatter
from apiexpect.handler import DefaultAssertionHandler


def test_default_reporter_raises_assertion_error():
    expect = Expect()
    with pytest.raises(AssertionError, match="expected: numbers are equal"):
        expect.number(1).is_equal(2)


def test_passing_chain_does_not_raise():
    Expect().object({"a": [1, 2]}).value("a").array().contains_all(1)


def test_log_severity_config_does_not_fail(caplog):
    reporter = RecordingReporter()
    expect = Expect(reporter, config=Config(severity=AssertionSeverity.LOG))
    with caplog.at_level(logging.INFO, logger="apiexpect"):
        expect.string("a").is_equal("b")
    assert not reporter.failed
    assert "expected: strings are equal" in caplog.text


def test_report_handler_through_config():
    reporter = RecordingReporter()
    report = ReportAssertionHandler()
    formatter = DefaultFormatter()
    handler = MultiAssertionHandler(DefaultAssertionHandler(formatter, reporter), report)
    expect = Expect(config=Config(assertion_handler=handler, test_name="test_report"))

    expect.number(1).is_equal(1)
    expect.number(1).is_equal(2)

    assert len(reporter.messages) == 1
    assert report.summary()["tests"] == {"test_report": {"pass": 1, "fail": 1, "log": 0}}
    assert report.results[1]["test_name"] == "test_report"
    assert report.results[1]["path"] == "Number().is_equal()"
