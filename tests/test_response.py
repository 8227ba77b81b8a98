from datetime import timedelta

import requests

from apiexpect.expect import Expect
from apiexpect.reporter import RecordingReporter
from apiexpect.response import StatusRange


def _response(status=200, body=b"", content_type="application/json", cookies=None):
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    if content_type:
        response.headers["Content-Type"] = content_type
    response.elapsed = timedelta(milliseconds=250)
    for name, value in (cookies or {}).items():
        response.cookies.set(name, value)
    request = requests.Request("GET", "http://example.test/items").prepare()
    response.request = request
    return response


def _expect():
    reporter = RecordingReporter()
    return Expect(reporter), reporter


def test_response_status_checks():
    expect, reporter = _expect()
    resp = expect.response(_response(status=201))
    resp.status(201).status_range(StatusRange.SUCCESS).status_list(200, 201)
    assert not reporter.failed

    resp.status(200)
    resp.status_range(StatusRange.CLIENT_ERROR)
    resp.status_list(500)
    assert len(reporter.messages) == 3
    assert "[400; 499]" in reporter.messages[1]


def test_response_json():
    expect, reporter = _expect()
    resp = expect.response(_response(body=b'{"id": 5, "tags": ["a"]}'))
    data = resp.json().object()
    data.value("id").number().is_equal(5)
    data.value("tags").array().contains_only("a")
    assert not reporter.failed


def test_response_json_problem_plus_json():
    expect, reporter = _expect()
    resp = expect.response(_response(body=b'{"title": "x"}', content_type="application/problem+json"))
    resp.json().object().has_value("title", "x")
    assert not reporter.failed


def test_response_json_wrong_content_type_and_body():
    expect, reporter = _expect()
    expect.response(_response(body=b"{}", content_type="text/plain")).json()
    expect.response(_response(body=b"not json")).json()
    assert len(reporter.messages) == 2
    assert "expected: content-type header has given media type" in reporter.messages[0]
    assert "expected: response body is valid json" in reporter.messages[1]


def test_response_content_type_charset():
    expect, reporter = _expect()
    expect.response(_response(content_type="text/html; charset=UTF-8")).content_type("text/html")
    expect.response(_response(content_type="text/html; charset=latin1")).content_type(
        "text/html", "latin1"
    )
    assert not reporter.failed

    expect.response(_response(content_type="text/html; charset=latin1")).content_type("text/html")
    assert "expected: content-type header has given charset" in reporter.messages[0]


def test_response_text_and_body():
    expect, reporter = _expect()
    resp = expect.response(_response(body=b"hello", content_type="text/plain"))
    resp.text().is_equal("hello")
    resp.body().contains("ell")
    assert not reporter.failed


def test_response_headers():
    expect, reporter = _expect()
    resp = expect.response(_response())
    resp.header("content-type").is_equal("application/json")
    resp.headers().contains_key("Content-Type")
    assert not reporter.failed

    resp.header("X-Missing")
    assert "expected: response contains header" in reporter.messages[0]


def test_response_cookies_and_elapsed():
    expect, reporter = _expect()
    resp = expect.response(_response(cookies={"session": "abc", "theme": "dark"}))
    resp.cookies().is_equal(["session", "theme"])
    resp.cookie("session").is_equal("abc")
    resp.elapsed().lt(1).is_equal(timedelta(milliseconds=250))
    resp.elapsed().seconds().in_delta(0.25, 0.001)
    assert not reporter.failed

    resp.cookie("missing")
    assert "expected: response contains cookie" in reporter.messages[0]


def test_response_attached_to_chain():
    expect, _reporter = _expect()
    raw = _response()
    resp = expect.response(raw)
    assert resp._chain.response is raw
    assert resp._chain.request is raw.request


def test_response_none():
    expect, reporter = _expect()
    expect.response(None).status(200)
    assert "unexpected None response argument" in reporter.messages[0]
