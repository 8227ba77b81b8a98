from __future__ import annotations

from enum import Enum
from typing import Any

import requests

from apiexpect.assertion import (
    AssertionFailure,
    AssertionList,
    AssertionRange,
    AssertionType,
    AssertionValue,
)
from apiexpect.base import Matcher


class StatusRange(Enum):
    INFORMATIONAL = 100
    SUCCESS = 200
    REDIRECTION = 300
    CLIENT_ERROR = 400
    SERVER_ERROR = 500


def _parse_content_type(header: str) -> tuple[str, dict[str, str]]:
    media, _, rest = header.partition(";")
    params: dict[str, str] = {}
    for item in rest.split(";"):
        key, sep, value = item.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip().strip('"')
    return media.strip().lower(), params


class Response(Matcher):
    """HTTP response returned by ``requests``.

    The response and its prepared request are attached to the chain, so every
    failure message built below this wrapper can show them.

    Example:
        resp = Expect(reporter).response(requests.get(url))
        resp.status(200).json().object().value("id").number().gt(0)
    """

    def __init__(self, chain, response: requests.Response | None) -> None:
        super().__init__(chain, response)
        if self._chain.failed():
            return
        if response is None:
            self._fail_usage(self._chain, "unexpected None response argument")
            return
        self._chain.set_response(response)
        if response.request is not None:
            self._chain.set_request(response.request)

    def status(self, code: int) -> Response:
        with self._chain.enter("status()") as op:
            if op.failed():
                return self
            if self._value.status_code != code:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.EQUAL,
                        actual=AssertionValue(self._value.status_code),
                        expected=AssertionValue(code),
                        errors=("expected: http status is equal to given value",),
                    )
                )
        return self

    def status_range(self, status_range: StatusRange) -> Response:
        with self._chain.enter("status_range()") as op:
            if op.failed():
                return self
            low = status_range.value
            high = low + 99
            if not low <= self._value.status_code <= high:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.IN_RANGE,
                        actual=AssertionValue(self._value.status_code),
                        expected=AssertionValue(AssertionRange(low, high)),
                        errors=("expected: http status belongs to given range",),
                    )
                )
        return self

    def status_list(self, *codes: int) -> Response:
        with self._chain.enter("status_list()") as op:
            if op.failed():
                return self
            if not codes:
                self._fail_usage(op, "unexpected empty list argument")
                return self
            if self._value.status_code not in codes:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.BELONGS,
                        actual=AssertionValue(self._value.status_code),
                        expected=AssertionValue(AssertionList(codes)),
                        errors=("expected: http status is equal to one of the given values",),
                    )
                )
        return self

    def headers(self):
        from apiexpect.object import Object

        with self._chain.enter("headers()") as op:
            if op.failed():
                return Object(op, {})
            return Object(op, dict(self._value.headers))

    def header(self, name: str):
        from apiexpect.string import String

        with self._chain.enter("header(%r)", name) as op:
            if op.failed():
                return String(op, "")
            # requests headers are case-insensitive
            if name not in self._value.headers:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(dict(self._value.headers)),
                        expected=AssertionValue(name),
                        errors=("expected: response contains header",),
                    )
                )
                return String(op, "")
            return String(op, self._value.headers[name])

    def content_type(self, media: str, charset: str | None = None) -> Response:
        """Check the Content-Type media type and charset.

        Without ``charset`` the header may have no charset or ``utf-8``.
        """
        with self._chain.enter("content_type()") as op:
            if not op.failed():
                self._check_content_type(op, (media,), charset)
        return self

    def body(self):
        from apiexpect.string import String

        with self._chain.enter("body()") as op:
            if op.failed():
                return String(op, "")
            return String(op, self._value.text)

    def text(self):
        from apiexpect.string import String

        with self._chain.enter("text()") as op:
            if op.failed():
                return String(op, "")
            if not self._check_content_type(op, ("text/plain",), None):
                return String(op, "")
            return String(op, self._value.text)

    def json(self):
        from apiexpect.value import Value

        with self._chain.enter("json()") as op:
            if op.failed():
                return Value(op, None)
            if not self._check_content_type(op, ("application/json", "+json"), None):
                return Value(op, None)
            try:
                data = self._value.json()
            except ValueError as exc:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.VALID,
                        actual=AssertionValue(self._value.text),
                        errors=("expected: response body is valid json", str(exc)),
                    )
                )
                return Value(op, None)
            return Value(op, data)

    def cookies(self):
        from apiexpect.array import Array

        with self._chain.enter("cookies()") as op:
            if op.failed():
                return Array(op, [])
            return Array(op, sorted(cookie.name for cookie in self._value.cookies))

    def cookie(self, name: str):
        from apiexpect.string import String

        with self._chain.enter("cookie(%r)", name) as op:
            if op.failed():
                return String(op, "")
            cookies = {cookie.name: cookie.value for cookie in self._value.cookies}
            if name not in cookies:
                op.fail(
                    AssertionFailure(
                        type=AssertionType.CONTAINS_KEY,
                        actual=AssertionValue(sorted(cookies)),
                        expected=AssertionValue(name),
                        errors=("expected: response contains cookie",),
                    )
                )
                return String(op, "")
            return String(op, cookies[name] or "")

    def elapsed(self):
        """Return the round trip time as a Duration."""
        from apiexpect.duration import Duration

        with self._chain.enter("elapsed()") as op:
            if op.failed():
                return Duration(op, None)
            return Duration(op, getattr(self._value, "elapsed", None))

    def _check_content_type(self, op, medias: tuple[str, ...], charset: str | None) -> bool:
        header = self._value.headers.get("Content-Type", "")
        media, params = _parse_content_type(header)
        if not any(media == item or (item.startswith("+") and media.endswith(item)) for item in medias):
            op.fail(
                AssertionFailure(
                    type=AssertionType.EQUAL,
                    actual=AssertionValue(media),
                    expected=AssertionValue(medias[0]),
                    errors=("expected: content-type header has given media type",),
                )
            )
            return False

        actual_charset = params.get("charset", "").lower()
        if charset is None:
            ok = actual_charset in ("", "utf-8")
            expected_charset: Any = "utf-8"
        else:
            ok = actual_charset == charset.lower()
            expected_charset = charset
        if not ok:
            op.fail(
                AssertionFailure(
                    type=AssertionType.EQUAL,
                    actual=AssertionValue(actual_charset),
                    expected=AssertionValue(expected_charset),
                    errors=("expected: content-type header has given charset",),
                )
            )
            return False
        return True
