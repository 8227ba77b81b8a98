from __future__ import annotations

from typing import Any

from jsonpath_ng import parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue


def json_path(chain, value: Any, path: str) -> tuple[Any, bool]:
    """Evaluate a JSONPath expression against a canonical value.

    A single match yields the matched value; several matches yield the list of
    matched values.
    """
    try:
        expression = parse(path)
    except (JsonPathLexerError, JsonPathParserError) as exc:
        chain.fail(
            AssertionFailure(
                type=AssertionType.VALID,
                actual=AssertionValue(path),
                errors=("expected: valid json path", str(exc)),
            )
        )
        return None, False

    matches = [match.value for match in expression.find(value)]
    if not matches:
        chain.fail(
            AssertionFailure(
                type=AssertionType.MATCH_PATH,
                actual=AssertionValue(value),
                expected=AssertionValue(path),
                errors=("expected: value matches given json path",),
            )
        )
        return None, False

    return (matches[0] if len(matches) == 1 else matches), True
