from __future__ import annotations

from dataclasses import replace
from typing import Any

from apiexpect.array import Array
from apiexpect.boolean import Boolean
from apiexpect.chain import Chain
from apiexpect.config import Config
from apiexpect.date_time import DateTime
from apiexpect.duration import Duration
from apiexpect.environment import Environment
from apiexpect.number import Number
from apiexpect.object import Object
from apiexpect.response import Response
from apiexpect.string import String
from apiexpect.value import Value


class Expect:
    """Entry point: builds wrappers on fresh root chains.

    Example:
        expect = Expect(RecordingReporter())
        expect.object({"id": 1}).value("id").number().is_equal(1)
    """

    def __init__(self, reporter=None, *, config: Config | None = None) -> None:
        config = config or Config()
        if reporter is not None:
            config = replace(config, reporter=reporter)
        config = config.with_defaults()
        if config.environment is None:
            config = replace(config, environment=Environment(Chain("Environment()", config)))
        self.config = config

    @property
    def env(self) -> Environment:
        return self.config.environment

    def value(self, value: Any) -> Value:
        return Value(Chain("Value()", self.config), value)

    def object(self, value: Any) -> Object:
        return Object(Chain("Object()", self.config), value)

    def array(self, value: Any) -> Array:
        return Array(Chain("Array()", self.config), value)

    def string(self, value: Any) -> String:
        return String(Chain("String()", self.config), value)

    def number(self, value: Any) -> Number:
        return Number(Chain("Number()", self.config), value)

    def boolean(self, value: Any) -> Boolean:
        return Boolean(Chain("Boolean()", self.config), value)

    def datetime(self, value: Any) -> DateTime:
        return DateTime(Chain("DateTime()", self.config), value)

    def duration(self, value: Any) -> Duration:
        return Duration(Chain("Duration()", self.config), value)

    def response(self, response) -> Response:
        return Response(Chain("Response()", self.config), response)
