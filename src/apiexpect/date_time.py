from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from apiexpect.assertion import AssertionFailure, AssertionType, AssertionValue
from apiexpect.base import Ordered


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


class DateTime(Ordered):
    """Point in time (``datetime.datetime``).

    Naive and timezone-aware datetimes cannot be ordered against each other;
    mixing them is reported as a usage failure.

    Example:
        dt = Expect(reporter).string("2024-05-01T10:00:00+00:00").as_datetime()
        dt.year().is_equal(2024)
    """

    noun = "datetime"

    def __init__(self, chain, value: Any) -> None:
        super().__init__(chain, value)
        if self._chain.failed() or isinstance(value, datetime):
            return
        self._chain.fail(
            AssertionFailure(
                type=AssertionType.TYPE,
                actual=AssertionValue(value),
                errors=("expected: value is datetime",),
            )
        )
        self._value = datetime.fromtimestamp(0, timezone.utc)

    def zone(self):
        from apiexpect.string import String

        with self._chain.enter("zone()") as op:
            if op.failed():
                return String(op, "")
            return String(op, self._value.tzname() or "")

    def year(self):
        return self._part("year()", lambda dt: dt.year)

    def month(self):
        return self._part("month()", lambda dt: dt.month)

    def day(self):
        return self._part("day()", lambda dt: dt.day)

    def weekday(self):
        """Day of the week, Monday is 0."""
        return self._part("weekday()", lambda dt: dt.weekday())

    def yearday(self):
        return self._part("yearday()", lambda dt: dt.timetuple().tm_yday)

    def hour(self):
        return self._part("hour()", lambda dt: dt.hour)

    def minute(self):
        return self._part("minute()", lambda dt: dt.minute)

    def second(self):
        return self._part("second()", lambda dt: dt.second)

    def microsecond(self):
        return self._part("microsecond()", lambda dt: dt.microsecond)

    def as_utc(self) -> DateTime:
        # Naive values are taken as UTC.
        with self._chain.enter("as_utc()") as op:
            if op.failed():
                return DateTime(op, self._value)
            if _is_aware(self._value):
                return DateTime(op, self._value.astimezone(timezone.utc))
            return DateTime(op, self._value.replace(tzinfo=timezone.utc))

    def as_local(self) -> DateTime:
        with self._chain.enter("as_local()") as op:
            if op.failed():
                return DateTime(op, self._value)
            return DateTime(op, self._value.astimezone())

    def _part(self, name: str, getter):
        from apiexpect.number import Number

        with self._chain.enter(name) as op:
            if op.failed():
                return Number(op, 0)
            return Number(op, getter(self._value))

    def _coerce(self, op, value: Any) -> tuple[Any, bool]:
        if not isinstance(value, datetime):
            self._fail_usage(op, "unexpected non-datetime argument")
            return None, False
        if _is_aware(value) != _is_aware(self._value):
            self._fail_usage(op, "unexpected mix of naive and timezone-aware datetimes")
            return None, False
        return value, True
