"""Week and month period bucketing."""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

import pendulum

from alignment_engine.config import DEFAULT_TIMEZONE
from alignment_engine.schema import Period

DateLike = Union[date, datetime]


def coerce_period(value) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(str(value).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Unknown period '{value}', expected 'week' or 'month'") from exc


def to_moment(reference: DateLike, tz: str = DEFAULT_TIMEZONE) -> pendulum.DateTime:
    """Convert a date or datetime to a timezone-aware pendulum instance.

    Naive datetimes and plain dates are interpreted in ``tz``.
    """

    if isinstance(reference, datetime):
        return pendulum.instance(reference, tz=tz)
    return pendulum.datetime(reference.year, reference.month, reference.day, tz=tz)


def period_bounds(period, reference: DateLike, tz: str = DEFAULT_TIMEZONE) -> tuple[pendulum.DateTime, pendulum.DateTime]:
    """Return the first and last instant of the week or month containing ``reference``.

    Weeks run Monday 00:00:00 to Sunday 23:59:59.999999.
    """

    unit = coerce_period(period).value
    moment = to_moment(reference, tz)
    return moment.start_of(unit), moment.end_of(unit)


def shift_period(period, reference: DateLike, steps: int, tz: str = DEFAULT_TIMEZONE) -> pendulum.DateTime:
    """Move ``reference`` back ``steps`` weeks or calendar months.

    Month shifts clamp to the last valid day, so 31 March minus one month is
    the last day of February.
    """

    moment = to_moment(reference, tz)
    if coerce_period(period) is Period.WEEK:
        return moment.subtract(weeks=steps)
    return moment.subtract(months=steps)


def period_label(period, start: DateLike) -> str:
    """Short chart label: ``Week D/M`` or ``Mon YYYY``."""

    if coerce_period(period) is Period.WEEK:
        return f"Week {start.day}/{start.month}"
    return to_moment(start).format("MMM YYYY", locale="en")


def parse_timestamp(value: str, tz: str = DEFAULT_TIMEZONE) -> pendulum.DateTime:
    """Parse an ISO 8601 timestamp; values without an offset are read in ``tz``."""

    parsed = pendulum.parse(str(value).strip(), tz=tz)
    if not isinstance(parsed, datetime):
        raise ValueError(f"'{value}' is not a timestamp")
    return parsed
