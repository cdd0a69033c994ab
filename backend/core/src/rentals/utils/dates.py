"""Calendar date helpers for half-open stay ranges.

Every date handled here is a calendar day, i.e. a UTC midnight. Day
arithmetic is therefore exact and never shifted by daylight saving.
"""

import datetime as dt
from collections.abc import Iterator
from typing import Any


def parse_strict_date(raw: Any) -> dt.date | None:
    """Parse a CRM date value into a calendar day.

    Accepts ``date`` and ``datetime`` objects, ``YYYY-MM-DD`` strings and
    ISO-8601 date-time strings (a trailing ``Z`` included). Aware date-times
    are converted to UTC before the day is taken. Only ISO forms are read:
    the CRM always emits them, so locale formats such as ``2025/03/01`` or
    ``01/03/2025`` are treated as unparseable rather than guessed. Anything
    else yields None; this function never raises.

    Args:
        raw: Value to parse

    Returns:
        The UTC calendar day, or None if the value is empty or unparseable
    """
    if raw is None:
        return None

    if isinstance(raw, dt.datetime):
        return _datetime_to_utc_day(raw)

    if isinstance(raw, dt.date):
        return raw

    if not isinstance(raw, str):
        return None

    value = raw.strip()
    if not value:
        return None

    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        pass

    try:
        return _datetime_to_utc_day(dt.datetime.fromisoformat(value))
    except ValueError:
        return None


def _datetime_to_utc_day(value: dt.datetime) -> dt.date:
    if value.tzinfo is not None:
        value = value.astimezone(dt.timezone.utc)
    return value.date()


def add_days(date: dt.date, n: int) -> dt.date:
    """Shift a calendar day by ``n`` days (negative moves backwards)."""
    return date + dt.timedelta(days=n)


def to_iso(date: dt.date) -> str:
    """Format a calendar day as ``YYYY-MM-DD``."""
    return date.isoformat()


def iter_days(start: dt.date, end: dt.date) -> Iterator[dt.date]:
    """Yield each day in ``[start, end)`` in ascending order."""
    current = start
    while current < end:
        yield current
        current = add_days(current, 1)


def enumerate_days(start: dt.date, end: dt.date) -> list[str]:
    """List every day in ``[start, end)`` as ISO strings.

    Args:
        start: First day (inclusive)
        end: Last day (exclusive)

    Returns:
        Ascending ISO date strings; empty when ``start >= end``
    """
    return [to_iso(d) for d in iter_days(start, end)]


def nights_between(start: dt.date, end: dt.date) -> int:
    """Number of nights in ``[start, end)``, never negative."""
    return max((end - start).days, 0)
