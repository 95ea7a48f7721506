"""Calendar-day helpers shared by the analytics and calendar services.

Everything here works on ``datetime.date``; ``datetime`` inputs are truncated
to their calendar day so time-of-day never leaks into a comparison. Months
are 0-based (0 = January) to match the calendar navigation contract.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime, timedelta

WEEKDAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def to_day(value) -> date | None:
    """Return the calendar day for ``value`` or ``None`` when it is not a date."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def today_or(value=None) -> date:
    """Resolve an injected "now" (date, datetime or None) to a calendar day."""

    day = to_day(value)
    return day if day is not None else date.today()


def is_same_day(first, second) -> bool:
    a, b = to_day(first), to_day(second)
    return a is not None and a == b


def sunday_index(day: date) -> int:
    """Weekday index with Sunday as 0 (Python's ``weekday()`` starts on Monday)."""

    return (day.weekday() + 1) % 7


def start_of_week(value) -> date:
    """Sunday on or before ``value``."""

    day = to_day(value)
    if day is None:
        raise TypeError(f"expected a date, got {type(value).__name__}")
    return day - timedelta(days=sunday_index(day))


def end_of_week(value) -> date:
    """Saturday on or after ``value``."""

    return start_of_week(value) + timedelta(days=6)


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Roll an out-of-range 0-based month into the neighbouring years."""

    carry, month = divmod(int(month), 12)
    return int(year) + carry, month


def clamp_month(
    year: int,
    month: int,
    *,
    earliest: tuple[int, int] = (MINYEAR, 0),
    latest: tuple[int, int] = (MAXYEAR, 11),
) -> tuple[int, int]:
    """Normalize ``(year, month)`` and pin it into ``[earliest, latest]``.

    ``datetime.date`` only covers years 1-9999, so months outside that span
    resolve to the nearest representable one.
    """

    return min(max(normalize_month(year, month), earliest), latest)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a (0-based) month."""

    year, month = clamp_month(year, month)
    days_in_month = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, 1), date(year, month + 1, days_in_month)


def previous_month(year: int, month: int) -> tuple[int, int]:
    return normalize_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    return normalize_month(year, month + 1)


def shift_months(value, months: int) -> date:
    """First day of the month ``months`` away from ``value``'s month."""

    day = to_day(value)
    if day is None:
        raise TypeError(f"expected a date, got {type(value).__name__}")
    year, month = clamp_month(day.year, day.month - 1 + months)
    return date(year, month + 1, 1)


def iter_days(start: date, end: date):
    """Yield each day from ``start`` to ``end`` inclusive (nothing if reversed)."""

    for offset in range((end - start).days + 1):
        yield start + timedelta(days=offset)


__all__ = [
    "WEEKDAY_NAMES",
    "clamp_month",
    "end_of_week",
    "is_same_day",
    "iter_days",
    "month_bounds",
    "next_month",
    "normalize_month",
    "previous_month",
    "shift_months",
    "start_of_week",
    "sunday_index",
    "to_day",
    "today_or",
]
