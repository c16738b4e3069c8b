"""
Date range helpers for the month calendar.

Pure functions over ``date``/``datetime`` values: month and week boundaries,
day stepping and same-day comparison. Weekdays use Python numbering
(Monday = 0 ... Sunday = 6).
"""

from __future__ import annotations

import calendar
from collections.abc import Iterator
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

# Weeks start on Sunday unless configured otherwise
DEFAULT_WEEK_START = calendar.SUNDAY

_WEEKDAY_NAMES = {
    "monday": calendar.MONDAY,
    "tuesday": calendar.TUESDAY,
    "wednesday": calendar.WEDNESDAY,
    "thursday": calendar.THURSDAY,
    "friday": calendar.FRIDAY,
    "saturday": calendar.SATURDAY,
    "sunday": calendar.SUNDAY,
}


def to_date(value: date | datetime) -> date:
    """Drop the time component of ``value``."""
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_month(value: date | datetime) -> date:
    """First day of the month containing ``value``."""
    return to_date(value).replace(day=1)


def end_of_month(value: date | datetime) -> date:
    """Last day of the month containing ``value``."""
    day = to_date(value)
    _, last = calendar.monthrange(day.year, day.month)
    return day.replace(day=last)


def start_of_week(value: date | datetime, week_start: int = DEFAULT_WEEK_START) -> date:
    """First day of the week containing ``value``."""
    day = to_date(value)
    return day - timedelta(days=(day.weekday() - week_start) % 7)


def end_of_week(value: date | datetime, week_start: int = DEFAULT_WEEK_START) -> date:
    """Last day of the week containing ``value``."""
    return start_of_week(value, week_start) + timedelta(days=6)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""
    return value + relativedelta(months=months)


def is_same_day(left: date | datetime, right: date | datetime) -> bool:
    """True when both values share year, month and day, ignoring time of day."""
    return to_date(left) == to_date(right)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    day = start
    while day <= end:
        yield day
        day = add_days(day, 1)


def parse_week_start(value: str | int | None, default: int = DEFAULT_WEEK_START) -> int:
    """Parse a configured week start ("sunday", "mon", "6") into a weekday number.

    Raises:
        ValueError: If the value names no weekday
    """
    if value is None:
        return default
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValueError(f"Week start must be between 0 and 6, got {value}")

    text = value.strip().lower()
    if not text:
        return default
    if text.isdigit():
        return parse_week_start(int(text), default)
    for name, number in _WEEKDAY_NAMES.items():
        if len(text) >= 3 and name.startswith(text):
            return number
    raise ValueError(f"Unknown week start: {value!r}")


def weekday_name(weekday: int) -> str:
    return calendar.day_name[weekday]
