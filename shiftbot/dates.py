"""
Date Helpers

ShiftBoard returns shift start/end times as ISO-8601 strings without a zone
designator (e.g. "2022-06-15T12:00:00"). They are treated as UTC.
"""

import calendar
from datetime import date, datetime, timezone


def parse_shift_datetime(value: str) -> datetime:
    """
    Parse a ShiftBoard date-time string into an aware UTC datetime.

    Accepts a trailing "Z" or an explicit offset; a missing zone means UTC.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def add_months(value: datetime | date, months: int):
    """
    Shift a date or datetime by whole calendar months.

    The day is clamped to the length of the target month, so
    Jan 31 + 1 month is Feb 28 (or 29).
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)
