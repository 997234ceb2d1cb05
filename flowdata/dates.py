"""Parsing and formatting of the API's ISO-8601 UTC date strings."""

from __future__ import annotations

import re
from datetime import datetime, timezone

__all__ = [
    "MAX_TIME",
    "date_string_valid",
    "time_point_from_date_string",
    "date_string_from_time_point",
]

# Returned for strings that cannot be parsed and used as "never".
MAX_TIME = datetime.max.replace(tzinfo=timezone.utc)

_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,6}))?([A-Za-z]+)"
)


def _parse(date: str) -> datetime | None:
    if not isinstance(date, str):
        return None
    match = _DATE_PATTERN.fullmatch(date)
    if match is None:
        return None
    year, month, day, hour, minute, second, fraction, _zone = match.groups()
    microsecond = int(fraction.ljust(6, "0")) if fraction else 0
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=timezone.utc,
        )
    except ValueError:
        return None


def date_string_valid(date: str) -> bool:
    """Return True if the string is a date in the API's format."""
    return _parse(date) is not None


def time_point_from_date_string(date: str) -> datetime:
    """Parse an API date string as UTC; unparseable strings give MAX_TIME."""
    parsed = _parse(date)
    return MAX_TIME if parsed is None else parsed


def date_string_from_time_point(time_point: datetime) -> str:
    """Format a datetime as a UTC date string, e.g. 2022-04-16T13:16:00Z.

    Naive datetimes are taken to be UTC already.
    """
    if time_point.tzinfo is not None:
        time_point = time_point.astimezone(timezone.utc)
    return time_point.strftime("%Y-%m-%dT%H:%M:%SZ")