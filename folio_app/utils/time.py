"""
Calendar date helpers for daily price series.

Every computation is anchored on the dates found in the data itself, so the
results for a given history never depend on when they are computed.
"""

from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Coerce a date-like value to a calendar date.

    Args:
        value: date, datetime (time of day is dropped) or ISO-8601 string
            ("YYYY-MM-DD" or a full timestamp)

    Returns:
        Calendar date

    Raises:
        ValueError: If a string cannot be parsed
        TypeError: If the value is of an unsupported type
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    raise TypeError(f"Unsupported date type: {type(value).__name__}")


def days_before(anchor: date, days: int) -> date:
    """Calendar date `days` days before `anchor`."""
    return anchor - timedelta(days=days)


def previous_year_end(anchor: date) -> date:
    """December 31 of the year before `anchor`."""
    return date(anchor.year - 1, 12, 31)


def start_of_year(anchor: date) -> date:
    """January 1 of `anchor`'s year."""
    return date(anchor.year, 1, 1)


def years_between(start: date, end: date, days_per_year: float = 365.25) -> float:
    """Elapsed time between two dates in (fractional) years."""
    return (end - start).days / days_per_year
