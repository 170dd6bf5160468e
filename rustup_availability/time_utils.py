"""
Shared date helpers.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Union

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: Union[str, date]) -> date:
    """Return a calendar date from an ISO 8601 string or a date object.

    Raises ValueError when the value is neither.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError(f"Not a date: {value!r}")


def format_date(day: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    return day.strftime(fmt)


def days_back(anchor: date, count: int) -> List[date]:
    """Dates from `anchor` going back in time, newest first, `count` items."""
    return [anchor - timedelta(days=offset) for offset in range(max(count, 0))]
