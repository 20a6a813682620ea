"""
Date helpers for on-call scheduling.

An on-call "day" runs from the configured start hour (07:00 by default)
until just before that hour on the next calendar day.
"""

from datetime import date, datetime, timedelta
from typing import Union


def effective_on_call_date(dt: datetime, day_start_hour: int = 7) -> date:
    """
    Get the on-call day a moment belongs to.

    Args:
        dt: Local date and time
        day_start_hour: Hour at which a new on-call day begins

    Returns:
        The on-call calendar date
    """
    if dt.hour < day_start_hour:
        dt = dt - timedelta(days=1)
    return dt.date()


def to_ymd(value: Union[date, datetime]) -> str:
    """Format a date as YYYY-MM-DD."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def previous_day(value: date) -> date:
    return value - timedelta(days=1)


def next_day(value: date) -> date:
    return value + timedelta(days=1)
