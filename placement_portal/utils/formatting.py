"""
Display helpers shared by the dashboard.
"""

from datetime import datetime
from typing import Optional


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit if count == 1 else unit + 's'} ago"


def time_ago(then: datetime, now: Optional[datetime] = None) -> str:
    """
    Human label for how long ago `then` was.

    Examples: "42 seconds ago", "1 minute ago", "3 days ago", "2 years ago".
    Months are 30 days and years 12 months.
    """
    now = now or datetime.utcnow()
    seconds = max(int((now - then).total_seconds()), 0)

    if seconds < 60:
        return _plural(seconds, "second")
    minutes = seconds // 60
    if minutes < 60:
        return _plural(minutes, "minute")
    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")
    days = hours // 24
    if days < 30:
        return _plural(days, "day")
    months = days // 30
    if months < 12:
        return _plural(months, "month")
    return _plural(months // 12, "year")


def iso_date(value: datetime) -> str:
    """YYYY-MM-DD part of a timestamp."""
    return value.date().isoformat()
