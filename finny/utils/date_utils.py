"""Date manipulation utilities"""

from datetime import date, datetime, timezone


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)"""
    return (end - start).days


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
