"""Datetime utilities for common operations."""

from datetime import datetime, timedelta, timezone
from typing import Optional


def now() -> datetime:
    """Get current datetime in UTC."""
    return datetime.now(timezone.utc)


def current_year() -> int:
    """Get the current calendar year in UTC."""
    return now().year


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to an aware UTC value.

    Naive values are treated as UTC, which is how every timestamp is stored.

    Args:
        dt: Datetime to normalize

    Returns:
        Aware UTC datetime or None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 in UTC with millisecond precision.

    Example:
        2026-03-01T09:30:00.000Z
    """
    value = ensure_utc(dt)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def add_days(dt: datetime, days: int) -> datetime:
    """
    Add days to a datetime.

    Args:
        dt: Base datetime
        days: Number of days to add (can be negative)

    Returns:
        New datetime
    """
    return dt + timedelta(days=days)


def is_within(dt: datetime, start: datetime, end: datetime) -> bool:
    """Check whether dt lies in the closed range [start, end]."""
    value = ensure_utc(dt)
    return ensure_utc(start) <= value <= ensure_utc(end)
