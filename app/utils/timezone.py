"""Timezone helpers for log timestamps.

Workout logs arrive from persistence with or without tzinfo; analysis always
compares in UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC.

    Args:
        dt: Datetime (timezone-aware or naive)

    Returns:
        Datetime in UTC timezone
    """
    if dt.tzinfo is None:
        # Assume UTC if naive
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def hours_between(earlier: datetime, later: datetime) -> float:
    return (to_utc(later) - to_utc(earlier)).total_seconds() / 3600.0
