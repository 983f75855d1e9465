"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the camera backend.
Every timestamp that is persisted or compared is timezone-aware UTC.

Functions:
- utc_now(): Returns timezone-aware UTC datetime
- ensure_utc(): Normalize naive/aware datetimes to UTC
- to_iso(): Convert datetime object to ISO 8601 string
- whole_minutes(): Whole minutes in a duration, or None when not positive
"""
from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string in UTC.

    Args:
        dt: datetime object (naive values are treated as UTC)

    Returns:
        ISO 8601 formatted string with a 'Z' suffix, or None if dt is None
    """
    if dt is None:
        return None
    dt = ensure_utc(dt)
    return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")


def whole_minutes(elapsed: Optional[timedelta]) -> Optional[int]:
    """Truncated minutes in a duration, or None when it is missing or not positive"""
    if elapsed is None:
        return None
    elapsed_minutes = elapsed.total_seconds() / 60
    if elapsed_minutes <= 0:
        return None
    return int(elapsed_minutes)

