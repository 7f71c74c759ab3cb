"""Core utilities for Campaign Access."""

from __future__ import annotations

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Returns:
        datetime: Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def to_date(value: date | datetime | str) -> date:
    """Normalise a date, datetime or ISO string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Keep the calendar date as written, without shifting to UTC
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


__all__ = [
    "utc_now",
    "to_date",
]
