"""Timestamp helpers for registration/update dates."""

from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime.

    SQLite does not keep tzinfo, so timestamps read back from the store are
    naive even though they were written as UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_update_time(previous: datetime | None) -> datetime:
    """Return a new last-update timestamp that never moves backwards."""
    now = utcnow()
    if previous is None:
        return now
    return max(now, ensure_utc(previous))
