"""
UTC datetime helpers.

Post timestamps are stored and returned as timezone-aware UTC. Use these
instead of datetime.now() or datetime.utcnow().
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current UTC datetime with timezone info."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a datetime to UTC-aware.

    Naive values are assumed to be UTC; aware values are converted.
    Use at repository boundaries.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
