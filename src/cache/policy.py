# src/cache/policy.py — v1
"""Cache freshness policy.

A cached feed is valid for a fixed number of whole calendar days after it
was stored. Day arithmetic is done in UTC so the decision never depends on
the local timezone of the process. Naive datetimes are read as UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

MAX_CACHE_AGE_DAYS = 7


def validate(timestamp: datetime, against: datetime) -> bool:
    """Return True while ``against`` is strictly before the expiry instant.

    Args:
        timestamp: When the cache entry was stored.
        against: Reference time, usually "now".

    Returns:
        False once ``against`` reaches ``timestamp + MAX_CACHE_AGE_DAYS``,
        or when that instant is not representable.
    """
    try:
        max_cache_age = _as_utc(timestamp) + timedelta(days=MAX_CACHE_AGE_DAYS)
        return _as_utc(against) < max_cache_age
    except OverflowError:
        return False


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
