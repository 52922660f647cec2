# src/cache/errors.py — v1
"""Failures reported by feed store backends."""

from __future__ import annotations

from feedcache.feed.errors import FeedError


class FeedStoreError(FeedError):
    """Base class for store failures (retrieve, insert, delete)."""


class CacheRetrievalError(FeedStoreError):
    """Persisted state could not be read or decoded."""


class CacheInsertionError(FeedStoreError):
    """New state could not be durably written."""


class CacheDeletionError(FeedStoreError):
    """Persisted state could not be removed."""
