# src/cache/memory_store.py — v1
"""In-memory feed store (FEEDCACHE_STORE_BACKEND=memory).

Nothing survives the process. Useful for tests and for running the loaders
without touching the filesystem. Operations complete without suspending,
so they cannot interleave on one event loop.
"""

from __future__ import annotations

from feedcache.cache.base_feed_store import BaseFeedStore
from feedcache.cache.models import (
    CacheEntry,
    Empty,
    Found,
    MutationOutcome,
    RetrievalOutcome,
)


class InMemoryFeedStore(BaseFeedStore):
    """Feed store holding the cache entry on the instance."""

    def __init__(self, entry: CacheEntry | None = None) -> None:
        self._entry = entry

    async def retrieve(self) -> RetrievalOutcome:
        if self._entry is None:
            return Empty()
        return Found(self._entry)

    async def insert(self, entry: CacheEntry) -> MutationOutcome:
        self._entry = entry
        return None

    async def delete(self) -> MutationOutcome:
        self._entry = None
        return None
