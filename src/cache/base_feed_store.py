# src/cache/base_feed_store.py — v1
"""Abstract feed store interface.

Every operation is awaitable and reports exactly once. Failures are
returned as values (Failure outcome or a FeedStoreError), never raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from feedcache.cache.models import CacheEntry, MutationOutcome, RetrievalOutcome


class BaseFeedStore(ABC):
    """Unified interface for feed cache storage backends."""

    @abstractmethod
    async def retrieve(self) -> RetrievalOutcome:
        """Read the current entry without side effects."""

    @abstractmethod
    async def insert(self, entry: CacheEntry) -> MutationOutcome:
        """Replace any existing entry with ``entry``."""

    @abstractmethod
    async def delete(self) -> MutationOutcome:
        """Remove the existing entry. Succeeds on an empty store."""

    async def close(self) -> None:
        """Release backend resources."""

    async def __aenter__(self) -> BaseFeedStore:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
