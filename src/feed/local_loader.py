# src/feed/local_loader.py — v1
"""Local feed loader: the cache coordinator sitting in front of a feed store.

Three independent flows share one store:

- load: retrieve and return the cached items while they are fresh, an
  empty feed when the cache is absent or expired. Never mutates the store.
- save: delete the current entry, then insert the new feed stamped with
  the current time. A failed delete aborts the save.
- validate_cache: retrieve and delete the entry when it cannot be read or
  has expired. Never reports an error.

Teardown: after close(), any operation whose store call completes is
suppressed. The store call itself is shielded and always finishes, but the
loader does not continue (a save whose delete lands after teardown never
inserts) and the awaiting caller gets CancelledError instead of a result.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timezone
from typing import Any, TypeVar

from feedcache.cache import policy
from feedcache.cache.base_feed_store import BaseFeedStore
from feedcache.cache.errors import FeedStoreError
from feedcache.cache.models import CacheEntry, Failure, Found, LocalFeedImage
from feedcache.feed.base_loader import FeedLoader
from feedcache.feed.errors import LoaderClosedError
from feedcache.feed.models import FeedImage, LoadFailure, LoadResult, LoadSuccess
from feedcache.logging.context import operation_context

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocalFeedLoader(FeedLoader):
    """Loads, saves and validates the cached feed through a BaseFeedStore."""

    def __init__(
        self,
        store: BaseFeedStore,
        current_date: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._current_date = current_date
        self._closed = False
        self._waiters: set[asyncio.Task[Any]] = set()

    @property
    def closed(self) -> bool:
        return self._closed

    async def load(self) -> LoadResult:
        """Return cached items if still fresh, otherwise an empty feed."""
        with operation_context("load", source="cache"):
            outcome = await self._complete(self._store.retrieve)

            if isinstance(outcome, Failure):
                return LoadFailure(outcome.error)

            if isinstance(outcome, Found):
                entry = outcome.entry
                if policy.validate(entry.timestamp, against=self._current_date()):
                    return LoadSuccess(_to_models(entry.items))
                logger.debug("Cached feed from %s has expired", entry.timestamp)

            return LoadSuccess([])

    async def save(self, feed: Sequence[FeedImage]) -> FeedStoreError | None:
        """Replace the cached feed, resetting its freshness window.

        Returns:
            None on success, otherwise the deletion or insertion error.
        """
        with operation_context("save", source="cache"):
            deletion_error = await self._complete(self._store.delete)
            if deletion_error is not None:
                return deletion_error

            entry = CacheEntry(items=_to_local(feed), timestamp=self._current_date())
            insertion_error = await self._complete(self._store.insert, entry)
            if insertion_error is None:
                logger.info("Saved %d feed items to cache", len(entry.items))
            return insertion_error

    async def validate_cache(self) -> None:
        """Delete the cached feed when it is unreadable or expired."""
        with operation_context("validate", source="cache"):
            outcome = await self._complete(self._store.retrieve)

            if isinstance(outcome, Failure):
                logger.info("Discarding unreadable feed cache: %s", outcome.error)
                await self._complete(self._store.delete)
            elif isinstance(outcome, Found) and not policy.validate(
                outcome.entry.timestamp, against=self._current_date()
            ):
                logger.info("Discarding feed cache from %s", outcome.entry.timestamp)
                await self._complete(self._store.delete)

    async def close(self) -> None:
        """Tear the loader down, suppressing completions still in flight."""
        self._closed = True
        for task in list(self._waiters):
            task.cancel()

    async def __aenter__(self) -> LocalFeedLoader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _complete(
        self, operation: Callable[..., Awaitable[T]], *args: Any
    ) -> T:
        """Run a store operation and deliver its result only if still open."""
        if self._closed:
            raise LoaderClosedError("Feed loader has been closed")

        pending = asyncio.ensure_future(operation(*args))
        waiter = asyncio.current_task()
        if waiter is not None:
            self._waiters.add(waiter)
        try:
            result = await asyncio.shield(pending)
        finally:
            self._waiters.discard(waiter)  # type: ignore[arg-type]

        if self._closed:
            raise asyncio.CancelledError
        return result


def _to_local(feed: Sequence[FeedImage]) -> list[LocalFeedImage]:
    return [
        LocalFeedImage(
            id=image.id,
            description=image.description,
            location=image.location,
            url=image.url,
        )
        for image in feed
    ]


def _to_models(items: Sequence[LocalFeedImage]) -> list[FeedImage]:
    return [
        FeedImage(
            id=item.id,
            description=item.description,
            location=item.location,
            url=item.url,
        )
        for item in items
    ]
