# src/cache/json_store.py — v2
"""JSON file-based feed store (default FEEDCACHE_STORE_BACKEND=json).

Keeps the single cache entry as one JSON document at a fixed path.

Writes never touch the canonical file in place: the new document is written
to a temporary file in the same directory, fsynced, then moved over the
canonical path with os.replace. Readers therefore see either the previous
document or the new one, never a truncated mix.

All operations on one instance run on a dedicated single-thread executor,
so they execute one at a time in the order they were submitted and their
completions are delivered in that same order.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, TypeVar

from pydantic import ValidationError

from feedcache.cache.base_feed_store import BaseFeedStore
from feedcache.cache.errors import (
    CacheDeletionError,
    CacheInsertionError,
    CacheRetrievalError,
    FeedStoreError,
)
from feedcache.cache.models import (
    CacheEntry,
    Empty,
    Failure,
    Found,
    MutationOutcome,
    RetrievalOutcome,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFeedStore(BaseFeedStore):
    """File-backed feed store with atomic replace and a serial execution lane."""

    def __init__(self, store_path: Path | str) -> None:
        self._path = Path(store_path).expanduser()
        self._lane = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="feedcache-store"
        )

    @property
    def store_path(self) -> Path:
        return self._path

    async def retrieve(self) -> RetrievalOutcome:
        """Read the cached entry."""
        return await self._submit(self._retrieve)

    async def insert(self, entry: CacheEntry) -> MutationOutcome:
        """Atomically replace the cached entry."""
        return await self._submit(self._insert, entry)

    async def delete(self) -> MutationOutcome:
        """Remove the cached entry."""
        return await self._submit(self._delete)

    async def close(self) -> None:
        """Stop accepting work. Already queued operations still run."""
        self._lane.shutdown(wait=False)

    async def _submit(self, operation: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._lane, operation, *args)

    # --- Lane operations (run on the store thread) ---

    def _retrieve(self) -> RetrievalOutcome:
        try:
            data = self._path.read_bytes()
        except FileNotFoundError:
            return Empty()
        except OSError as e:
            logger.warning("Failed to read feed cache %s: %s", self._path, e)
            return Failure(
                _chain(CacheRetrievalError(f"Cannot read {self._path}"), e)
            )

        try:
            entry = CacheEntry.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Failed to decode feed cache %s: %s", self._path, e)
            return Failure(
                _chain(CacheRetrievalError(f"Cannot decode {self._path}"), e)
            )
        return Found(entry)

    def _insert(self, entry: CacheEntry) -> MutationOutcome:
        payload = entry.model_dump_json(indent=2)
        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = Path(tmp.name)
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink(missing_ok=True)
            logger.warning("Failed to write feed cache %s: %s", self._path, e)
            return _chain(CacheInsertionError(f"Cannot write {self._path}"), e)

        logger.debug("Cached %d feed items at %s", len(entry.items), self._path)
        return None

    def _delete(self) -> MutationOutcome:
        try:
            self._path.unlink()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning("Failed to delete feed cache %s: %s", self._path, e)
            return _chain(CacheDeletionError(f"Cannot delete {self._path}"), e)

        logger.debug("Deleted feed cache at %s", self._path)
        return None


def _chain(error: FeedStoreError, cause: BaseException) -> FeedStoreError:
    error.__cause__ = cause
    return error
