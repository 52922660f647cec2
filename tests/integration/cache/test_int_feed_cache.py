# tests/integration/cache/test_int_feed_cache.py — v1
"""Integration tests: LocalFeedLoader over a real JsonFeedStore.

No external services required.
Coverage targets: local_loader.py, json_store.py, policy.py, cache_factory.py
"""

from __future__ import annotations

import asyncio
import os
import uuid
from datetime import datetime, timedelta

import pytest

from feedcache.cache.cache_factory import create_feed_store
from feedcache.cache.errors import CacheInsertionError, CacheRetrievalError
from feedcache.cache.json_store import JsonFeedStore
from feedcache.cache.models import Empty, Found
from feedcache.config.settings import Settings
from feedcache.feed.local_loader import LocalFeedLoader
from feedcache.feed.models import FeedImage, LoadFailure, LoadSuccess


def _feed(n: int) -> list[FeedImage]:
    return [
        FeedImage(id=uuid.uuid4(), url=f"https://images.example.com/{i}.jpg")
        for i in range(n)
    ]


class _Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def json_store(store_path):
    store = JsonFeedStore(store_path)
    yield store
    store._lane.shutdown(wait=True)


@pytest.fixture
def clock(fixed_now) -> _Clock:
    return _Clock(fixed_now)


@pytest.fixture
def loader(json_store, clock) -> LocalFeedLoader:
    return LocalFeedLoader(json_store, current_date=clock)


class TestFeedCacheRoundTrip:
    @pytest.mark.asyncio
    async def test_empty_cache_loads_nothing(self, loader):
        assert await loader.load() == LoadSuccess([])

    @pytest.mark.asyncio
    async def test_saved_feed_visible_to_new_instances(self, store_path, clock, sample_feed):
        async with JsonFeedStore(store_path) as store:
            async with LocalFeedLoader(store, current_date=clock) as writer:
                assert await writer.save(sample_feed) is None

        async with JsonFeedStore(store_path) as store:
            async with LocalFeedLoader(store, current_date=clock) as reader:
                assert await reader.load() == LoadSuccess(sample_feed)

    @pytest.mark.asyncio
    async def test_last_save_wins(self, loader):
        first, last = _feed(3), _feed(1)
        await loader.save(first)
        await loader.save(last)
        assert await loader.load() == LoadSuccess(last)

    @pytest.mark.asyncio
    async def test_concurrent_saves_leave_one_complete_feed(self, loader, json_store):
        feeds = [_feed(2), _feed(4)]
        errors = await asyncio.gather(*(loader.save(f) for f in feeds))
        assert errors == [None, None]

        outcome = await json_store.retrieve()
        assert isinstance(outcome, Found)
        assert [i.id for i in outcome.entry.items] in (
            [i.id for i in f] for f in feeds
        )

    @pytest.mark.asyncio
    async def test_factory_store_shares_file(self, store_path, clock, sample_feed):
        settings = Settings(_env_file=None, store_path=store_path)
        async with create_feed_store(settings) as store:
            await LocalFeedLoader(store, current_date=clock).save(sample_feed)
        assert store_path.exists()


class TestExpiry:
    @pytest.mark.asyncio
    async def test_expired_load_leaves_file(self, loader, clock, store_path, sample_feed):
        await loader.save(sample_feed)
        before = store_path.read_bytes()

        clock.now += timedelta(days=7)
        assert await loader.load() == LoadSuccess([])
        assert store_path.read_bytes() == before

    @pytest.mark.asyncio
    async def test_fresh_until_just_before_seven_days(self, loader, clock, sample_feed):
        await loader.save(sample_feed)
        clock.now += timedelta(days=7) - timedelta(microseconds=1)
        assert await loader.load() == LoadSuccess(sample_feed)

    @pytest.mark.asyncio
    async def test_validate_deletes_expired(self, loader, clock, store_path, sample_feed):
        await loader.save(sample_feed)
        clock.now += timedelta(days=8)
        await loader.validate_cache()
        assert not store_path.exists()

    @pytest.mark.asyncio
    async def test_validate_keeps_fresh(self, loader, clock, store_path, sample_feed):
        await loader.save(sample_feed)
        clock.now += timedelta(days=1)
        await loader.validate_cache()
        assert await loader.load() == LoadSuccess(sample_feed)

    @pytest.mark.asyncio
    async def test_save_resets_freshness(self, loader, clock, sample_feed):
        await loader.save(_feed(1))
        clock.now += timedelta(days=6)
        await loader.save(sample_feed)
        clock.now += timedelta(days=6)
        assert await loader.load() == LoadSuccess(sample_feed)


class TestCorruption:
    @pytest.mark.asyncio
    async def test_corrupt_file_fails_then_validate_clears(self, loader, store_path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text('{"items": [', encoding="utf-8")

        result = await loader.load()
        assert isinstance(result, LoadFailure)
        assert isinstance(result.error, CacheRetrievalError)
        assert store_path.exists()

        await loader.validate_cache()
        assert not store_path.exists()
        assert await loader.load() == LoadSuccess([])

    @pytest.mark.asyncio
    async def test_save_overwrites_corrupt_file(self, loader, store_path, sample_feed):
        store_path.parent.mkdir(parents=True)
        store_path.write_bytes(b"\xff\xfe")
        assert await loader.save(sample_feed) is None
        assert await loader.load() == LoadSuccess(sample_feed)

    @pytest.mark.asyncio
    async def test_failed_insert_after_delete_leaves_cache_empty(
        self, loader, json_store, sample_feed, monkeypatch
    ):
        await loader.save(_feed(2))

        def _deny(src, dst):
            raise PermissionError("read-only medium")

        monkeypatch.setattr(os, "replace", _deny)
        error = await loader.save(sample_feed)
        monkeypatch.undo()

        assert isinstance(error, CacheInsertionError)
        assert await json_store.retrieve() == Empty()
        assert await loader.load() == LoadSuccess([])
