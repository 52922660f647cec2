# tests/conftest.py — v2
"""Shared test fixtures for unit and integration tests.

Provides sample feeds, a fixed reference time and temporary store paths.
No network access: remote calls go through httpx.MockTransport or fakes.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest

from feedcache.cache.models import CacheEntry, LocalFeedImage
from feedcache.feed.models import FeedImage
from feedcache.logging.context import clear_context


# === FIXTURES: Sample data ===


@pytest.fixture
def fixed_now() -> datetime:
    """Reference 'now' used by time-sensitive tests."""
    return datetime(2026, 3, 10, 12, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture
def sample_feed() -> list[FeedImage]:
    """Two feed items, one with every optional field missing."""
    return [
        FeedImage(
            id=uuid.uuid4(),
            description="Sunset over the fjord",
            location="Bergen",
            url="https://images.example.com/1.jpg",
        ),
        FeedImage(
            id=uuid.uuid4(),
            url="https://images.example.com/2.jpg",
        ),
    ]


@pytest.fixture
def sample_local_feed(sample_feed: list[FeedImage]) -> list[LocalFeedImage]:
    """sample_feed in its cached representation."""
    return [
        LocalFeedImage(
            id=i.id, description=i.description, location=i.location, url=i.url
        )
        for i in sample_feed
    ]


@pytest.fixture
def sample_entry(
    sample_local_feed: list[LocalFeedImage], fixed_now: datetime
) -> CacheEntry:
    """Cache entry stamped at fixed_now."""
    return CacheEntry(items=sample_local_feed, timestamp=fixed_now)


# === FIXTURES: Temp paths ===


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    """Location for a JsonFeedStore file (not created)."""
    return tmp_path / "cache" / "feed-store.json"


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
