# src/feed/base_loader.py — v1
"""Abstract feed loader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from feedcache.feed.models import LoadResult


class FeedLoader(ABC):
    """Anything that can produce a feed."""

    @abstractmethod
    async def load(self) -> LoadResult:
        """Load the feed. Failures are returned as LoadFailure, not raised."""
