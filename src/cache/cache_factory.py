# src/cache/cache_factory.py — v3
"""Factory for feed store instantiation."""

from __future__ import annotations

from feedcache.cache.base_feed_store import BaseFeedStore
from feedcache.config.settings import Settings


def create_feed_store(settings: Settings | None = None) -> BaseFeedStore:
    """Instantiate the configured store backend.

    Args:
        settings: Application settings. Defaults to the JSON backend at the
            default store path.

    Returns:
        Configured BaseFeedStore implementation.
    """
    settings = settings or Settings(_env_file=None)  # type: ignore[call-arg]
    backend = settings.store_backend

    if backend == "json":
        from feedcache.cache.json_store import JsonFeedStore
        return JsonFeedStore(store_path=settings.store_path)

    if backend == "memory":
        from feedcache.cache.memory_store import InMemoryFeedStore
        return InMemoryFeedStore()

    raise ValueError(f"Unsupported store backend: {backend!r}")
