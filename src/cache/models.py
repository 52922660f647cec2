# src/cache/models.py — v2
"""Cache domain models: LocalFeedImage, CacheEntry and store outcomes.

A store holds at most one CacheEntry. Retrieval reports one of three
outcomes (Empty, Found, Failure); mutations report an optional error.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Union
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict

from feedcache.cache.errors import FeedStoreError


class LocalFeedImage(BaseModel):
    """Cached representation of a single feed item."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: str | None = None
    location: str | None = None
    url: AnyUrl


class CacheEntry(BaseModel):
    """The single persisted snapshot: ordered items plus the time they were cached."""

    model_config = ConfigDict(frozen=True)

    items: list[LocalFeedImage]
    timestamp: datetime


@dataclass(frozen=True)
class Empty:
    """Nothing is cached."""


@dataclass(frozen=True)
class Found:
    """A cache entry is present."""

    entry: CacheEntry


@dataclass(frozen=True)
class Failure:
    """Persisted state exists but could not be read."""

    error: FeedStoreError


RetrievalOutcome = Union[Empty, Found, Failure]

# None on success.
MutationOutcome = Union[FeedStoreError, None]
