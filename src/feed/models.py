# src/feed/models.py — v1
"""Public feed models: FeedImage and the load result union."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union
from uuid import UUID

from pydantic import AnyUrl, BaseModel, ConfigDict

from feedcache.feed.errors import FeedError


class FeedImage(BaseModel):
    """A feed item as seen by consumers."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    description: str | None = None
    location: str | None = None
    url: AnyUrl


@dataclass(frozen=True)
class LoadSuccess:
    """Loaded items, possibly none."""

    items: list[FeedImage] = field(default_factory=list)


@dataclass(frozen=True)
class LoadFailure:
    """The loader could not produce a feed."""

    error: FeedError


LoadResult = Union[LoadSuccess, LoadFailure]
