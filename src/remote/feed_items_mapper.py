# src/remote/feed_items_mapper.py — v1
"""Decode the remote feed payload into FeedImage models.

Expected payload::

    {"items": [{"id": "<uuid>", "description": "...", "location": "...",
                "image": "https://..."}]}

``description`` and ``location`` may be missing or null; ``id`` and
``image`` are required.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import AnyUrl, BaseModel, ValidationError

from feedcache.feed.errors import InvalidDataError
from feedcache.feed.models import FeedImage

OK_200 = 200


class RemoteFeedItem(BaseModel):
    """Item shape as served by the remote API."""

    id: UUID
    description: str | None = None
    location: str | None = None
    image: AnyUrl

    def to_model(self) -> FeedImage:
        return FeedImage(
            id=self.id,
            description=self.description,
            location=self.location,
            url=self.image,
        )


class _Root(BaseModel):
    items: list[RemoteFeedItem]


def map_feed_items(body: bytes, status_code: int) -> list[FeedImage]:
    """Validate a response and convert its items.

    Raises:
        InvalidDataError: On a non-200 status or a payload that fails
            schema validation.
    """
    if status_code != OK_200:
        raise InvalidDataError(f"Unexpected status code {status_code}")

    try:
        root = _Root.model_validate_json(body)
    except ValidationError as e:
        raise InvalidDataError("Feed payload failed schema validation") from e

    return [item.to_model() for item in root.items]
