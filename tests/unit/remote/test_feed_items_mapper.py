# tests/unit/remote/test_feed_items_mapper.py — v1
"""Tests for remote/feed_items_mapper.py — status and schema validation."""

from __future__ import annotations

import json
import uuid

import pytest

from feedcache.feed.errors import InvalidDataError
from feedcache.remote.feed_items_mapper import map_feed_items


def _item_json(**overrides) -> dict:
    item = {
        "id": str(uuid.uuid4()),
        "description": "a description",
        "location": "a location",
        "image": "https://images.example.com/x.jpg",
    }
    item.update(overrides)
    return {k: v for k, v in item.items() if v is not None}


def _payload(*items: dict) -> bytes:
    return json.dumps({"items": list(items)}).encode("utf-8")


class TestMapFeedItems:
    @pytest.mark.parametrize("status", [199, 201, 300, 400, 404, 500])
    def test_rejects_non_200(self, status):
        with pytest.raises(InvalidDataError, match=str(status)):
            map_feed_items(_payload(), status)

    def test_rejects_invalid_json(self):
        with pytest.raises(InvalidDataError):
            map_feed_items(b"invalid json", 200)

    def test_rejects_missing_items_key(self):
        with pytest.raises(InvalidDataError):
            map_feed_items(b"{}", 200)

    def test_rejects_item_without_image(self):
        with pytest.raises(InvalidDataError) as exc_info:
            map_feed_items(_payload({"id": str(uuid.uuid4())}), 200)
        assert exc_info.value.__cause__ is not None

    def test_empty_list(self):
        assert map_feed_items(_payload(), 200) == []

    def test_maps_items_in_order(self):
        first = _item_json()
        second = _item_json(description=None, location=None)
        images = map_feed_items(_payload(first, second), 200)

        assert [str(i.id) for i in images] == [first["id"], second["id"]]
        assert images[0].description == "a description"
        assert images[0].location == "a location"
        assert str(images[0].url) == first["image"]
        assert images[1].description is None
        assert images[1].location is None

    def test_explicit_nulls_accepted(self):
        item = {"id": str(uuid.uuid4()), "description": None, "location": None,
                "image": "https://images.example.com/y.jpg"}
        images = map_feed_items(_payload(item), 200)
        assert images[0].description is None
