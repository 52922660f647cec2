# src/remote/remote_loader.py — v1
"""Feed loader fetching from the remote API."""

from __future__ import annotations

import logging

from feedcache.feed.base_loader import FeedLoader
from feedcache.feed.errors import ConnectivityError, InvalidDataError
from feedcache.feed.models import LoadFailure, LoadResult, LoadSuccess
from feedcache.logging.context import operation_context
from feedcache.remote.feed_items_mapper import map_feed_items
from feedcache.remote.http_client import HTTPClient

logger = logging.getLogger(__name__)


class RemoteFeedLoader(FeedLoader):
    """Loads the feed from ``url`` through an HTTPClient."""

    def __init__(self, url: str, client: HTTPClient) -> None:
        self._url = url
        self._client = client

    async def load(self) -> LoadResult:
        with operation_context("fetch", source=self._url):
            try:
                response = await self._client.get(self._url)
            except ConnectivityError as e:
                return LoadFailure(e)

            try:
                items = map_feed_items(response.body, response.status_code)
            except InvalidDataError as e:
                logger.warning("Rejected feed from %s: %s", self._url, e)
                return LoadFailure(e)

            logger.info("Fetched %d feed items", len(items))
            return LoadSuccess(items)
