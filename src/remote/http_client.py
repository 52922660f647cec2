# src/remote/http_client.py — v1
"""HTTP client abstraction and its httpx implementation.

Clients return whatever the server answered, including non-200 statuses.
Only transport failures (DNS, refused connection, timeout) raise, and they
raise ConnectivityError so callers never depend on the HTTP library.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from feedcache.feed.errors import ConnectivityError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    """Raw body and status code of a completed request."""

    body: bytes
    status_code: int


class HTTPClient(ABC):
    """Minimal GET-only client used by the remote feed loader."""

    @abstractmethod
    async def get(self, url: str) -> HTTPResponse:
        """Fetch ``url``.

        Raises:
            ConnectivityError: If the request could not be completed.
        """

    async def close(self) -> None:
        """Release connections."""


class HttpxClient(HTTPClient):
    """HTTPClient backed by httpx.AsyncClient."""

    def __init__(
        self, timeout: float = 10.0, client: httpx.AsyncClient | None = None
    ) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=timeout, follow_redirects=True
        )

    async def get(self, url: str) -> HTTPResponse:
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning("GET %s failed: %s", url, e)
            raise ConnectivityError(f"Cannot reach {url}") from e
        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return HTTPResponse(body=response.content, status_code=response.status_code)

    async def close(self) -> None:
        await self._client.aclose()
