# src/feed/errors.py — v1
"""Error kinds reported by feed loaders and cache stores.

Store and loader failures are returned as values rather than raised, so
these classes mostly travel inside outcome objects. The original cause is
kept on ``__cause__``.
"""

from __future__ import annotations


class FeedError(Exception):
    """Base class for every feed-related failure."""


class ConnectivityError(FeedError):
    """Upstream feed endpoint could not be reached."""


class InvalidDataError(FeedError):
    """Upstream payload failed status or schema validation."""


class LoaderClosedError(FeedError):
    """Operation requested on a loader that was already torn down."""
