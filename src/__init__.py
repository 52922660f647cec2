"""feedcache: a crash-safe local cache for a remote image feed."""

from feedcache.version import __version__

__all__ = ["__version__"]
