# src/main.py — v2
"""CLI entry point: fetch, show, validate commands.

Usage:
    feedcache fetch [--url URL]
    feedcache show [--json]
    feedcache validate

Global options (--store, -v) go before the command.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from feedcache.cache.cache_factory import create_feed_store
from feedcache.config.settings import ConfigurationError, Settings, load_settings
from feedcache.feed.local_loader import LocalFeedLoader
from feedcache.feed.models import FeedImage, LoadFailure
from feedcache.logging.logger import setup_logging
from feedcache.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = _load_settings(args)
    except (ConfigurationError, ValueError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="feedcache",
        description=f"feedcache v{__version__}: local cache for a remote image feed",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--store", type=Path, default=None,
        help="Cache file location (default: FEEDCACHE_STORE_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- fetch ---
    p_fetch = subparsers.add_parser(
        "fetch", help="Download the remote feed and replace the local cache",
    )
    p_fetch.add_argument(
        "--url", default=None,
        help="Feed endpoint (default: FEEDCACHE_FEED_URL)",
    )
    p_fetch.set_defaults(func=_cmd_fetch)

    # --- show ---
    p_show = subparsers.add_parser(
        "show", help="Print the cached feed if it is still fresh",
    )
    p_show.add_argument(
        "--json", action="store_true", dest="as_json",
        help="Print items as JSON",
    )
    p_show.set_defaults(func=_cmd_show)

    # --- validate ---
    p_validate = subparsers.add_parser(
        "validate", help="Delete the cached feed if it is expired or unreadable",
    )
    p_validate.set_defaults(func=_cmd_validate)

    return parser


def _load_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.store is not None:
        overrides["store_path"] = args.store
    if getattr(args, "url", None):
        overrides["feed_url"] = args.url
    return load_settings(**overrides)


async def _cmd_fetch(args: argparse.Namespace, settings: Settings) -> int:
    """Fetch the remote feed and save it to the cache."""
    from feedcache.remote.http_client import HttpxClient
    from feedcache.remote.remote_loader import RemoteFeedLoader

    if not settings.feed_url:
        logger.error("No feed URL configured (use --url or FEEDCACHE_FEED_URL)")
        return 1

    client = HttpxClient(timeout=settings.http_timeout)
    store = create_feed_store(settings)
    try:
        result = await RemoteFeedLoader(settings.feed_url, client).load()
        if isinstance(result, LoadFailure):
            logger.error("Fetch failed: %s", result.error)
            return 1

        async with LocalFeedLoader(store) as local:
            error = await local.save(result.items)
        if error is not None:
            logger.error("Could not cache feed: %s", error)
            return 1
    finally:
        await client.close()
        await store.close()

    print(f"Cached {len(result.items)} feed items")
    return 0


async def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    """Print the cached feed."""
    async with create_feed_store(settings) as store:
        async with LocalFeedLoader(store) as local:
            result = await local.load()

    if isinstance(result, LoadFailure):
        logger.error("Could not read cache: %s", result.error)
        return 1

    if args.as_json:
        print(json.dumps([item.model_dump(mode="json") for item in result.items], indent=2))
    elif not result.items:
        print("No fresh feed cached")
    else:
        for item in result.items:
            print(_format_item(item))
    return 0


async def _cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    """Drop the cached feed if it is expired or corrupt."""
    async with create_feed_store(settings) as store:
        async with LocalFeedLoader(store) as local:
            await local.validate_cache()
    return 0


def _format_item(item: FeedImage) -> str:
    fields = [str(item.id), str(item.url)]
    if item.description:
        fields.append(item.description)
    if item.location:
        fields.append(f"@ {item.location}")
    return "  ".join(fields)


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
