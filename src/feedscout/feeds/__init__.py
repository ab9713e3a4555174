"""Feed discovery (RSS, Atom, RDF and JSON Feed)."""

import dataclasses
from typing import Optional

from feedscout.core.models import DiscoverInput, DiscoverOptions, DiscoverResult, FeedInfo
from feedscout.core.urls import normalize_url
from feedscout.engine.discover import discover
from feedscout.feeds.defaults import (
    FEED_DEFAULTS,
    FEED_METHODS,
    URI_TIERS,
    URIS_BALANCED,
    URIS_COMPREHENSIVE,
    URIS_MINIMAL,
)
from feedscout.feeds.extractors import detect_feed_format, extract_feed
from feedscout.fetch import HttpxFetcher


async def discover_feeds(
    input: DiscoverInput,
    options: Optional[DiscoverOptions] = None,
) -> list[DiscoverResult[FeedInfo]]:
    """Discover feeds for a page or site.

    Args:
        input: Page URL, or ``InputData`` with already fetched content/headers.
        options: Discovery options. Unset callables default to an
            ``HttpxFetcher``, ``extract_feed`` and ``normalize_url``; unset
            methods default to platform, html, headers and guess.

    Returns:
        Feed results in completion order.

    Example:
        >>> results = await discover_feeds("https://example.com")
        >>> [result.url for result in results]
    """
    options = options or DiscoverOptions()
    options = dataclasses.replace(
        options,
        extract_fn=options.extract_fn or extract_feed,
        normalize_url_fn=options.normalize_url_fn or normalize_url,
    )

    if options.fetch_fn is not None:
        return await discover(input, options, FEED_DEFAULTS, FEED_METHODS)

    async with HttpxFetcher() as fetcher:
        return await discover(
            input, dataclasses.replace(options, fetch_fn=fetcher), FEED_DEFAULTS, FEED_METHODS
        )


__all__ = [
    "FEED_DEFAULTS",
    "FEED_METHODS",
    "URI_TIERS",
    "URIS_BALANCED",
    "URIS_COMPREHENSIVE",
    "URIS_MINIMAL",
    "detect_feed_format",
    "discover_feeds",
    "extract_feed",
]
