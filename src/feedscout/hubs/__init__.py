"""WebSub hub discovery."""

from typing import Optional, Sequence

import structlog

from feedscout.core.models import DiscoverInput, FetchFn, HubResult, NormalizedInput
from feedscout.engine.discover import normalize_input
from feedscout.fetch import HttpxFetcher
from feedscout.hubs.sources import (
    dedupe_hubs,
    discover_hubs_from_feed,
    discover_hubs_from_headers,
    discover_hubs_from_html,
)

logger = structlog.get_logger(__name__)

HUB_METHODS = ("headers", "feed", "html")


def _check_methods(methods: Sequence[str]) -> None:
    unknown = set(methods) - set(HUB_METHODS)
    if unknown:
        raise ValueError(
            f"Unknown hub discovery method(s): {', '.join(sorted(unknown))} "
            f"(expected one of {', '.join(HUB_METHODS)})"
        )


def find_hubs(data: NormalizedInput, methods: Sequence[str] = HUB_METHODS) -> list[HubResult]:
    """Collect hubs from already fetched data, in method order."""
    _check_methods(methods)

    results: list[HubResult] = []
    for method in methods:
        if method == "headers" and data.headers is not None:
            results.extend(discover_hubs_from_headers(data.headers, data.url))
        elif method == "feed" and data.content:
            results.extend(discover_hubs_from_feed(data.content, data.url))
        elif method == "html" and data.content:
            results.extend(discover_hubs_from_html(data.content, data.url))

    return dedupe_hubs(results)


async def discover_hubs(
    input: DiscoverInput,
    methods: Sequence[str] = HUB_METHODS,
    fetch_fn: Optional[FetchFn] = None,
) -> list[HubResult]:
    """Discover the WebSub hubs announced by a page or feed.

    Only the input itself is inspected; no candidates are fetched.

    Args:
        input: Page or feed URL, or ``InputData`` with fetched content/headers.
        methods: Sources to read, any of ``headers``, ``feed`` and ``html``.
        fetch_fn: Fetch function for URL input; defaults to ``HttpxFetcher``.

    Returns:
        Hub/topic pairs without duplicates, in discovery order.

    Raises:
        ValueError: If a method name is unknown or the URL is malformed.
    """
    _check_methods(methods)

    if fetch_fn is not None:
        data = await normalize_input(input, fetch_fn)
    else:
        async with HttpxFetcher() as fetcher:
            data = await normalize_input(input, fetcher)

    results = find_hubs(data, methods)
    logger.debug("Discovered hubs", url=data.url, count=len(results))
    return results


__all__ = [
    "HUB_METHODS",
    "discover_hubs",
    "discover_hubs_from_feed",
    "discover_hubs_from_headers",
    "discover_hubs_from_html",
    "find_hubs",
]
