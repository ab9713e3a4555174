"""Blogroll discovery (OPML reading lists)."""

import dataclasses
from typing import Optional

from feedscout.blogrolls.defaults import (
    BLOGROLL_DEFAULTS,
    BLOGROLL_METHODS,
    URI_TIERS,
    URIS_BALANCED,
    URIS_COMPREHENSIVE,
    URIS_MINIMAL,
)
from feedscout.blogrolls.extractors import extract_blogroll, parse_opml_title
from feedscout.core.models import BlogrollInfo, DiscoverInput, DiscoverOptions, DiscoverResult
from feedscout.core.urls import normalize_url
from feedscout.engine.discover import discover
from feedscout.fetch import HttpxFetcher


async def discover_blogrolls(
    input: DiscoverInput,
    options: Optional[DiscoverOptions] = None,
) -> list[DiscoverResult[BlogrollInfo]]:
    """Discover OPML blogrolls for a page or site.

    Works like ``discover_feeds`` with blogroll defaults: methods html,
    headers and guess, and ``extract_blogroll`` as the extractor.
    """
    options = options or DiscoverOptions()
    options = dataclasses.replace(
        options,
        extract_fn=options.extract_fn or extract_blogroll,
        normalize_url_fn=options.normalize_url_fn or normalize_url,
    )

    if options.fetch_fn is not None:
        return await discover(input, options, BLOGROLL_DEFAULTS, BLOGROLL_METHODS)

    async with HttpxFetcher() as fetcher:
        return await discover(
            input,
            dataclasses.replace(options, fetch_fn=fetcher),
            BLOGROLL_DEFAULTS,
            BLOGROLL_METHODS,
        )


__all__ = [
    "BLOGROLL_DEFAULTS",
    "BLOGROLL_METHODS",
    "URI_TIERS",
    "URIS_BALANCED",
    "URIS_COMPREHENSIVE",
    "URIS_MINIMAL",
    "discover_blogrolls",
    "extract_blogroll",
    "parse_opml_title",
]
