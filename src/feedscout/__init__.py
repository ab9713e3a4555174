"""
feedscout - Discover feeds, blogrolls and WebSub hubs of any website.

Candidate URIs are collected from known hosting platforms, page markup, the
HTTP Link header and well-known paths, then fetched and validated with
bounded concurrency.

Usage:
    feedscout https://example.com
    feedscout blogrolls https://example.com -t comprehensive
"""

__version__ = "0.1.0"

from feedscout.blogrolls import discover_blogrolls
from feedscout.core.exceptions import FeedscoutError, MalformedUriError
from feedscout.core.interfaces import (
    CallablePlatformHandler,
    PlatformHandler,
    UriDiscoveryStrategy,
)
from feedscout.core.models import (
    BlogrollInfo,
    DiscoverOptions,
    ExtractInput,
    FeedInfo,
    FetchResponse,
    HubResult,
    InputData,
    InvalidResult,
    LinkSelector,
    Progress,
    ValidResult,
)
from feedscout.core.urls import normalize_url
from feedscout.feeds import discover_feeds
from feedscout.fetch import HttpxFetcher
from feedscout.hubs import discover_hubs
from feedscout.platforms import DEFAULT_PLATFORM_HANDLERS, build_platform_handlers

__all__ = [
    "__version__",
    # Entry points
    "discover_blogrolls",
    "discover_feeds",
    "discover_hubs",
    # Models
    "BlogrollInfo",
    "DiscoverOptions",
    "ExtractInput",
    "FeedInfo",
    "FetchResponse",
    "HubResult",
    "InputData",
    "InvalidResult",
    "LinkSelector",
    "Progress",
    "ValidResult",
    # Interfaces
    "CallablePlatformHandler",
    "PlatformHandler",
    "UriDiscoveryStrategy",
    # Platforms
    "DEFAULT_PLATFORM_HANDLERS",
    "build_platform_handlers",
    # Utilities
    "FeedscoutError",
    "HttpxFetcher",
    "MalformedUriError",
    "normalize_url",
]
