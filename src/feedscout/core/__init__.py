"""Core models and interfaces for feedscout."""

from feedscout.core.exceptions import FeedscoutError, MalformedUriError
from feedscout.core.interfaces import (
    CallablePlatformHandler,
    PlatformHandler,
    UriDiscoveryStrategy,
)
from feedscout.core.models import (
    BlogrollInfo,
    DiscoverInput,
    DiscoverOptions,
    DiscoverResult,
    ExtractInput,
    FeedInfo,
    FetchResponse,
    GuessMethodOptions,
    HeadersMethodOptions,
    HtmlMethodOptions,
    HubResult,
    InputData,
    InvalidResult,
    LinkSelector,
    MethodsDefaults,
    NormalizedInput,
    PlatformMethodOptions,
    Progress,
    ValidResult,
)

__all__ = [
    "FeedscoutError",
    "MalformedUriError",
    "CallablePlatformHandler",
    "PlatformHandler",
    "UriDiscoveryStrategy",
    "BlogrollInfo",
    "DiscoverInput",
    "DiscoverOptions",
    "DiscoverResult",
    "ExtractInput",
    "FeedInfo",
    "FetchResponse",
    "GuessMethodOptions",
    "HeadersMethodOptions",
    "HtmlMethodOptions",
    "HubResult",
    "InputData",
    "InvalidResult",
    "LinkSelector",
    "MethodsDefaults",
    "NormalizedInput",
    "PlatformMethodOptions",
    "Progress",
    "ValidResult",
]
