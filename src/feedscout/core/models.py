"""Data models for feedscout."""

from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Generic,
    Literal,
    Mapping,
    Optional,
    Sequence,
    TypeVar,
    Union,
)

import httpx

if TYPE_CHECKING:
    from feedscout.core.interfaces import PlatformHandler

T = TypeVar("T")

METHOD_NAMES = ("platform", "html", "headers", "guess")


@dataclass(frozen=True)
class LinkSelector:
    """Accepts a ``<link>`` or Link header entry by relation and MIME type.

    When ``types`` is None any type (or none at all) is accepted.
    """

    rel: str
    types: Optional[tuple[str, ...]] = None


@dataclass
class InputData:
    """Pre-fetched data for a page, used instead of fetching its URL."""

    url: str
    content: Optional[str] = None
    headers: Optional[Union[httpx.Headers, Mapping[str, str]]] = None


DiscoverInput = Union[str, InputData]


@dataclass(frozen=True)
class NormalizedInput:
    """Canonical input shape consumed by every generator."""

    url: str
    content: Optional[str] = None
    headers: Optional[httpx.Headers] = None


@dataclass
class FetchResponse:
    """Response returned by a fetch function.

    ``url`` is the final URL after redirects.
    """

    url: str
    body: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    status: int = 200

    def __post_init__(self) -> None:
        if not isinstance(self.headers, httpx.Headers):
            self.headers = httpx.Headers(self.headers or {})


@dataclass(frozen=True)
class ExtractInput:
    """What an extractor gets to look at for one candidate."""

    url: str
    content: str
    headers: Optional[httpx.Headers] = None


@dataclass(frozen=True)
class ValidResult(Generic[T]):
    """A candidate confirmed to be the resource being looked for."""

    url: str
    data: T
    is_valid: Literal[True] = True


@dataclass(frozen=True)
class InvalidResult:
    """A candidate that was checked and rejected (or failed to load)."""

    url: str
    error: Optional[BaseException] = None
    is_valid: Literal[False] = False


DiscoverResult = Union[ValidResult[T], InvalidResult]


@dataclass(frozen=True)
class Progress:
    """Cumulative progress of a validation run."""

    tested: int
    total: int
    found: int
    current: str


FetchFn = Callable[[str], Awaitable[FetchResponse]]
ExtractFn = Callable[[ExtractInput], Union[DiscoverResult, Awaitable[DiscoverResult]]]
NormalizeUrlFn = Callable[[str, Optional[str]], str]
ProgressFn = Callable[[Progress], None]


@dataclass(frozen=True)
class HtmlMethodOptions:
    """Options for discovering candidates in HTML markup."""

    link_selectors: tuple[LinkSelector, ...] = ()
    anchor_uris: tuple[str, ...] = ()
    anchor_ignored_uris: tuple[str, ...] = ()
    anchor_labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class HeadersMethodOptions:
    """Options for discovering candidates in the HTTP Link header."""

    link_selectors: tuple[LinkSelector, ...] = ()


@dataclass(frozen=True)
class GuessMethodOptions:
    """Options for guessing well-known resource paths."""

    uris: tuple[str, ...] = ()
    additional_base_urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlatformMethodOptions:
    """Ordered platform handler table consulted first-match."""

    handlers: tuple["PlatformHandler", ...] = ()


MethodOptions = Union[
    HtmlMethodOptions, HeadersMethodOptions, GuessMethodOptions, PlatformMethodOptions
]

MethodsConfig = Union[
    Sequence[str],
    Mapping[str, Union[bool, MethodOptions, Mapping[str, Any]]],
]


@dataclass(frozen=True)
class MethodsDefaults:
    """Per-product default options for each discovery method."""

    platform: PlatformMethodOptions = PlatformMethodOptions()
    html: HtmlMethodOptions = HtmlMethodOptions()
    headers: HeadersMethodOptions = HeadersMethodOptions()
    guess: GuessMethodOptions = GuessMethodOptions()


@dataclass
class MethodsPlan:
    """Resolved options for the methods enabled in a single discovery call."""

    platform: Optional[PlatformMethodOptions] = None
    html: Optional[HtmlMethodOptions] = None
    headers: Optional[HeadersMethodOptions] = None
    guess: Optional[GuessMethodOptions] = None


@dataclass
class DiscoverOptions:
    """Options for a discovery call.

    Unset callables are filled in by the product entry points
    (``discover_feeds``, ``discover_blogrolls``).
    """

    methods: Optional[MethodsConfig] = None
    fetch_fn: Optional[FetchFn] = None
    extract_fn: Optional[ExtractFn] = None
    normalize_url_fn: Optional[NormalizeUrlFn] = None
    concurrency: int = 3
    stop_on_first: bool = False
    include_invalid: bool = False
    on_progress: Optional[ProgressFn] = None
    additional_uris: Sequence[str] = ()

    def __post_init__(self) -> None:
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")


@dataclass(frozen=True)
class FeedInfo:
    """Metadata of a discovered feed."""

    format: Literal["rss", "atom", "rdf", "json"]
    title: Optional[str] = None
    description: Optional[str] = None
    site_url: Optional[str] = None


@dataclass(frozen=True)
class BlogrollInfo:
    """Metadata of a discovered OPML blogroll."""

    title: Optional[str] = None


@dataclass(frozen=True)
class HubResult:
    """A WebSub hub and the topic URL it notifies about."""

    hub: str
    topic: str
