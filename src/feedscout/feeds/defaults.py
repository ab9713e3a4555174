"""Default option tables for feed discovery."""

from feedscout.core.models import (
    GuessMethodOptions,
    HeadersMethodOptions,
    HtmlMethodOptions,
    LinkSelector,
    MethodsDefaults,
    PlatformMethodOptions,
)
from feedscout.platforms.registry import DEFAULT_PLATFORM_HANDLERS

FEED_METHODS = ("platform", "html", "headers", "guess")

MIME_TYPES = (
    "application/rss+xml",
    "text/rss+xml",
    "application/x-rss+xml",
    "application/rss",
    "application/atom+xml",
    "text/atom+xml",
    "application/feed+json",
    "application/json",
    "application/rdf+xml",
    "text/rdf+xml",
    "application/atom",
    "application/xml",
    "text/xml",
)

URIS_MINIMAL = (
    "/feed",
    "/rss",
    "/atom.xml",
    "/feed.xml",
    "/rss.xml",
    "/index.xml",
)

URIS_BALANCED = URIS_MINIMAL + (
    "/feed/",
    "/index.atom",
    "/index.rss",
    "/feed.json",
)

URIS_COMPREHENSIVE = URIS_BALANCED + (
    "/atom",
    "/feed.rss",
    "/feed.atom",
    "/feed.rss.xml",
    "/feed.atom.xml",
    "/index.rss.xml",
    "/index.atom.xml",
    "/?feed=rss",
    "/?feed=rss2",
    "/?feed=atom",
    "/?format=rss",
    "/?format=atom",
    "/?rss=1",
    "/?atom=1",
    "/.rss",
    "/f.json",
    "/f.rss",
    "/json",
    "/.feed",
    "/comments/feed",
    "/feeds/posts/default",
)

URI_TIERS = {
    "minimal": URIS_MINIMAL,
    "balanced": URIS_BALANCED,
    "comprehensive": URIS_COMPREHENSIVE,
}

IGNORED_URIS = ("wp-json/oembed/", "wp-json/wp/")

ANCHOR_LABELS = ("rss", "feed", "atom", "subscribe", "syndicate", "json feed")

LINK_SELECTORS = (
    LinkSelector(rel="alternate", types=MIME_TYPES),
    LinkSelector(rel="feed"),
)

DEFAULT_HTML_OPTIONS = HtmlMethodOptions(
    link_selectors=LINK_SELECTORS,
    anchor_uris=URIS_COMPREHENSIVE,
    anchor_ignored_uris=IGNORED_URIS,
    anchor_labels=ANCHOR_LABELS,
)

DEFAULT_HEADERS_OPTIONS = HeadersMethodOptions(link_selectors=LINK_SELECTORS)

DEFAULT_GUESS_OPTIONS = GuessMethodOptions(uris=URIS_BALANCED)

DEFAULT_PLATFORM_OPTIONS = PlatformMethodOptions(handlers=DEFAULT_PLATFORM_HANDLERS)

FEED_DEFAULTS = MethodsDefaults(
    platform=DEFAULT_PLATFORM_OPTIONS,
    html=DEFAULT_HTML_OPTIONS,
    headers=DEFAULT_HEADERS_OPTIONS,
    guess=DEFAULT_GUESS_OPTIONS,
)
