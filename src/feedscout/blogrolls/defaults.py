"""Default option tables for blogroll (OPML) discovery."""

from feedscout.core.models import (
    GuessMethodOptions,
    HeadersMethodOptions,
    HtmlMethodOptions,
    LinkSelector,
    MethodsDefaults,
    PlatformMethodOptions,
)

BLOGROLL_METHODS = ("html", "headers", "guess")

MIME_TYPES = ("text/x-opml", "application/xml", "text/xml")

URIS_MINIMAL = (
    "/.well-known/recommendations.opml",
    "/blogroll.opml",
    "/opml.xml",
)

URIS_BALANCED = URIS_MINIMAL + (
    "/blogroll.xml",
    "/subscriptions.opml",
    "/recommendations.opml",
)

URIS_COMPREHENSIVE = URIS_BALANCED + (
    "/links.opml",
    "/feeds.opml",
    "/subscriptions.xml",
)

URI_TIERS = {
    "minimal": URIS_MINIMAL,
    "balanced": URIS_BALANCED,
    "comprehensive": URIS_COMPREHENSIVE,
}

ANCHOR_LABELS = ("blogroll", "opml", "subscriptions", "reading list")

LINK_SELECTORS = (
    LinkSelector(rel="blogroll"),
    LinkSelector(rel="outline", types=MIME_TYPES),
)

BLOGROLL_DEFAULTS = MethodsDefaults(
    # no hosting platform publishes blogrolls at a known location
    platform=PlatformMethodOptions(handlers=()),
    html=HtmlMethodOptions(
        link_selectors=LINK_SELECTORS,
        anchor_uris=URIS_COMPREHENSIVE,
        anchor_labels=ANCHOR_LABELS,
    ),
    headers=HeadersMethodOptions(link_selectors=LINK_SELECTORS),
    guess=GuessMethodOptions(uris=URIS_BALANCED),
)
