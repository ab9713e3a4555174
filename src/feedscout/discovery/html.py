"""Discovery strategy reading ``<link>`` and ``<a>`` elements of a page."""

from typing import Optional

import structlog
from bs4 import BeautifulSoup

from feedscout.core.interfaces import UriDiscoveryStrategy
from feedscout.core.models import HtmlMethodOptions, NormalizedInput
from feedscout.core.urls import (
    ends_with_any_of,
    includes_any_of,
    matches_any_of_link_selectors,
    resolve_url,
)

logger = structlog.get_logger(__name__)


class HtmlDiscovery(UriDiscoveryStrategy):
    """Find candidate URIs in page markup."""

    def __init__(self, options: HtmlMethodOptions) -> None:
        self._options = options

    @property
    def name(self) -> str:
        return "html"

    def discover(self, data: NormalizedInput) -> list[str]:
        if not data.content:
            return []
        return discover_uris_from_html(data.content, self._options, data.url)


def discover_uris_from_html(
    html: str,
    options: HtmlMethodOptions,
    base_url: Optional[str] = None,
) -> list[str]:
    """Extract candidate URIs from HTML.

    Accepts ``<link>`` elements whose ``rel``/``type`` match one of the link
    selectors, and ``<a>`` elements whose ``href`` ends with one of the anchor
    URIs or whose text contains one of the anchor labels. Anchors whose
    ``href`` contains an ignored URI are skipped entirely.

    Args:
        html: Page markup.
        options: Selectors and anchor patterns.
        base_url: URL of the page, used to resolve relative references.

    Returns:
        Resolved URIs in document order, without duplicates.
    """
    soup = BeautifulSoup(html, "html.parser")

    # <base href> overrides the document URL for relative references
    base = soup.find("base", href=True)
    if base and base["href"].strip():
        base_url = resolve_url(base["href"], base_url) or base_url

    uris: dict[str, None] = {}

    def accept(href: str) -> None:
        uri = resolve_url(href, base_url)
        if uri is None:
            logger.debug("Skipping unparseable reference", href=href)
            return
        uris.setdefault(uri, None)

    for elem in soup.find_all(["link", "a"], href=True):
        href = elem["href"].strip()
        if not href:
            continue

        if elem.name == "link":
            rel = elem.get("rel")
            if isinstance(rel, list):
                rel = " ".join(rel)
            if matches_any_of_link_selectors(rel, elem.get("type"), options.link_selectors):
                accept(href)
            continue

        if includes_any_of(href, options.anchor_ignored_uris):
            continue

        if ends_with_any_of(href, options.anchor_uris) or includes_any_of(
            elem.get_text(" ", strip=True), options.anchor_labels
        ):
            accept(href)

    return list(uris)
