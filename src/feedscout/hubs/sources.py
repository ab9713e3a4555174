"""Hub lookups in response headers, page markup and feed documents."""

import json
from typing import Mapping, Union

import httpx
import structlog
from lxml import etree

from feedscout.core.exceptions import MalformedUriError
from feedscout.core.models import HeadersMethodOptions, HtmlMethodOptions, HubResult, LinkSelector
from feedscout.core.urls import normalize_url
from feedscout.discovery.headers import discover_uris_from_headers
from feedscout.discovery.html import discover_uris_from_html

logger = structlog.get_logger(__name__)

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"

HUB_SELECTORS = (LinkSelector(rel="hub"),)
SELF_SELECTORS = (LinkSelector(rel="self"),)


def _pair_with_topic(hubs: list[str], selves: list[str], base_url: str) -> list[HubResult]:
    topic = base_url
    if selves:
        try:
            topic = normalize_url(selves[0], base_url)
        except MalformedUriError:
            logger.debug("Ignoring malformed self link", uri=selves[0])

    results = []
    for hub in hubs:
        try:
            results.append(HubResult(hub=normalize_url(hub, base_url), topic=topic))
        except MalformedUriError:
            logger.debug("Ignoring malformed hub link", uri=hub)
    return results


def discover_hubs_from_headers(
    headers: Union[httpx.Headers, Mapping[str, str]],
    base_url: str,
) -> list[HubResult]:
    """Find ``rel=hub`` entries in the Link header.

    The topic is the first ``rel=self`` entry, or ``base_url`` without one.
    """
    hubs = discover_uris_from_headers(headers, HeadersMethodOptions(HUB_SELECTORS), base_url)
    if not hubs:
        return []
    selves = discover_uris_from_headers(headers, HeadersMethodOptions(SELF_SELECTORS), base_url)
    return _pair_with_topic(hubs, selves, base_url)


def discover_hubs_from_html(content: str, base_url: str) -> list[HubResult]:
    """Find ``<link rel="hub">`` elements in page markup."""
    hubs = discover_uris_from_html(content, HtmlMethodOptions(HUB_SELECTORS), base_url)
    if not hubs:
        return []
    selves = discover_uris_from_html(content, HtmlMethodOptions(SELF_SELECTORS), base_url)
    return _pair_with_topic(hubs, selves, base_url)


def _json_feed_hubs(document: dict, base_url: str) -> list[HubResult]:
    entries = document.get("hubs")
    if not isinstance(entries, list):
        return []
    hubs = [
        hub["url"]
        for hub in entries
        if isinstance(hub, dict) and isinstance(hub.get("url"), str) and hub["url"].strip()
    ]
    if not hubs:
        return []
    feed_url = document.get("feed_url")
    selves = [feed_url] if isinstance(feed_url, str) and feed_url.strip() else []
    return _pair_with_topic(hubs, selves, base_url)


def _xml_feed_links(root: etree._Element) -> list[etree._Element]:
    name = etree.QName(root).localname
    if name == "feed":
        return [child for child in root if child.tag == f"{{{ATOM_NAMESPACE}}}link"]
    if name in ("rss", "RDF"):
        for child in root:
            if isinstance(child.tag, str) and etree.QName(child).localname == "channel":
                return [link for link in child if link.tag == f"{{{ATOM_NAMESPACE}}}link"]
    return []


def _links_with_rel(links: list[etree._Element], rel: str) -> list[str]:
    return [
        link.get("href").strip()
        for link in links
        if link.get("rel") == rel and link.get("href") and link.get("href").strip()
    ]


def discover_hubs_from_feed(content: str, base_url: str) -> list[HubResult]:
    """Find hubs declared inside a feed document.

    Atom feeds and RSS/RDF channels declare them with ``atom:link rel="hub"``
    (topic from ``rel="self"``); JSON Feed lists them under ``hubs`` (topic
    from ``feed_url``). Content that is not a feed yields nothing.
    """
    text = content.lstrip("\ufeff").strip()

    if text.startswith("{"):
        try:
            document = json.loads(text)
        except ValueError:
            return []
        return _json_feed_hubs(document, base_url) if isinstance(document, dict) else []

    try:
        root = etree.fromstring(
            text.encode("utf-8"), etree.XMLParser(resolve_entities=False, no_network=True)
        )
    except etree.XMLSyntaxError:
        return []

    links = _xml_feed_links(root)
    hubs = _links_with_rel(links, "hub")
    if not hubs:
        return []

    return _pair_with_topic(hubs, _links_with_rel(links, "self"), base_url)


def dedupe_hubs(results: list[HubResult]) -> list[HubResult]:
    """Drop repeated hub/topic pairs, keeping the first occurrence."""
    seen: set[HubResult] = set()
    unique = []
    for result in results:
        if result not in seen:
            seen.add(result)
            unique.append(result)
    return unique
