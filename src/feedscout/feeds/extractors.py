"""Default extractor deciding whether a fetched document is a feed."""

import json
import re
from typing import Any, Optional

import fastfeedparser
import structlog

from feedscout.core.models import DiscoverResult, ExtractInput, FeedInfo, InvalidResult, ValidResult

logger = structlog.get_logger(__name__)

_HTML_MARKER = re.compile(r"<html", re.IGNORECASE)
_FORMAT_MARKERS = (
    ("rss", re.compile(r"<rss", re.IGNORECASE)),
    ("atom", re.compile(r"<feed", re.IGNORECASE)),
    ("rdf", re.compile(r"<rdf", re.IGNORECASE)),
)
_JSON_FEED_VERSION = re.compile(r'"version"', re.IGNORECASE)
_JSON_FEED_SPEC = re.compile(r"jsonfeed\.org", re.IGNORECASE)


def detect_feed_format(content: str) -> Optional[str]:
    """Classify a document by its feed markers.

    HTML documents are never feeds, even when they mention feed elements.

    Returns:
        One of ``rss``, ``atom``, ``rdf``, ``json``, or None.
    """
    if not content or _HTML_MARKER.search(content):
        return None

    for name, marker in _FORMAT_MARKERS:
        if marker.search(content):
            return name

    if _JSON_FEED_VERSION.search(content) and _JSON_FEED_SPEC.search(content):
        return "json"

    return None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _parse_json_feed(content: str) -> FeedInfo:
    try:
        document = json.loads(content)
    except ValueError as e:
        logger.debug("Could not parse JSON feed metadata", error=str(e))
        return FeedInfo(format="json")

    if not isinstance(document, dict):
        return FeedInfo(format="json")

    return FeedInfo(
        format="json",
        title=_text(document.get("title")),
        description=_text(document.get("description")),
        site_url=_text(document.get("home_page_url")),
    )


def _parse_xml_feed(content: str, format: str) -> FeedInfo:
    try:
        parsed = fastfeedparser.parse(content.lstrip("\ufeff").strip())
    except Exception as e:
        logger.debug("Could not parse feed metadata", format=format, error=str(e))
        return FeedInfo(format=format)  # type: ignore[arg-type]

    feed = parsed.get("feed") or {}
    return FeedInfo(
        format=format,  # type: ignore[arg-type]
        title=_text(feed.get("title")),
        description=_text(feed.get("subtitle") or feed.get("description")),
        site_url=_text(feed.get("link")),
    )


def extract_feed(data: ExtractInput) -> DiscoverResult[FeedInfo]:
    """Classify a fetched document and read its feed metadata.

    Validity is decided by content markers alone; metadata is read on a best
    effort basis (``fastfeedparser`` for XML formats, ``json`` for JSON Feed).

    Args:
        data: Fetched candidate.

    Returns:
        ``ValidResult`` carrying ``FeedInfo``, or ``InvalidResult``.
    """
    format = detect_feed_format(data.content)
    if format is None:
        return InvalidResult(url=data.url)

    if format == "json":
        info = _parse_json_feed(data.content)
    else:
        info = _parse_xml_feed(data.content, format)

    return ValidResult(url=data.url, data=info)
