"""Default extractor deciding whether a fetched document is an OPML file."""

from typing import Optional

import structlog
from lxml import etree

from feedscout.core.models import (
    BlogrollInfo,
    DiscoverResult,
    ExtractInput,
    InvalidResult,
    ValidResult,
)

logger = structlog.get_logger(__name__)


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True)


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname if isinstance(element.tag, str) else ""


def parse_opml_title(content: str) -> Optional[str]:
    """Parse an OPML document and return its title.

    Raises:
        ValueError: If the content is not an OPML document with a body.
    """
    try:
        root = etree.fromstring(content.lstrip("\ufeff").strip().encode("utf-8"), _parser())
    except etree.XMLSyntaxError as e:
        raise ValueError(f"Not well-formed XML: {e}") from e

    if _local_name(root) != "opml":
        raise ValueError(f"Root element is <{_local_name(root)}>, not <opml>")

    children = {_local_name(child): child for child in root}
    if "body" not in children:
        raise ValueError("OPML document has no <body>")

    head = children.get("head")
    if head is None:
        return None

    for child in head:
        if _local_name(child) == "title" and child.text and child.text.strip():
            return child.text.strip()
    return None


def extract_blogroll(data: ExtractInput) -> DiscoverResult[BlogrollInfo]:
    """Classify a fetched document as an OPML blogroll.

    Args:
        data: Fetched candidate.

    Returns:
        ``ValidResult`` carrying ``BlogrollInfo``, or ``InvalidResult``.
    """
    if not data.content or not data.content.strip():
        return InvalidResult(url=data.url)

    try:
        title = parse_opml_title(data.content)
    except ValueError as e:
        logger.debug("Not an OPML document", url=data.url, reason=str(e))
        return InvalidResult(url=data.url)

    return ValidResult(url=data.url, data=BlogrollInfo(title=title))
