"""Discovery strategy reading the HTTP ``Link`` header (RFC 8288)."""

import re
from typing import Mapping, Optional, Union

import httpx
import structlog

from feedscout.core.interfaces import UriDiscoveryStrategy
from feedscout.core.models import HeadersMethodOptions, NormalizedInput
from feedscout.core.urls import matches_any_of_link_selectors, resolve_url

_TARGET_PATTERN = re.compile(r"^\s*<([^<>]*)>(.*)$", re.DOTALL)
_PARAM_PATTERN = re.compile(r"^\s*([^\s=]+)\s*=\s*(.*?)\s*$", re.DOTALL)

logger = structlog.get_logger(__name__)


class HeadersDiscovery(UriDiscoveryStrategy):
    """Find candidate URIs in the Link header of the page response."""

    def __init__(self, options: HeadersMethodOptions) -> None:
        self._options = options

    @property
    def name(self) -> str:
        return "headers"

    def discover(self, data: NormalizedInput) -> list[str]:
        if data.headers is None:
            return []
        return discover_uris_from_headers(data.headers, self._options, data.url)


def split_outside_quotes(value: str, separator: str) -> list[str]:
    """Split on ``separator`` except inside ``<...>`` or quoted strings.

    A naive split breaks on commas in URIs (``data:`` URIs) and in quoted
    parameter values such as ``title="News, Updates"``.
    """
    parts: list[str] = []
    current: list[str] = []
    quote: Optional[str] = None
    in_angle = False
    escaped = False

    for char in value:
        if escaped:
            escaped = False
        elif quote:
            if char == "\\":
                escaped = True
            elif char == quote:
                quote = None
        elif in_angle:
            if char == ">":
                in_angle = False
        elif char == "<":
            in_angle = True
        elif char in "\"'":
            quote = char
        elif char == separator:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return parts


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1].replace('\\"', '"').replace("\\'", "'")
    return value.strip()


def parse_link_header(value: str) -> list[tuple[str, dict[str, str]]]:
    """Parse a Link header value into ``(target, params)`` pairs.

    Parameter names are lowercased and only their first occurrence is kept.
    Entries without a well-formed ``<target>`` are skipped.
    """
    links = []

    for segment in split_outside_quotes(value, ","):
        match = _TARGET_PATTERN.match(segment)
        if not match or not match.group(1).strip():
            continue

        params: dict[str, str] = {}
        for raw_param in split_outside_quotes(match.group(2), ";"):
            param = _PARAM_PATTERN.match(raw_param)
            if param:
                params.setdefault(param.group(1).lower(), _unquote(param.group(2)))

        links.append((match.group(1).strip(), params))

    return links


def discover_uris_from_headers(
    headers: Union[httpx.Headers, Mapping[str, str]],
    options: HeadersMethodOptions,
    base_url: Optional[str] = None,
) -> list[str]:
    """Extract candidate URIs from ``Link`` headers.

    Args:
        headers: Response headers (lookup is case-insensitive and repeated
            Link headers are combined).
        options: Link selectors to accept.
        base_url: URL of the response, used to resolve relative targets.

    Returns:
        Resolved URIs in header order, without duplicates.
    """
    if not isinstance(headers, httpx.Headers):
        headers = httpx.Headers(headers)

    value = ", ".join(headers.get_list("link"))
    if not value.strip():
        return []

    uris: dict[str, None] = {}

    for target, params in parse_link_header(value):
        rel = params.get("rel")
        if not rel:
            continue
        if matches_any_of_link_selectors(rel, params.get("type"), options.link_selectors):
            uri = resolve_url(target, base_url)
            if uri is None:
                logger.debug("Skipping unparseable link target", target=target)
                continue
            uris.setdefault(uri, None)

    return list(uris)
