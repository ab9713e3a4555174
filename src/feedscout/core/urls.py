"""URL normalization and the small matching helpers shared by generators."""

import re
from typing import Iterable, Optional, Sequence
from urllib.parse import urldefrag, urljoin, urlsplit

from url_normalize import url_normalize

from feedscout.core.exceptions import MalformedUriError
from feedscout.core.models import LinkSelector

_IPV4_PATTERN = re.compile(r"^\d+\.\d+\.\d+\.\d+$")
_ALLOWED_SCHEMES = ("http", "https")


def resolve_url(uri: str, base_url: Optional[str] = None) -> Optional[str]:
    """Resolve a possibly relative reference against a base URL.

    This is the plain RFC 3986 join used by generators before candidates
    reach the normalizer. References that cannot be parsed at all (such as
    an unclosed IPv6 bracket) give None instead of raising.
    """
    uri = uri.strip()
    if not base_url:
        return uri
    try:
        return urljoin(base_url, uri)
    except ValueError:
        return None


def normalize_url(uri: str, base_url: Optional[str] = None) -> str:
    """Canonicalize a URI into an absolute, comparable http(s) URL.

    Args:
        uri: Raw URI, absolute or relative.
        base_url: URL that relative references are resolved against.

    Returns:
        Normalized absolute URL (lowercased scheme and host, default port
        dropped, fragment removed, percent-encoding normalized).

    Raises:
        MalformedUriError: If the URI cannot be turned into an http(s) URL.
    """
    if uri is None or not uri.strip():
        raise MalformedUriError(str(uri), "empty")

    resolved = resolve_url(uri, base_url)
    if resolved is None:
        raise MalformedUriError(uri, "unparseable reference")

    try:
        absolute, _ = urldefrag(resolved)
        parts = urlsplit(absolute)
        _ = parts.port  # raises ValueError on an out-of-range port
    except ValueError as e:
        raise MalformedUriError(uri, str(e)) from e

    if parts.scheme.lower() not in _ALLOWED_SCHEMES or not parts.hostname:
        raise MalformedUriError(uri, "not an absolute http(s) URL")

    try:
        return url_normalize(absolute)
    except (ValueError, UnicodeError) as e:
        raise MalformedUriError(uri, str(e)) from e


def get_hostname(url: str) -> str:
    """Return the lowercased hostname of a URL ("" when there is none)."""
    return (urlsplit(url).hostname or "").lower()


def normalize_mime_type(mime_type: str) -> str:
    """Strip parameters (``; charset=...``) and case from a MIME type."""
    return mime_type.split(";")[0].strip().lower()


def includes_any_of(value: Optional[str], patterns: Iterable[str]) -> bool:
    """Case-insensitive substring match against any of the patterns."""
    if not value:
        return False
    value = value.lower()
    return any(pattern.lower() in value for pattern in patterns)


def is_any_of(value: Optional[str], patterns: Iterable[str]) -> bool:
    """Case-insensitive, whitespace-trimmed equality against any pattern."""
    if value is None:
        return False
    value = value.lower().strip()
    return any(value == pattern.lower().strip() for pattern in patterns)


def ends_with_any_of(value: Optional[str], patterns: Iterable[str]) -> bool:
    """Case-insensitive suffix match against any of the patterns."""
    if not value:
        return False
    value = value.lower()
    return any(pattern and value.endswith(pattern.lower()) for pattern in patterns)


def is_of_allowed_mime_type(
    mime_type: Optional[str], allowed_types: Sequence[str]
) -> bool:
    """Check a MIME type against an allow-list, ignoring parameters.

    An empty allow-list accepts anything, including a missing type.
    """
    if not allowed_types:
        return True
    if not mime_type:
        return False
    normalized = normalize_mime_type(mime_type)
    return any(normalized == normalize_mime_type(t) for t in allowed_types)


def matches_any_of_link_selectors(
    rel: Optional[str],
    mime_type: Optional[str],
    selectors: Iterable[LinkSelector],
) -> bool:
    """Check whether a ``rel``/``type`` pair is accepted by any selector.

    ``rel`` may hold several space-separated relation tokens.
    """
    if not rel:
        return False
    rels = set(rel.lower().split())

    for selector in selectors:
        if selector.rel.lower() not in rels:
            continue
        if selector.types is None or is_of_allowed_mime_type(mime_type, selector.types):
            return True

    return False


def is_host_of(url: str, hosts: Iterable[str]) -> bool:
    """Check whether the URL's hostname is exactly one of ``hosts``."""
    return is_any_of(get_hostname(url), hosts)


def is_subdomain_of(url: str, domain: str) -> bool:
    """Check whether the URL's hostname is a subdomain of ``domain``."""
    hostname = get_hostname(url)
    domain = domain.lower().lstrip(".")
    return hostname != domain and hostname.endswith(f".{domain}")


def get_www_counterpart(base_url: str) -> list[str]:
    """Return the www/non-www counterpart origin of a URL.

    Examples:
        https://example.com -> ["https://www.example.com"]
        https://www.example.com -> ["https://example.com"]
    """
    parts = urlsplit(base_url)
    hostname = (parts.hostname or "").lower()
    if not hostname:
        return []

    if hostname.startswith("www."):
        counterpart = hostname[len("www.") :]
    else:
        counterpart = f"www.{hostname}"

    port = f":{parts.port}" if parts.port else ""
    return [f"{parts.scheme}://{counterpart}{port}"]


def get_subdomain_variants(base_url: str, prefixes: Sequence[str]) -> list[str]:
    """Apply subdomain prefixes to the root domain of a URL.

    The root domain is taken to be the last two hostname labels, so
    multi-level public suffixes (``example.co.uk``) are not handled; pass
    explicit base URLs for those instead. An empty prefix yields the bare
    root domain. Localhost and IPv4 hosts yield no variants.

    Examples:
        get_subdomain_variants("https://www.example.com", ["blog", ""])
        -> ["https://blog.example.com", "https://example.com"]
    """
    parts = urlsplit(base_url)
    hostname = (parts.hostname or "").lower()

    if hostname == "localhost" or _IPV4_PATTERN.match(hostname):
        return []

    labels = hostname.split(".")
    if len(labels) < 2:
        return []

    root_domain = ".".join(labels[-2:])
    port = f":{parts.port}" if parts.port else ""

    variants = []
    for prefix in prefixes:
        host = root_domain if prefix == "" else f"{prefix}.{root_domain}"
        variants.append(f"{parts.scheme}://{host}{port}")
    return variants
