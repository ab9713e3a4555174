"""Base classes for platform handlers."""

from urllib.parse import urlsplit

from feedscout.core.interfaces import PlatformHandler
from feedscout.core.urls import is_host_of, is_subdomain_of

_DEFAULT_PORTS = {"http": 80, "https": 443}


def origin_of(url: str) -> str:
    """Return ``scheme://host[:port]`` of a URL.

    Credentials are dropped, as is a port equal to the scheme default.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is None or _DEFAULT_PORTS.get(scheme) == port:
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def path_segments(url: str) -> list[str]:
    """Return the non-empty path segments of a URL."""
    return [segment for segment in urlsplit(url).path.split("/") if segment]


class HostPlatformHandler(PlatformHandler):
    """Handler matching an exact list of hostnames."""

    HOSTS: tuple[str, ...] = ()

    def match(self, url: str) -> bool:
        return is_host_of(url, self.HOSTS)


class SubdomainPlatformHandler(PlatformHandler):
    """Handler matching every subdomain of a hosting domain."""

    DOMAIN: str = ""

    def match(self, url: str) -> bool:
        return is_subdomain_of(url, self.DOMAIN)
