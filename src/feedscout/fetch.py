"""Default fetch function built on httpx."""

from typing import Mapping, Optional

import httpx
import structlog

from feedscout import __version__
from feedscout.core.models import FetchResponse

logger = structlog.get_logger(__name__)

DEFAULT_USER_AGENT = f"feedscout/{__version__}"
DEFAULT_HEADERS = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": (
        "application/rss+xml, application/atom+xml, application/feed+json, "
        "text/x-opml, application/xml;q=0.9, text/html;q=0.8, */*;q=0.5"
    ),
}


class HttpxFetcher:
    """Fetch function backed by ``httpx.AsyncClient``.

    Redirects are followed and the final URL is reported. Error statuses are
    returned rather than raised, so the extractor gets to classify them;
    transport errors (DNS, TLS, timeouts) propagate as ``httpx.HTTPError``.

    Usage:
        async with HttpxFetcher(timeout=10) as fetch:
            response = await fetch("https://example.com/feed.xml")
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Client to use. A client passed in is never closed by the
                fetcher; otherwise one is created on first use.
            timeout: Request timeout in seconds for the owned client.
            headers: Extra request headers for the owned client.
        """
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._headers = {**DEFAULT_HEADERS, **(headers or {})}

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers=self._headers,
                follow_redirects=True,
            )
        return self._client

    async def __call__(self, url: str) -> FetchResponse:
        response = await self._get_client().get(url, follow_redirects=True)
        logger.debug("Fetched", url=url, final_url=str(response.url), status=response.status_code)
        return FetchResponse(
            url=str(response.url),
            body=response.text,
            headers=response.headers,
            status=response.status_code,
        )

    async def aclose(self) -> None:
        """Close the client if the fetcher created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
