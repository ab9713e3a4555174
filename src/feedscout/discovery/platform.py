"""Discovery strategy dispatching to known hosting platforms."""

from typing import Optional, Sequence

import structlog

from feedscout.core.interfaces import PlatformHandler, UriDiscoveryStrategy
from feedscout.core.models import NormalizedInput, PlatformMethodOptions

logger = structlog.get_logger(__name__)


class PlatformDiscovery(UriDiscoveryStrategy):
    """Ask the first matching platform handler for feed URIs."""

    def __init__(self, options: PlatformMethodOptions) -> None:
        self._options = options

    @property
    def name(self) -> str:
        return "platform"

    def discover(self, data: NormalizedInput) -> list[str]:
        if not data.url:
            return []
        return discover_uris_from_platform(data.url, self._options.handlers, data.content)


def discover_uris_from_platform(
    url: str,
    handlers: Sequence[PlatformHandler],
    content: Optional[str] = None,
) -> list[str]:
    """Run the first handler whose ``match`` accepts the URL.

    Handlers are tried in order. A handler raising from ``match`` counts as
    not matching. Once a handler matches, its result is final even when it is
    empty; an exception from its ``resolve`` yields no URIs.

    Args:
        url: Page URL.
        handlers: Ordered handler table.
        content: Page body for handlers that read identifiers from it.

    Returns:
        URIs produced by the matched handler, or an empty list.
    """
    for handler in handlers:
        try:
            matched = handler.match(url)
        except Exception as e:
            logger.debug("Platform handler failed to match", handler=handler.name, url=url, error=str(e))
            continue

        if not matched:
            continue

        logger.debug("Platform handler matched", handler=handler.name, url=url)
        try:
            return list(handler.resolve(url, content))
        except Exception as e:
            logger.warning("Platform handler failed to resolve", handler=handler.name, url=url, error=str(e))
            return []

    return []
