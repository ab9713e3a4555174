"""Abstract interfaces for feedscout."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from feedscout.core.models import NormalizedInput


class UriDiscoveryStrategy(ABC):
    """Abstract base class for candidate URI generators.

    Strategies are synchronous and side-effect free: they only look at the
    normalized input and their own options.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the method name of this strategy."""
        ...

    @abstractmethod
    def discover(self, data: NormalizedInput) -> list[str]:
        """Generate candidate URIs.

        Args:
            data: Normalized input of the discovery call.

        Returns:
            Candidate URIs in generation order, without duplicates.
        """
        ...


class PlatformHandler(ABC):
    """Maps URLs of one hosting platform to its feed URL conventions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the platform name."""
        ...

    @abstractmethod
    def match(self, url: str) -> bool:
        """Check whether this handler knows the URL's platform.

        Args:
            url: Page URL.

        Returns:
            True if the handler should resolve this URL.
        """
        ...

    @abstractmethod
    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        """Build feed URIs for a matched URL.

        Args:
            url: Page URL.
            content: Already fetched page body, if any. Handlers that need to
                read identifiers out of the page return nothing without it.

        Returns:
            Ordered feed URIs (may be empty).
        """
        ...


class CallablePlatformHandler(PlatformHandler):
    """Platform handler built from a pair of plain functions."""

    def __init__(
        self,
        name: str,
        match: Callable[[str], bool],
        resolve: Callable[[str, Optional[str]], list[str]],
    ) -> None:
        self._name = name
        self._match = match
        self._resolve = resolve

    @property
    def name(self) -> str:
        return self._name

    def match(self, url: str) -> bool:
        return self._match(url)

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        return self._resolve(url, content)

    def __repr__(self) -> str:
        return f"CallablePlatformHandler({self._name!r})"
