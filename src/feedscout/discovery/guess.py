"""Discovery strategy guessing well-known resource paths."""

from typing import Sequence

from feedscout.core.interfaces import UriDiscoveryStrategy
from feedscout.core.models import GuessMethodOptions, NormalizedInput
from feedscout.core.urls import resolve_url


class GuessDiscovery(UriDiscoveryStrategy):
    """Combine base URLs with a list of well-known relative paths.

    Nothing is checked here; whether a guessed URI exists is decided by the
    validation step.
    """

    def __init__(self, options: GuessMethodOptions) -> None:
        self._options = options

    @property
    def name(self) -> str:
        return "guess"

    def discover(self, data: NormalizedInput) -> list[str]:
        if not data.url:
            return []
        base_urls = [data.url, *self._options.additional_base_urls]
        return generate_url_combinations(base_urls, self._options.uris)


def generate_url_combinations(base_urls: Sequence[str], uris: Sequence[str]) -> list[str]:
    """Resolve every URI against every base URL, base URLs outermost.

    Pairs that cannot be joined (an unparseable base URL) are left out.
    """
    combinations: dict[str, None] = {}
    for base in base_urls:
        for uri in uris:
            combined = resolve_url(uri, base)
            if combined is not None:
                combinations.setdefault(combined, None)
    return list(combinations)
