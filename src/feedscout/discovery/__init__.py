"""Candidate URI generators and their aggregation."""

from feedscout.core.interfaces import UriDiscoveryStrategy
from feedscout.core.models import MethodsPlan, NormalizedInput
from feedscout.discovery.guess import GuessDiscovery, generate_url_combinations
from feedscout.discovery.headers import (
    HeadersDiscovery,
    discover_uris_from_headers,
    parse_link_header,
)
from feedscout.discovery.html import HtmlDiscovery, discover_uris_from_html
from feedscout.discovery.platform import PlatformDiscovery, discover_uris_from_platform


def build_strategies(plan: MethodsPlan) -> list[UriDiscoveryStrategy]:
    """Instantiate the strategies enabled in a plan, in a fixed order."""
    strategies: list[UriDiscoveryStrategy] = []
    if plan.platform is not None:
        strategies.append(PlatformDiscovery(plan.platform))
    if plan.html is not None:
        strategies.append(HtmlDiscovery(plan.html))
    if plan.headers is not None:
        strategies.append(HeadersDiscovery(plan.headers))
    if plan.guess is not None:
        strategies.append(GuessDiscovery(plan.guess))
    return strategies


def discover_uris(plan: MethodsPlan, data: NormalizedInput) -> list[str]:
    """Union the candidates of every enabled strategy, first seen first."""
    uris: dict[str, None] = {}
    for strategy in build_strategies(plan):
        for uri in strategy.discover(data):
            uris.setdefault(uri, None)
    return list(uris)


__all__ = [
    "GuessDiscovery",
    "HeadersDiscovery",
    "HtmlDiscovery",
    "PlatformDiscovery",
    "build_strategies",
    "discover_uris",
    "discover_uris_from_headers",
    "discover_uris_from_html",
    "discover_uris_from_platform",
    "generate_url_combinations",
    "parse_link_header",
]
