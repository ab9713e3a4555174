"""Ordered table of the built-in platform handlers."""

from typing import Iterable

from feedscout.core.interfaces import PlatformHandler
from feedscout.platforms.blogs import (
    BlogspotHandler,
    DevToHandler,
    MediumHandler,
    SubstackHandler,
    TumblrHandler,
    WordPressHandler,
)
from feedscout.platforms.code import GitHubGistHandler, GitHubHandler, GitLabHandler
from feedscout.platforms.media import (
    ApplePodcastsHandler,
    BehanceHandler,
    DailymotionHandler,
    DeviantArtHandler,
    ItchIoHandler,
    KickstarterHandler,
    SoundCloudHandler,
    YouTubeHandler,
)
from feedscout.platforms.social import (
    BlueskyHandler,
    LobstersHandler,
    MastodonHandler,
    PinterestHandler,
    ProductHuntHandler,
    RedditHandler,
)

# Consulted first-match, so the order is part of the behavior
DEFAULT_PLATFORM_HANDLERS: tuple[PlatformHandler, ...] = (
    ApplePodcastsHandler(),
    BehanceHandler(),
    BlogspotHandler(),
    BlueskyHandler(),
    DailymotionHandler(),
    DeviantArtHandler(),
    DevToHandler(),
    GitHubGistHandler(),
    GitHubHandler(),
    GitLabHandler(),
    ItchIoHandler(),
    KickstarterHandler(),
    LobstersHandler(),
    MastodonHandler(),
    MediumHandler(),
    PinterestHandler(),
    ProductHuntHandler(),
    RedditHandler(),
    SoundCloudHandler(),
    SubstackHandler(),
    TumblrHandler(),
    WordPressHandler(),
    YouTubeHandler(),
)


def build_platform_handlers(
    prepend: Iterable[PlatformHandler] = (),
    append: Iterable[PlatformHandler] = (),
    base: Iterable[PlatformHandler] = DEFAULT_PLATFORM_HANDLERS,
) -> tuple[PlatformHandler, ...]:
    """Build a handler table around the defaults.

    Args:
        prepend: Handlers consulted before the defaults (they win on overlap).
        append: Handlers consulted only when no default matches.
        base: Table to extend.

    Returns:
        The combined table.
    """
    return (*prepend, *base, *append)


def get_platform_handler(name: str) -> PlatformHandler:
    """Look up a built-in handler by name.

    Raises:
        KeyError: If no built-in handler has that name.
    """
    for handler in DEFAULT_PLATFORM_HANDLERS:
        if handler.name == name.lower():
            return handler
    raise KeyError(f"Unknown platform: {name}")


def list_platforms() -> list[str]:
    """List the names of the built-in handlers, in match order."""
    return [handler.name for handler in DEFAULT_PLATFORM_HANDLERS]
