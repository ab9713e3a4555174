"""Platform handlers mapping known hosting sites to their feed URLs."""

from feedscout.platforms.base import HostPlatformHandler, SubdomainPlatformHandler
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
from feedscout.platforms.registry import (
    DEFAULT_PLATFORM_HANDLERS,
    build_platform_handlers,
    get_platform_handler,
    list_platforms,
)
from feedscout.platforms.social import (
    BlueskyHandler,
    LobstersHandler,
    MastodonHandler,
    PinterestHandler,
    ProductHuntHandler,
    RedditHandler,
)

__all__ = [
    "DEFAULT_PLATFORM_HANDLERS",
    "build_platform_handlers",
    "get_platform_handler",
    "list_platforms",
    "HostPlatformHandler",
    "SubdomainPlatformHandler",
    "ApplePodcastsHandler",
    "BehanceHandler",
    "BlogspotHandler",
    "BlueskyHandler",
    "DailymotionHandler",
    "DeviantArtHandler",
    "DevToHandler",
    "GitHubGistHandler",
    "GitHubHandler",
    "GitLabHandler",
    "ItchIoHandler",
    "KickstarterHandler",
    "LobstersHandler",
    "MastodonHandler",
    "MediumHandler",
    "PinterestHandler",
    "ProductHuntHandler",
    "RedditHandler",
    "SoundCloudHandler",
    "SubstackHandler",
    "TumblrHandler",
    "WordPressHandler",
    "YouTubeHandler",
]
