"""Handlers for video, audio, art and creator platforms."""

import json
import re
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from feedscout.core.interfaces import PlatformHandler
from feedscout.core.urls import is_any_of, is_host_of
from feedscout.platforms.base import (
    HostPlatformHandler,
    SubdomainPlatformHandler,
    origin_of,
    path_segments,
)

_YOUTUBE_CHANNEL_ID = re.compile(r'"channelId":"(UC[a-zA-Z0-9_-]+)"')
_SOUNDCLOUD_USER_ID = re.compile(r"soundcloud://users:(\d+)")
_JSON_LD = re.compile(
    r'<script[^>]*type="application/ld\+json"[^>]*>(.*?)</script>', re.IGNORECASE | re.DOTALL
)
_FEED_URL_PROPERTY = re.compile(r'"feedUrl"\s*:\s*"([^"]+)"', re.IGNORECASE)
_FEED_URL_META = re.compile(
    r'<meta[^>]*property="al:web:url"[^>]*content="([^"]*feed[^"]*)"', re.IGNORECASE
)


class YouTubeHandler(HostPlatformHandler):
    """Channel and playlist feeds.

    Handle (``/@name``), ``/user/`` and ``/c/`` URLs carry no channel ID, so
    they are only resolved when the page content is available.
    """

    HOSTS = ("youtube.com", "www.youtube.com", "m.youtube.com")

    @property
    def name(self) -> str:
        return "youtube"

    @staticmethod
    def _channel_feeds(channel_id: str) -> list[str]:
        # UULF playlists hold uploads without shorts
        return [
            f"https://www.youtube.com/feeds/videos.xml?channel_id={channel_id}",
            f"https://www.youtube.com/feeds/videos.xml?playlist_id=UULF{channel_id[2:]}",
        ]

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        parts = urlsplit(url)
        uris = []

        channel_match = re.match(r"^/channel/(UC[a-zA-Z0-9_-]+)", parts.path)
        if channel_match:
            uris.extend(self._channel_feeds(channel_match.group(1)))

        playlist_ids = parse_qs(parts.query).get("list")
        if playlist_ids and playlist_ids[0]:
            uris.append(f"https://www.youtube.com/feeds/videos.xml?playlist_id={playlist_ids[0]}")

        if not uris and content and re.match(r"^/(?:@|user/|c/)[^/]+", parts.path):
            content_match = _YOUTUBE_CHANNEL_ID.search(content)
            if content_match:
                uris.extend(self._channel_feeds(content_match.group(1)))

        return uris


class SoundCloudHandler(PlatformHandler):
    """User track feeds; the numeric user ID is read from the page."""

    HOSTS = ("soundcloud.com", "www.soundcloud.com", "m.soundcloud.com")
    EXCLUDED_PATHS = ("discover", "stream", "search", "upload", "you", "settings", "messages")

    @property
    def name(self) -> str:
        return "soundcloud"

    def match(self, url: str) -> bool:
        if not is_host_of(url, self.HOSTS):
            return False
        segments = path_segments(url)
        return bool(segments) and segments[0] not in self.EXCLUDED_PATHS

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        if not content:
            return []
        user_match = _SOUNDCLOUD_USER_ID.search(content)
        if not user_match:
            return []
        return [
            f"https://feeds.soundcloud.com/users/soundcloud:users:{user_match.group(1)}/sounds.rss"
        ]


def _find_podcast_feed_url(content: str) -> Optional[str]:
    ld_match = _JSON_LD.search(content)
    if ld_match:
        try:
            data = json.loads(ld_match.group(1))
        except ValueError:
            data = None
        if isinstance(data, dict):
            media = data.get("associatedMedia")
            if isinstance(media, dict) and media.get("contentUrl"):
                return media["contentUrl"]

    for pattern in (_FEED_URL_PROPERTY, _FEED_URL_META):
        match = pattern.search(content)
        if match:
            return match.group(1)

    return None


class ApplePodcastsHandler(HostPlatformHandler):
    """Podcast feeds from Apple Podcasts pages.

    The feed URL is read from the page when it is available. Otherwise the
    iTunes lookup endpoint for the podcast ID is returned.
    """

    HOSTS = ("podcasts.apple.com",)
    EXCLUDED_PATHS = ("subscribe", "app", "redeem", "buy", "charts")

    @property
    def name(self) -> str:
        return "apple_podcasts"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        segments = path_segments(url)
        if segments and is_any_of(segments[0], self.EXCLUDED_PATHS):
            return []

        if content:
            feed_url = _find_podcast_feed_url(content)
            if feed_url:
                return [feed_url]

        id_match = re.search(r"/id(\d+)", urlsplit(url).path)
        if id_match:
            return [f"https://itunes.apple.com/lookup?id={id_match.group(1)}&entity=podcast"]
        return []


class DailymotionHandler(HostPlatformHandler):
    HOSTS = ("dailymotion.com", "www.dailymotion.com")
    EXCLUDED_PATHS = (
        "signin",
        "signout",
        "signup",
        "login",
        "logout",
        "register",
        "search",
        "legal",
        "about",
        "careers",
        "terms",
        "privacy",
        "feedback",
        "help",
        "settings",
        "upload",
        "partner",
        "monetize",
        "studio",
        "video",
        "live",
        "channels",
        "playlist",
        "topics",
        "trending",
        "dm",
        "creator",
        "premium",
        "explore",
        "following",
        "subscriptions",
        "notifications",
        "history",
        "watch",
        "contact",
        "ads",
        "dmca",
        "copyright",
        "community",
    )

    @property
    def name(self) -> str:
        return "dailymotion"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        playlist_match = re.match(r"^/playlist/([a-zA-Z0-9_-]+)", path)
        if playlist_match:
            return [f"https://www.dailymotion.com/rss/playlist/{playlist_match.group(1)}"]

        user_match = re.match(r"^/([a-zA-Z0-9_-]+)$", path)
        if user_match and not is_any_of(user_match.group(1), self.EXCLUDED_PATHS):
            return [f"https://www.dailymotion.com/rss/{user_match.group(1)}"]

        return []


class DeviantArtHandler(HostPlatformHandler):
    """Deviation feeds of a DeviantArt user through the backend RSS search."""

    HOSTS = ("deviantart.com", "www.deviantart.com")
    EXCLUDED_PATHS = (
        "about",
        "join",
        "search",
        "tag",
        "topic",
        "watch",
        "notifications",
        "settings",
        "submit",
        "shop",
        "core-membership",
        "team",
        "developers",
    )

    @property
    def name(self) -> str:
        return "deviantart"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        user_match = re.match(r"^/([a-zA-Z0-9_-]+)(?:/gallery)?(?:/|$)", urlsplit(url).path)
        if not user_match or is_any_of(user_match.group(1), self.EXCLUDED_PATHS):
            return []

        query = quote(f"by:{user_match.group(1)} sort:time meta:all", safe="-_.!~*'()")
        return [f"https://backend.deviantart.com/rss.xml?type=deviation&q={query}"]


class BehanceHandler(HostPlatformHandler):
    HOSTS = ("behance.net", "www.behance.net")
    EXCLUDED_PATHS = (
        "search",
        "galleries",
        "curated",
        "features",
        "live",
        "joblist",
        "hire",
        "blog",
        "about",
        "privacy",
        "tos",
        "help",
        "onboarding",
        "settings",
        "notifications",
        "messages",
        "adobe",
    )

    @property
    def name(self) -> str:
        return "behance"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        user_match = re.match(
            r"^/([a-zA-Z0-9_-]+)(?:/(appreciated))?/?$", urlsplit(url).path
        )
        if not user_match or is_any_of(user_match.group(1), self.EXCLUDED_PATHS):
            return []

        feed = f"https://www.behance.net/feeds/user?username={user_match.group(1)}"
        if user_match.group(2):
            feed += "&content=appreciated"
        return [feed]


class ItchIoHandler(SubdomainPlatformHandler):
    """Creator and devlog feeds on itch.io subdomains."""

    DOMAIN = "itch.io"

    @property
    def name(self) -> str:
        return "itchio"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        segments = path_segments(url)
        if len(segments) >= 2 and segments[1] == "devlog":
            return [f"{origin}/{segments[0]}/devlog.rss"]
        return [f"{origin}/feed.xml"]


class KickstarterHandler(PlatformHandler):
    """Project update feeds; only project pages are matched."""

    HOSTS = ("kickstarter.com", "www.kickstarter.com")

    @property
    def name(self) -> str:
        return "kickstarter"

    def match(self, url: str) -> bool:
        if not is_host_of(url, self.HOSTS):
            return False
        segments = path_segments(url)
        return len(segments) >= 3 and segments[0] == "projects"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        segments = path_segments(url)
        if len(segments) < 3 or segments[0] != "projects":
            return []
        return [f"{origin_of(url)}/projects/{segments[1]}/{segments[2]}/posts.atom"]
