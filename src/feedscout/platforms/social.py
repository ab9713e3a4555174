"""Handlers for social networks and link aggregators."""

import re
from typing import Optional
from urllib.parse import urlsplit

from feedscout.core.interfaces import PlatformHandler
from feedscout.core.urls import get_hostname, is_any_of
from feedscout.platforms.base import HostPlatformHandler, origin_of, path_segments

KNOWN_MASTODON_INSTANCES = (
    "mastodon.social",
    "mastodon.online",
    "mastodon.world",
    "mstdn.social",
    "mas.to",
    "universeodon.com",
    "c.im",
    "social.vivaldi.net",
    "masto.ai",
    "mastodon.cloud",
    "fosstodon.org",
    "hachyderm.io",
    "infosec.exchange",
    "techhub.social",
    "phpc.social",
    "ruby.social",
    "functional.cafe",
    "toot.cafe",
    "mathstodon.xyz",
    "aus.social",
    "nrw.social",
    "chaos.social",
    "social.tchncs.de",
    "piaille.fr",
    "mamot.fr",
    "social.coop",
    "wandering.shop",
    "tabletop.social",
    "metalhead.club",
    "mindly.social",
    "pixelfed.social",
    "kolektiva.social",
)

MASTODON_HOST_PREFIXES = ("mastodon.", "mstdn.", "social.", "toot.")


class MastodonHandler(PlatformHandler):
    """Profile and hashtag feeds of Mastodon instances.

    Instances are recognized from a list of well-known hosts or from a
    conventional host prefix, and only on profile (``/@user``) or tag pages.
    """

    @property
    def name(self) -> str:
        return "mastodon"

    def match(self, url: str) -> bool:
        hostname = get_hostname(url)
        if hostname not in KNOWN_MASTODON_INSTANCES and not hostname.startswith(
            MASTODON_HOST_PREFIXES
        ):
            return False
        path = urlsplit(url).path
        return path.startswith("/@") or path.startswith("/tags/")

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        path = urlsplit(url).path

        user_match = re.match(r"^/@([^/]+)", path)
        if user_match:
            return [f"{origin}/@{user_match.group(1)}.rss"]

        tag_match = re.match(r"^/tags/([^/]+)", path)
        if tag_match:
            return [f"{origin}/tags/{tag_match.group(1)}.rss"]

        return []


class BlueskyHandler(HostPlatformHandler):
    """Bluesky profiles through the bsky.link RSS bridge."""

    HOSTS = ("bsky.app",)

    @property
    def name(self) -> str:
        return "bluesky"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        profile_match = re.match(r"^/profile/([^/]+)", urlsplit(url).path)
        if not profile_match:
            return []
        return [f"https://bsky.link/api/rss/{profile_match.group(1)}"]


class RedditHandler(HostPlatformHandler):
    """Subreddit and user feeds."""

    HOSTS = ("reddit.com", "www.reddit.com", "old.reddit.com", "new.reddit.com")

    @property
    def name(self) -> str:
        return "reddit"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        subreddit_match = re.match(r"^/r/([^/]+)", path)
        if subreddit_match:
            return [f"https://www.reddit.com/r/{subreddit_match.group(1)}/.rss"]

        user_match = re.match(r"^/(?:u|user)/([^/]+)", path)
        if user_match:
            return [f"https://www.reddit.com/user/{user_match.group(1)}/.rss"]

        return []


class LobstersHandler(HostPlatformHandler):
    HOSTS = ("lobste.rs",)

    @property
    def name(self) -> str:
        return "lobsters"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        tag_match = re.match(r"^/t/([a-zA-Z0-9,_-]+)", path)
        if tag_match:
            return [f"https://lobste.rs/t/{tag_match.group(1)}.rss"]

        domain_match = re.match(r"^/domains/([^/]+)", path)
        if domain_match:
            return [f"https://lobste.rs/domains/{domain_match.group(1)}.rss"]

        if path in ("/newest", "/newest/"):
            return ["https://lobste.rs/newest.rss"]

        return ["https://lobste.rs/rss"]


class ProductHuntHandler(HostPlatformHandler):
    """Product Hunt front page, topic and category feeds."""

    HOSTS = ("producthunt.com", "www.producthunt.com")

    @property
    def name(self) -> str:
        return "producthunt"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        topic_match = re.match(r"^/topics/([a-zA-Z0-9_-]+)", path)
        if topic_match:
            return [f"https://www.producthunt.com/feed?topic={topic_match.group(1)}"]

        category_match = re.match(r"^/categories/([a-zA-Z0-9_-]+)", path)
        if category_match:
            return [f"https://www.producthunt.com/feed?category={category_match.group(1)}"]

        return ["https://www.producthunt.com/feed"]


class PinterestHandler(HostPlatformHandler):
    """Pinterest user and board feeds."""

    HOSTS = ("pinterest.com", "www.pinterest.com", "pin.it")
    EXCLUDED_PATHS = (
        "_",
        "about",
        "business",
        "convert",
        "explore",
        "ideas",
        "login",
        "news_hub",
        "password",
        "pin",
        "privacy",
        "resource",
        "search",
        "settings",
        "terms",
        "today",
        "topics",
    )

    @property
    def name(self) -> str:
        return "pinterest"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        segments = path_segments(url)
        if not segments or is_any_of(segments[0], self.EXCLUDED_PATHS):
            return []

        user = segments[0]
        if len(segments) >= 2:
            board = segments[1]
            # /_saved, /pins and /boards are profile tabs, not boards
            if not board.startswith("_") and board not in ("pins", "boards"):
                return [f"https://www.pinterest.com/{user}/{board}.rss"]
        return [f"https://www.pinterest.com/{user}/feed.rss"]
