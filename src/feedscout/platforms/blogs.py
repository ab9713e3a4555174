"""Handlers for hosted blogging platforms."""

import re
from typing import Optional
from urllib.parse import urlsplit

from feedscout.core.interfaces import PlatformHandler
from feedscout.core.urls import get_hostname, is_any_of
from feedscout.platforms.base import (
    HostPlatformHandler,
    SubdomainPlatformHandler,
    origin_of,
)

_BLOGSPOT_HOST = re.compile(
    r"^.+\.blogspot\.(?:com|co\.[a-z]{2}|com\.[a-z]{2}|[a-z]{2,3})$", re.IGNORECASE
)


class BlogspotHandler(PlatformHandler):
    """Blogger feeds, including country-specific blogspot domains."""

    @property
    def name(self) -> str:
        return "blogspot"

    def match(self, url: str) -> bool:
        return bool(_BLOGSPOT_HOST.match(get_hostname(url)))

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        return [
            f"{origin}/feeds/posts/default",
            f"{origin}/feeds/posts/default?alt=rss",
        ]


class MediumHandler(PlatformHandler):
    """Medium user, publication and custom subdomain feeds."""

    EXCLUDED_PATHS = ("tag", "search", "me", "new-story", "plans", "membership")

    @property
    def name(self) -> str:
        return "medium"

    def match(self, url: str) -> bool:
        hostname = get_hostname(url)
        return hostname in ("medium.com", "www.medium.com") or hostname.endswith(".medium.com")

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        hostname = get_hostname(url)

        if hostname not in ("medium.com", "www.medium.com"):
            subdomain = hostname[: -len(".medium.com")]
            return [f"https://medium.com/feed/{subdomain}"]

        path = urlsplit(url).path

        user_match = re.match(r"^/@([^/]+)", path)
        if user_match:
            return [f"https://medium.com/feed/@{user_match.group(1)}"]

        publication_match = re.match(r"^/([^/@][^/]+)", path)
        if publication_match and not is_any_of(
            publication_match.group(1), self.EXCLUDED_PATHS
        ):
            return [f"https://medium.com/feed/{publication_match.group(1)}"]

        return []


class SubstackHandler(PlatformHandler):
    @property
    def name(self) -> str:
        return "substack"

    def match(self, url: str) -> bool:
        return get_hostname(url).endswith(".substack.com")

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        return [f"{origin_of(url)}/feed"]


class TumblrHandler(SubdomainPlatformHandler):
    """Tumblr blog feeds; tag pages get the per-tag feed."""

    DOMAIN = "tumblr.com"

    @property
    def name(self) -> str:
        return "tumblr"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        tag_match = re.match(r"^/tagged/([^/]+)", urlsplit(url).path)
        if tag_match:
            return [f"{origin}/tagged/{tag_match.group(1)}/rss"]
        return [f"{origin}/rss"]


class WordPressHandler(SubdomainPlatformHandler):
    """Feeds of blogs hosted on wordpress.com."""

    DOMAIN = "wordpress.com"

    @property
    def name(self) -> str:
        return "wordpress"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        path = urlsplit(url).path
        uris = []

        for section in ("category", "tag", "author"):
            section_match = re.match(rf"^/{section}/([^/]+)", path)
            if section_match:
                uris.append(f"{origin}/{section}/{section_match.group(1)}/feed/")

        uris.extend(
            [
                f"{origin}/feed/",
                f"{origin}/feed/rss2/",
                f"{origin}/feed/rdf/",
                f"{origin}/feed/atom/",
                f"{origin}/comments/feed/",
            ]
        )
        return uris


class DevToHandler(HostPlatformHandler):
    """dev.to user and tag feeds."""

    HOSTS = ("dev.to", "www.dev.to")
    EXCLUDED_PATHS = (
        "tag",
        "tags",
        "search",
        "top",
        "latest",
        "about",
        "contact",
        "privacy",
        "terms",
        "code-of-conduct",
        "faq",
        "enter",
        "settings",
        "signout-confirm",
        "notifications",
        "reading-list",
        "dashboard",
    )

    @property
    def name(self) -> str:
        return "devto"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        tag_match = re.match(r"^/t/([^/]+)", path)
        if tag_match:
            return [f"https://dev.to/feed/tag/{tag_match.group(1)}"]

        user_match = re.match(r"^/([a-zA-Z0-9_]+)$", path)
        if user_match and not is_any_of(user_match.group(1), self.EXCLUDED_PATHS):
            return [f"https://dev.to/feed/{user_match.group(1)}"]

        return []
