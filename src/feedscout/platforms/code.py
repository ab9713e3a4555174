"""Handlers for code hosting platforms."""

import re
from typing import Optional
from urllib.parse import urlsplit

from feedscout.core.urls import is_any_of
from feedscout.platforms.base import HostPlatformHandler, origin_of, path_segments


class GitHubHandler(HostPlatformHandler):
    """User and repository activity feeds on github.com."""

    HOSTS = ("github.com", "www.github.com")
    EXCLUDED_PATHS = (
        "settings",
        "explore",
        "topics",
        "trending",
        "collections",
        "events",
        "sponsors",
        "about",
        "pricing",
        "search",
        "marketplace",
        "features",
        "enterprise",
        "team",
        "login",
        "signup",
        "join",
        "notifications",
        "new",
        "organizations",
        "orgs",
        "codespaces",
        "pulls",
        "issues",
        "apps",
    )

    @property
    def name(self) -> str:
        return "github"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        user_match = re.match(r"^/([^/]+)/?$", path)
        if user_match:
            user = user_match.group(1)
            if is_any_of(user, self.EXCLUDED_PATHS):
                return []
            return [f"https://github.com/{user}.atom"]

        repo_match = re.match(r"^/([^/]+)/([^/]+)", path)
        if not repo_match or is_any_of(repo_match.group(1), self.EXCLUDED_PATHS):
            return []

        repo = f"https://github.com/{repo_match.group(1)}/{repo_match.group(2)}"
        uris = [f"{repo}/releases.atom", f"{repo}/commits.atom", f"{repo}/tags.atom"]

        if "/wiki" in path:
            uris.append(f"{repo}/wiki.atom")
        if "/discussions" in path:
            uris.append(f"{repo}/discussions.atom")

        branch_match = re.match(r"^/[^/]+/[^/]+/tree/([^/]+)", path)
        if branch_match:
            uris.append(f"{repo}/commits/{branch_match.group(1)}.atom")

        return uris


class GitHubGistHandler(HostPlatformHandler):
    """Gist feeds of a gist.github.com user."""

    HOSTS = ("gist.github.com",)
    EXCLUDED_PATHS = ("discover", "search", "login", "join", "settings")

    @property
    def name(self) -> str:
        return "github_gist"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        path = urlsplit(url).path

        gist_match = re.match(r"^/([^/]+)/([a-f0-9]+)", path)
        if gist_match:
            user = gist_match.group(1)
            if is_any_of(user, self.EXCLUDED_PATHS):
                return []
            return [f"https://gist.github.com/{user}.atom"]

        starred_match = re.match(r"^/([^/]+)/starred/?$", path)
        if starred_match and not is_any_of(starred_match.group(1), self.EXCLUDED_PATHS):
            return [f"https://gist.github.com/{starred_match.group(1)}/starred.atom"]

        user_match = re.match(r"^/([^/]+)/?$", path)
        if user_match and not is_any_of(user_match.group(1), self.EXCLUDED_PATHS):
            return [f"https://gist.github.com/{user_match.group(1)}.atom"]

        return []


class GitLabHandler(HostPlatformHandler):
    """User and project feeds on gitlab.com."""

    HOSTS = ("gitlab.com", "www.gitlab.com")
    EXCLUDED_PATHS = (
        "explore",
        "dashboard",
        "projects",
        "groups",
        "search",
        "admin",
        "help",
        "assets",
        "users",
        "api",
        "jwt",
        "oauth",
        "profile",
        "snippets",
        "abuse_reports",
        "invites",
        "import",
        "uploads",
        "robots.txt",
        "sitemap",
        "-",
    )

    @property
    def name(self) -> str:
        return "gitlab"

    def resolve(self, url: str, content: Optional[str] = None) -> list[str]:
        origin = origin_of(url)
        segments = path_segments(url)

        if not segments or is_any_of(segments[0], self.EXCLUDED_PATHS):
            return []

        if len(segments) == 1:
            return [f"{origin}/{segments[0]}.atom"]

        project = f"{origin}/{segments[0]}/{segments[1]}"
        return [
            f"{project}/-/releases.atom",
            f"{project}/-/tags?format=atom",
            f"{project}.atom",
        ]
