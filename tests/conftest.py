"""Pytest configuration and fixtures."""

import asyncio
from typing import Optional, Union

import pytest

from feedscout.core.models import FetchResponse
from feedscout.core.urls import normalize_url

Page = Union[str, FetchResponse, Exception]


class FakeFetcher:
    """In-memory fetch function recording what it was asked for.

    Unknown URLs answer with a 404 page. Pages given as exceptions are
    raised instead of returned.
    """

    def __init__(self, pages: Optional[dict[str, Page]] = None, delay: float = 0.0) -> None:
        self.pages = {normalize_url(url): page for url, page in (pages or {}).items()}
        self.delay = delay
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str) -> FetchResponse:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            page = self.pages.get(normalize_url(url))
            if page is None:
                return FetchResponse(url=url, body="Not Found", status=404)
            if isinstance(page, Exception):
                raise page
            if isinstance(page, str):
                return FetchResponse(url=url, body=page)
            return page
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_fetcher():
    """Factory for in-memory fetch functions."""
    return FakeFetcher


@pytest.fixture
def sample_html():
    """Blog page announcing its feeds in several ways."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Example Blog</title>
        <link rel="alternate" type="application/rss+xml" title="RSS" href="/feed.xml">
        <link rel="alternate" type="application/atom+xml" href="https://example.com/atom.xml">
        <link rel="stylesheet" type="text/css" href="/style.css">
        <link rel="alternate" hreflang="de" href="/de/">
    </head>
    <body>
        <nav>
            <a href="/about">About</a>
            <a href="/comments/feed">Comments</a>
            <a href="/subscribe-page">Subscribe via RSS</a>
            <a href="/wp-json/oembed/1.0/embed?url=x">Embed feed</a>
        </nav>
        <main><p>Hello world</p></main>
    </body>
    </html>
    """


@pytest.fixture
def sample_rss():
    """Minimal RSS 2.0 document."""
    return """<?xml version="1.0" encoding="UTF-8"?>
    <rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
      <channel>
        <title>Example Blog</title>
        <link>https://example.com/</link>
        <description>Posts about examples</description>
        <atom:link rel="self" href="https://example.com/feed.xml"/>
        <atom:link rel="hub" href="https://pubsubhubbub.appspot.com/"/>
        <item>
          <title>First post</title>
          <link>https://example.com/first</link>
          <guid>https://example.com/first</guid>
        </item>
      </channel>
    </rss>
    """


@pytest.fixture
def sample_atom():
    """Minimal Atom document."""
    return """<?xml version="1.0" encoding="utf-8"?>
    <feed xmlns="http://www.w3.org/2005/Atom">
      <title>Example Atom</title>
      <id>urn:example:feed</id>
      <updated>2024-01-01T00:00:00Z</updated>
      <link rel="self" href="https://example.com/atom.xml"/>
      <link rel="hub" href="https://hub.example.com/"/>
      <entry>
        <title>Entry</title>
        <id>urn:example:entry</id>
        <updated>2024-01-01T00:00:00Z</updated>
        <link href="https://example.com/entry"/>
      </entry>
    </feed>
    """


@pytest.fixture
def sample_opml():
    """Minimal OPML blogroll."""
    return """<?xml version="1.0" encoding="UTF-8"?>
    <opml version="2.0">
      <head><title>My Blogroll</title></head>
      <body>
        <outline text="Example" type="rss" xmlUrl="https://example.org/feed.xml"/>
      </body>
    </opml>
    """
