"""Tests for WebSub hub discovery."""

import json

import pytest

from feedscout.core.models import FetchResponse, HubResult, InputData, NormalizedInput
from feedscout.hubs import (
    discover_hubs,
    discover_hubs_from_feed,
    discover_hubs_from_headers,
    discover_hubs_from_html,
    find_hubs,
)


class TestHeaderHubs:
    """Tests for hubs announced in the Link header."""

    def test_hub_with_self_topic(self):
        """Test pairing the hub with the self link."""
        headers = {
            "Link": '<https://hub.example.com/>; rel="hub", <https://example.com/feed>; rel="self"'
        }
        assert discover_hubs_from_headers(headers, "https://example.com/page") == [
            HubResult(hub="https://hub.example.com/", topic="https://example.com/feed")
        ]

    def test_topic_defaults_to_base_url(self):
        """Test that the page URL is the topic without a self link."""
        headers = {"Link": '<https://hub.example.com/>; rel="hub"'}
        assert discover_hubs_from_headers(headers, "https://example.com/page") == [
            HubResult(hub="https://hub.example.com/", topic="https://example.com/page")
        ]

    def test_unparseable_hub_skipped(self):
        """Test that a broken hub target does not hide the others."""
        headers = {"Link": '<http://[x>; rel="hub", <https://hub.example/>; rel="hub"'}
        assert discover_hubs_from_headers(headers, "https://example.com/") == [
            HubResult(hub="https://hub.example/", topic="https://example.com/")
        ]

    def test_no_hub(self):
        """Test that a self link alone announces nothing."""
        headers = {"Link": '<https://example.com/feed>; rel="self"'}
        assert discover_hubs_from_headers(headers, "https://example.com/") == []


class TestHtmlHubs:
    """Tests for hubs announced in page markup."""

    def test_relative_hub(self):
        """Test resolving hub links against the page."""
        html = '<link rel="hub" href="/websub"><link rel="self" href="/page">'
        assert discover_hubs_from_html(html, "https://example.com/x") == [
            HubResult(hub="https://example.com/websub", topic="https://example.com/page")
        ]

    def test_several_hubs(self):
        """Test that every hub link is reported."""
        html = (
            '<link rel="hub" href="https://a.example/">'
            '<link rel="hub" href="https://b.example/">'
        )
        hubs = discover_hubs_from_html(html, "https://example.com/")
        assert [result.hub for result in hubs] == ["https://a.example/", "https://b.example/"]


class TestFeedHubs:
    """Tests for hubs declared inside feeds."""

    def test_rss_channel(self, sample_rss):
        """Test atom:link hubs inside an RSS channel."""
        assert discover_hubs_from_feed(sample_rss, "https://example.com/feed.xml") == [
            HubResult(hub="https://pubsubhubbub.appspot.com/", topic="https://example.com/feed.xml")
        ]

    def test_atom_feed(self, sample_atom):
        """Test hub links of an Atom feed."""
        assert discover_hubs_from_feed(sample_atom, "https://example.com/other") == [
            HubResult(hub="https://hub.example.com/", topic="https://example.com/atom.xml")
        ]

    def test_entry_links_ignored(self):
        """Test that hub links inside entries do not count."""
        content = """<feed xmlns="http://www.w3.org/2005/Atom">
          <entry><link rel="hub" href="https://hub.example.com/"/></entry>
        </feed>"""
        assert discover_hubs_from_feed(content, "https://example.com/") == []

    def test_json_feed(self):
        """Test the hubs list of a JSON Feed."""
        content = json.dumps(
            {
                "version": "https://jsonfeed.org/version/1.1",
                "feed_url": "https://example.com/feed.json",
                "hubs": [{"type": "WebSub", "url": "https://hub.example.com/"}, {"type": "x"}],
            }
        )
        assert discover_hubs_from_feed(content, "https://example.com/") == [
            HubResult(hub="https://hub.example.com/", topic="https://example.com/feed.json")
        ]

    def test_json_feed_hubs_not_a_list(self):
        """Test that a JSON Feed with a non-list hubs member has no hubs."""
        for hubs in (5, "https://hub.example.com/", {"url": "https://hub.example.com/"}):
            content = json.dumps({"version": "https://jsonfeed.org/version/1.1", "hubs": hubs})
            assert discover_hubs_from_feed(content, "https://example.com/") == []

    def test_not_a_feed(self):
        """Test that pages and broken documents yield nothing."""
        assert discover_hubs_from_feed("<html><body>", "https://example.com/") == []
        assert discover_hubs_from_feed("{not json", "https://example.com/") == []
        assert discover_hubs_from_feed("<opml><body/></opml>", "https://example.com/") == []


class TestFindHubs:
    """Tests for combining hub sources."""

    def test_duplicates_removed(self, sample_atom):
        """Test that a hub found in several sources is reported once."""
        data = NormalizedInput(
            url="https://example.com/atom.xml",
            content=sample_atom,
            headers=FetchResponse(
                url="https://example.com/atom.xml",
                headers={"Link": '<https://hub.example.com/>; rel="hub"'},
            ).headers,
        )
        assert find_hubs(data) == [
            HubResult(hub="https://hub.example.com/", topic="https://example.com/atom.xml")
        ]

    def test_method_order(self):
        """Test that results follow the requested method order."""
        data = NormalizedInput(
            url="https://example.com/",
            content='<link rel="hub" href="https://html.example/">',
            headers=FetchResponse(
                url="https://example.com/",
                headers={"Link": '<https://header.example/>; rel="hub"'},
            ).headers,
        )
        assert [result.hub for result in find_hubs(data, ["html", "headers"])] == [
            "https://html.example/",
            "https://header.example/",
        ]

    def test_unknown_method(self):
        """Test that unknown sources are rejected."""
        with pytest.raises(ValueError):
            find_hubs(NormalizedInput(url="https://example.com/"), ["sitemap"])


class TestDiscoverHubs:
    """Tests for discover_hubs."""

    @pytest.mark.asyncio
    async def test_fetches_input_only(self, fake_fetcher, sample_rss):
        """Test that only the input URL is fetched."""
        fetcher = fake_fetcher({"https://example.com/feed.xml": sample_rss})
        hubs = await discover_hubs("https://example.com/feed.xml", fetch_fn=fetcher)
        assert hubs == [
            HubResult(hub="https://pubsubhubbub.appspot.com/", topic="https://example.com/feed.xml")
        ]
        assert fetcher.calls == ["https://example.com/feed.xml"]

    @pytest.mark.asyncio
    async def test_input_data(self, fake_fetcher):
        """Test hubs from pre-fetched headers without network access."""
        fetcher = fake_fetcher()
        hubs = await discover_hubs(
            InputData(
                url="https://example.com/",
                headers={"Link": '<https://hub.example.com/>; rel="hub"'},
            ),
            methods=["headers"],
            fetch_fn=fetcher,
        )
        assert hubs == [HubResult(hub="https://hub.example.com/", topic="https://example.com/")]
        assert fetcher.calls == []

    @pytest.mark.asyncio
    async def test_unparseable_hub_in_input_headers(self, fake_fetcher):
        """Test that a broken Link target does not abort discovery."""
        hubs = await discover_hubs(
            InputData(
                url="https://example.com/",
                headers={"Link": '<http://[x>; rel="hub", <https://hub.example/>; rel="hub"'},
            ),
            methods=["headers"],
            fetch_fn=fake_fetcher(),
        )
        assert hubs == [HubResult(hub="https://hub.example/", topic="https://example.com/")]

    @pytest.mark.asyncio
    async def test_json_feed_hubs_not_a_list(self, fake_fetcher):
        """Test that a malformed JSON Feed yields no hubs instead of failing."""
        content = json.dumps({"version": "https://jsonfeed.org/version/1.1", "hubs": 5})
        hubs = await discover_hubs(
            InputData(url="https://example.com/feed.json", content=content),
            methods=["feed"],
            fetch_fn=fake_fetcher(),
        )
        assert hubs == []

    @pytest.mark.asyncio
    async def test_unknown_method_before_fetch(self, fake_fetcher):
        """Test that a bad method list fails without fetching."""
        fetcher = fake_fetcher()
        with pytest.raises(ValueError):
            await discover_hubs("https://example.com/", methods=["bogus"], fetch_fn=fetcher)
        assert fetcher.calls == []
