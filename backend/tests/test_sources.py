"""Unit tests for feed document shape handling."""
from __future__ import annotations

import json

import httpx
import pytest
from structlog.testing import capture_logs

from shared.config import Settings
from shared.utils.http_client import FeedHTTPClient

from merger.sources import FeedShapeError, NodeFeedSource, PlaylistFeedSource, ScheduleFeedSource


def http_returning(body: str, requests: list[httpx.Request] | None = None) -> FeedHTTPClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(200, text=body)

    return FeedHTTPClient(Settings(), max_attempts=1, retry_delay_s=0, transport=httpx.MockTransport(handler))


# ── schedule ────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_schedule_returns_match_list() -> None:
    doc = {"body": {"matchList": {"20260103": [{"mgdbId": "m1"}]}}}
    async with http_returning(json.dumps(doc)) as http:
        match_list = await ScheduleFeedSource(http, "http://feed.test/schedule").fetch_match_list()
    assert match_list == {"20260103": [{"mgdbId": "m1"}]}


@pytest.mark.asyncio
@pytest.mark.parametrize("doc", [{}, {"body": None}, {"body": {}}, {"body": {"matchList": []}}, []])
async def test_schedule_missing_match_list_raises(doc) -> None:
    async with http_returning(json.dumps(doc)) as http:
        with pytest.raises(FeedShapeError):
            await ScheduleFeedSource(http, "http://feed.test/schedule").fetch_match_list()


@pytest.mark.asyncio
async def test_schedule_invalid_json_raises() -> None:
    async with http_returning("<html>") as http:
        with pytest.raises(FeedShapeError):
            await ScheduleFeedSource(http, "http://feed.test/schedule").fetch_match_list()


@pytest.mark.asyncio
async def test_invalid_json_is_logged_before_raising() -> None:
    async with http_returning("<html>") as http:
        with capture_logs() as logs, pytest.raises(FeedShapeError):
            await ScheduleFeedSource(http, "http://feed.test/schedule").fetch_match_list()
    events = [entry for entry in logs if entry["event"] == "feed_not_json"]
    assert len(events) == 1
    assert events[0]["log_level"] == "warning"
    assert events[0]["url"] == "http://feed.test/schedule"


# ── nodes ───────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_node_feed_success() -> None:
    requests: list[httpx.Request] = []
    doc = {"code": 200, "body": {"multiPlayList": {"liveList": [{"pID": 1, "name": "A"}]}}}
    async with http_returning(json.dumps(doc), requests) as http:
        source = NodeFeedSource(http, "http://feed.test/basic/{mgdb_id}/data", headers={"appId": "x"})
        result = await source.fetch_multi_play_list("m42")
    assert result == {"liveList": [{"pID": 1, "name": "A"}]}
    assert str(requests[0].url) == "http://feed.test/basic/m42/data"
    assert requests[0].headers["appid"] == "x"


@pytest.mark.asyncio
@pytest.mark.parametrize("doc", [
    {"code": 500, "body": {"multiPlayList": {}}},
    {"code": 200},
    {"code": 200, "body": {}},
    {"code": 200, "body": {"multiPlayList": None}},
])
async def test_node_feed_unsuccessful_returns_none(doc) -> None:
    async with http_returning(json.dumps(doc)) as http:
        source = NodeFeedSource(http, "http://feed.test/{mgdb_id}")
        assert await source.fetch_multi_play_list("m1") is None


# ── playlist ────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_playlist_returns_text() -> None:
    async with http_returning("#EXTM3U\n") as http:
        assert await PlaylistFeedSource(http, "http://feed.test/m3u").fetch_playlist() == "#EXTM3U\n"
