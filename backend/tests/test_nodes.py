"""Unit tests for node collection precedence and resolver degradation."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from merger.nodes import NodeResolver, collect_nodes


def as_wire(nodes) -> list[dict]:
    return [n.to_wire() for n in nodes]


# ── collect_nodes ───────────────────────────────────────────────────────

class TestCollectNodes:

    def test_cross_category_duplicate_dropped(self) -> None:
        multi = {
            "replayList": [{"pID": 1, "name": "A"}],
            "liveList": [{"pID": 1, "name": "A"}, {"pID": 2, "name": "B"}],
        }
        assert as_wire(collect_nodes(multi)) == [
            {"pID": 1, "name": "A"},
            {"pID": 2, "name": "B"},
        ]

    def test_precedence_is_replay_live_pre(self) -> None:
        multi = {
            "preList": [{"pID": "p", "name": "pre"}],
            "liveList": [{"pID": "l", "name": "live"}],
            "replayList": [{"pID": "r", "name": "replay"}],
        }
        assert [n.name for n in collect_nodes(multi)] == ["replay", "live", "pre"]

    def test_same_pid_different_name_kept(self) -> None:
        multi = {"liveList": [{"pID": 1, "name": "A"}, {"pID": 1, "name": "B"}]}
        assert len(collect_nodes(multi)) == 2

    def test_duplicate_within_category_dropped(self) -> None:
        multi = {"preList": [{"pID": 1, "name": "A"}, {"pID": 1, "name": "A"}]}
        assert len(collect_nodes(multi)) == 1

    def test_missing_and_malformed_categories(self) -> None:
        multi = {"replayList": None, "liveList": "oops", "preList": ["bad", {"pID": 3, "name": "C"}]}
        assert as_wire(collect_nodes(multi)) == [{"pID": 3, "name": "C"}]

    def test_extra_item_fields_dropped(self) -> None:
        multi = {"liveList": [{"pID": 9, "name": "Z", "url": "ignored"}]}
        assert as_wire(collect_nodes(multi)) == [{"pID": 9, "name": "Z"}]


# ── NodeResolver ────────────────────────────────────────────────────────

@pytest.fixture
def source() -> MagicMock:
    s = MagicMock()
    s.fetch_multi_play_list = AsyncMock(return_value=None)
    return s


@pytest.mark.asyncio
async def test_resolver_returns_collected_nodes(source: MagicMock) -> None:
    source.fetch_multi_play_list.return_value = {"liveList": [{"pID": 1, "name": "A"}]}
    nodes = await NodeResolver(source).resolve("m1")
    assert as_wire(nodes) == [{"pID": 1, "name": "A"}]
    source.fetch_multi_play_list.assert_awaited_once_with("m1")


@pytest.mark.asyncio
async def test_resolver_unsuccessful_feed_is_empty(source: MagicMock) -> None:
    assert await NodeResolver(source).resolve("m1") == []


@pytest.mark.asyncio
async def test_resolver_swallows_fetch_errors(source: MagicMock) -> None:
    source.fetch_multi_play_list.side_effect = httpx.ReadTimeout("timed out")
    assert await NodeResolver(source).resolve("m1") == []
