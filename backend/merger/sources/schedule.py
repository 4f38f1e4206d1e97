"""
Schedule feed: body.matchList maps a date key to that day's scheduled matches.
"""
from __future__ import annotations

from typing import Any

from shared.utils.http_client import FeedHTTPClient

from merger.sources.base import FeedShapeError, FeedSource


class ScheduleFeedSource(FeedSource):

    def __init__(self, http: FeedHTTPClient, url: str) -> None:
        super().__init__(http)
        self._url = url

    @property
    def source_name(self) -> str:
        return "schedule"

    async def fetch_match_list(self) -> dict[str, list[Any]]:
        """
        Return body.matchList. Transport errors propagate; a missing or
        non-mapping matchList raises FeedShapeError.
        """
        document = await self._get_json(self._url)
        body = document.get("body") if isinstance(document, dict) else None
        match_list = body.get("matchList") if isinstance(body, dict) else None
        if not isinstance(match_list, dict):
            raise FeedShapeError("schedule feed has no body.matchList mapping")
        return match_list
