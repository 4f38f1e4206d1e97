"""
Playlist feed: M3U text whose #EXTINF entries describe event streams.
"""
from __future__ import annotations

from shared.utils.http_client import FeedHTTPClient

from merger.sources.base import FeedSource


class PlaylistFeedSource(FeedSource):

    def __init__(self, http: FeedHTTPClient, url: str) -> None:
        super().__init__(http)
        self._url = url

    @property
    def source_name(self) -> str:
        return "playlist"

    async def fetch_playlist(self) -> str:
        return await self._get_text(self._url)
