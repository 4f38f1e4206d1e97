"""
Per-match node feed: body.multiPlayList groups a match's playable nodes by category.
"""
from __future__ import annotations

from typing import Any, Optional

from shared.utils.http_client import FeedHTTPClient

from merger.sources.base import FeedSource


class NodeFeedSource(FeedSource):

    def __init__(
        self,
        http: FeedHTTPClient,
        url_template: str,
        headers: Optional[dict[str, str]] = None,
        success_code: int = 200,
    ) -> None:
        super().__init__(http)
        self._url_template = url_template
        self._headers = headers or {}
        self._success_code = success_code

    @property
    def source_name(self) -> str:
        return "nodes"

    def url_for(self, mgdb_id: Any) -> str:
        return self._url_template.format(mgdb_id=mgdb_id)

    async def fetch_multi_play_list(self, mgdb_id: Any) -> Optional[dict[str, Any]]:
        """
        Return body.multiPlayList, or None when the feed reports a non-success
        code or the nested fields are absent. Transport errors propagate.
        """
        document = await self._get_json(self.url_for(mgdb_id), headers=self._headers)
        if not isinstance(document, dict) or document.get("code") != self._success_code:
            return None
        body = document.get("body")
        if not isinstance(body, dict):
            return None
        multi_play_list = body.get("multiPlayList")
        if not isinstance(multi_play_list, dict):
            return None
        return multi_play_list
