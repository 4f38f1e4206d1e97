"""
Base feed source.
A source owns one upstream document type and turns HTTP responses into plain
Python structures; shape errors are raised as FeedShapeError.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Optional

from shared.utils.http_client import FeedHTTPClient
from shared.utils.logging import get_logger

logger = get_logger(__name__)


class FeedShapeError(ValueError):
    """Feed document is missing its required top-level structure."""


class FeedSource(ABC):
    """Base for the schedule, node and playlist feeds."""

    def __init__(self, http: FeedHTTPClient) -> None:
        self._http = http

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Label used in logs and metrics."""

    async def _get_text(self, url: str, headers: Optional[dict[str, str]] = None) -> str:
        resp = await self._http.get(url, headers=headers, feed=self.source_name)
        return resp.text

    async def _get_json(self, url: str, headers: Optional[dict[str, str]] = None) -> Any:
        text = await self._get_text(url, headers=headers)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("feed_not_json", feed=self.source_name, url=url, error=str(exc))
            raise FeedShapeError(f"{self.source_name} feed is not valid JSON: {exc}") from exc
