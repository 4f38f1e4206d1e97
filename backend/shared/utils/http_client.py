"""
Async HTTP client wrapper for feed requests.
Fixed per-attempt timeout, bounded retries with a fixed backoff, and metrics per attempt.
"""
from __future__ import annotations

import asyncio
import time
from typing import Optional

import httpx

from shared.config import Settings, get_settings
from shared.utils.logging import get_logger
from shared.utils.metrics import FEED_LATENCY, FEED_REQUESTS

logger = get_logger(__name__)


class FeedHTTPClient:
    """
    Async HTTP client for upstream feeds.

    Every failure kind (timeout, connection error, non-2xx status) is retried
    until the attempt budget is spent; the last error is then re-raised.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        headers: dict[str, str] | None = None,
        timeout_s: float | None = None,
        max_attempts: int | None = None,
        retry_delay_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._timeout = timeout_s if timeout_s is not None else settings.request_timeout_s
        self._max_attempts = max(1, max_attempts if max_attempts is not None else settings.request_max_attempts)
        self._retry_delay = retry_delay_s if retry_delay_s is not None else settings.request_retry_delay_s
        self._default_headers = headers or {}
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def start(self) -> None:
        """Initialize the underlying httpx client."""
        self._client = httpx.AsyncClient(
            headers=self._default_headers,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying httpx client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FeedHTTPClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get(
        self,
        url: str,
        headers: dict[str, str] | None = None,
        feed: str = "unknown",
    ) -> httpx.Response:
        """
        Perform a GET request with retry, metrics, and structured logging.

        Args:
            url: Absolute URL of the feed document.
            headers: Request-specific headers merged over the defaults.
            feed: Feed label for logs and metrics.

        Returns:
            httpx.Response with a 2xx status.

        Raises:
            httpx.HTTPError or httpx.InvalidURL: the error of the final attempt.
        """
        if not self._client:
            raise RuntimeError("FeedHTTPClient not started. Call start() first.")

        last_exc: Optional[Exception] = None
        for attempt in range(1, self._max_attempts + 1):
            start_time = time.perf_counter()
            status = "unknown"
            try:
                resp = await self._client.get(url, headers=headers)
                status = str(resp.status_code)
                resp.raise_for_status()
                logger.debug(
                    "feed_request_success",
                    feed=feed,
                    url=url,
                    status=resp.status_code,
                    latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
                )
                return resp

            except httpx.TimeoutException as exc:
                status = "timeout"
                last_exc = exc
            except httpx.HTTPStatusError as exc:
                last_exc = exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                status = "error"
                last_exc = exc

            finally:
                FEED_REQUESTS.labels(feed=feed, status=status).inc()
                FEED_LATENCY.labels(feed=feed).observe(time.perf_counter() - start_time)

            logger.warning(
                "feed_request_failed",
                feed=feed,
                url=url,
                attempt=attempt,
                max_attempts=self._max_attempts,
                error=str(last_exc) or type(last_exc).__name__,
            )
            if attempt < self._max_attempts:
                await asyncio.sleep(self._retry_delay)

        # All attempts exhausted
        if last_exc:
            raise last_exc
        raise RuntimeError(f"Feed request failed after {self._max_attempts} attempts")
