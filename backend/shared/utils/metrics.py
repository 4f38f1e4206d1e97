"""
Metrics for matchstreams runs.
Wraps prometheus_client; a run is a short-lived batch job, so values are
flushed to a textfile-collector file instead of being scraped live.
"""
from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from prometheus_client import REGISTRY, Counter, Gauge, Histogram, write_to_textfile

from shared.utils.logging import get_logger

logger = get_logger(__name__)

# ── Counters ────────────────────────────────────────────────────────────
FEED_REQUESTS = Counter(
    "ms_feed_requests_total",
    "Total feed HTTP attempts",
    ["feed", "status"],
)
PLAYLIST_ENTRIES = Counter(
    "ms_playlist_entries_total",
    "Playlist entries seen during aggregation, by outcome",
    ["outcome"],
)
MATCH_CORRELATIONS = Counter(
    "ms_match_correlations_total",
    "Scheduled matches by playlist correlation outcome",
    ["outcome"],
)
NODE_RESOLUTIONS = Counter(
    "ms_node_resolutions_total",
    "Per-match node feed resolutions, by outcome",
    ["outcome"],
)

# ── Histograms ──────────────────────────────────────────────────────────
FEED_LATENCY = Histogram(
    "ms_feed_latency_seconds",
    "Feed request latency in seconds",
    ["feed"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)
RUN_DURATION = Histogram(
    "ms_run_duration_seconds",
    "Wall time of one merge run",
    buckets=(5, 15, 30, 60, 120, 300, 600),
)

# ── Gauges ──────────────────────────────────────────────────────────────
LAST_RUN_SUCCESS = Gauge(
    "ms_last_run_success",
    "1 if the last run produced a successful snapshot, else 0",
)
LAST_RUN_MATCHES = Gauge(
    "ms_last_run_matches",
    "Number of merged matches in the last snapshot",
)


@asynccontextmanager
async def atrack_latency(histogram: Histogram) -> AsyncIterator[None]:
    """Async context manager that observes the elapsed time on an unlabelled histogram."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def write_metrics_textfile(path: str) -> None:
    """Dump the default registry for node_exporter's textfile collector."""
    try:
        write_to_textfile(path, REGISTRY)
        logger.debug("metrics_textfile_written", path=path)
    except OSError as exc:
        logger.warning("metrics_textfile_failed", path=path, error=str(exc))
