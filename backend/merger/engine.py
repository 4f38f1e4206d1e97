"""
Match merge engine.
One pass: aggregate the playlist feed, walk the schedule feed date by date,
resolve each match's nodes, correlate it against the playlist candidates and
assemble the snapshot. Fetches are sequential and paced between matches.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

from shared.models.domain import MergedMatch, ScheduledMatch, Snapshot
from shared.utils.logging import get_logger
from shared.utils.metrics import LAST_RUN_MATCHES, LAST_RUN_SUCCESS, RUN_DURATION, atrack_latency

from merger.config import MergerSettings, get_merger_settings
from merger.correlator import correlate
from merger.nodes import NodeResolver
from merger.playlist import CandidateMap, PlaylistAggregator, load_candidates
from merger.snapshot import build_snapshot, capture_timestamp, failed_snapshot, merge_match
from merger.sources.nodes import NodeFeedSource
from merger.sources.playlist import PlaylistFeedSource
from merger.sources.schedule import ScheduleFeedSource

logger = get_logger(__name__)


class MatchMergeEngine:
    """Produces one Snapshot per call to run(); run() never raises."""

    def __init__(
        self,
        schedule: ScheduleFeedSource,
        nodes: NodeFeedSource,
        playlist: PlaylistFeedSource,
        settings: Optional[MergerSettings] = None,
    ) -> None:
        self._settings = settings or get_merger_settings()
        self._schedule = schedule
        self._resolver = NodeResolver(nodes)
        self._playlist = playlist
        self._aggregator = PlaylistAggregator(
            group_prefix=self._settings.playlist_group_prefix,
            day_suffixes=self._settings.playlist_day_suffixes,
        )

    async def merge_one(self, raw_match: Any, candidates: CandidateMap) -> MergedMatch:
        match = ScheduledMatch.model_validate(raw_match)
        base_nodes = await self._resolver.resolve(match.mgdb_id)
        correlation = correlate(match, candidates, self._settings.time_tolerance_minutes)
        return merge_match(match, base_nodes, correlation)

    async def collect(self) -> list[MergedMatch]:
        """Merged matches in date-key order; shared-setup failures propagate."""
        candidates = await load_candidates(self._playlist, self._aggregator)
        match_list = await self._schedule.fetch_match_list()

        merged: list[MergedMatch] = []
        for date_key in sorted(match_list):
            day_matches = match_list[date_key] or []
            logger.info("processing_date", date_key=date_key, matches=len(day_matches))
            for raw_match in day_matches:
                merged.append(await self.merge_one(raw_match, candidates))
                await asyncio.sleep(self._settings.match_delay_s)
        return merged

    async def run(self) -> Snapshot:
        async with atrack_latency(RUN_DURATION):
            try:
                merged = await self.collect()
            except Exception as exc:
                logger.exception("merge_run_failed", error=str(exc))
                snapshot = failed_snapshot(
                    str(exc) or type(exc).__name__,
                    capture_timestamp(self._settings.utc_offset_hours),
                )
            else:
                snapshot = build_snapshot(merged, capture_timestamp(self._settings.utc_offset_hours))
                logger.info("merge_run_complete", matches=len(merged))

        LAST_RUN_SUCCESS.set(1 if snapshot.success else 0)
        LAST_RUN_MATCHES.set(len(snapshot.data))
        return snapshot
