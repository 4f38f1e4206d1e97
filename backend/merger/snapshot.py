"""
Snapshot assembly: merged per-match records wrapped with run status and capture time.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from shared.models.domain import MatchInfo, MergedMatch, PlayableNode, ScheduledMatch, Snapshot

from merger.correlator import CorrelationResult
from merger.normalize import format_date_time

UPDATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def capture_timestamp(utc_offset_hours: int = 8, now: Optional[datetime] = None) -> str:
    """Wall-clock time at a fixed UTC offset, e.g. '2026-10-19 20:15:03'."""
    tz = timezone(timedelta(hours=utc_offset_hours))
    current = now.astimezone(tz) if now else datetime.now(tz)
    return current.strftime(UPDATE_TIME_FORMAT)


def merge_match(
    match: ScheduledMatch,
    base_nodes: Sequence[PlayableNode],
    correlation: CorrelationResult,
) -> MergedMatch:
    """Resolver nodes first, then the correlated playlist nodes."""
    keyword = format_date_time(match.keyword)
    return MergedMatch(
        mgdb_id=match.mgdb_id,
        p_id=match.p_id,
        title=match.title,
        keyword=keyword,
        sport_item_id=match.sport_item_id,
        match_status=match.match_status,
        match_field=match.match_field or "",
        competition_name=match.competition_name,
        pad_img=match.pad_img or "",
        competition_logo=match.competition_logo or "",
        pk_info_title=match.pk_info_title,
        modify_title=match.modify_title,
        presenters=match.presenter_names,
        match_info=MatchInfo(time=keyword),
        nodes=[*base_nodes, *correlation.nodes],
        correlation_skipped=correlation.skipped,
    )


def build_snapshot(matches: Sequence[MergedMatch], update_time: str) -> Snapshot:
    return Snapshot(success=True, update_time=update_time, data=list(matches))


def failed_snapshot(error: str, update_time: str) -> Snapshot:
    return Snapshot(success=False, error=error, update_time=update_time, data=[])
