"""
Match correlation: decides which playlist candidate, if any, is the same
real-world event as a scheduled match.

A candidate qualifies when its team key, competition and one of its kickoff
times line up with the match. Candidates are scanned in map order and the
first qualifying one is taken (first-match-wins, not best-match).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from shared.models.domain import PlaylistNode, ScheduledMatch
from shared.models.enums import CorrelationOutcome
from shared.utils.logging import get_logger
from shared.utils.metrics import MATCH_CORRELATIONS

from merger.normalize import is_hhmm, minutes_since_midnight, normalize_team_string
from merger.playlist import AggregatedCandidate, CandidateMap

logger = get_logger(__name__)

DEFAULT_TOLERANCE_MINUTES = 30


@dataclass(frozen=True)
class MatchKeys:
    """Comparison keys derived once per scheduled match."""
    teams: str
    competition: str
    minutes: Optional[int]


@dataclass
class CorrelationResult:
    outcome: CorrelationOutcome
    candidate: Optional[AggregatedCandidate] = None
    nodes: list[PlaylistNode] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.outcome is CorrelationOutcome.SKIPPED


def match_keys(match: ScheduledMatch) -> MatchKeys:
    # The raw keyword, not its formatted form, supplies the kickoff time.
    keyword = match.keyword if isinstance(match.keyword, str) else ""
    time_str = keyword[-5:]
    return MatchKeys(
        teams=normalize_team_string(match.pk_info_title),
        competition=(match.competition_name or "").lower(),
        minutes=minutes_since_midnight(time_str) if is_hhmm(time_str) else None,
    )


def within_tolerance(times: list[str], minutes: int, tolerance: int) -> bool:
    """True if any recorded HH:MM is at most `tolerance` minutes from `minutes`."""
    return any(abs(minutes_since_midnight(t) - minutes) <= tolerance for t in times)


def candidate_matches(
    keys: MatchKeys,
    candidate: AggregatedCandidate,
    tolerance: int = DEFAULT_TOLERANCE_MINUTES,
) -> bool:
    if keys.minutes is None:
        return False
    if normalize_team_string(candidate.normalized_identifier) != keys.teams:
        return False
    if candidate.competition_name.lower() != keys.competition:
        return False
    return within_tolerance(candidate.times, keys.minutes, tolerance)


def correlate(
    match: ScheduledMatch,
    candidates: CandidateMap,
    tolerance: int = DEFAULT_TOLERANCE_MINUTES,
) -> CorrelationResult:
    """
    Find the playlist candidate for `match`.

    A match whose keyword does not end in HH:MM has no time key and is
    reported as SKIPPED; its resolver nodes are still published.
    """
    keys = match_keys(match)
    if keys.minutes is None:
        MATCH_CORRELATIONS.labels(outcome=CorrelationOutcome.SKIPPED.value).inc()
        logger.info("correlation_skipped", mgdb_id=match.mgdb_id, keyword=match.keyword)
        return CorrelationResult(outcome=CorrelationOutcome.SKIPPED)

    for candidate in candidates.values():
        if not candidate_matches(keys, candidate, tolerance):
            continue
        nodes = [PlaylistNode(url=node.url, name=node.name) for node in candidate.nodes]
        MATCH_CORRELATIONS.labels(outcome=CorrelationOutcome.MATCHED.value).inc()
        logger.info(
            "playlist_candidate_matched",
            mgdb_id=match.mgdb_id,
            tvg_id=candidate.identifier_raw,
            nodes=len(nodes),
        )
        return CorrelationResult(outcome=CorrelationOutcome.MATCHED, candidate=candidate, nodes=nodes)

    MATCH_CORRELATIONS.labels(outcome=CorrelationOutcome.UNMATCHED.value).inc()
    return CorrelationResult(outcome=CorrelationOutcome.UNMATCHED)
