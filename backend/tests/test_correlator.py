"""Unit tests for scheduled-match / playlist-candidate correlation."""
from __future__ import annotations

from shared.models.domain import PlaylistNode, ScheduledMatch
from shared.models.enums import CorrelationOutcome

from merger.correlator import correlate, match_keys, within_tolerance
from merger.playlist import AggregatedCandidate, CandidateMap


def scheduled(keyword: str = "01月03日15:00", **overrides) -> ScheduledMatch:
    data = {
        "mgdbId": "m1",
        "keyword": keyword,
        "competitionName": "NBA",
        "pkInfoTitle": "热火VS76人",
    }
    data.update(overrides)
    return ScheduledMatch.model_validate(data)


def candidate(key: str = "76人VS热火", competition: str = "nba", times=("15:00",), urls=("http://a",)) -> AggregatedCandidate:
    return AggregatedCandidate(
        identifier_raw=key,
        normalized_identifier=key,
        competition_name=competition,
        times=list(times),
        nodes=[PlaylistNode(name=f"n{i}", url=u) for i, u in enumerate(urls)],
    )


def cmap(*cands: AggregatedCandidate) -> CandidateMap:
    # Distinct keys keep insertion order observable even for equal identifiers.
    return {f"{c.normalized_identifier}#{i}": c for i, c in enumerate(cands)}


# ── match keys ──────────────────────────────────────────────────────────

class TestMatchKeys:

    def test_keys(self) -> None:
        keys = match_keys(scheduled())
        assert keys.teams == "76人热火"
        assert keys.competition == "nba"
        assert keys.minutes == 900

    def test_unpadded_hour_has_no_time_key(self) -> None:
        assert match_keys(scheduled(keyword="1月3日 9:05")).minutes is None

    def test_missing_keyword(self) -> None:
        assert match_keys(scheduled(keyword=None)).minutes is None


# ── tolerance ───────────────────────────────────────────────────────────

class TestTolerance:

    def test_inclusive_bound(self) -> None:
        assert within_tolerance(["15:30"], 900, 30)
        assert not within_tolerance(["15:31"], 900, 30)

    def test_any_time_qualifies(self) -> None:
        assert within_tolerance(["09:00", "14:45"], 900, 30)


# ── correlate ───────────────────────────────────────────────────────────

class TestCorrelate:

    def test_25_minute_gap_matches(self) -> None:
        result = correlate(scheduled(), cmap(candidate(times=["15:25"])))
        assert result.outcome is CorrelationOutcome.MATCHED
        assert [n.url for n in result.nodes] == ["http://a"]

    def test_35_minute_gap_does_not_match(self) -> None:
        result = correlate(scheduled(), cmap(candidate(times=["15:35"])))
        assert result.outcome is CorrelationOutcome.UNMATCHED
        assert result.nodes == []

    def test_first_qualifying_candidate_wins(self) -> None:
        first = candidate(times=["15:20"], urls=["http://first"])
        second = candidate(times=["15:00"], urls=["http://second"])
        result = correlate(scheduled(), cmap(first, second))
        assert result.candidate is first
        assert [n.url for n in result.nodes] == ["http://first"]

    def test_competition_must_match_case_insensitively(self) -> None:
        assert correlate(scheduled(), cmap(candidate(competition="Nba"))).outcome is CorrelationOutcome.MATCHED
        assert correlate(scheduled(), cmap(candidate(competition="CBA"))).outcome is CorrelationOutcome.UNMATCHED

    def test_teams_must_match(self) -> None:
        result = correlate(scheduled(), cmap(candidate(key="湖人VS勇士")))
        assert result.outcome is CorrelationOutcome.UNMATCHED

    def test_skipped_without_time_key(self) -> None:
        result = correlate(scheduled(keyword="1月3日 9:05"), cmap(candidate()))
        assert result.outcome is CorrelationOutcome.SKIPPED
        assert result.skipped
        assert result.nodes == []

    def test_nodes_are_copies(self) -> None:
        cand = candidate()
        result = correlate(scheduled(), cmap(cand))
        result.nodes.append(PlaylistNode(name="x", url="y"))
        assert len(cand.nodes) == 1

    def test_no_candidates(self) -> None:
        assert correlate(scheduled(), {}).outcome is CorrelationOutcome.UNMATCHED
