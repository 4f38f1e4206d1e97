"""
Playlist aggregation.

Scans the playlist feed's #EXTINF entries and groups the sports entries for
yesterday/today/tomorrow into candidates keyed by their whitespace-free
tvg-id. Each candidate collects every kickoff time and stream seen for it,
in feed order. Malformed entries are skipped one at a time.
"""
from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from shared.models.domain import PlaylistNode
from shared.models.enums import PlaylistOutcome
from shared.utils.logging import get_logger
from shared.utils.metrics import PLAYLIST_ENTRIES

from merger.normalize import is_hhmm, strip_whitespace
from merger.sources.playlist import PlaylistFeedSource

logger = get_logger(__name__)

EXTINF_MARKER = "#EXTINF:"

_TVG_ID = re.compile(r'tvg-id="([^"]*)"')
_TVG_NAME = re.compile(r'tvg-name="([^"]*)"')
_GROUP_TITLE = re.compile(r'group-title="([^"]*)"')


@dataclass(frozen=True)
class PlaylistEntry:
    identifier_raw: str
    display_name: str
    group_tag: str
    url: str


@dataclass
class AggregatedCandidate:
    """All playlist entries sharing one join key."""
    identifier_raw: str
    normalized_identifier: str
    competition_name: str
    times: list[str] = field(default_factory=list)
    nodes: list[PlaylistNode] = field(default_factory=list)


CandidateMap = dict[str, AggregatedCandidate]


def _extract_attributes(line: str) -> Optional[tuple[str, str, str]]:
    tvg_id = _TVG_ID.search(line)
    tvg_name = _TVG_NAME.search(line)
    group_title = _GROUP_TITLE.search(line)
    if not (tvg_id and tvg_name and group_title):
        return None
    return tvg_id.group(1), tvg_name.group(1), group_title.group(1)


def accumulate_entry(candidates: CandidateMap, entry: PlaylistEntry) -> PlaylistOutcome:
    """
    Fold one entry into the candidate map.

    The display name reads "<competition> <middle> <HH:MM>"; the tvg-id is
    removed from the middle part to leave the stream name.
    """
    display_name = entry.display_name
    first_space = display_name.find(" ")
    if first_space == -1:
        return PlaylistOutcome.MALFORMED_NAME
    last_space = display_name.rfind(" ")
    kickoff = display_name[last_space + 1:].strip()
    if not is_hhmm(kickoff):
        return PlaylistOutcome.BAD_TIME

    competition_name = display_name[:first_space]
    middle = display_name[first_space + 1:last_space].strip()
    name = re.sub(re.escape(entry.identifier_raw), "", middle).strip()
    key = strip_whitespace(entry.identifier_raw)

    candidate = candidates.get(key)
    if candidate is None:
        candidate = AggregatedCandidate(
            identifier_raw=entry.identifier_raw,
            normalized_identifier=key,
            competition_name=competition_name,
        )
        candidates[key] = candidate
    candidate.times.append(kickoff)
    candidate.nodes.append(PlaylistNode(name=name, url=entry.url))
    return PlaylistOutcome.ACCEPTED


class PlaylistAggregator:
    """Builds the candidate map for one run."""

    def __init__(
        self,
        group_prefix: str = "体育-",
        day_suffixes: Iterable[str] = ("昨天", "今天", "明天"),
    ) -> None:
        self._group_prefix = group_prefix
        self._day_suffixes = frozenset(day_suffixes)

    def _check_group(self, group_tag: str) -> Optional[PlaylistOutcome]:
        if not group_tag.startswith(self._group_prefix):
            return PlaylistOutcome.WRONG_GROUP
        if group_tag[len(self._group_prefix):] not in self._day_suffixes:
            return PlaylistOutcome.WRONG_DAY
        return None

    def aggregate(self, text: str) -> CandidateMap:
        candidates: CandidateMap = {}
        outcomes: Counter[str] = Counter()
        lines = text.split("\n")
        i = 0
        while i < len(lines):
            line = lines[i].strip()
            i += 1
            if not line.startswith(EXTINF_MARKER):
                continue

            attributes = _extract_attributes(line)
            if attributes is None:
                outcomes[PlaylistOutcome.MISSING_ATTRIBUTES.value] += 1
                continue
            identifier, display_name, group_tag = attributes
            rejected = self._check_group(group_tag)
            if rejected is not None:
                outcomes[rejected.value] += 1
                continue

            # The stream URL is the next non-blank line.
            while i < len(lines) and not lines[i].strip():
                i += 1
            if i >= len(lines):
                outcomes[PlaylistOutcome.NO_URL.value] += 1
                break
            url = lines[i].strip()
            i += 1

            entry = PlaylistEntry(identifier, display_name, group_tag, url)
            outcomes[accumulate_entry(candidates, entry).value] += 1

        for outcome, count in outcomes.items():
            PLAYLIST_ENTRIES.labels(outcome=outcome).inc(count)
        logger.info(
            "playlist_aggregated",
            candidates=len(candidates),
            outcomes=dict(outcomes),
        )
        return candidates


async def load_candidates(source: PlaylistFeedSource, aggregator: PlaylistAggregator) -> CandidateMap:
    """Fetch and aggregate the playlist; any failure yields an empty map."""
    try:
        text = await source.fetch_playlist()
        return aggregator.aggregate(text)
    except Exception as exc:
        logger.warning("playlist_unavailable", error=str(exc) or type(exc).__name__)
        return {}
