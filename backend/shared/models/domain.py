"""
Pydantic v2 domain models shared across matchstreams.
These are the wire representations of the feeds and of the published snapshot.
Field names are snake_case; aliases carry the feeds' camelCase keys.
"""
from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ── Base ────────────────────────────────────────────────────────────────
class DomainModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the feed's camelCase keys."""
        return self.model_dump(by_alias=True)


# ── Playable nodes ──────────────────────────────────────────────────────
class ResolverNode(DomainModel):
    """Node sourced from the per-match node feed."""
    p_id: Any = Field(default=None, alias="pID")
    name: Any = None

    @property
    def dedupe_key(self) -> str:
        return f"{self.p_id}|{self.name}"


class PlaylistNode(DomainModel):
    """Node sourced from a correlated playlist candidate."""
    url: str
    name: str


PlayableNode = Union[ResolverNode, PlaylistNode]


# ── Schedule feed ───────────────────────────────────────────────────────
class ScheduledMatch(DomainModel):
    """One entry of the schedule feed's body.matchList[date_key]."""
    mgdb_id: Any = Field(default=None, alias="mgdbId")
    p_id: Any = Field(default=None, alias="pID")
    title: Any = None
    keyword: Any = None
    sport_item_id: Any = Field(default=None, alias="sportItemId")
    match_status: Any = Field(default=None, alias="matchStatus")
    match_field: Any = Field(default=None, alias="matchField")
    competition_name: Optional[str] = Field(default=None, alias="competitionName")
    pad_img: Any = Field(default=None, alias="padImg")
    competition_logo: Any = Field(default=None, alias="competitionLogo")
    pk_info_title: Optional[str] = Field(default=None, alias="pkInfoTitle")
    modify_title: Any = Field(default=None, alias="modifyTitle")
    presenters: Optional[list[Any]] = None

    @property
    def presenter_names(self) -> str:
        if not self.presenters:
            return ""
        return " ".join(
            str(p.get("name") or "") if isinstance(p, dict) else "" for p in self.presenters
        )


# ── Output ──────────────────────────────────────────────────────────────
class MatchInfo(DomainModel):
    time: Any = None


class MergedMatch(DomainModel):
    """Scheduled match display fields plus every playable node found for it."""
    mgdb_id: Any = Field(default=None, alias="mgdbId")
    p_id: Any = Field(default=None, alias="pID")
    title: Any = None
    keyword: Any = None
    sport_item_id: Any = Field(default=None, alias="sportItemId")
    match_status: Any = Field(default=None, alias="matchStatus")
    match_field: Any = Field(default="", alias="matchField")
    competition_name: Optional[str] = Field(default=None, alias="competitionName")
    pad_img: Any = Field(default="", alias="padImg")
    competition_logo: Any = Field(default="", alias="competitionLogo")
    pk_info_title: Optional[str] = Field(default=None, alias="pkInfoTitle")
    modify_title: Any = Field(default=None, alias="modifyTitle")
    presenters: str = ""
    match_info: MatchInfo = Field(default_factory=MatchInfo, alias="matchInfo")
    nodes: list[PlayableNode] = Field(default_factory=list)
    correlation_skipped: bool = Field(default=False, alias="correlationSkipped")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Snapshot(DomainModel):
    """One run's result. `error` is only present on failed runs."""
    success: bool
    error: Optional[str] = None
    update_time: str = Field(alias="updateTime")
    data: list[MergedMatch] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        if payload.get("error") is None:
            payload.pop("error", None)
        return payload
