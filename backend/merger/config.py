"""
Merger service configuration.
Uses MS_MERGER_ prefix; shared HTTP/logging settings come from get_settings().
"""
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

SCHEDULE_FEED_URL = (
    "https://vms-sc.miguvideo.com/vms-match/v6/staticcache/basic/match-list/"
    "normal-match-list/0/all/default/1/miguvideo"
)
NODE_FEED_URL_TEMPLATE = (
    "https://vms-sc.miguvideo.com/vms-match/v6/staticcache/basic/basic-data/"
    "{mgdb_id}/miguvideo"
)
PLAYLIST_FEED_URL = "http://ikuai.168957.xyz:9080/migu_www.php?VideoDetail=http://1.199.194.152:5555/"

NODE_FEED_HEADERS: dict[str, str] = {
    "appVersion": "2600052000",
    "User-Agent": "Dalvik%2F2.1.0+%28Linux%3B+U%3B+Android+9%3B+TAS-AN00+Build%2FPQ3A.190705.08211809%29",
    "terminalId": "android",
    "appCode": "miguvideo_default_android",
    "appType": "3",
    "appId": "miguvideo",
    "Content-Type": "application/json",
}


class MergerSettings(BaseSettings):
    """Merger-specific settings; use get_settings() for HTTP timeouts and logging."""

    model_config = SettingsConfigDict(
        env_prefix="MS_MERGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Feeds
    schedule_feed_url: str = Field(default=SCHEDULE_FEED_URL, description="Schedule feed (JSON)")
    node_feed_url_template: str = Field(
        default=NODE_FEED_URL_TEMPLATE, description="Per-match node feed; {mgdb_id} is substituted"
    )
    playlist_feed_url: str = Field(default=PLAYLIST_FEED_URL, description="Playlist feed (M3U text)")
    node_feed_headers: dict[str, str] = Field(default_factory=lambda: dict(NODE_FEED_HEADERS))
    node_success_code: int = Field(default=200, description="Body `code` the node feed reports on success")

    # Pacing
    match_delay_s: float = Field(default=0.5, description="Sleep after each scheduled match")

    # Correlation
    time_tolerance_minutes: int = Field(default=30, description="Max kickoff gap, inclusive")
    playlist_group_prefix: str = Field(default="体育-", description="group-title prefix denoting sports")
    playlist_day_suffixes: list[str] = Field(
        default_factory=lambda: ["昨天", "今天", "明天"],
        description="Accepted group-title day suffixes (yesterday, today, tomorrow)",
    )

    # Snapshot
    utc_offset_hours: int = Field(default=8, description="Fixed offset for updateTime")
    output_dir: str = Field(default=".", description="Directory holding the published snapshot")
    output_filename: str = "sports-data-latest.json"
    temp_filename: str = "sports-data-temp.json"


def get_merger_settings() -> MergerSettings:
    """Load merger settings from the environment."""
    return MergerSettings()
