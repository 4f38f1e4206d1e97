"""Domain enumerations for matchstreams."""
from __future__ import annotations

from enum import Enum


class NodeCategory(str, Enum):
    """Node-feed list keys, declared in precedence order."""
    REPLAY = "replayList"
    LIVE = "liveList"
    PRE = "preList"


# Recordings first, then live, then upcoming/pre-show. First sighting of a node wins.
NODE_CATEGORY_PRECEDENCE: tuple[NodeCategory, ...] = (
    NodeCategory.REPLAY,
    NodeCategory.LIVE,
    NodeCategory.PRE,
)


class CorrelationOutcome(str, Enum):
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    SKIPPED = "skipped"


class PlaylistOutcome(str, Enum):
    ACCEPTED = "accepted"
    MISSING_ATTRIBUTES = "missing_attributes"
    WRONG_GROUP = "wrong_group"
    WRONG_DAY = "wrong_day"
    NO_URL = "no_url"
    MALFORMED_NAME = "malformed_name"
    BAD_TIME = "bad_time"
