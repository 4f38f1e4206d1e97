from merger.sources.base import FeedShapeError, FeedSource
from merger.sources.nodes import NodeFeedSource
from merger.sources.playlist import PlaylistFeedSource
from merger.sources.schedule import ScheduleFeedSource

__all__ = [
    "FeedShapeError",
    "FeedSource",
    "NodeFeedSource",
    "PlaylistFeedSource",
    "ScheduleFeedSource",
]
