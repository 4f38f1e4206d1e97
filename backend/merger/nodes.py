"""
Node resolution for one scheduled match.
Categories are folded in precedence order (recordings, live, pre-show) with a
shared set of seen (pID, name) keys, so the first sighting of a node wins.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

from shared.models.domain import ResolverNode
from shared.models.enums import NODE_CATEGORY_PRECEDENCE, NodeCategory
from shared.utils.logging import get_logger
from shared.utils.metrics import NODE_RESOLUTIONS

from merger.sources.nodes import NodeFeedSource

logger = get_logger(__name__)


def collect_nodes(
    multi_play_list: dict[str, Any],
    precedence: Iterable[NodeCategory] = NODE_CATEGORY_PRECEDENCE,
) -> list[ResolverNode]:
    """Deduplicated nodes across categories; non-list categories and non-object items are skipped."""
    seen: set[str] = set()
    nodes: list[ResolverNode] = []
    for category in precedence:
        items = multi_play_list.get(category.value)
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict):
                continue
            node = ResolverNode(p_id=item.get("pID"), name=item.get("name"))
            if node.dedupe_key in seen:
                continue
            seen.add(node.dedupe_key)
            nodes.append(node)
    return nodes


class NodeResolver:
    """Never raises: a failed lookup degrades that match to an empty node list."""

    def __init__(self, source: NodeFeedSource) -> None:
        self._source = source

    async def resolve(self, mgdb_id: Any) -> list[ResolverNode]:
        multi_play_list: Optional[dict[str, Any]]
        try:
            multi_play_list = await self._source.fetch_multi_play_list(mgdb_id)
        except Exception as exc:
            NODE_RESOLUTIONS.labels(outcome="failed").inc()
            logger.warning(
                "node_resolution_failed",
                mgdb_id=mgdb_id,
                error=str(exc) or type(exc).__name__,
            )
            return []

        if multi_play_list is None:
            NODE_RESOLUTIONS.labels(outcome="empty").inc()
            logger.debug("node_feed_empty", mgdb_id=mgdb_id)
            return []

        nodes = collect_nodes(multi_play_list)
        NODE_RESOLUTIONS.labels(outcome="ok").inc()
        logger.debug("nodes_resolved", mgdb_id=mgdb_id, nodes=len(nodes))
        return nodes
