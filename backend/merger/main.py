"""
Merger entrypoint.
Runs one merge pass, publishes the snapshot atomically and flushes metrics.
Exit status is 0 only when a new snapshot was published.
"""
from __future__ import annotations

import asyncio
import sys
import uuid
from pathlib import Path

# Ensure backend root is on path when run as python -m merger.main
_backend = Path(__file__).resolve().parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

from shared.config import get_settings
from shared.utils.http_client import FeedHTTPClient
from shared.utils.logging import bind_run_context, get_logger, setup_logging
from shared.utils.metrics import write_metrics_textfile

from merger.config import get_merger_settings
from merger.engine import MatchMergeEngine
from merger.publisher import publish_snapshot
from merger.sources import NodeFeedSource, PlaylistFeedSource, ScheduleFeedSource

logger = get_logger(__name__)


async def main() -> int:
    setup_logging("merger")
    settings = get_settings()
    merger_settings = get_merger_settings()
    bind_run_context(run_id=uuid.uuid4().hex[:12])
    logger.info("merger_started")

    async with FeedHTTPClient(settings) as http:
        engine = MatchMergeEngine(
            schedule=ScheduleFeedSource(http, merger_settings.schedule_feed_url),
            nodes=NodeFeedSource(
                http,
                merger_settings.node_feed_url_template,
                headers=merger_settings.node_feed_headers,
                success_code=merger_settings.node_success_code,
            ),
            playlist=PlaylistFeedSource(http, merger_settings.playlist_feed_url),
            settings=merger_settings,
        )
        snapshot = await engine.run()

    published = publish_snapshot(
        snapshot,
        merger_settings.output_dir,
        output_filename=merger_settings.output_filename,
        temp_filename=merger_settings.temp_filename,
    )

    if settings.metrics_enabled and settings.metrics_textfile:
        write_metrics_textfile(settings.metrics_textfile)

    logger.info("merger_stopped", published=published, success=snapshot.success)
    return 0 if published else 1


def run() -> None:
    """Console-script entry."""
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
