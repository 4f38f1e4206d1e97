"""
Atomic snapshot publishing.
Writes to a temp file, re-reads and validates it, then renames it over the
canonical file. The canonical file is never left half-written or emptied.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from shared.models.domain import Snapshot
from shared.utils.logging import get_logger

logger = get_logger(__name__)


def is_publishable(payload: Any) -> bool:
    return isinstance(payload, dict) and bool(payload.get("success")) and bool(payload.get("data"))


def publish_snapshot(
    snapshot: Snapshot,
    output_dir: str | Path,
    output_filename: str = "sports-data-latest.json",
    temp_filename: str = "sports-data-temp.json",
) -> bool:
    """
    Publish `snapshot` to output_dir/output_filename.

    Returns True if the canonical file was replaced. Failed or empty
    snapshots are not written at all.
    """
    payload = snapshot.to_wire()
    if not is_publishable(payload):
        logger.warning(
            "snapshot_not_published",
            reason="failed_or_empty",
            success=snapshot.success,
            error=snapshot.error,
        )
        return False

    directory = Path(output_dir)
    temp_path = directory / temp_filename
    final_path = directory / output_filename

    try:
        directory.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        written = json.loads(temp_path.read_text(encoding="utf-8"))
        if not is_publishable(written):
            logger.error("snapshot_temp_invalid", path=str(temp_path))
            temp_path.unlink(missing_ok=True)
            return False
        os.replace(temp_path, final_path)
    except (OSError, ValueError) as exc:
        logger.error("snapshot_write_failed", path=str(temp_path), error=str(exc))
        temp_path.unlink(missing_ok=True)
        return False

    logger.info("snapshot_published", path=str(final_path), matches=len(written["data"]))
    return True
