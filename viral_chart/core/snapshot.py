"""
Leaderboard snapshots.

A snapshot freezes one period's leaderboard view into a JSON document with a
unique id, a creation time and a SHA-256 digest of the leaderboard content,
so that a published chart can later be verified against its source.
"""
import hashlib
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from viral_chart.models.dtos import LeaderboardView, SnapshotDocument, SnapshotMetadata

logger = logging.getLogger(__name__)


def leaderboard_digest(view: LeaderboardView) -> str:
    """SHA-256 hex digest of the view's canonical JSON (sorted keys, compact separators)."""
    canonical = json.dumps(view.model_dump(mode="json"), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def build_snapshot(
    view: LeaderboardView,
    protocol: str = "slop100",
    version: str = "1.0",
    created_at: Optional[datetime] = None,
) -> SnapshotDocument:
    """Wrap a leaderboard view with snapshot metadata."""
    metadata = SnapshotMetadata(
        snapshot_id=str(uuid.uuid4()),
        created_at=created_at or datetime.now(timezone.utc),
        protocol=protocol,
        version=version,
        digest=leaderboard_digest(view),
    )
    logger.info(f"Prepared snapshot {metadata.snapshot_id} (digest {metadata.digest[:12]})")
    return SnapshotDocument(leaderboard=view, snapshot_metadata=metadata)


def snapshot_filename(document: SnapshotDocument) -> str:
    meta = document.snapshot_metadata
    return f"snapshot_{meta.snapshot_id}_{meta.created_at:%Y%m%d_%H%M%S}.json"


def write_snapshot(document: SnapshotDocument, directory: Union[str, Path]) -> Path:
    """
    Write a snapshot document as pretty-printed JSON.

    Args:
        document: The snapshot to write.
        directory: Target directory, created if missing.

    Returns:
        Path: The written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / snapshot_filename(document)
    payload = document.model_dump_json(indent=2)
    path.write_text(payload, encoding="utf-8")
    logger.info(f"Snapshot written to {path} ({len(payload.encode('utf-8'))} bytes)")
    return path
