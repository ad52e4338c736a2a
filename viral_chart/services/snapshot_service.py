"""
Snapshot production for the viral chart.

Writes one snapshot of the current chart on demand, or keeps writing them on a
fixed schedule.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Union

from viral_chart.core.exceptions import FeedError
from viral_chart.core.snapshot import build_snapshot, write_snapshot
from viral_chart.models.dtos import SnapshotDocument

from .leaderboard_service import LeaderboardService

logger = logging.getLogger(__name__)


def take_snapshot(
    service: LeaderboardService,
    directory: Union[str, Path],
    protocol: str = "slop100",
    version: str = "1.0",
) -> SnapshotDocument:
    """
    Re-read the feed and write a snapshot of the resulting view.

    Raises:
        FeedError: If the feed cannot be loaded.
        OSError: If the snapshot file cannot be written.
    """
    view = service.refresh()
    document = build_snapshot(view, protocol=protocol, version=version)
    write_snapshot(document, directory)
    return document


async def snapshot_worker(
    service: LeaderboardService,
    directory: Union[str, Path],
    interval_seconds: float,
    protocol: str = "slop100",
    version: str = "1.0",
    max_runs: Optional[int] = None,
) -> int:
    """
    Background worker that writes a snapshot now and then once per interval.

    A failed run is logged and the schedule continues.

    Args:
        service: Source of the leaderboard view.
        directory: Where snapshot files are written.
        interval_seconds: Pause between runs.
        protocol: Protocol tag recorded in each snapshot.
        version: Version tag recorded in each snapshot.
        max_runs: Stop after this many attempts; run forever if None.

    Returns:
        int: Number of snapshots written successfully.
    """
    logger.info(f"Snapshot worker started. Interval: {interval_seconds}s")
    attempts = 0
    written = 0
    try:
        while True:
            attempts += 1
            try:
                document = take_snapshot(service, directory, protocol=protocol, version=version)
                written += 1
                logger.info(f"Scheduled snapshot {document.snapshot_metadata.snapshot_id} written")
            except FeedError as e:
                logger.error(f"Scheduled snapshot failed: {e.message}")
            except OSError as e:
                logger.error(f"Scheduled snapshot could not be written: {e}")

            if max_runs is not None and attempts >= max_runs:
                logger.info(f"Snapshot worker finished after {attempts} runs ({written} written)")
                return written
            await asyncio.sleep(interval_seconds)
    except asyncio.CancelledError:
        logger.info("Snapshot worker cancelled. Shutting down.")
        raise
