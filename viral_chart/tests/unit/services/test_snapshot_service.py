import asyncio
import json
from unittest.mock import patch

import pytest

from viral_chart.core.exceptions import FeedError
from viral_chart.services import LeaderboardService, snapshot_worker, take_snapshot


def test_take_snapshot_rereads_feed(tmp_path, feed_file):
    service = LeaderboardService(feed_path=feed_file)

    document = take_snapshot(service, tmp_path / "out", protocol="slop100", version="1.0")

    files = list((tmp_path / "out").glob("snapshot_*.json"))
    assert len(files) == 1
    written = json.loads(files[0].read_text(encoding="utf-8"))
    assert written["snapshot_metadata"]["snapshot_id"] == document.snapshot_metadata.snapshot_id
    assert service.is_loaded


@pytest.mark.asyncio
async def test_worker_writes_one_snapshot_per_tick(tmp_path, feed_file):
    service = LeaderboardService(feed_path=feed_file)

    written = await snapshot_worker(service, tmp_path, interval_seconds=0.01, max_runs=2)

    assert written == 2
    assert len(list(tmp_path.glob("snapshot_*.json"))) == 2


@pytest.mark.asyncio
async def test_worker_continues_after_failed_run(tmp_path, feed_file):
    service = LeaderboardService(feed_path=feed_file)
    view = service.refresh()

    with patch.object(service, "refresh", side_effect=[FeedError("Feed file not found: chart.json"), view]):
        written = await snapshot_worker(service, tmp_path / "out", interval_seconds=0.01, max_runs=2)

    assert written == 1
    assert len(list((tmp_path / "out").glob("snapshot_*.json"))) == 1


@pytest.mark.asyncio
async def test_worker_cancellation(tmp_path, feed_file):
    service = LeaderboardService(feed_path=feed_file)
    task = asyncio.create_task(snapshot_worker(service, tmp_path, interval_seconds=60))
    await asyncio.sleep(0.05)

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert len(list(tmp_path.glob("snapshot_*.json"))) == 1
