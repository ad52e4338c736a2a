import json

import pytest

from viral_chart.core.exceptions import FeedError
from viral_chart.services import LeaderboardService


class TestLeaderboardService:
    """Test cases for LeaderboardService."""

    def test_refresh_builds_view(self, feed_file):
        service = LeaderboardService(feed_path=feed_file)

        view = service.refresh()

        assert service.is_loaded
        assert view.metadata.chart == "Slop 100"
        assert [e.position for e in view.rankings] == [1, 2, 3, 4]
        assert view.trending_threshold == pytest.approx(1_069_005.5)

    def test_featured_entry(self, feed_file):
        view = LeaderboardService(feed_path=feed_file).get_view()

        assert view.featured.position == 1
        assert view.weeks_at_number_one == "2+"

    def test_featured_first_week_at_number_one(self, sample_feed):
        sample_feed.rankings[0].last_week_position = 2
        view = LeaderboardService(feed_path="unused.json").load(sample_feed)

        assert view.weeks_at_number_one == "1"

    def test_period_stats(self, feed_file):
        stats = LeaderboardService(feed_path=feed_file).get_view().stats

        assert stats.total_entries == 4
        assert stats.new_entries == 1
        assert stats.gainers == 1
        assert stats.trending == 3
        assert stats.awards == 1
        assert stats.total_engagement == 2_138_661
        assert stats.formatted_engagement == "2.1M"
        assert stats.entries_by_platform == {"spotify": 1, "tiktok": 1, "youtube": 1, "web": 1}

    def test_empty_period_stats(self):
        stats = LeaderboardService(feed_path="unused.json").calculate_period_stats([])

        assert stats.total_entries == 0
        assert stats.formatted_engagement == "0"

    def test_get_view_limit(self, feed_file):
        service = LeaderboardService(feed_path=feed_file)

        limited = service.get_view(limit=2)

        assert [e.position for e in limited.rankings] == [1, 2]
        # Stats still describe the whole period.
        assert limited.stats.total_entries == 4
        assert len(service.get_view().rankings) == 4

    def test_get_entry(self, feed_file):
        service = LeaderboardService(feed_path=feed_file)

        assert service.get_entry(3).position_change == -1
        assert service.get_entry(42) is None

    def test_explicit_threshold(self, feed_file):
        view = LeaderboardService(feed_path=feed_file, threshold=500).get_view()

        faller = view.rankings[2]
        assert view.trending_threshold == 500.0
        assert faller.is_trending is True

    def test_refresh_failure_keeps_previous_view(self, feed_file):
        service = LeaderboardService(feed_path=feed_file)
        service.refresh()
        feed_file.write_text(json.dumps({"rankings": [{"position": "x"}]}), encoding="utf-8")

        with pytest.raises(FeedError):
            service.refresh()

        assert len(service.get_view().rankings) == 4

    def test_undecodable_feed_keeps_previous_view(self, feed_file):
        service = LeaderboardService(feed_path=feed_file)
        service.refresh()
        feed_file.write_bytes(b"\xff\xfe garbage")

        with pytest.raises(FeedError):
            service.refresh()

        assert len(service.get_view().rankings) == 4

    def test_missing_feed(self, tmp_path):
        service = LeaderboardService(feed_path=tmp_path / "missing.json")

        with pytest.raises(FeedError):
            service.get_view()
