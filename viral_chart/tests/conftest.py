"""Shared fixtures for the viral chart test-suite."""

import json
from typing import Any, Dict

import pytest

from viral_chart.models.dtos import ChartEntry, LeaderboardFeed


def entry_data(position: int, last_week=None, **overrides) -> Dict[str, Any]:
    """Raw feed record in the shape the chart page publishes."""
    data = {
        "position": position,
        "title": f"Entry {position}",
        "artist": f"creator{position}",
        "platform": "web",
        "peak_position": position,
        "weeks_on_chart": 1 if last_week is None else 2,
        "is_award": False,
    }
    if last_week is not None:
        data["last_week"] = last_week
    data.update(overrides)
    return data


@pytest.fixture
def make_entry():
    """Factory building validated ChartEntry objects."""
    def _make(position: int, last_week=None, **overrides) -> ChartEntry:
        return ChartEntry.model_validate(entry_data(position, last_week, **overrides))
    return _make


@pytest.fixture
def feed_document() -> Dict[str, Any]:
    """A small chart: a hold, a climber, a faller and a new entry."""
    return {
        "metadata": {
            "chart": "Slop 100",
            "week": "October 19, 2026",
            "description": "Test chart",
            "total_entries": 4,
        },
        "rankings": [
            entry_data(1, 1, platform="spotify", is_award=True,
                       metrics={"likes": 641713, "shares": 427142, "comments": 213571, "plays": 854285}),
            entry_data(2, 4, platform="tiktok",
                       metrics={"likes": 1000, "shares": 200, "comments": 100}),
            entry_data(3, 2, platform="youtube",
                       metrics={"likes": 500, "shares": 100, "comments": 50, "plays": 0}),
            entry_data(4, None, platform="web"),
        ],
    }


@pytest.fixture
def sample_feed(feed_document) -> LeaderboardFeed:
    return LeaderboardFeed.model_validate(feed_document)


@pytest.fixture
def feed_file(tmp_path, feed_document):
    path = tmp_path / "chart.json"
    path.write_text(json.dumps(feed_document), encoding="utf-8")
    return path
