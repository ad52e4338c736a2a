"""
Chart feed loading.

Reads a period's chart from a JSON or YAML document and validates it into a
``LeaderboardFeed``.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from viral_chart.core.exceptions import FeedError
from viral_chart.models.dtos import LeaderboardFeed

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def period_label(moment: datetime) -> str:
    """Format a date as a period label, e.g. ``October 19, 2026``."""
    return f"{moment:%B} {moment.day}, {moment.year}"


def parse_feed(data: Dict[str, Any], now: Optional[datetime] = None) -> LeaderboardFeed:
    """
    Validate a raw feed document.

    Missing header values (period label, timestamps, entry count) are filled
    in from ``now`` and the rankings.

    Raises:
        FeedError: If the document does not describe a valid chart.
    """
    if not isinstance(data, dict):
        raise FeedError(f"Feed document must be a mapping, got {type(data).__name__}")
    try:
        feed = LeaderboardFeed.model_validate(data)
    except ValidationError as e:
        raise FeedError(f"Invalid chart feed: {e}") from e

    now = now or datetime.now(timezone.utc)
    metadata = feed.metadata
    if not metadata.week:
        metadata.week = period_label(now)
    if metadata.timestamp is None:
        metadata.timestamp = now
    if metadata.last_updated is None:
        metadata.last_updated = now
    if metadata.total_entries is None:
        metadata.total_entries = len(feed.rankings)
    return feed


def load_feed(path: Union[str, Path], now: Optional[datetime] = None) -> LeaderboardFeed:
    """
    Load and validate a chart feed file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file.
        now: Reference time for defaulted header values.

    Returns:
        LeaderboardFeed: The validated feed, rankings ordered by position.

    Raises:
        FeedError: If the file is missing, unparsable or invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FeedError(f"Feed file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise FeedError(f"Could not parse feed file {path}: {e}") from e
    except OSError as e:
        raise FeedError(f"Could not read feed file {path}: {e}") from e

    feed = parse_feed(data, now=now)
    logger.info(f"Loaded feed '{feed.metadata.chart}' with {len(feed.rankings)} entries from {path}")
    return feed
