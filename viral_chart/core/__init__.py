"""
Core components for the viral chart service.

Ranking, reward and snapshot logic plus feed loading.
"""

from .classifier import classify, classify_period, compute_trending_threshold
from .exceptions import (
    FeedError,
    MetricsError,
    SubmissionInFlightError,
    SubmissionValidationError,
    ViralChartError,
)
from .feed_loader import load_feed, parse_feed
from .metrics import aggregate, format_engagement
from .rewards import compute_reward, reward_table, score_submission, validate_submission
from .snapshot import build_snapshot, leaderboard_digest, write_snapshot

__all__ = [
    "aggregate",
    "build_snapshot",
    "classify",
    "classify_period",
    "compute_reward",
    "compute_trending_threshold",
    "format_engagement",
    "leaderboard_digest",
    "load_feed",
    "parse_feed",
    "reward_table",
    "score_submission",
    "validate_submission",
    "write_snapshot",
    "FeedError",
    "MetricsError",
    "SubmissionInFlightError",
    "SubmissionValidationError",
    "ViralChartError",
]
