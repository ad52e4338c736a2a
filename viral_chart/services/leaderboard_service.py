"""
Leaderboard service.

Holds the current period's feed and builds the view the presenter renders:
classified rankings, the featured entry and overview statistics.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from viral_chart.config import get_settings
from viral_chart.core.classifier import classify_period, period_threshold
from viral_chart.core.feed_loader import load_feed
from viral_chart.core.metrics import format_engagement
from viral_chart.models.dtos import (
    ClassifiedEntry,
    LeaderboardFeed,
    LeaderboardView,
    PeriodStats,
)

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Builds and caches the leaderboard view for the current period.

    The feed is re-read on ``refresh``; until then the last built view is
    served.
    """

    def __init__(
        self,
        feed_path: Optional[Union[str, Path]] = None,
        quantile: Optional[float] = None,
        threshold: Optional[float] = None,
    ):
        """
        Initialize the leaderboard service.

        Args:
            feed_path: Chart feed file; defaults to the configured feed
            quantile: Trending quantile; defaults to the configured value
            threshold: Absolute trending threshold overriding the quantile
        """
        settings = get_settings()
        self.feed_path = Path(feed_path or settings.FEED_PATH)
        self.quantile = quantile if quantile is not None else settings.TRENDING_QUANTILE
        self.threshold = threshold if threshold is not None else settings.TRENDING_THRESHOLD
        self._view: Optional[LeaderboardView] = None

    @property
    def is_loaded(self) -> bool:
        return self._view is not None

    def refresh(self) -> LeaderboardView:
        """
        Reload the feed file and rebuild the view.

        Raises:
            FeedError: If the feed cannot be loaded; the previous view is kept.
        """
        feed = load_feed(self.feed_path)
        self._view = self.build_view(feed)
        logger.info(
            f"Leaderboard refreshed: {len(self._view.rankings)} entries, "
            f"trending threshold {self._view.trending_threshold}"
        )
        return self._view

    def load(self, feed: LeaderboardFeed) -> LeaderboardView:
        """Replace the current view with one built from an in-memory feed."""
        self._view = self.build_view(feed)
        return self._view

    def get_view(self, limit: Optional[int] = None) -> LeaderboardView:
        """
        Get the current view, loading the feed on first use.

        Args:
            limit: Maximum number of ranked entries to include

        Returns:
            LeaderboardView: The current period's view
        """
        view = self._view or self.refresh()
        if limit is None or limit >= len(view.rankings):
            return view
        return view.model_copy(update={"rankings": view.rankings[:limit]})

    def get_entry(self, position: int) -> Optional[ClassifiedEntry]:
        for entry in self.get_view().rankings:
            if entry.position == position:
                return entry
        return None

    def build_view(self, feed: LeaderboardFeed) -> LeaderboardView:
        threshold = period_threshold(feed.rankings, self.quantile, self.threshold)
        rankings = classify_period(feed.rankings, threshold=threshold)

        featured = rankings[0] if rankings else None
        weeks_at_number_one = None
        if featured is not None:
            weeks_at_number_one = "2+" if featured.last_week_position == 1 else "1"

        return LeaderboardView(
            metadata=feed.metadata,
            featured=featured,
            weeks_at_number_one=weeks_at_number_one,
            trending_threshold=threshold,
            rankings=rankings,
            stats=self.calculate_period_stats(rankings),
        )

    def calculate_period_stats(self, entries: List[ClassifiedEntry]) -> PeriodStats:
        """
        Calculate overview statistics for a classified period.

        Args:
            entries: Classified entries of the period

        Returns:
            PeriodStats: Counts of new, gaining, trending and award entries,
            total engagement and entries per platform
        """
        if not entries:
            return PeriodStats()

        df = pd.DataFrame([e.model_dump() for e in entries])

        total_engagement = int(df["engagement_total"].fillna(0).sum())
        platform_counts = df["platform"].fillna("unknown").value_counts()

        return PeriodStats(
            total_entries=len(df),
            new_entries=int(df["is_new"].sum()),
            gainers=int(df["has_gains"].sum()),
            trending=int(df["is_trending"].sum()),
            awards=int(df["is_award"].sum()),
            total_engagement=total_engagement,
            formatted_engagement=format_engagement(total_engagement),
            entries_by_platform={str(k): int(v) for k, v in platform_counts.items()},
        )
