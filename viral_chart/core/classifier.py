"""
Rank delta classification for a chart period.

Classification runs in two passes over a period: first every entry's
engagement is aggregated and the trending threshold is derived from the
period's distribution, then each entry is classified against that threshold.
"""
import logging
from typing import Iterable, List, Optional

import pandas as pd

from viral_chart.core.metrics import aggregate
from viral_chart.models.dtos import ChartEntry, ClassifiedEntry, RankClassification

logger = logging.getLogger(__name__)

DEFAULT_TRENDING_QUANTILE = 0.75


def compute_trending_threshold(
    totals: Iterable[int], quantile: float = DEFAULT_TRENDING_QUANTILE
) -> Optional[float]:
    """
    Compute the engagement total an entry must exceed to trend on engagement alone.

    Args:
        totals: Engagement totals of every entry in the period that has metrics.
        quantile: Quantile of the distribution to use (0.75 = top quartile).

    Returns:
        The threshold, or None for an empty distribution.
    """
    series = pd.Series(list(totals), dtype="float64")
    if series.empty:
        return None
    return float(series.quantile(quantile))


def classify(entry: ChartEntry, trending_threshold: Optional[float] = None) -> RankClassification:
    """
    Derive movement, status and trending flags for a single entry.

    ``trending_threshold`` must come from the entry's own period (see
    ``compute_trending_threshold``); without one, only movement and recency
    can make an entry trend.
    """
    is_new = entry.last_week_position is None
    if is_new:
        position_change = None
        has_gains = False
    else:
        position_change = entry.last_week_position - entry.position
        has_gains = position_change > 0

    total = None
    formatted = ""
    if entry.metrics is not None:
        summary = aggregate(entry.metrics)
        total = summary.total
        formatted = summary.formatted

    above_threshold = (
        total is not None
        and trending_threshold is not None
        and total > trending_threshold
    )

    return RankClassification(
        position_change=position_change,
        is_new=is_new,
        has_gains=has_gains,
        is_award=entry.is_award,
        is_trending=has_gains or is_new or above_threshold,
        engagement_total=total,
        formatted_engagement=formatted,
    )


def period_threshold(
    entries: List[ChartEntry],
    quantile: float = DEFAULT_TRENDING_QUANTILE,
    threshold: Optional[float] = None,
) -> Optional[float]:
    """Resolve the trending threshold for a period; an explicit threshold wins."""
    if threshold is not None:
        return float(threshold)
    totals = [aggregate(e.metrics).total for e in entries if e.metrics is not None]
    return compute_trending_threshold(totals, quantile)


def classify_period(
    entries: List[ChartEntry],
    quantile: float = DEFAULT_TRENDING_QUANTILE,
    threshold: Optional[float] = None,
) -> List[ClassifiedEntry]:
    """
    Classify every entry of a period.

    Args:
        entries: The period's chart entries.
        quantile: Quantile of the engagement distribution used as the trending
            threshold when no explicit threshold is given.
        threshold: Absolute engagement threshold overriding the quantile.

    Returns:
        Classified entries ordered by position.
    """
    resolved = period_threshold(entries, quantile, threshold)
    logger.debug(f"Classifying {len(entries)} entries with trending threshold {resolved}")

    classified = []
    for entry in sorted(entries, key=lambda e: e.position):
        derived = classify(entry, resolved)
        classified.append(
            ClassifiedEntry(
                **entry.model_dump(exclude={"is_award"}),
                **derived.model_dump(),
            )
        )
    return classified
