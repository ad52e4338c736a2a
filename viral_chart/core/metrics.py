"""
Metric aggregation for chart entries.

Reduces an entry's engagement counters to a single comparable total and a
short human-readable string ("2.1M", "1.5K", "999").
"""
import logging
from decimal import ROUND_HALF_UP, Decimal

from viral_chart.core.exceptions import MetricsError
from viral_chart.models.dtos import EngagementMetrics, EngagementSummary

logger = logging.getLogger(__name__)

MILLION = 1_000_000
THOUSAND = 1_000
ONE_DECIMAL = Decimal("0.1")


def engagement_total(metrics: EngagementMetrics) -> int:
    """Sum likes, shares, comments and plays (absent plays count as zero)."""
    total = metrics.likes + metrics.shares + metrics.comments + (metrics.plays or 0)
    if total < 0:
        # Only reachable when a caller bypasses model validation.
        raise MetricsError(f"Engagement total must be non-negative, got {total}")
    return total


def format_engagement(total: int) -> str:
    """
    Format an engagement total into a magnitude bucket with one decimal.

    Bucket boundaries are strict: exactly 1,000,000 formats as "1000.0K" and
    exactly 1,000 as "1000". The decimal is rounded half up, so 1,250 formats
    as "1.3K" and 3,250,000 as "3.3M".
    """
    if total > MILLION:
        return f"{_one_decimal(total, MILLION)}M"
    if total > THOUSAND:
        return f"{_one_decimal(total, THOUSAND)}K"
    return str(total)


def _one_decimal(total: int, unit: int) -> Decimal:
    return (Decimal(total) / Decimal(unit)).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def aggregate(metrics: EngagementMetrics) -> EngagementSummary:
    """
    Aggregate an entry's metrics bundle.

    Args:
        metrics: The entry's engagement counters.

    Returns:
        EngagementSummary: The total and its formatted representation.
    """
    total = engagement_total(metrics)
    return EngagementSummary(total=total, formatted=format_engagement(total))
