"""
Models package for the viral chart service.

This package contains the Pydantic DTOs shared by the core, the services and
the API.
"""

from .dtos import (
    BalanceResponse,
    ChartEntry,
    ChartMetadata,
    ClassifiedEntry,
    EngagementMetrics,
    EngagementSummary,
    LeaderboardFeed,
    LeaderboardView,
    PeriodStats,
    RankClassification,
    RewardResult,
    RewardTable,
    SnapshotDocument,
    SnapshotMetadata,
    SubmissionReceipt,
    SubmissionRequest,
)

__all__ = [
    "BalanceResponse",
    "ChartEntry",
    "ChartMetadata",
    "ClassifiedEntry",
    "EngagementMetrics",
    "EngagementSummary",
    "LeaderboardFeed",
    "LeaderboardView",
    "PeriodStats",
    "RankClassification",
    "RewardResult",
    "RewardTable",
    "SnapshotDocument",
    "SnapshotMetadata",
    "SubmissionReceipt",
    "SubmissionRequest",
]
