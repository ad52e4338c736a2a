"""
Presentation services for the viral chart.

This module provides the leaderboard view builder, the rune ledger, the
submission processor and the snapshot writer used by the API and the CLI.
"""

from .leaderboard_service import LeaderboardService
from .ledger import RuneLedger
from .snapshot_service import snapshot_worker, take_snapshot
from .submission_service import SubmissionService

__all__ = ["LeaderboardService", "RuneLedger", "SubmissionService", "snapshot_worker", "take_snapshot"]
