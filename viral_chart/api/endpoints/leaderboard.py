"""
Leaderboard API endpoints.

Serves the current period's classified chart.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from viral_chart.core.exceptions import FeedError
from viral_chart.models.dtos import ClassifiedEntry, LeaderboardView
from viral_chart.services import LeaderboardService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_leaderboard_service(request: Request) -> LeaderboardService:
    """Get the leaderboard service created at startup."""
    return request.app.state.leaderboard_service


@router.get("", response_model=LeaderboardView)
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of ranked entries to return"),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> LeaderboardView:
    """
    Get the current period's leaderboard.

    Args:
        limit: Maximum number of ranked entries to return
        service: Leaderboard service instance

    Returns:
        LeaderboardView: Metadata, featured entry, classified rankings and stats

    Raises:
        HTTPException: 503 if no chart feed could be loaded
    """
    try:
        return service.get_view(limit=limit)
    except FeedError as e:
        logger.error(f"Leaderboard unavailable: {e.message}")
        raise HTTPException(status_code=503, detail=f"Leaderboard unavailable: {e.message}")


@router.get("/entries/{position}", response_model=ClassifiedEntry)
async def get_entry(
    position: int,
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> ClassifiedEntry:
    """Get one classified entry by chart position."""
    try:
        entry = service.get_entry(position)
    except FeedError as e:
        logger.error(f"Leaderboard unavailable: {e.message}")
        raise HTTPException(status_code=503, detail=f"Leaderboard unavailable: {e.message}")
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No entry at position {position}")
    return entry
