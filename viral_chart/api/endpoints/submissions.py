"""
Submission API endpoints.

Accepts content submissions, reports the rune balance and exposes the reward
table shown next to the submission form.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from viral_chart.core.exceptions import SubmissionInFlightError, SubmissionValidationError
from viral_chart.core.rewards import reward_table
from viral_chart.models.dtos import (
    BalanceResponse,
    RewardTable,
    SubmissionReceipt,
    SubmissionRequest,
)
from viral_chart.services import RuneLedger, SubmissionService

router = APIRouter()
logger = logging.getLogger(__name__)


def get_submission_service(request: Request) -> SubmissionService:
    return request.app.state.submission_service


def get_ledger(request: Request) -> RuneLedger:
    return request.app.state.ledger


@router.post("/submissions", response_model=SubmissionReceipt)
async def submit_content(
    request: SubmissionRequest,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionReceipt:
    """
    Submit new content and earn runes.

    Args:
        request: The submission form contents
        service: Submission service instance

    Returns:
        SubmissionReceipt: Runes awarded and the new balance

    Raises:
        HTTPException: 422 if required fields are missing, 409 if another
            submission is still being processed
    """
    try:
        return await service.submit(request)
    except SubmissionValidationError as e:
        logger.info(f"Submission rejected: {e.message}")
        raise HTTPException(status_code=422, detail={"message": e.message, "fields": e.fields})
    except SubmissionInFlightError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("/runes/balance", response_model=BalanceResponse)
async def get_balance(ledger: RuneLedger = Depends(get_ledger)) -> BalanceResponse:
    """Get the current rune balance."""
    return BalanceResponse(balance=ledger.balance)


@router.get("/rewards/table", response_model=RewardTable)
async def get_reward_table() -> RewardTable:
    """Get the platform multipliers and category bonuses used to score submissions."""
    return reward_table()
