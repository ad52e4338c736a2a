"""
Submission processing.

Runs one submission at a time through validation, scoring and the ledger
credit. A second submission arriving while one is pending is rejected.
"""
import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from viral_chart.config import get_settings
from viral_chart.core.exceptions import SubmissionInFlightError
from viral_chart.core.rewards import score_submission, validate_submission
from viral_chart.models.dtos import SubmissionReceipt, SubmissionRequest
from viral_chart.services.ledger import RuneLedger

logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Single-slot submission processor bound to one rune ledger.
    """

    def __init__(self, ledger: RuneLedger, processing_delay: Optional[float] = None):
        """
        Args:
            ledger: The balance credited with each reward.
            processing_delay: Seconds to wait before scoring; defaults to the
                configured ``SUBMISSION_PROCESSING_DELAY_SECONDS``.
        """
        self.ledger = ledger
        if processing_delay is None:
            processing_delay = get_settings().SUBMISSION_PROCESSING_DELAY_SECONDS
        self.processing_delay = processing_delay
        self._lock = asyncio.Lock()

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    async def submit(self, request: SubmissionRequest) -> SubmissionReceipt:
        """
        Validate, score and credit a submission.

        Args:
            request: The user-filled submission.

        Returns:
            SubmissionReceipt: The reward and the balance after crediting it.

        Raises:
            SubmissionValidationError: If the submission is incomplete. The
                ledger is not touched.
            SubmissionInFlightError: If another submission is being processed.
        """
        validate_submission(request)

        if self._lock.locked():
            logger.warning(f"Rejected submission '{request.title}': another submission is in flight")
            raise SubmissionInFlightError("A submission is already being processed")

        async with self._lock:
            logger.info(f"Processing submission '{request.title}' by {request.creator} ({request.platform})")
            if self.processing_delay > 0:
                # Cancellation here leaves the ledger untouched.
                await asyncio.sleep(self.processing_delay)

            reward = score_submission(request)
            balance = self.ledger.credit(reward.runes_awarded)

        logger.info(f"Submission '{request.title}' earned {reward.runes_awarded} runes, balance {balance}")
        return SubmissionReceipt(
            title=request.title,
            creator=request.creator,
            platform=request.platform,
            category=request.category,
            reward=reward,
            balance=balance,
            submitted_at=datetime.now(timezone.utc),
        )
