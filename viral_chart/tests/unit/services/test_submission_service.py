import asyncio

import pytest

from viral_chart.core.exceptions import SubmissionInFlightError, SubmissionValidationError
from viral_chart.models.dtos import SubmissionRequest
from viral_chart.services import RuneLedger, SubmissionService


@pytest.fixture
def submission() -> SubmissionRequest:
    return SubmissionRequest(
        title="Animals dancing on motorcycles",
        creator="@petsdance7",
        platform="tiktok",
        url="https://www.tiktok.com/@petsdance7/video/7378357253595811080",
        category="video",
    )


def test_ledger_credit():
    ledger = RuneLedger(2500)

    assert ledger.credit(225) == 2725
    assert ledger.balance == 2725


def test_ledger_rejects_negative_values():
    with pytest.raises(ValueError):
        RuneLedger(-1)
    with pytest.raises(ValueError):
        RuneLedger(0).credit(-5)


@pytest.mark.asyncio
async def test_submit_credits_ledger(submission):
    ledger = RuneLedger(2500)
    service = SubmissionService(ledger, processing_delay=0)

    receipt = await service.submit(submission)

    assert receipt.reward.runes_awarded == 225
    assert receipt.balance == 2725
    assert ledger.balance == 2725
    assert receipt.platform == "tiktok"
    assert not service.is_busy


@pytest.mark.asyncio
async def test_invalid_submission_leaves_balance(submission):
    ledger = RuneLedger(2500)
    service = SubmissionService(ledger, processing_delay=0)

    with pytest.raises(SubmissionValidationError):
        await service.submit(submission.model_copy(update={"url": ""}))

    assert ledger.balance == 2500


@pytest.mark.asyncio
async def test_concurrent_submission_rejected(submission):
    ledger = RuneLedger(0)
    service = SubmissionService(ledger, processing_delay=0.05)

    first = asyncio.create_task(service.submit(submission))
    await asyncio.sleep(0)
    assert service.is_busy

    with pytest.raises(SubmissionInFlightError):
        await service.submit(submission)

    receipt = await first
    assert receipt.balance == 225
    assert ledger.balance == 225

    # The slot is free again once the first submission completes.
    second = await service.submit(submission)
    assert second.balance == 450


@pytest.mark.asyncio
async def test_cancelled_submission_leaves_balance(submission):
    ledger = RuneLedger(100)
    service = SubmissionService(ledger, processing_delay=10)

    task = asyncio.create_task(service.submit(submission))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert ledger.balance == 100
    assert not service.is_busy
