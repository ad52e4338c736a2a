"""
Reward calculation for content submissions.

Runes are a fixed base reward scaled by the submission's platform plus a flat
bonus for its category. Unknown platforms and categories are not errors: they
fall back to the default multiplier and bonus.
"""
import logging
import math
from decimal import Decimal
from typing import Dict, List, Optional
from urllib.parse import urlparse

from viral_chart.core.exceptions import SubmissionValidationError
from viral_chart.models.dtos import RewardResult, RewardTable, SubmissionRequest

logger = logging.getLogger(__name__)

BASE_REWARD = 100

PLATFORM_MULTIPLIERS: Dict[str, float] = {
    "tiktok": 1.5,
    "youtube": 1.3,
    "twitter": 1.2,
    "spotify": 1.4,
    "instagram": 1.1,
    "web": 1.0,
}
DEFAULT_PLATFORM_MULTIPLIER = 1.0

CATEGORY_BONUSES: Dict[str, int] = {
    "music": 50,
    "video": 75,
    "article": 30,
    "image": 25,
}
DEFAULT_CATEGORY_BONUS = 0

REQUIRED_FIELDS = ("title", "creator", "platform", "url")


def platform_multiplier(platform: Optional[str]) -> float:
    return PLATFORM_MULTIPLIERS.get((platform or "").lower(), DEFAULT_PLATFORM_MULTIPLIER)


def category_bonus(category: Optional[str]) -> int:
    return CATEGORY_BONUSES.get((category or "").lower(), DEFAULT_CATEGORY_BONUS)


def compute_reward(platform: Optional[str], category: Optional[str] = None) -> int:
    """
    Compute the runes awarded for a platform/category pair.

    The floor is applied once, after the scaled base and the bonus are summed.
    Decimal arithmetic keeps table multipliers exact (100 * 1.1 is 110, not
    110.00000000000001).
    """
    scaled = Decimal(BASE_REWARD) * Decimal(str(platform_multiplier(platform)))
    return math.floor(scaled + category_bonus(category))


def _is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_submission(request: SubmissionRequest) -> None:
    """
    Check a submission before it is scored.

    Raises:
        SubmissionValidationError: If a required field is blank or the URL is
            not an absolute http(s) URL.
    """
    missing: List[str] = [name for name in REQUIRED_FIELDS if not getattr(request, name)]
    if missing:
        raise SubmissionValidationError(
            f"Missing required fields: {', '.join(missing)}", fields=missing
        )
    if not _is_http_url(request.url):
        raise SubmissionValidationError(f"Invalid content URL: {request.url!r}", fields=["url"])


def score_submission(request: SubmissionRequest) -> RewardResult:
    """
    Validate a submission and compute its reward.

    Args:
        request: The user-filled submission.

    Returns:
        RewardResult: Runes awarded and the factors that produced them.

    Raises:
        SubmissionValidationError: If the submission is incomplete.
    """
    validate_submission(request)
    multiplier = platform_multiplier(request.platform)
    bonus = category_bonus(request.category)
    if request.platform not in PLATFORM_MULTIPLIERS:
        logger.info(f"Unknown platform '{request.platform}', using default multiplier {multiplier}")
    if request.category and request.category not in CATEGORY_BONUSES:
        logger.info(f"Unknown category '{request.category}', using default bonus {bonus}")

    return RewardResult(
        runes_awarded=compute_reward(request.platform, request.category),
        platform_multiplier=multiplier,
        category_bonus=bonus,
    )


def reward_table() -> RewardTable:
    return RewardTable(
        base_reward=BASE_REWARD,
        platform_multipliers=dict(PLATFORM_MULTIPLIERS),
        category_bonuses=dict(CATEGORY_BONUSES),
        default_multiplier=DEFAULT_PLATFORM_MULTIPLIER,
        default_bonus=DEFAULT_CATEGORY_BONUS,
    )
