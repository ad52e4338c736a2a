"""
Pydantic Data Transfer Objects (DTOs) for the viral chart service.

These models describe the chart feed, the derived ranking metadata, content
submissions and their rewards. They are used for feed validation, API
request/response validation and internal data transfer.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class EngagementMetrics(BaseModel):
    """Raw engagement counters for one entry."""
    likes: int = Field(..., ge=0)
    shares: int = Field(..., ge=0)
    comments: int = Field(..., ge=0)
    plays: Optional[int] = Field(None, ge=0)


class EngagementSummary(BaseModel):
    """Output of the metric aggregator."""
    total: int
    formatted: str


class ChartEntry(BaseModel):
    """
    One ranked item of the current period, as supplied by the feed.

    Feeds produced by the original chart page use ``artist`` and ``last_week``;
    both spellings are accepted. Derived values a feed may still carry
    (``position_change``, ``is_new`` ...) are ignored and recomputed.
    """
    position: int = Field(..., ge=1)
    last_week_position: Optional[int] = Field(
        None, ge=1, validation_alias=AliasChoices("last_week_position", "last_week")
    )
    peak_position: int = Field(..., ge=1)
    weeks_on_chart: int = Field(..., ge=1)
    metrics: Optional[EngagementMetrics] = None
    # Curated editorial flag, passed through unchanged.
    is_award: bool = False

    title: str = ""
    creator: str = Field("", validation_alias=AliasChoices("creator", "artist"))
    platform: Optional[str] = None
    url: Optional[str] = None
    thumbnail: Optional[str] = None
    content_type: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    engagement_score: Optional[float] = None
    ai_confidence: Optional[float] = None
    viral_score: Optional[float] = None


class RankClassification(BaseModel):
    """Ranking metadata derived for one entry."""
    position_change: Optional[int] = None
    is_new: bool
    has_gains: bool
    is_award: bool
    is_trending: bool
    engagement_total: Optional[int] = None
    formatted_engagement: str = ""


class ClassifiedEntry(ChartEntry):
    """A chart entry annotated with its derived ranking metadata."""
    position_change: Optional[int] = None
    is_new: bool = False
    has_gains: bool = False
    is_trending: bool = False
    engagement_total: Optional[int] = None
    formatted_engagement: str = ""


class ChartMetadata(BaseModel):
    """Period header attached to rendered output; not interpreted by the core."""
    chart: str = "Slop 100"
    week: Optional[str] = None
    description: str = ""
    timestamp: Optional[datetime] = None
    total_entries: Optional[int] = Field(None, ge=0)
    data_sources: List[str] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class LeaderboardFeed(BaseModel):
    """A period's raw chart: metadata header plus ranked entries."""
    metadata: ChartMetadata = Field(default_factory=ChartMetadata)
    rankings: List[ChartEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_positions(self) -> "LeaderboardFeed":
        seen = set()
        duplicates = set()
        for entry in self.rankings:
            if entry.position in seen:
                duplicates.add(entry.position)
            seen.add(entry.position)
        if duplicates:
            raise ValueError(f"Duplicate chart positions: {sorted(duplicates)}")
        self.rankings = sorted(self.rankings, key=lambda e: e.position)
        return self


class PeriodStats(BaseModel):
    """Overview statistics for one period."""
    total_entries: int = 0
    new_entries: int = 0
    gainers: int = 0
    trending: int = 0
    awards: int = 0
    total_engagement: int = 0
    formatted_engagement: str = "0"
    entries_by_platform: Dict[str, int] = Field(default_factory=dict)


class LeaderboardView(BaseModel):
    """Everything the presenter needs to render one period."""
    metadata: ChartMetadata
    featured: Optional[ClassifiedEntry] = None
    # "2+" when the featured entry also held #1 last week, else "1".
    weeks_at_number_one: Optional[str] = None
    trending_threshold: Optional[float] = None
    rankings: List[ClassifiedEntry] = Field(default_factory=list)
    stats: PeriodStats = Field(default_factory=PeriodStats)


class SubmissionRequest(BaseModel):
    """
    User-authored candidate entry.

    Required fields default to empty strings so that an incomplete form can
    still be represented; ``validate_submission`` rejects it before scoring.
    """
    title: str = ""
    creator: str = Field("", validation_alias=AliasChoices("creator", "artist"))
    platform: str = ""
    url: str = ""
    category: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title", "creator", "url", mode="before")
    @classmethod
    def strip_text(cls, v):
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("platform", mode="before")
    @classmethod
    def normalize_platform(cls, v):
        if v is None:
            return ""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v


class RewardResult(BaseModel):
    """Runes awarded for one submission."""
    runes_awarded: int = Field(..., ge=0)
    platform_multiplier: float
    category_bonus: int


class RewardTable(BaseModel):
    """Reward lookup tables, for display next to the submission form."""
    base_reward: int
    platform_multipliers: Dict[str, float]
    category_bonuses: Dict[str, int]
    default_multiplier: float
    default_bonus: int


class SubmissionReceipt(BaseModel):
    """Result of a processed submission: the reward and the new balance."""
    title: str
    creator: str
    platform: str
    category: Optional[str] = None
    reward: RewardResult
    balance: int
    submitted_at: datetime


class BalanceResponse(BaseModel):
    balance: int


class SnapshotMetadata(BaseModel):
    snapshot_id: str
    created_at: datetime
    protocol: str
    version: str
    content_type: str = "application/json"
    digest: str


class SnapshotDocument(BaseModel):
    """Immutable JSON record of one period's leaderboard view."""
    leaderboard: LeaderboardView
    snapshot_metadata: SnapshotMetadata
