"""Score models: aggregated statistics, editorial overrides and resolved views."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from toolscore.consts import MAX_CONFIDENCE, MAX_EDITORIAL_NOTES_LENGTH, MAX_SCORE, MIN_SCORE
from toolscore.models.common import _utc_now


class ScoreSource(str, Enum):
    """Where a resolved set of scores came from."""

    AGGREGATED = "aggregated"
    EDITORIAL = "editorial"
    DEFAULT = "default"


class MetricStats(BaseModel):
    """Statistics for a single metric across approved reviews.

    A metric nobody scored has ``count == 0`` and no min/max.
    """

    avg: float = Field(default=0.0, ge=MIN_SCORE, le=MAX_SCORE)
    count: int = Field(default=0, ge=0)
    std_dev: float = Field(default=0.0, ge=0.0)
    min: float | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    max: float | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)


class AggregatedScore(BaseModel):
    """Derived per-tool score row, one per tool (upsert keyed by tool_id)."""

    tool_id: str
    category: str
    metric_scores: dict[str, MetricStats] = Field(
        default_factory=dict, description="Key: metric key"
    )
    overall_average: float = Field(default=0.0, ge=MIN_SCORE, le=MAX_SCORE)
    total_reviews: int = Field(default=0, ge=0)
    verified_reviews: int = Field(default=0, ge=0)
    editorial_reviews: int = Field(default=0, ge=0)
    confidence_score: float = Field(default=0.0, ge=0.0, le=MAX_CONFIDENCE)
    last_calculated_at: datetime = Field(default_factory=_utc_now)


class EditorialScore(BaseModel):
    """Curator-entered scores for a tool in a category.

    Several rows may exist per tool; the newest active one is authoritative.
    """

    id: int | None = Field(default=None, description="Store-assigned identifier")
    tool_id: str
    category: str
    metric_scores: dict[str, float] = Field(default_factory=dict)
    editor_id: str | None = Field(default=None)
    notes: str | None = Field(default=None, max_length=MAX_EDITORIAL_NOTES_LENGTH)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=_utc_now)

    @field_validator("metric_scores")
    @classmethod
    def scores_in_range(cls, value: dict[str, float]) -> dict[str, float]:
        """Reject metric scores outside 0-10."""
        for key, score in value.items():
            if not MIN_SCORE <= score <= MAX_SCORE:
                msg = f"Metric score for '{key}' must be between {MIN_SCORE:g} and {MAX_SCORE:g}, got {score}"
                raise ValueError(msg)
        return value


class ResolvedScoreView(BaseModel):
    """Scores chosen for display for one tool. Computed per request, never stored."""

    source: ScoreSource
    metric_scores: dict[str, float] = Field(default_factory=dict)
    fallback_reason: str | None = Field(default=None)
    confidence_score: float | None = Field(
        default=None, description="Confidence of the aggregated row, when one exists"
    )


class RecalculationFailure(BaseModel):
    """A tool whose scheduled recompute failed."""

    tool_id: str
    error: str


class RecalculationSummary(BaseModel):
    """Outcome of recomputing aggregated scores for every tool."""

    total_tools: int = 0
    successful: int = 0
    failed: int = 0
    failures: list[RecalculationFailure] = Field(default_factory=list)
