"""Structured review models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field, field_validator

from toolscore.consts import MAX_SCORE, MIN_SCORE
from toolscore.models.common import _utc_now


class ReviewStatus(str, Enum):
    """Moderation status of a structured review."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewerType(str, Enum):
    """Who wrote the review."""

    USER = "user"
    EDITORIAL = "editorial"


class StructuredReview(BaseModel):
    """One user's per-metric evaluation of one tool in one category.

    Reviews are never deleted. Moderation only changes ``status``; only
    approved reviews take part in aggregation.
    """

    id: int | None = Field(default=None, description="Store-assigned identifier")
    tool_id: str = Field(description="Reviewed tool")
    user_id: str = Field(description="Reviewing user")
    category: str = Field(description="Category the review was scored against")

    metric_scores: dict[str, float] = Field(
        default_factory=dict, description="Key: metric key, value 0-10"
    )
    metric_comments: dict[str, str] = Field(default_factory=dict)
    overall_rating: float | None = Field(default=None, ge=MIN_SCORE, le=MAX_SCORE)
    review_text: str | None = Field(default=None)

    reviewer_type: ReviewerType = Field(default=ReviewerType.USER)
    is_verified: bool = Field(default=False, description="Verified user badge")
    status: ReviewStatus = Field(default=ReviewStatus.PENDING)

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @field_validator("metric_scores")
    @classmethod
    def scores_in_range(cls, value: dict[str, float]) -> dict[str, float]:
        """Reject metric scores outside 0-10."""
        for key, score in value.items():
            if not MIN_SCORE <= score <= MAX_SCORE:
                msg = f"Metric score for '{key}' must be between {MIN_SCORE:g} and {MAX_SCORE:g}, got {score}"
                raise ValueError(msg)
        return value

    @computed_field
    @property
    def is_approved(self) -> bool:
        """Whether this review participates in aggregation."""
        return self.status == ReviewStatus.APPROVED
