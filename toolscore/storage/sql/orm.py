"""Scoring ORM models.

Tables
------
- tools               (directory listings: category and spider-chart defaults)
- structured_reviews  (per-user per-metric reviews, moderated by status)
- aggregated_scores   (derived per-tool statistics, unique on tool_id)
- editorial_scores    (curator overrides, history kept, newest active wins)
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from toolscore.storage.sql.database import Base

__all__ = [
    "TimestampMixin",
    "ToolRow",
    "StructuredReviewRow",
    "AggregatedScoreRow",
    "EditorialScoreRow",
]


class TimestampMixin:
    """Mixin that adds ``created_at`` and ``updated_at`` columns.

    Both default to ``NOW()`` on the server side.  ``updated_at`` is also
    refreshed on every UPDATE via ``onupdate``.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# ═══════════════════════════════════════════════════════════════════════════
# tools
# ═══════════════════════════════════════════════════════════════════════════


class ToolRow(TimestampMixin, Base):
    """A directory listing."""

    __tablename__ = "tools"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    default_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)


# ═══════════════════════════════════════════════════════════════════════════
# structured_reviews
# ═══════════════════════════════════════════════════════════════════════════


class StructuredReviewRow(TimestampMixin, Base):
    """One user's per-metric review of a tool."""

    __tablename__ = "structured_reviews"
    __table_args__ = (Index("ix_structured_reviews_tool_status", "tool_id", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tool_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)

    metric_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    metric_comments: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    overall_rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    review_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    reviewer_type: Mapped[str] = mapped_column(String(32), nullable=False, default="user")
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="pending")


# ═══════════════════════════════════════════════════════════════════════════
# aggregated_scores
# ═══════════════════════════════════════════════════════════════════════════


class AggregatedScoreRow(Base):
    """Derived statistics for one tool. Upserted on tool_id."""

    __tablename__ = "aggregated_scores"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tool_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    category: Mapped[str] = mapped_column(String(255), nullable=False)

    metric_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    overall_average: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    verified_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    editorial_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    confidence_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    last_calculated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# ═══════════════════════════════════════════════════════════════════════════
# editorial_scores
# ═══════════════════════════════════════════════════════════════════════════


class EditorialScoreRow(TimestampMixin, Base):
    """Curator-entered scores for a tool in a category."""

    __tablename__ = "editorial_scores"
    __table_args__ = (Index("ix_editorial_scores_tool_category", "tool_id", "category"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tool_id: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)

    metric_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    editor_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
