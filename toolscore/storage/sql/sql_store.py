"""Relational score store backed by SQLAlchemy.

Each method runs in its own short transaction. Reads take no locks, so a
resolver may see an aggregated row mid-recompute and simply applies its
fallback policy to whatever snapshot it gets. Aggregated rows are written
with a single ``INSERT ... ON CONFLICT (tool_id) DO UPDATE`` so concurrent
recomputes for one tool end as last write wins.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from toolscore.models.model_review import ReviewerType, ReviewStatus, StructuredReview
from toolscore.models.model_score import AggregatedScore, EditorialScore, MetricStats
from toolscore.models.model_tool import ToolRecord
from toolscore.storage.base import ScoreStore, StorageError
from toolscore.storage.sql.orm import (
    AggregatedScoreRow,
    EditorialScoreRow,
    StructuredReviewRow,
    ToolRow,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; restore it as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _tool_from_row(row: ToolRow) -> ToolRecord:
    return ToolRecord(
        id=row.id,
        title=row.title,
        category=row.category,
        default_scores=dict(row.default_scores or {}),
    )


def _review_from_row(row: StructuredReviewRow) -> StructuredReview:
    return StructuredReview(
        id=row.id,
        tool_id=row.tool_id,
        user_id=row.user_id,
        category=row.category,
        metric_scores=dict(row.metric_scores or {}),
        metric_comments=dict(row.metric_comments or {}),
        overall_rating=row.overall_rating,
        review_text=row.review_text,
        reviewer_type=ReviewerType(row.reviewer_type),
        is_verified=row.is_verified,
        status=ReviewStatus(row.status),
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
    )


def _aggregated_from_row(row: AggregatedScoreRow) -> AggregatedScore:
    return AggregatedScore(
        tool_id=row.tool_id,
        category=row.category,
        metric_scores={
            key: MetricStats.model_validate(stats)
            for key, stats in (row.metric_scores or {}).items()
        },
        overall_average=row.overall_average,
        total_reviews=row.total_reviews,
        verified_reviews=row.verified_reviews,
        editorial_reviews=row.editorial_reviews,
        confidence_score=row.confidence_score,
        last_calculated_at=_as_utc(row.last_calculated_at),
    )


def _editorial_from_row(row: EditorialScoreRow) -> EditorialScore:
    return EditorialScore(
        id=row.id,
        tool_id=row.tool_id,
        category=row.category,
        metric_scores=dict(row.metric_scores or {}),
        editor_id=row.editor_id,
        notes=row.notes,
        is_active=row.is_active,
        created_at=_as_utc(row.created_at),
    )


def _dialect_insert(dialect_name: str) -> Any | None:
    """Return the dialect's upsert-capable insert(), or None if unsupported."""
    if dialect_name == "postgresql":
        from sqlalchemy.dialects.postgresql import insert

        return insert
    if dialect_name == "sqlite":
        from sqlalchemy.dialects.sqlite import insert

        return insert
    return None


class SQLScoreStore(ScoreStore):
    """Score store on any SQLAlchemy-supported relational database."""

    def __init__(self, session_factory: sessionmaker[Session]):
        """Initialize with a session factory.

        Args:
            session_factory: Factory from ``create_session_factory``.
        """
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        """Open a session and transaction, translating driver errors."""
        try:
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error(f"Database operation failed: {e}")
            raise StorageError(str(e)) from e

    # === TOOLS ===

    def save_tool(self, tool: ToolRecord) -> ToolRecord:
        with self._transaction() as session:
            session.merge(
                ToolRow(
                    id=tool.id,
                    title=tool.title,
                    category=tool.category,
                    default_scores=dict(tool.default_scores),
                )
            )
        return tool

    def get_tool(self, tool_id: str) -> ToolRecord | None:
        with self._transaction() as session:
            row = session.get(ToolRow, tool_id)
            return _tool_from_row(row) if row is not None else None

    def list_tools(self) -> list[ToolRecord]:
        with self._transaction() as session:
            rows = session.scalars(select(ToolRow).order_by(ToolRow.id)).all()
            return [_tool_from_row(row) for row in rows]

    # === STRUCTURED REVIEWS ===

    def save_review(self, review: StructuredReview) -> StructuredReview:
        with self._transaction() as session:
            row = StructuredReviewRow(
                tool_id=review.tool_id,
                user_id=review.user_id,
                category=review.category,
                metric_scores=dict(review.metric_scores),
                metric_comments=dict(review.metric_comments),
                overall_rating=review.overall_rating,
                review_text=review.review_text,
                reviewer_type=review.reviewer_type.value,
                is_verified=review.is_verified,
                status=review.status.value,
                created_at=review.created_at,
                updated_at=review.updated_at,
            )
            session.add(row)
            session.flush()
            stored = _review_from_row(row)

        logger.info(f"Saved review {stored.id} for tool {stored.tool_id}")
        return stored

    def get_review(self, review_id: int) -> StructuredReview | None:
        with self._transaction() as session:
            row = session.get(StructuredReviewRow, review_id)
            return _review_from_row(row) if row is not None else None

    def list_reviews(
        self,
        tool_id: str,
        status: ReviewStatus | None = None,
    ) -> list[StructuredReview]:
        stmt = select(StructuredReviewRow).where(StructuredReviewRow.tool_id == tool_id)
        if status is not None:
            stmt = stmt.where(StructuredReviewRow.status == status.value)
        stmt = stmt.order_by(StructuredReviewRow.id)

        with self._transaction() as session:
            return [_review_from_row(row) for row in session.scalars(stmt).all()]

    def update_review_status(
        self,
        review_id: int,
        status: ReviewStatus,
    ) -> StructuredReview | None:
        with self._transaction() as session:
            row = session.get(StructuredReviewRow, review_id)
            if row is None:
                logger.warning(f"Review not found: {review_id}")
                return None
            row.status = status.value
            row.updated_at = datetime.now(UTC)
            session.flush()
            return _review_from_row(row)

    # === AGGREGATED SCORES ===

    def get_aggregated_score(self, tool_id: str) -> AggregatedScore | None:
        stmt = select(AggregatedScoreRow).where(AggregatedScoreRow.tool_id == tool_id)
        with self._transaction() as session:
            row = session.scalars(stmt).first()
            return _aggregated_from_row(row) if row is not None else None

    def upsert_aggregated_score(self, score: AggregatedScore) -> AggregatedScore:
        now = datetime.now(UTC)
        values = {
            "category": score.category,
            "metric_scores": {
                key: stats.model_dump(mode="json") for key, stats in score.metric_scores.items()
            },
            "overall_average": score.overall_average,
            "total_reviews": score.total_reviews,
            "verified_reviews": score.verified_reviews,
            "editorial_reviews": score.editorial_reviews,
            "confidence_score": score.confidence_score,
            "last_calculated_at": score.last_calculated_at,
            "updated_at": now,
        }

        with self._transaction() as session:
            insert = _dialect_insert(session.get_bind().dialect.name)
            if insert is not None:
                stmt = insert(AggregatedScoreRow).values(tool_id=score.tool_id, **values)
                stmt = stmt.on_conflict_do_update(index_elements=["tool_id"], set_=values)
                session.execute(stmt)
            else:
                existing = session.scalars(
                    select(AggregatedScoreRow).where(AggregatedScoreRow.tool_id == score.tool_id)
                ).first()
                if existing is None:
                    session.add(AggregatedScoreRow(tool_id=score.tool_id, **values))
                else:
                    for field, value in values.items():
                        setattr(existing, field, value)

        logger.info(
            f"Upserted aggregated score for {score.tool_id} "
            f"({score.total_reviews} reviews, confidence {score.confidence_score:.1f})"
        )
        return score

    # === EDITORIAL SCORES ===

    def get_active_editorial_score(self, tool_id: str, category: str) -> EditorialScore | None:
        stmt = (
            select(EditorialScoreRow)
            .where(
                EditorialScoreRow.tool_id == tool_id,
                EditorialScoreRow.category == category,
                EditorialScoreRow.is_active.is_(True),
            )
            .order_by(EditorialScoreRow.created_at.desc(), EditorialScoreRow.id.desc())
            .limit(1)
        )
        with self._transaction() as session:
            row = session.scalars(stmt).first()
            return _editorial_from_row(row) if row is not None else None

    def save_editorial_score(self, score: EditorialScore) -> EditorialScore:
        with self._transaction() as session:
            row = EditorialScoreRow(
                tool_id=score.tool_id,
                category=score.category,
                metric_scores=dict(score.metric_scores),
                editor_id=score.editor_id,
                notes=score.notes,
                is_active=score.is_active,
                created_at=score.created_at,
                updated_at=score.created_at,
            )
            session.add(row)
            session.flush()
            stored = _editorial_from_row(row)

        logger.info(f"Saved editorial score {stored.id} for {stored.tool_id}/{stored.category}")
        return stored

    def deactivate_editorial_scores(self, tool_id: str, category: str) -> int:
        stmt = (
            update(EditorialScoreRow)
            .where(
                EditorialScoreRow.tool_id == tool_id,
                EditorialScoreRow.category == category,
                EditorialScoreRow.is_active.is_(True),
            )
            .values(is_active=False, updated_at=datetime.now(UTC))
        )
        with self._transaction() as session:
            result = session.execute(stmt)
            count = result.rowcount or 0

        if count:
            logger.debug(f"Deactivated {count} editorial scores for {tool_id}/{category}")
        return count
