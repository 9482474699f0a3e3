"""Review and editorial-score workflows that keep aggregated scores current.

This module coordinates the writes that feed scoring:
1. Accept a structured review (validated, stored as pending)
2. Moderate it (approve / reject), recomputing the tool's aggregated score
   whenever the review enters or leaves the approved set
3. Record an editorial score, retiring the previous active one
"""

import logging
from dataclasses import dataclass

from toolscore.criteria.registry import filter_metric_scores
from toolscore.evaluators.aggregator import ReviewAggregator
from toolscore.models.common import _utc_now
from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_review import ReviewStatus, StructuredReview
from toolscore.models.model_score import AggregatedScore, EditorialScore
from toolscore.storage.base import ScoreStore, StorageError

logger = logging.getLogger(__name__)


@dataclass
class StatusChange:
    """Result of moderating a review."""

    review: StructuredReview
    previous_status: ReviewStatus
    recalculated: bool = False
    aggregated: AggregatedScore | None = None


class ReviewModeration:
    """Submission and moderation entry points for request handlers."""

    def __init__(self, store: ScoreStore, config: ScoringConfig | None = None) -> None:
        self.store = store
        self.aggregator = ReviewAggregator(store, config)

    def submit_review(self, review: StructuredReview) -> StructuredReview:
        """Validate and store a new review as pending.

        Args:
            review: Review as submitted by a user.

        Returns:
            The stored review with its id.

        Raises:
            ValueError: If the review scores a metric its category does not have.
        """
        filter_metric_scores(review.category, review.metric_scores, strict=True)

        now = _utc_now()
        pending = review.model_copy(
            update={"status": ReviewStatus.PENDING, "created_at": now, "updated_at": now}
        )
        stored = self.store.save_review(pending)
        logger.info(f"Review {stored.id} submitted for {stored.tool_id} by {stored.user_id}")
        return stored

    def set_review_status(self, review_id: int, status: ReviewStatus) -> StatusChange:
        """Change a review's moderation status.

        Moving a review into or out of ``approved`` triggers a recompute of
        the tool's aggregated score. The recompute is not transactional with
        the status write: if it fails the status change stands, the failure
        is logged and ``recalculated`` is False (the next scheduled
        recompute repairs the row).

        Args:
            review_id: Review to moderate.
            status: New status.

        Returns:
            StatusChange describing what happened.

        Raises:
            LookupError: If the review does not exist.
        """
        current = self.store.get_review(review_id)
        if current is None:
            raise LookupError(f"Review not found: {review_id}")

        previous = current.status
        if previous == status:
            return StatusChange(review=current, previous_status=previous)

        updated = self.store.update_review_status(review_id, status)
        if updated is None:
            raise LookupError(f"Review not found: {review_id}")
        logger.info(f"Review {review_id} moved {previous.value} -> {status.value}")

        change = StatusChange(review=updated, previous_status=previous)
        if ReviewStatus.APPROVED not in (previous, status):
            return change

        try:
            change.aggregated = self.aggregator.aggregate(updated.tool_id, updated.category)
            change.recalculated = True
        except StorageError as e:
            logger.warning(f"Aggregated score recompute failed for {updated.tool_id}: {e}")

        return change

    def submit_editorial_score(
        self,
        tool_id: str,
        category: str,
        metric_scores: dict[str, float],
        editor_id: str | None = None,
        notes: str | None = None,
    ) -> EditorialScore:
        """Record curator scores for a tool, replacing the active ones.

        Earlier rows are kept as inactive history.

        Raises:
            ValueError: On unknown metric keys, scores outside 0-10 or notes
                over the length limit.
        """
        scores = filter_metric_scores(category, metric_scores, strict=True)
        score = EditorialScore(
            tool_id=tool_id,
            category=category,
            metric_scores=scores,
            editor_id=editor_id,
            notes=notes,
            is_active=True,
        )

        retired = self.store.deactivate_editorial_scores(tool_id, category)
        stored = self.store.save_editorial_score(score)
        logger.info(
            f"Editorial score {stored.id} recorded for {tool_id}/{category}"
            + (f" (retired {retired})" if retired else "")
        )
        return stored
