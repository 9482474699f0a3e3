"""Review aggregation into per-tool score statistics.

Turns approved structured reviews into per-metric statistics, an overall
average and a confidence score. The pure functions here never touch
storage; ReviewAggregator wires them to a ScoreStore and upserts the
result keyed by tool id.
"""

import logging
import math
from collections.abc import Iterable

from toolscore.consts import STATS_DECIMALS
from toolscore.criteria.registry import filter_metric_scores, get_metric_keys
from toolscore.evaluators.confidence import calculate_confidence_score
from toolscore.models.common import _utc_now
from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_review import ReviewerType, ReviewStatus, StructuredReview
from toolscore.models.model_score import (
    AggregatedScore,
    MetricStats,
    RecalculationFailure,
    RecalculationSummary,
)
from toolscore.storage.base import ScoreStore, StorageError

logger = logging.getLogger(__name__)


def _population_variance(values: list[float]) -> float:
    mean = sum(values) / len(values)
    return sum((v - mean) ** 2 for v in values) / len(values)


def compute_metric_stats(scores: list[float]) -> MetricStats:
    """Compute statistics for one metric's scores.

    Args:
        scores: Every score given for the metric (missing scores excluded,
            never counted as zero)

    Returns:
        MetricStats with mean, population std-dev, min and max rounded to
        2 decimals; count 0 and no min/max when nobody scored the metric
    """
    if not scores:
        return MetricStats(avg=0.0, count=0, std_dev=0.0, min=None, max=None)

    mean = sum(scores) / len(scores)
    std_dev = math.sqrt(_population_variance(scores))

    return MetricStats(
        avg=round(mean, STATS_DECIMALS),
        count=len(scores),
        std_dev=round(std_dev, STATS_DECIMALS),
        min=min(scores),
        max=max(scores),
    )


def _review_metric_scores(category: str, review: StructuredReview) -> dict[str, float]:
    """Scores a review contributes to the category's metrics.

    Categories without criteria fall back to whatever keys the review used
    so the row still carries data.
    """
    if get_metric_keys(category):
        return filter_metric_scores(category, review.metric_scores)
    return {key: float(score) for key, score in review.metric_scores.items()}


def _collect_metric_scores(
    category: str,
    per_review: list[dict[str, float]],
) -> dict[str, list[float]]:
    """Group review scores by metric key, in criteria order."""
    collected: dict[str, list[float]] = {key: [] for key in get_metric_keys(category)}
    for scores in per_review:
        for key, score in scores.items():
            collected.setdefault(key, []).append(score)
    return collected


def aggregate_reviews(
    tool_id: str,
    category: str,
    reviews: Iterable[StructuredReview],
    config: ScoringConfig | None = None,
) -> AggregatedScore:
    """Aggregate a tool's reviews into an AggregatedScore.

    Only approved reviews count. Each metric is averaged over the reviews
    that scored it; the overall average is the mean of metric averages so
    that heavily-answered metrics do not dominate.

    Args:
        tool_id: Tool being aggregated
        category: Category whose criteria select the metrics
        reviews: Reviews for the tool (any status)
        config: Scoring configuration (defaults used when None)

    Returns:
        AggregatedScore; all-zero with confidence 0 when no approved
        review scored any of the category's metrics
    """
    approved = [r for r in reviews if r.status == ReviewStatus.APPROVED and r.tool_id == tool_id]

    per_review = [_review_metric_scores(category, r) for r in approved]
    collected = _collect_metric_scores(category, per_review)
    metric_stats = {key: compute_metric_stats(scores) for key, scores in collected.items()}

    # Metrics nobody scored carry no weight
    scored = {key: scores for key, scores in collected.items() if scores}
    if scored:
        averages = [sum(scores) / len(scores) for scores in scored.values()]
        overall_average = round(sum(averages) / len(averages), STATS_DECIMALS)
        mean_variance = sum(_population_variance(s) for s in scored.values()) / len(scored)
    else:
        overall_average = 0.0
        mean_variance = 0.0

    total_reviews = len(approved)
    verified_reviews = sum(1 for r in approved if r.is_verified)
    editorial_reviews = sum(1 for r in approved if r.reviewer_type == ReviewerType.EDITORIAL)

    # Only reviews that scored at least one metric back the averages
    contributing = [r for r, scores in zip(approved, per_review) if scores]
    confidence = calculate_confidence_score(
        total_reviews=len(contributing),
        verified_reviews=sum(1 for r in contributing if r.is_verified),
        mean_variance=mean_variance,
        config=config,
    )

    return AggregatedScore(
        tool_id=tool_id,
        category=category,
        metric_scores=metric_stats,
        overall_average=overall_average,
        total_reviews=total_reviews,
        verified_reviews=verified_reviews,
        editorial_reviews=editorial_reviews,
        confidence_score=confidence,
        last_calculated_at=_utc_now(),
    )


class ReviewAggregator:
    """Recomputes and persists aggregated scores from stored reviews.

    Recomputing from the full approved set is idempotent, so racing
    recomputes for one tool converge on the same row.
    """

    def __init__(self, store: ScoreStore, config: ScoringConfig | None = None) -> None:
        self.store = store
        self.config = config or ScoringConfig()

    def aggregate(self, tool_id: str, category: str) -> AggregatedScore:
        """Recompute a tool's aggregated score and upsert it.

        Args:
            tool_id: Tool to recompute
            category: Category whose criteria select the metrics

        Returns:
            The stored AggregatedScore
        """
        reviews = self.store.list_reviews(tool_id, status=ReviewStatus.APPROVED)
        score = aggregate_reviews(tool_id, category, reviews, self.config)
        self.store.upsert_aggregated_score(score)

        logger.info(
            f"Aggregated {score.total_reviews} reviews for {tool_id} "
            f"(overall {score.overall_average:.2f}, confidence {score.confidence_score:.1f})"
        )
        return score

    def recalculate_all(self) -> RecalculationSummary:
        """Recompute aggregated scores for every stored tool.

        A failing tool is recorded and skipped; the batch carries on.

        Returns:
            RecalculationSummary with per-tool failures
        """
        tools = self.store.list_tools()
        summary = RecalculationSummary(total_tools=len(tools))

        for tool in tools:
            try:
                self.aggregate(tool.id, tool.category)
            except StorageError as e:
                logger.warning(f"Recalculation failed for {tool.id}: {e}")
                summary.failed += 1
                summary.failures.append(RecalculationFailure(tool_id=tool.id, error=str(e)))
                continue
            summary.successful += 1

        logger.info(
            f"Recalculated {summary.successful}/{summary.total_tools} tools "
            f"({summary.failed} failed)"
        )
        return summary
