"""Evaluators module for aggregating, resolving and comparing tool scores.

Scores reach the spider chart through three stages:
- Aggregation (approved reviews → per-metric stats + confidence)
- Resolution (aggregated → editorial → default fallback)
- Comparison (2-3 resolved tools → champions, bar and table projections)

The pure functions take records and return records; the classes wire them
to a ScoreStore.
"""

from toolscore.evaluators.aggregator import (
    ReviewAggregator,
    aggregate_reviews,
    compute_metric_stats,
)
from toolscore.evaluators.comparison import (
    ComparisonEngine,
    build_comparison,
    validate_selection,
)
from toolscore.evaluators.confidence import (
    calculate_confidence_score,
    consistency_factor,
    volume_factor,
)
from toolscore.evaluators.resolver import ScoreResolver, resolve_scores

__all__ = [
    # Aggregation
    "ReviewAggregator",
    "aggregate_reviews",
    "compute_metric_stats",
    # Confidence
    "calculate_confidence_score",
    "consistency_factor",
    "volume_factor",
    # Resolution
    "ScoreResolver",
    "resolve_scores",
    # Comparison
    "ComparisonEngine",
    "build_comparison",
    "validate_selection",
]
