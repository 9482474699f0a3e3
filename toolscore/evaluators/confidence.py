"""Confidence scoring for aggregated review statistics.

Confidence answers "how much should the UI trust these averages?" on a
0-100 scale. Three inputs feed it:

- Volume: ln(1 + n) / ln(1 + N_sat), capped at 1. Diminishing returns up
  to N_sat reviews (20 by default), no further gain past it.
- Verification: the same saturating curve over the verified review count.
  A count rather than a share, so unverified reviews never dilute it.
- Consistency: 1 / (1 + mean_variance / VARIANCE_SCALE). Reviewers that
  agree give a value near 1; a spread as wide as 2 and 9 drops it to ~0.25.

    confidence = 100 * volume * (w_c * consistency + w_v * verified + w_b)

Volume multiplies the rest so that no reviews means no confidence. With
variance held fixed, adding any review (verified or not) never lowers the
score: volume and verified volume are both non-decreasing counts. Higher
variance never raises it.
"""

import math

from toolscore.consts import MAX_CONFIDENCE, STATS_DECIMALS
from toolscore.models.model_eval import ScoringConfig


def volume_factor(total_reviews: int, saturation: int) -> float:
    """Saturating contribution of review count, in [0, 1]."""
    if total_reviews <= 0:
        return 0.0
    return min(1.0, math.log1p(total_reviews) / math.log1p(saturation))


def consistency_factor(mean_variance: float, variance_scale: float) -> float:
    """Inverse-variance agreement between reviewers, in (0, 1]."""
    return 1.0 / (1.0 + max(0.0, mean_variance) / variance_scale)


def calculate_confidence_score(
    total_reviews: int,
    verified_reviews: int,
    mean_variance: float,
    config: ScoringConfig | None = None,
) -> float:
    """Calculate the confidence score for an aggregated record.

    Args:
        total_reviews: Approved reviews counted
        verified_reviews: How many of those came from verified users
        mean_variance: Mean population variance across scored metrics
        config: Scoring configuration (defaults used when None)

    Returns:
        Confidence between 0-100, rounded to 2 decimals
    """
    if total_reviews <= 0:
        return 0.0

    config = config or ScoringConfig()
    weights = config.confidence_weights

    volume = volume_factor(total_reviews, config.volume_saturation)
    # Verified reviews are a subset of the total
    verified = volume_factor(min(verified_reviews, total_reviews), config.volume_saturation)
    consistency = consistency_factor(mean_variance, config.variance_scale)

    quality = (
        weights.consistency * consistency
        + weights.verification * verified
        + weights.baseline
    )
    confidence = MAX_CONFIDENCE * volume * quality

    return round(max(0.0, min(MAX_CONFIDENCE, confidence)), STATS_DECIMALS)
