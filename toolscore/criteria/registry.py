"""Category criteria lookups.

Maps a tool category to the ordered metrics its spider chart shows. An
unknown category has no criteria: callers render no chart for it rather
than failing.
"""

import logging
import math
from collections.abc import Mapping

from toolscore.criteria.human_maintained import GENRE_CRITERIA
from toolscore.models.model_criteria import CategoryCriteria, MetricDefinition

logger = logging.getLogger(__name__)


def get_category(category: str) -> CategoryCriteria | None:
    """Get category criteria by name."""
    for criteria in GENRE_CRITERIA:
        if criteria.category == category:
            return criteria
    return None


def get_all_categories() -> list[str]:
    """Get list of all categories that support scoring."""
    return [criteria.category for criteria in GENRE_CRITERIA]


def get_criteria(category: str) -> tuple[MetricDefinition, ...]:
    """Get the ordered metric definitions for a category.

    Args:
        category: Tool category name.

    Returns:
        Metric definitions sorted by display order, or an empty tuple when
        the category is unknown.
    """
    criteria = get_category(category)
    if criteria is None:
        return ()
    return tuple(sorted(criteria.metrics, key=lambda m: m.display_order))


def get_metric_keys(category: str) -> tuple[str, ...]:
    """Get metric keys for a category in display order."""
    return tuple(metric.metric_key for metric in get_criteria(category))


def is_known_metric(category: str, metric_key: str) -> bool:
    """Check if a metric key belongs to a category's criteria."""
    criteria = get_category(category)
    if criteria is None:
        return False
    return criteria.has_metric(metric_key)


def filter_metric_scores(
    category: str,
    scores: Mapping[str, object],
    strict: bool = False,
) -> dict[str, float]:
    """Validate a string-keyed score map against a category's criteria.

    Keys outside the category's criteria and non-numeric values are
    dropped. With ``strict`` they raise instead, which is what submission
    paths want.

    Args:
        category: Tool category the scores were given in.
        scores: Raw metric scores keyed by metric key.
        strict: Raise ValueError on unknown keys or bad values.

    Returns:
        Scores restricted to known metric keys, in criteria order.

    Raises:
        ValueError: In strict mode, for unknown keys or non-numeric values.
    """
    known = get_metric_keys(category)

    unknown = [key for key in scores if key not in known]
    if unknown:
        if strict:
            msg = f"Unknown metric keys for category '{category}': {sorted(unknown)}. Valid: {list(known)}"
            raise ValueError(msg)
        logger.warning(f"Dropping unknown metric keys for '{category}': {sorted(unknown)}")

    filtered: dict[str, float] = {}
    for key in known:
        if key not in scores:
            continue
        value = scores[key]
        # bool is an int subclass but never a score
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            if strict:
                msg = f"Metric score for '{key}' must be a number, got {value!r}"
                raise ValueError(msg)
            logger.warning(f"Dropping non-numeric score for '{category}/{key}': {value!r}")
            continue
        filtered[key] = float(value)

    return filtered
