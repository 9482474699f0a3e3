"""Category criteria registry.

Each tool category is scored on its own small set of metrics (the axes of
its spider chart). This module exposes:
- GENRE_CRITERIA: The curated category → metrics table
- get_criteria: Ordered metric definitions for a category (empty if unknown)
- filter_metric_scores: Boundary validation for string-keyed score maps
"""

from toolscore.criteria.human_maintained import (
    ALL_METRIC_KEYS,
    FALLBACK_CATEGORY,
    GENRE_CRITERIA,
)
from toolscore.criteria.registry import (
    filter_metric_scores,
    get_all_categories,
    get_category,
    get_criteria,
    get_metric_keys,
    is_known_metric,
)

__all__ = [
    "ALL_METRIC_KEYS",
    "FALLBACK_CATEGORY",
    "GENRE_CRITERIA",
    "filter_metric_scores",
    "get_all_categories",
    "get_category",
    "get_criteria",
    "get_metric_keys",
    "is_known_metric",
]
