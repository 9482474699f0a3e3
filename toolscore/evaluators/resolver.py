"""Score resolution with aggregated → editorial → default fallback."""

import logging
from collections.abc import Mapping

from toolscore.consts import FALLBACK_LOW_CONFIDENCE, FALLBACK_NO_AGGREGATED, FALLBACK_NO_SCORES
from toolscore.criteria.registry import get_metric_keys
from toolscore.models.common import clamp_score
from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_score import (
    AggregatedScore,
    EditorialScore,
    ResolvedScoreView,
    ScoreSource,
)
from toolscore.storage.base import ScoreStore

logger = logging.getLogger(__name__)


def _default_scores(
    metric_keys: tuple[str, ...],
    tool_defaults: Mapping[str, float],
    neutral_score: float,
) -> dict[str, float]:
    """Per-metric fallback: the tool's own default, else the neutral midpoint."""
    return {key: clamp_score(tool_defaults.get(key, neutral_score)) for key in metric_keys}


def _fill_scores(
    metric_keys: tuple[str, ...],
    source_scores: Mapping[str, float],
    defaults: Mapping[str, float],
) -> dict[str, float]:
    """Project source scores onto the category's metrics.

    Keys outside the criteria are dropped and gaps take the default. With
    no criteria at all the source's own keys are shown.
    """
    if not metric_keys:
        return {key: clamp_score(value) for key, value in source_scores.items()}
    return {
        key: clamp_score(source_scores[key]) if key in source_scores else defaults[key]
        for key in metric_keys
    }


def resolve_scores(
    category: str,
    aggregated: AggregatedScore | None,
    editorial: EditorialScore | None,
    tool_defaults: Mapping[str, float] | None = None,
    config: ScoringConfig | None = None,
) -> ResolvedScoreView:
    """Choose which scores to display, first match wins.

    1. Aggregated scores whose confidence reaches the threshold. A row
       computed for a different category counts as missing.
    2. The active editorial score, with the reason aggregated was skipped.
    3. Defaults: the tool's own defaults, else the neutral midpoint.

    Total and deterministic: every input yields exactly one view, and
    every value is clamped to [0, 10].

    Args:
        category: Category whose criteria select the metrics shown
        aggregated: The tool's aggregated row, if any
        editorial: The tool's active editorial row, if any
        tool_defaults: Curator-set per-metric defaults for the tool
        config: Scoring configuration (defaults used when None)

    Returns:
        ResolvedScoreView naming its source and fallback reason
    """
    config = config or ScoringConfig()
    metric_keys = get_metric_keys(category)

    # A row aggregated against another category's criteria says nothing here
    if aggregated is not None and aggregated.category != category:
        logger.warning(
            f"Ignoring aggregated score for {aggregated.tool_id}: computed for "
            f"'{aggregated.category}', resolving '{category}'"
        )
        aggregated = None

    defaults = _default_scores(metric_keys, tool_defaults or {}, config.neutral_score)
    confidence = aggregated.confidence_score if aggregated is not None else None

    if aggregated is not None and aggregated.confidence_score >= config.confidence_threshold:
        averages = {
            key: stats.avg for key, stats in aggregated.metric_scores.items() if stats.count > 0
        }
        return ResolvedScoreView(
            source=ScoreSource.AGGREGATED,
            metric_scores=_fill_scores(metric_keys, averages, defaults),
            fallback_reason=None,
            confidence_score=confidence,
        )

    if editorial is not None:
        reason = FALLBACK_LOW_CONFIDENCE if aggregated is not None else FALLBACK_NO_AGGREGATED
        return ResolvedScoreView(
            source=ScoreSource.EDITORIAL,
            metric_scores=_fill_scores(metric_keys, editorial.metric_scores, defaults),
            fallback_reason=reason,
            confidence_score=confidence,
        )

    scores = defaults if metric_keys else {
        key: clamp_score(value) for key, value in (tool_defaults or {}).items()
    }
    return ResolvedScoreView(
        source=ScoreSource.DEFAULT,
        metric_scores=scores,
        fallback_reason=FALLBACK_NO_SCORES,
        confidence_score=confidence,
    )


class ScoreResolver:
    """Resolves the scores to display for a tool from the store."""

    def __init__(self, store: ScoreStore, config: ScoringConfig | None = None) -> None:
        self.store = store
        self.config = config or ScoringConfig()

    def resolve(self, tool_id: str, category: str) -> ResolvedScoreView:
        """Resolve display scores for a tool in a category.

        Reads whatever snapshot the store holds; no locks are taken.

        Args:
            tool_id: Tool to resolve
            category: Category whose criteria select the metrics shown

        Returns:
            ResolvedScoreView from the aggregated, editorial or default source
        """
        aggregated = self.store.get_aggregated_score(tool_id)

        editorial = None
        if (
            aggregated is None
            or aggregated.category != category
            or aggregated.confidence_score < self.config.confidence_threshold
        ):
            editorial = self.store.get_active_editorial_score(tool_id, category)

        tool = self.store.get_tool(tool_id)
        tool_defaults = tool.default_scores if tool is not None else {}

        view = resolve_scores(category, aggregated, editorial, tool_defaults, self.config)
        logger.debug(
            f"Resolved {tool_id} in '{category}' from {view.source.value}"
            + (f" ({view.fallback_reason})" if view.fallback_reason else "")
        )
        return view
