"""Side-by-side tool comparison.

Projections are derived from resolved scores only: no persistence and no
side effects, so the same inputs always give the same result.
"""

import logging
from collections.abc import Sequence

from toolscore.consts import MIN_COMPARE_TOOLS, STATS_DECIMALS
from toolscore.criteria.registry import get_category
from toolscore.evaluators.resolver import ScoreResolver
from toolscore.models.model_comparison import (
    BarChartRow,
    ComparedTool,
    ComparisonError,
    ComparisonRejection,
    ComparisonResult,
    MetricChampion,
    TableRow,
)
from toolscore.models.model_score import ResolvedScoreView
from toolscore.models.model_tool import ToolRef

logger = logging.getLogger(__name__)


def _metric_label(metric_key: str, categories: list[str]) -> str:
    """Label from the first category defining the metric, else the key itself."""
    for category in categories:
        criteria = get_category(category)
        if criteria is None:
            continue
        metric = criteria.get_metric(metric_key)
        if metric is not None:
            return metric.label
    return metric_key


def _ordered_metric_keys(views: list[ResolvedScoreView]) -> list[str]:
    """Union of metric keys in first-seen order across tools."""
    keys: list[str] = []
    for view in views:
        for key in view.metric_scores:
            if key not in keys:
                keys.append(key)
    return keys


def validate_selection(
    count: int,
    max_tools: int,
    min_tools: int = MIN_COMPARE_TOOLS,
) -> ComparisonRejection | None:
    """Check the number of selected tools.

    Returns:
        A rejection naming the problem, or None if the count is valid
    """
    if count < min_tools:
        return ComparisonRejection(
            error=ComparisonError.INSUFFICIENT_TOOLS,
            message=f"Select at least {min_tools} tools to compare (got {count})",
            requested=count,
            min_tools=min_tools,
            max_tools=max_tools,
        )
    if count > max_tools:
        return ComparisonRejection(
            error=ComparisonError.TOO_MANY_TOOLS,
            message=f"At most {max_tools} tools can be compared at once (got {count})",
            requested=count,
            min_tools=min_tools,
            max_tools=max_tools,
        )
    return None


def build_comparison(entries: Sequence[tuple[ToolRef, ResolvedScoreView]]) -> ComparisonResult:
    """Build comparison projections from already-resolved tools.

    Args:
        entries: (tool, resolved view) pairs in the caller's display order

    Returns:
        ComparisonResult with champions, bar-chart rows and table rows
    """
    refs = [ref for ref, _ in entries]
    views = [view for _, view in entries]
    categories = [ref.category for ref in refs]

    tools = [
        ComparedTool(
            tool_id=ref.tool_id,
            category=ref.category,
            source=view.source,
            fallback_reason=view.fallback_reason,
        )
        for ref, view in entries
    ]

    champions: list[MetricChampion] = []
    bar_rows: list[BarChartRow] = []
    table: list[TableRow] = []

    for metric_key in _ordered_metric_keys(views):
        label = _metric_label(metric_key, categories)

        # Tools whose category lacks the metric do not compete on it
        values = {
            ref.tool_id: round(view.metric_scores[metric_key], STATS_DECIMALS)
            for ref, view in entries
            if metric_key in view.metric_scores
        }

        max_value = max(values.values())
        champions.append(
            MetricChampion(
                metric_key=metric_key,
                label=label,
                max_value=max_value,
                # Ties are kept: every tool at the max is a champion
                champions=[tool_id for tool_id, value in values.items() if value == max_value],
            )
        )

        bar_rows.append(
            BarChartRow(
                metric_key=metric_key,
                label=label,
                values=values,
                average=round(sum(values.values()) / len(values), STATS_DECIMALS),
            )
        )

        table.append(
            TableRow(
                metric_key=metric_key,
                label=label,
                values=[values.get(ref.tool_id) for ref in refs],
            )
        )

    # sorted() is stable, so equal averages keep metric order
    bar_rows = sorted(bar_rows, key=lambda row: row.average, reverse=True)

    return ComparisonResult(tools=tools, champions=champions, bar_chart=bar_rows, table=table)


class ComparisonEngine:
    """Resolves and compares two or three tools."""

    def __init__(self, resolver: ScoreResolver) -> None:
        self.resolver = resolver

    def compare(
        self,
        tools: Sequence[ToolRef],
        max_tools: int | None = None,
    ) -> ComparisonResult | ComparisonRejection:
        """Compare tools on their resolved scores.

        Tools resolved from different sources are still compared; each
        column reports its source so the UI can disclose it.

        Args:
            tools: Tools to compare, in display order
            max_tools: Upper bound on the selection (config default when None)

        Returns:
            ComparisonResult, or ComparisonRejection when the selection has
            fewer than 2 or more than max_tools tools (never truncated)

        Raises:
            ValueError: If the same tool id appears twice
        """
        if max_tools is None:
            max_tools = self.resolver.config.max_compare_tools

        rejection = validate_selection(len(tools), max_tools)
        if rejection is not None:
            logger.info(f"Comparison rejected: {rejection.message}")
            return rejection

        tool_ids = [ref.tool_id for ref in tools]
        if len(set(tool_ids)) != len(tool_ids):
            msg = f"Duplicate tool ids in comparison: {tool_ids}"
            raise ValueError(msg)

        entries = [(ref, self.resolver.resolve(ref.tool_id, ref.category)) for ref in tools]
        return build_comparison(entries)
