"""Pydantic models for toolscore."""

from toolscore.models.model_comparison import (
    BarChartRow,
    ComparedTool,
    ComparisonError,
    ComparisonRejection,
    ComparisonResult,
    MetricChampion,
    TableRow,
)
from toolscore.models.model_criteria import CategoryCriteria, MetricDefinition
from toolscore.models.model_eval import ConfidenceWeights, ScoringConfig
from toolscore.models.model_review import ReviewerType, ReviewStatus, StructuredReview
from toolscore.models.model_score import (
    AggregatedScore,
    EditorialScore,
    MetricStats,
    RecalculationFailure,
    RecalculationSummary,
    ResolvedScoreView,
    ScoreSource,
)
from toolscore.models.model_tool import ToolRecord, ToolRef

__all__ = [
    # Criteria models
    "CategoryCriteria",
    "MetricDefinition",
    # Tool models
    "ToolRecord",
    "ToolRef",
    # Review models
    "ReviewerType",
    "ReviewStatus",
    "StructuredReview",
    # Score models
    "AggregatedScore",
    "EditorialScore",
    "MetricStats",
    "ResolvedScoreView",
    "ScoreSource",
    "RecalculationFailure",
    "RecalculationSummary",
    # Comparison models
    "BarChartRow",
    "ComparedTool",
    "ComparisonError",
    "ComparisonRejection",
    "ComparisonResult",
    "MetricChampion",
    "TableRow",
    # Configuration
    "ConfidenceWeights",
    "ScoringConfig",
]
