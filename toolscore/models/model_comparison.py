"""Comparison result models.

All models are JSON-serialisable so request handlers can return them as-is.
"""

from enum import Enum

from pydantic import BaseModel, Field

from toolscore.models.model_score import ScoreSource


class ComparisonError(str, Enum):
    """Why a comparison request was rejected."""

    INSUFFICIENT_TOOLS = "insufficient_tools"
    TOO_MANY_TOOLS = "too_many_tools"


class ComparisonRejection(BaseModel):
    """Returned instead of a result when the tool selection is invalid.

    The two codes need different UI guidance ("pick another tool" vs
    "remove a tool"), so they are never merged.
    """

    error: ComparisonError
    message: str
    requested: int = Field(ge=0, description="Number of tools requested")
    min_tools: int
    max_tools: int


class ComparedTool(BaseModel):
    """One column of the comparison, with score provenance."""

    tool_id: str
    category: str
    source: ScoreSource
    fallback_reason: str | None = None


class MetricChampion(BaseModel):
    """Highest score for a metric and every tool that reached it."""

    metric_key: str
    label: str
    max_value: float
    champions: list[str] = Field(default_factory=list, description="Tool ids, ties included")


class BarChartRow(BaseModel):
    """A metric row for the bar chart, ordered by across-tool average."""

    metric_key: str
    label: str
    values: dict[str, float] = Field(default_factory=dict, description="Key: tool id")
    average: float


class TableRow(BaseModel):
    """A metric row for the comparison table."""

    metric_key: str
    label: str
    values: list[float | None] = Field(
        default_factory=list, description="Per-tool values in the requested tool order"
    )


class ComparisonResult(BaseModel):
    """Side-by-side comparison of two or three resolved tools."""

    tools: list[ComparedTool]
    champions: list[MetricChampion] = Field(default_factory=list)
    bar_chart: list[BarChartRow] = Field(default_factory=list)
    table: list[TableRow] = Field(default_factory=list)
