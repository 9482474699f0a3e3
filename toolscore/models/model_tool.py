from pydantic import BaseModel, Field


class ToolRecord(BaseModel):
    """A directory listing as seen by the scoring core.

    Only the fields scoring needs are kept: identity, category and the
    curator-set spider-chart defaults used when no scores exist.
    """

    id: str = Field(description="Unique tool identifier")
    title: str = Field(default="", description="Display name")
    category: str = Field(description="Directory category, keys the criteria registry")
    default_scores: dict[str, float] = Field(
        default_factory=dict,
        description="Per-metric fallback values (clamped to 0-10 when shown)",
    )


class ToolRef(BaseModel):
    """Tool id plus the category to resolve it in."""

    tool_id: str
    category: str
