"""Scoring configuration models."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

from toolscore.consts import (
    CONFIDENCE_THRESHOLD,
    ENV_CONFIDENCE_THRESHOLD,
    ENV_NEUTRAL_SCORE,
    ENV_VOLUME_SATURATION,
    MAX_COMPARE_TOOLS,
    MAX_CONFIDENCE,
    MAX_SCORE,
    MIN_SCORE,
    NEUTRAL_SCORE,
    REVIEW_VOLUME_SATURATION,
    VARIANCE_SCALE,
)


class ConfidenceWeights(BaseModel):
    """Weights for the quality factors of the confidence score.

    Review volume gates the whole score; these weights split what remains
    between agreement among reviewers, verified share and a flat baseline.
    All weights must sum to 1.0.
    """

    consistency: float = Field(default=0.5, ge=0.0, le=1.0)
    verification: float = Field(default=0.3, ge=0.0, le=1.0)
    baseline: float = Field(default=0.2, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def weights_sum_to_one(self) -> "ConfidenceWeights":
        """Validate that weights sum to 1.0."""
        total = self.consistency + self.verification + self.baseline
        if abs(total - 1.0) > 0.001:
            msg = f"Weights must sum to 1.0, got {total}"
            raise ValueError(msg)
        return self


class ScoringConfig(BaseModel):
    """Tunable knobs for aggregation, resolution and comparison."""

    confidence_threshold: float = Field(
        default=CONFIDENCE_THRESHOLD,
        ge=0.0,
        le=MAX_CONFIDENCE,
        description="Minimum confidence for aggregated scores to be shown",
    )
    neutral_score: float = Field(
        default=NEUTRAL_SCORE,
        ge=MIN_SCORE,
        le=MAX_SCORE,
        description="Value shown for a metric with no data",
    )
    volume_saturation: int = Field(
        default=REVIEW_VOLUME_SATURATION,
        ge=1,
        description="Review count past which volume adds no confidence",
    )
    variance_scale: float = Field(default=VARIANCE_SCALE, gt=0.0)
    max_compare_tools: int = Field(default=MAX_COMPARE_TOOLS, ge=2)
    confidence_weights: ConfidenceWeights = Field(default_factory=ConfidenceWeights)

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        """Build config from environment variables (and a .env file if present)."""
        load_dotenv()

        overrides: dict[str, object] = {}

        threshold = os.getenv(ENV_CONFIDENCE_THRESHOLD, "").strip()
        if threshold:
            overrides["confidence_threshold"] = float(threshold)

        neutral = os.getenv(ENV_NEUTRAL_SCORE, "").strip()
        if neutral:
            overrides["neutral_score"] = float(neutral)

        saturation = os.getenv(ENV_VOLUME_SATURATION, "").strip()
        if saturation:
            overrides["volume_saturation"] = int(saturation)

        return cls(**overrides)
