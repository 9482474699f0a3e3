"""Tests for data models."""

import pytest
from pydantic import ValidationError

from toolscore.models.common import clamp_score
from toolscore.models.model_comparison import ComparisonError, ComparisonRejection
from toolscore.models.model_criteria import CategoryCriteria, MetricDefinition
from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_review import ReviewStatus, StructuredReview
from toolscore.models.model_score import AggregatedScore, EditorialScore, MetricStats


class TestStructuredReview:
    """Tests for StructuredReview model."""

    def test_defaults(self) -> None:
        review = StructuredReview(tool_id="jasper", user_id="u1", category="AI Writing")
        assert review.status == ReviewStatus.PENDING
        assert not review.is_approved
        assert review.metric_scores == {}
        assert review.created_at.tzinfo is not None

    @pytest.mark.parametrize("score", [-0.1, 10.5])
    def test_score_out_of_range(self, score: float) -> None:
        with pytest.raises(ValidationError, match="between 0 and 10"):
            StructuredReview(
                tool_id="jasper", user_id="u1", category="AI Writing", metric_scores={"contentQuality": score}
            )

    @pytest.mark.parametrize("score", [0, 10, 5.5])
    def test_score_bounds_inclusive(self, score: float) -> None:
        review = StructuredReview(
            tool_id="jasper", user_id="u1", category="AI Writing", metric_scores={"contentQuality": score}
        )
        assert review.metric_scores["contentQuality"] == score

    def test_is_approved_serialised(self) -> None:
        review = StructuredReview(
            tool_id="jasper", user_id="u1", category="AI Writing", status=ReviewStatus.APPROVED
        )
        assert review.model_dump()["is_approved"] is True

    def test_round_trip_ignores_computed_field(self) -> None:
        review = StructuredReview(tool_id="jasper", user_id="u1", category="AI Writing")
        restored = StructuredReview.model_validate_json(review.model_dump_json())
        assert restored == review


class TestScoreModels:
    """Tests for score models."""

    def test_metric_stats_range(self) -> None:
        with pytest.raises(ValidationError):
            MetricStats(avg=11.0, count=1)

    def test_confidence_range(self) -> None:
        with pytest.raises(ValidationError):
            AggregatedScore(tool_id="jasper", category="AI Writing", confidence_score=101.0)

    def test_editorial_notes_limit(self) -> None:
        EditorialScore(tool_id="jasper", category="AI Writing", notes="x" * 1000)
        with pytest.raises(ValidationError):
            EditorialScore(tool_id="jasper", category="AI Writing", notes="x" * 1001)

    def test_editorial_score_range(self) -> None:
        with pytest.raises(ValidationError):
            EditorialScore(tool_id="jasper", category="AI Writing", metric_scores={"contentQuality": 12})


class TestCriteriaModels:
    """Tests for criteria dataclasses."""

    def test_category_lookups(self) -> None:
        criteria = CategoryCriteria(
            category="Test",
            color="#000000",
            metrics=(
                MetricDefinition(metric_key="a", label="A", display_order=0),
                MetricDefinition(metric_key="b", label="B", display_order=1),
            ),
        )
        assert criteria.metric_keys == ("a", "b")
        assert criteria.has_metric("a")
        assert not criteria.has_metric("c")
        assert criteria.get_metric("b").label == "B"
        assert criteria.get_metric("c") is None

    def test_frozen(self) -> None:
        metric = MetricDefinition(metric_key="a", label="A")
        with pytest.raises(AttributeError):
            metric.label = "changed"


class TestScoringConfig:
    """Tests for ScoringConfig."""

    def test_defaults(self) -> None:
        config = ScoringConfig()
        assert config.confidence_threshold == 70.0
        assert config.neutral_score == 5.0
        assert config.max_compare_tools == 3

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("TOOLSCORE_CONFIDENCE_THRESHOLD", "60")
        monkeypatch.setenv("TOOLSCORE_NEUTRAL_SCORE", "4.5")
        monkeypatch.setenv("TOOLSCORE_VOLUME_SATURATION", "10")

        config = ScoringConfig.from_env()

        assert config.confidence_threshold == 60.0
        assert config.neutral_score == 4.5
        assert config.volume_saturation == 10

    def test_from_env_unset(self, monkeypatch) -> None:
        for name in (
            "TOOLSCORE_CONFIDENCE_THRESHOLD",
            "TOOLSCORE_NEUTRAL_SCORE",
            "TOOLSCORE_VOLUME_SATURATION",
        ):
            monkeypatch.delenv(name, raising=False)
        assert ScoringConfig.from_env() == ScoringConfig()

    def test_threshold_range(self) -> None:
        with pytest.raises(ValidationError):
            ScoringConfig(confidence_threshold=150.0)


def test_clamp_score() -> None:
    assert clamp_score(-3) == 0.0
    assert clamp_score(12.5) == 10.0
    assert clamp_score(7) == 7.0


def test_rejection_codes_distinct() -> None:
    assert ComparisonError.INSUFFICIENT_TOOLS != ComparisonError.TOO_MANY_TOOLS
    rejection = ComparisonRejection(
        error=ComparisonError.TOO_MANY_TOOLS, message="too many", requested=4, min_tools=2, max_tools=3
    )
    assert rejection.model_dump(mode="json")["error"] == "too_many_tools"
