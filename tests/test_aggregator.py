"""Tests for review aggregation."""

import pytest

from toolscore.evaluators.aggregator import ReviewAggregator, aggregate_reviews, compute_metric_stats
from toolscore.models.model_review import ReviewerType, ReviewStatus
from toolscore.models.model_tool import ToolRecord
from toolscore.storage.base import StorageError


class TestComputeMetricStats:
    """Tests for per-metric statistics."""

    def test_empty_scores(self) -> None:
        stats = compute_metric_stats([])
        assert stats.count == 0
        assert stats.avg == 0.0
        assert stats.std_dev == 0.0
        assert stats.min is None
        assert stats.max is None

    def test_basic_stats(self) -> None:
        stats = compute_metric_stats([2.0, 9.0])
        assert stats.count == 2
        assert stats.avg == 5.5
        assert stats.std_dev == 3.5
        assert stats.min == 2.0
        assert stats.max == 9.0

    def test_rounded_to_two_decimals(self) -> None:
        stats = compute_metric_stats([7.0, 8.0, 8.0])
        assert stats.avg == 7.67
        assert stats.std_dev == 0.47

    def test_single_score(self) -> None:
        stats = compute_metric_stats([6.5])
        assert stats.avg == 6.5
        assert stats.std_dev == 0.0
        assert stats.min == stats.max == 6.5


class TestAggregateReviews:
    """Tests for aggregate_reviews."""

    def test_no_reviews(self) -> None:
        score = aggregate_reviews("jasper", "AI Writing", [])
        assert score.total_reviews == 0
        assert score.overall_average == 0.0
        assert score.confidence_score == 0.0
        assert all(stats.count == 0 for stats in score.metric_scores.values())

    def test_only_approved_reviews_count(self, review_factory) -> None:
        reviews = [
            review_factory(metric_scores={"contentQuality": 8.0}),
            review_factory(metric_scores={"contentQuality": 1.0}, status=ReviewStatus.PENDING),
            review_factory(metric_scores={"contentQuality": 1.0}, status=ReviewStatus.REJECTED),
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.total_reviews == 1
        assert score.metric_scores["contentQuality"].avg == 8.0

    def test_ignores_other_tools(self, review_factory) -> None:
        reviews = [
            review_factory(metric_scores={"contentQuality": 8.0}),
            review_factory(tool_id="other", metric_scores={"contentQuality": 1.0}),
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.total_reviews == 1

    def test_missing_metric_not_counted_as_zero(self, review_factory) -> None:
        """A review that skips a metric does not drag that metric down."""
        reviews = [
            review_factory(metric_scores={"contentQuality": 8.0, "speedEfficiency": 6.0}),
            review_factory(metric_scores={"contentQuality": 6.0}),
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.metric_scores["speedEfficiency"].count == 1
        assert score.metric_scores["speedEfficiency"].avg == 6.0
        assert score.metric_scores["contentQuality"].count == 2
        assert score.metric_scores["contentQuality"].avg == 7.0

    def test_overall_average_is_mean_of_metric_means(self, review_factory) -> None:
        reviews = [
            review_factory(metric_scores={"contentQuality": 8.0, "speedEfficiency": 4.0}),
            review_factory(metric_scores={"contentQuality": 6.0}),
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        # (7.0 + 4.0) / 2
        assert score.overall_average == 5.5

    def test_unknown_keys_dropped(self, review_factory) -> None:
        reviews = [review_factory(metric_scores={"contentQuality": 8.0, "valueForMoney": 2.0})]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert "valueForMoney" not in score.metric_scores
        assert score.overall_average == 8.0

    def test_metric_keys_follow_criteria(self, review_factory) -> None:
        score = aggregate_reviews(
            "jasper", "AI Writing", [review_factory(metric_scores={"creativeFeatures": 7.0})]
        )
        assert list(score.metric_scores) == [
            "contentQuality",
            "speedEfficiency",
            "creativeFeatures",
            "integrationOptions",
        ]

    def test_unknown_category_uses_review_keys(self, review_factory) -> None:
        reviews = [review_factory(category="Mystery", metric_scores={"whatever": 4.0})]
        score = aggregate_reviews("jasper", "Mystery", reviews)
        assert score.metric_scores["whatever"].avg == 4.0

    def test_counts(self, review_factory) -> None:
        reviews = [
            review_factory(is_verified=True),
            review_factory(is_verified=True, reviewer_type=ReviewerType.EDITORIAL),
            review_factory(),
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.total_reviews == 3
        assert score.verified_reviews == 2
        assert score.editorial_reviews == 1

    def test_consistent_reviews_high_confidence(self, consistent_reviews) -> None:
        score = aggregate_reviews("jasper", "AI Writing", consistent_reviews)
        assert score.metric_scores["contentQuality"].avg == 8.48
        assert score.confidence_score >= 70.0

    def test_polarised_reviews_low_confidence(self, polarised_reviews) -> None:
        score = aggregate_reviews("jasper", "AI Writing", polarised_reviews)
        assert score.metric_scores["contentQuality"].avg == 5.5
        assert score.confidence_score < 70.0

    def test_reviews_without_metric_scores_give_no_confidence(self, review_factory) -> None:
        """Approved reviews that score nothing do not build confidence."""
        reviews = [
            review_factory(metric_scores={}, is_verified=True, user_id=f"user-{i}") for i in range(25)
        ]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.total_reviews == 25
        assert score.overall_average == 0.0
        assert score.confidence_score == 0.0

    def test_reviews_scoring_only_unknown_keys_give_no_confidence(self, review_factory) -> None:
        reviews = [review_factory(metric_scores={"valueForMoney": 9.0}) for _ in range(25)]
        score = aggregate_reviews("jasper", "AI Writing", reviews)
        assert score.confidence_score == 0.0

    def test_empty_reviews_do_not_raise_confidence(self, review_factory) -> None:
        """Only reviews with metric data count toward review volume."""
        scored = [review_factory(metric_scores={"contentQuality": 8.0}, user_id="scorer")]
        empty = [review_factory(metric_scores={}, user_id=f"user-{i}") for i in range(20)]
        alone = aggregate_reviews("jasper", "AI Writing", scored)
        padded = aggregate_reviews("jasper", "AI Writing", scored + empty)
        assert padded.confidence_score == alone.confidence_score
        assert padded.total_reviews == 21

    def test_idempotent(self, consistent_reviews) -> None:
        first = aggregate_reviews("jasper", "AI Writing", consistent_reviews)
        second = aggregate_reviews("jasper", "AI Writing", consistent_reviews)
        assert first.model_dump(exclude={"last_calculated_at"}) == second.model_dump(
            exclude={"last_calculated_at"}
        )


class TestReviewAggregator:
    """Tests for ReviewAggregator against both stores."""

    def test_aggregate_persists(self, store, writing_tool, consistent_reviews) -> None:
        store.save_tool(writing_tool)
        for review in consistent_reviews:
            store.save_review(review)

        score = ReviewAggregator(store).aggregate("jasper", "AI Writing")

        stored = store.get_aggregated_score("jasper")
        assert stored is not None
        assert stored.total_reviews == 25
        assert stored.confidence_score == score.confidence_score

    def test_aggregate_replaces_row(self, store, writing_tool, review_factory) -> None:
        """Recomputing overwrites the previous row for the tool."""
        store.save_tool(writing_tool)
        store.save_review(review_factory(metric_scores={"contentQuality": 4.0}))
        aggregator = ReviewAggregator(store)
        aggregator.aggregate("jasper", "AI Writing")

        store.save_review(review_factory(metric_scores={"contentQuality": 8.0}))
        aggregator.aggregate("jasper", "AI Writing")

        stored = store.get_aggregated_score("jasper")
        assert stored.total_reviews == 2
        assert stored.metric_scores["contentQuality"].avg == 6.0

    def test_recalculate_all(self, store, dev_tools, review_factory) -> None:
        for tool in dev_tools:
            store.save_tool(tool)
            store.save_review(
                review_factory(
                    tool_id=tool.id, category="Development", metric_scores={"speedEfficiency": 7.0}
                )
            )

        summary = ReviewAggregator(store).recalculate_all()

        assert summary.total_tools == 3
        assert summary.successful == 3
        assert summary.failed == 0
        for tool in dev_tools:
            assert store.get_aggregated_score(tool.id) is not None

    def test_recalculate_all_records_failures(self, file_manager, dev_tools) -> None:
        """A failing tool is reported and the batch carries on."""
        for tool in dev_tools:
            file_manager.save_tool(tool)

        original = file_manager.upsert_aggregated_score

        def flaky_upsert(score):
            if score.tool_id == "tool-b":
                raise StorageError("disk full")
            return original(score)

        file_manager.upsert_aggregated_score = flaky_upsert

        summary = ReviewAggregator(file_manager).recalculate_all()

        assert summary.successful == 2
        assert summary.failed == 1
        assert summary.failures[0].tool_id == "tool-b"
        assert "disk full" in summary.failures[0].error

    def test_recalculate_all_empty_store(self, store) -> None:
        summary = ReviewAggregator(store).recalculate_all()
        assert summary.total_tools == 0
        assert summary.failures == []


@pytest.mark.parametrize("count", [1, 3, 10, 25])
def test_confidence_grows_with_agreeing_reviews(review_factory, count) -> None:
    """More identical approved reviews never lower confidence."""
    fewer = aggregate_reviews("jasper", "AI Writing", [review_factory()] * count)
    more = aggregate_reviews("jasper", "AI Writing", [review_factory()] * (count + 1))
    assert more.confidence_score >= fewer.confidence_score
