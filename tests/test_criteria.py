"""Tests for the category criteria registry."""

import pytest

from toolscore.criteria.human_maintained import ALL_METRIC_KEYS, FALLBACK_CATEGORY, GENRE_CRITERIA
from toolscore.criteria.registry import (
    filter_metric_scores,
    get_all_categories,
    get_category,
    get_criteria,
    get_metric_keys,
    is_known_metric,
)


class TestCriteriaData:
    """Tests for the human-maintained criteria table."""

    def test_category_names_unique(self) -> None:
        names = [c.category for c in GENRE_CRITERIA]
        assert len(names) == len(set(names))

    def test_metric_keys_unique_per_category(self) -> None:
        for criteria in GENRE_CRITERIA:
            keys = criteria.metric_keys
            assert len(keys) == len(set(keys)), criteria.category

    def test_metric_keys_are_shared_keys(self) -> None:
        """Every category draws from the shared key set."""
        for criteria in GENRE_CRITERIA:
            for key in criteria.metric_keys:
                assert key in ALL_METRIC_KEYS

    def test_display_orders_unique_per_category(self) -> None:
        for criteria in GENRE_CRITERIA:
            orders = [m.display_order for m in criteria.metrics]
            assert len(orders) == len(set(orders)), criteria.category

    def test_fallback_category_defined(self) -> None:
        assert get_category(FALLBACK_CATEGORY) is not None


class TestLookups:
    """Tests for registry lookup functions."""

    def test_get_criteria_ai_writing(self) -> None:
        """AI Writing shows its four metrics in display order."""
        metrics = get_criteria("AI Writing")
        assert [m.metric_key for m in metrics] == [
            "contentQuality",
            "speedEfficiency",
            "creativeFeatures",
            "integrationOptions",
        ]
        assert metrics[0].label == "Content Quality"

    def test_get_criteria_sorted_by_display_order(self) -> None:
        for name in get_all_categories():
            orders = [m.display_order for m in get_criteria(name)]
            assert orders == sorted(orders)

    def test_same_key_different_label(self) -> None:
        """One metric key can carry a different label per category."""
        writing = get_category("AI Writing").get_metric("speedEfficiency")
        dev = get_category("Development").get_metric("speedEfficiency")
        assert writing.label != dev.label

    def test_unknown_category_is_empty(self) -> None:
        assert get_criteria("Underwater Basket Weaving") == ()
        assert get_metric_keys("Underwater Basket Weaving") == ()
        assert get_category("Underwater Basket Weaving") is None

    def test_lookup_is_case_sensitive(self) -> None:
        assert get_criteria("ai writing") == ()

    def test_get_all_categories(self) -> None:
        categories = get_all_categories()
        assert "AI Writing" in categories
        assert "Development" in categories
        assert len(categories) == len(GENRE_CRITERIA)

    def test_is_known_metric(self) -> None:
        assert is_known_metric("AI Writing", "contentQuality")
        assert not is_known_metric("AI Writing", "valueForMoney")
        assert not is_known_metric("Nope", "contentQuality")


class TestFilterMetricScores:
    """Tests for filter_metric_scores."""

    def test_drops_unknown_keys(self) -> None:
        scores = filter_metric_scores(
            "AI Writing", {"contentQuality": 8, "valueForMoney": 3, "bogus": 1}
        )
        assert scores == {"contentQuality": 8.0}

    def test_returns_criteria_order(self) -> None:
        scores = filter_metric_scores(
            "AI Writing", {"integrationOptions": 4, "contentQuality": 8}
        )
        assert list(scores) == ["contentQuality", "integrationOptions"]

    def test_drops_non_numeric_values(self) -> None:
        scores = filter_metric_scores(
            "AI Writing",
            {"contentQuality": "eight", "speedEfficiency": True, "creativeFeatures": float("nan")},
        )
        assert scores == {}

    def test_strict_rejects_unknown_keys(self) -> None:
        with pytest.raises(ValueError, match="Unknown metric keys"):
            filter_metric_scores("AI Writing", {"bogus": 1}, strict=True)

    def test_strict_rejects_non_numeric(self) -> None:
        with pytest.raises(ValueError, match="must be a number"):
            filter_metric_scores("AI Writing", {"contentQuality": "high"}, strict=True)

    def test_unknown_category_drops_everything(self) -> None:
        assert filter_metric_scores("Nope", {"contentQuality": 5}) == {}
