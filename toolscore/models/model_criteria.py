"""Category criteria models for spider-chart metrics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetricDefinition:
    """A single scoring metric shown on a category's spider chart."""

    metric_key: str
    label: str
    icon: str | None = None
    color: str | None = None
    display_order: int = 0


@dataclass(frozen=True)
class CategoryCriteria:
    """The ordered metric set for one tool category."""

    category: str
    color: str | None
    metrics: tuple[MetricDefinition, ...]

    def get_metric(self, metric_key: str) -> MetricDefinition | None:
        """Get metric definition by key."""
        for metric in self.metrics:
            if metric.metric_key == metric_key:
                return metric
        return None

    def has_metric(self, metric_key: str) -> bool:
        """Check if metric exists in this category."""
        return self.get_metric(metric_key) is not None

    @property
    def metric_keys(self) -> tuple[str, ...]:
        """Metric keys in display order."""
        ordered = sorted(self.metrics, key=lambda m: m.display_order)
        return tuple(m.metric_key for m in ordered)
