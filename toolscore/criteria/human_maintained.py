"""Human-maintained scoring criteria.

This file contains data that should be manually curated and extended:
which spider-chart metrics each tool category is scored on, with the label
and icon shown for each. Metric keys are shared across categories so that
reviews and editorial scores stay comparable; only the label changes.
"""

from typing import Final

from toolscore.models.model_criteria import CategoryCriteria, MetricDefinition

# Shared metric keys
CONTENT_QUALITY: Final[str] = "contentQuality"
SPEED_EFFICIENCY: Final[str] = "speedEfficiency"
CREATIVE_FEATURES: Final[str] = "creativeFeatures"
INTEGRATION_OPTIONS: Final[str] = "integrationOptions"
LEARNING_CURVE: Final[str] = "learningCurve"
VALUE_FOR_MONEY: Final[str] = "valueForMoney"

ALL_METRIC_KEYS: Final[tuple[str, ...]] = (
    CONTENT_QUALITY,
    SPEED_EFFICIENCY,
    CREATIVE_FEATURES,
    INTEGRATION_OPTIONS,
    LEARNING_CURVE,
    VALUE_FOR_MONEY,
)

# Category used for tools nobody has categorised yet
FALLBACK_CATEGORY: Final[str] = "Other"


def _metrics(*specs: tuple[str, str, str]) -> tuple[MetricDefinition, ...]:
    """Build metric definitions, display order following argument order."""
    return tuple(
        MetricDefinition(metric_key=key, label=label, icon=icon, display_order=index)
        for index, (key, label, icon) in enumerate(specs)
    )


GENRE_CRITERIA: Final[tuple[CategoryCriteria, ...]] = (
    # AI & Machine Learning
    CategoryCriteria(
        category="AI Writing",
        color="#8b5cf6",
        metrics=_metrics(
            (CONTENT_QUALITY, "Content Quality", "✨"),
            (SPEED_EFFICIENCY, "Generation Speed", "⚡"),
            (CREATIVE_FEATURES, "Creativity", "🎨"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
        ),
    ),
    CategoryCriteria(
        category="AI Tools",
        color="#8b5cf6",
        metrics=_metrics(
            (CONTENT_QUALITY, "Accuracy", "🎯"),
            (SPEED_EFFICIENCY, "Speed", "⚡"),
            (INTEGRATION_OPTIONS, "API Access", "🔗"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    CategoryCriteria(
        category="Machine Learning",
        color="#6366f1",
        metrics=_metrics(
            (CONTENT_QUALITY, "Model Quality", "🧠"),
            (SPEED_EFFICIENCY, "Training Speed", "⚡"),
            (INTEGRATION_OPTIONS, "Framework Support", "🔗"),
            (LEARNING_CURVE, "Ease of Use", "📚"),
        ),
    ),
    # Design & Creative
    CategoryCriteria(
        category="Design",
        color="#ec4899",
        metrics=_metrics(
            (CREATIVE_FEATURES, "Creative Tools", "🎨"),
            (SPEED_EFFICIENCY, "Performance", "⚡"),
            (INTEGRATION_OPTIONS, "Plugins", "🔗"),
            (LEARNING_CURVE, "Ease of Use", "📚"),
        ),
    ),
    CategoryCriteria(
        category="Video Editing",
        color="#f59e0b",
        metrics=_metrics(
            (CONTENT_QUALITY, "Export Quality", "🎬"),
            (SPEED_EFFICIENCY, "Rendering Speed", "⚡"),
            (CREATIVE_FEATURES, "Effects Library", "✨"),
            (LEARNING_CURVE, "User Friendly", "📚"),
        ),
    ),
    CategoryCriteria(
        category="Photo Editing",
        color="#10b981",
        metrics=_metrics(
            (CONTENT_QUALITY, "Output Quality", "📷"),
            (CREATIVE_FEATURES, "Filters & Tools", "🎨"),
            (SPEED_EFFICIENCY, "Processing Speed", "⚡"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    # Productivity
    CategoryCriteria(
        category="Productivity",
        color="#3b82f6",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Efficiency", "⚡"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
            (LEARNING_CURVE, "Ease of Use", "📚"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    CategoryCriteria(
        category="Project Management",
        color="#0ea5e9",
        metrics=_metrics(
            (CREATIVE_FEATURES, "Features", "📊"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
            (LEARNING_CURVE, "Team Adoption", "👥"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    CategoryCriteria(
        category="Time Management",
        color="#06b6d4",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Efficiency", "⏱️"),
            (CREATIVE_FEATURES, "Features", "📋"),
            (INTEGRATION_OPTIONS, "Calendar Sync", "🔗"),
            (LEARNING_CURVE, "Simplicity", "📚"),
        ),
    ),
    # Development
    CategoryCriteria(
        category="Development",
        color="#14b8a6",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Build Speed", "⚡"),
            (CREATIVE_FEATURES, "Features", "🛠️"),
            (INTEGRATION_OPTIONS, "Extensions", "🔗"),
            (LEARNING_CURVE, "Developer UX", "📚"),
        ),
    ),
    CategoryCriteria(
        category="Code Editor",
        color="#10b981",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Performance", "⚡"),
            (CREATIVE_FEATURES, "Features", "💻"),
            (INTEGRATION_OPTIONS, "Extensions", "🔗"),
            (LEARNING_CURVE, "Ease of Use", "📚"),
        ),
    ),
    CategoryCriteria(
        category="API Tools",
        color="#8b5cf6",
        metrics=_metrics(
            (CONTENT_QUALITY, "Reliability", "🎯"),
            (SPEED_EFFICIENCY, "Response Time", "⚡"),
            (INTEGRATION_OPTIONS, "Endpoints", "🔗"),
            (VALUE_FOR_MONEY, "Pricing", "💰"),
        ),
    ),
    # Marketing & Business
    CategoryCriteria(
        category="Marketing",
        color="#f59e0b",
        metrics=_metrics(
            (CONTENT_QUALITY, "Campaign Quality", "📈"),
            (INTEGRATION_OPTIONS, "Platform Support", "🔗"),
            (CREATIVE_FEATURES, "Automation", "🤖"),
            (VALUE_FOR_MONEY, "ROI", "💰"),
        ),
    ),
    CategoryCriteria(
        category="SEO",
        color="#10b981",
        metrics=_metrics(
            (CONTENT_QUALITY, "Data Accuracy", "🎯"),
            (CREATIVE_FEATURES, "Analysis Tools", "📊"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    CategoryCriteria(
        category="Analytics",
        color="#3b82f6",
        metrics=_metrics(
            (CONTENT_QUALITY, "Data Quality", "📊"),
            (SPEED_EFFICIENCY, "Real-time Data", "⚡"),
            (INTEGRATION_OPTIONS, "Data Sources", "🔗"),
            (CREATIVE_FEATURES, "Visualization", "📈"),
        ),
    ),
    # Communication & Collaboration
    CategoryCriteria(
        category="Communication",
        color="#06b6d4",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Message Speed", "💬"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
            (LEARNING_CURVE, "User Friendly", "📚"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    CategoryCriteria(
        category="Collaboration",
        color="#8b5cf6",
        metrics=_metrics(
            (SPEED_EFFICIENCY, "Real-time Sync", "🔄"),
            (CREATIVE_FEATURES, "Features", "🤝"),
            (INTEGRATION_OPTIONS, "Tool Support", "🔗"),
            (LEARNING_CURVE, "Adoption", "👥"),
        ),
    ),
    # E-commerce
    CategoryCriteria(
        category="E-commerce",
        color="#f59e0b",
        metrics=_metrics(
            (CREATIVE_FEATURES, "Store Features", "🛍️"),
            (INTEGRATION_OPTIONS, "Payment Options", "💳"),
            (SPEED_EFFICIENCY, "Load Speed", "⚡"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
    # Uncategorised tools
    CategoryCriteria(
        category=FALLBACK_CATEGORY,
        color="#6366f1",
        metrics=_metrics(
            (CONTENT_QUALITY, "Quality", "✨"),
            (SPEED_EFFICIENCY, "Speed", "⚡"),
            (INTEGRATION_OPTIONS, "Integrations", "🔗"),
            (VALUE_FOR_MONEY, "Value", "💰"),
        ),
    ),
)
