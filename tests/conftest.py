"""Pytest configuration and fixtures."""

import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from toolscore.models.model_eval import ScoringConfig
from toolscore.models.model_review import ReviewerType, ReviewStatus, StructuredReview
from toolscore.models.model_tool import ToolRecord
from toolscore.storage.permanent_storage.file_manager import FileManager
from toolscore.storage.sql.database import create_session_factory
from toolscore.storage.sql.sql_store import SQLScoreStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def file_manager(temp_dir: Path) -> FileManager:
    """Create a FileManager with temporary directory."""
    return FileManager(data_dir=temp_dir)


@pytest.fixture
def sql_store() -> SQLScoreStore:
    """Create a SQLScoreStore over a fresh in-memory SQLite database."""
    return SQLScoreStore(create_session_factory("sqlite:///:memory:"))


@pytest.fixture(params=["file", "sql"])
def store(request, temp_dir: Path):
    """Run a test against both storage backends."""
    if request.param == "file":
        return FileManager(data_dir=temp_dir)
    return SQLScoreStore(create_session_factory("sqlite:///:memory:"))


@pytest.fixture
def config() -> ScoringConfig:
    """Default scoring configuration."""
    return ScoringConfig()


@pytest.fixture
def writing_tool() -> ToolRecord:
    """An AI Writing tool with no curator defaults."""
    return ToolRecord(id="jasper", title="Jasper", category="AI Writing")


@pytest.fixture
def dev_tools() -> list[ToolRecord]:
    """Three Development tools for comparison tests."""
    return [
        ToolRecord(id="tool-a", title="Tool A", category="Development"),
        ToolRecord(id="tool-b", title="Tool B", category="Development"),
        ToolRecord(id="tool-c", title="Tool C", category="Development"),
    ]


def make_review(
    tool_id: str = "jasper",
    category: str = "AI Writing",
    metric_scores: dict[str, float] | None = None,
    status: ReviewStatus = ReviewStatus.APPROVED,
    is_verified: bool = False,
    reviewer_type: ReviewerType = ReviewerType.USER,
    user_id: str = "user-1",
    age_days: int = 0,
) -> StructuredReview:
    """Build a review with sensible defaults."""
    created = datetime.now(UTC) - timedelta(days=age_days)
    return StructuredReview(
        tool_id=tool_id,
        user_id=user_id,
        category=category,
        metric_scores=metric_scores if metric_scores is not None else {"contentQuality": 8.0},
        status=status,
        is_verified=is_verified,
        reviewer_type=reviewer_type,
        created_at=created,
        updated_at=created,
    )


@pytest.fixture
def review_factory():
    """Expose make_review to tests."""
    return make_review


@pytest.fixture
def consistent_reviews() -> list[StructuredReview]:
    """25 approved AI Writing reviews alternating 8 and 9, 23 verified."""
    return [
        make_review(
            metric_scores={"contentQuality": 8.0 if i % 2 == 0 else 9.0},
            is_verified=i < 23,
            user_id=f"user-{i}",
        )
        for i in range(25)
    ]


@pytest.fixture
def polarised_reviews() -> list[StructuredReview]:
    """Two approved reviews at opposite ends of the scale."""
    return [
        make_review(metric_scores={"contentQuality": 2.0}, user_id="user-low"),
        make_review(metric_scores={"contentQuality": 9.0}, user_id="user-high"),
    ]
