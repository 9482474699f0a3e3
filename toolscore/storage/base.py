"""Abstract base class for score storage backends.

The store is the single source of truth between requests. The scoring core
keeps no process-wide state: every read goes to the store and derived rows
are written back with per-tool upserts.
"""

from abc import ABC, abstractmethod

from toolscore.models.model_review import ReviewStatus, StructuredReview
from toolscore.models.model_score import AggregatedScore, EditorialScore
from toolscore.models.model_tool import ToolRecord


class StorageError(Exception):
    """Raised when a storage backend fails to read or write."""


class ScoreStore(ABC):
    """Abstract base class for score store implementations.

    Provides a consistent interface over the four record kinds the scoring
    core touches: tools, structured reviews, aggregated scores and
    editorial scores. Implementations may use files, databases, or other
    storage backends.
    """

    # === TOOLS ===

    @abstractmethod
    def save_tool(self, tool: ToolRecord) -> ToolRecord:
        """Insert or replace a tool record."""
        ...

    @abstractmethod
    def get_tool(self, tool_id: str) -> ToolRecord | None:
        """Load a tool by id, None if unknown."""
        ...

    @abstractmethod
    def list_tools(self) -> list[ToolRecord]:
        """List every stored tool."""
        ...

    # === STRUCTURED REVIEWS ===

    @abstractmethod
    def save_review(self, review: StructuredReview) -> StructuredReview:
        """Store a new review.

        Args:
            review: Review to store. Its id is ignored.

        Returns:
            The stored review with its assigned id.
        """
        ...

    @abstractmethod
    def get_review(self, review_id: int) -> StructuredReview | None:
        """Load a review by id, None if unknown."""
        ...

    @abstractmethod
    def list_reviews(
        self,
        tool_id: str,
        status: ReviewStatus | None = None,
    ) -> list[StructuredReview]:
        """List reviews for a tool, optionally restricted to one status."""
        ...

    @abstractmethod
    def update_review_status(
        self,
        review_id: int,
        status: ReviewStatus,
    ) -> StructuredReview | None:
        """Change a review's moderation status.

        Returns:
            The updated review, or None if the id is unknown.
        """
        ...

    # === AGGREGATED SCORES ===

    @abstractmethod
    def get_aggregated_score(self, tool_id: str) -> AggregatedScore | None:
        """Load the aggregated score row for a tool, None if never computed."""
        ...

    @abstractmethod
    def upsert_aggregated_score(self, score: AggregatedScore) -> AggregatedScore:
        """Insert or replace the single aggregated row keyed by tool_id.

        Concurrent writers for the same tool resolve as last write wins.
        """
        ...

    # === EDITORIAL SCORES ===

    @abstractmethod
    def get_active_editorial_score(self, tool_id: str, category: str) -> EditorialScore | None:
        """Load the most recent active editorial score for a tool/category."""
        ...

    @abstractmethod
    def save_editorial_score(self, score: EditorialScore) -> EditorialScore:
        """Store a new editorial score row and return it with its id."""
        ...

    @abstractmethod
    def deactivate_editorial_scores(self, tool_id: str, category: str) -> int:
        """Mark every active editorial row for a tool/category inactive.

        Returns:
            Number of rows deactivated.
        """
        ...
