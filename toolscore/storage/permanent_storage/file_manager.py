"""File-based score store.

Provides operations for:
- Tool records (category and spider-chart defaults)
- Structured reviews (append-only, status updated in place)
- Aggregated scores (one entry per tool, replaced on recompute)
- Editorial scores (history kept, newest active entry wins)

Meant for single-process use such as the CLI and local fixtures; request
handlers sharing one store should use SQLScoreStore.
"""

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from toolscore.consts import DEFAULT_DATA_DIR
from toolscore.models.model_review import ReviewStatus, StructuredReview
from toolscore.models.model_score import AggregatedScore, EditorialScore
from toolscore.models.model_tool import ToolRecord
from toolscore.storage.base import ScoreStore, StorageError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"


class FileManager(ScoreStore):
    """JSON file storage manager for scoring data.

    Directory structure:
        data/
        ├── tools.json              # Tool records keyed by id
        ├── reviews.json            # Structured reviews with id counter
        ├── aggregated_scores.json  # Aggregated rows keyed by tool id
        └── editorial_scores.json   # Editorial rows with id counter
    """

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR):
        """Initialize FileManager with data directory.

        Args:
            data_dir: Root directory for all data files.
        """
        self.data_dir = Path(data_dir)
        self._tools_path = self.data_dir / "tools.json"
        self._reviews_path = self.data_dir / "reviews.json"
        self._aggregated_path = self.data_dir / "aggregated_scores.json"
        self._editorial_path = self.data_dir / "editorial_scores.json"

    def _read(self, path: Path) -> dict[str, Any]:
        """Read a data file, returning an empty document if missing."""
        if not path.exists():
            return {}
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def _write(self, path: Path, data: dict[str, Any]) -> Path:
        """Write a data file atomically (temp file then rename)."""
        data["version"] = SCHEMA_VERSION
        data["updated_at"] = datetime.now(UTC).isoformat()
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(path)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        return path

    # === TOOL OPERATIONS ===

    def save_tool(self, tool: ToolRecord) -> ToolRecord:
        data = self._read(self._tools_path)
        tools = data.setdefault("tools", {})
        tools[tool.id] = tool.model_dump(mode="json")
        self._write(self._tools_path, data)
        logger.debug(f"Saved tool {tool.id}")
        return tool

    def get_tool(self, tool_id: str) -> ToolRecord | None:
        raw = self._read(self._tools_path).get("tools", {}).get(tool_id)
        if raw is None:
            return None
        return ToolRecord.model_validate(raw)

    def list_tools(self) -> list[ToolRecord]:
        tools = self._read(self._tools_path).get("tools", {})
        return [ToolRecord.model_validate(raw) for raw in tools.values()]

    # === REVIEW OPERATIONS ===

    def save_review(self, review: StructuredReview) -> StructuredReview:
        data = self._read(self._reviews_path)
        next_id = data.get("next_id", 1)
        stored = review.model_copy(update={"id": next_id})

        data.setdefault("reviews", []).append(stored.model_dump(mode="json"))
        data["next_id"] = next_id + 1
        self._write(self._reviews_path, data)
        logger.info(f"Saved review {next_id} for tool {review.tool_id}")
        return stored

    def get_review(self, review_id: int) -> StructuredReview | None:
        for raw in self._read(self._reviews_path).get("reviews", []):
            if raw.get("id") == review_id:
                return StructuredReview.model_validate(raw)
        return None

    def list_reviews(
        self,
        tool_id: str,
        status: ReviewStatus | None = None,
    ) -> list[StructuredReview]:
        reviews = [
            StructuredReview.model_validate(raw)
            for raw in self._read(self._reviews_path).get("reviews", [])
            if raw.get("tool_id") == tool_id
        ]
        if status is not None:
            reviews = [r for r in reviews if r.status == status]
        return reviews

    def update_review_status(
        self,
        review_id: int,
        status: ReviewStatus,
    ) -> StructuredReview | None:
        data = self._read(self._reviews_path)
        for index, raw in enumerate(data.get("reviews", [])):
            if raw.get("id") != review_id:
                continue
            updated = StructuredReview.model_validate(raw).model_copy(
                update={"status": status, "updated_at": datetime.now(UTC)}
            )
            data["reviews"][index] = updated.model_dump(mode="json")
            self._write(self._reviews_path, data)
            return updated

        logger.warning(f"Review not found: {review_id}")
        return None

    # === AGGREGATED SCORE OPERATIONS ===

    def get_aggregated_score(self, tool_id: str) -> AggregatedScore | None:
        raw = self._read(self._aggregated_path).get("scores", {}).get(tool_id)
        if raw is None:
            return None
        return AggregatedScore.model_validate(raw)

    def upsert_aggregated_score(self, score: AggregatedScore) -> AggregatedScore:
        data = self._read(self._aggregated_path)
        data.setdefault("scores", {})[score.tool_id] = score.model_dump(mode="json")
        self._write(self._aggregated_path, data)
        logger.info(
            f"Saved aggregated score for {score.tool_id} "
            f"({score.total_reviews} reviews, confidence {score.confidence_score:.1f})"
        )
        return score

    # === EDITORIAL SCORE OPERATIONS ===

    def _editorial_rows(self, data: dict[str, Any]) -> list[EditorialScore]:
        return [EditorialScore.model_validate(raw) for raw in data.get("scores", [])]

    def get_active_editorial_score(self, tool_id: str, category: str) -> EditorialScore | None:
        active = [
            score
            for score in self._editorial_rows(self._read(self._editorial_path))
            if score.tool_id == tool_id and score.category == category and score.is_active
        ]
        if not active:
            return None
        # Newest first; ids break ties between rows written in the same instant
        return max(active, key=lambda s: (s.created_at, s.id or 0))

    def save_editorial_score(self, score: EditorialScore) -> EditorialScore:
        data = self._read(self._editorial_path)
        next_id = data.get("next_id", 1)
        stored = score.model_copy(update={"id": next_id})

        data.setdefault("scores", []).append(stored.model_dump(mode="json"))
        data["next_id"] = next_id + 1
        self._write(self._editorial_path, data)
        logger.info(f"Saved editorial score {next_id} for {score.tool_id}/{score.category}")
        return stored

    def deactivate_editorial_scores(self, tool_id: str, category: str) -> int:
        data = self._read(self._editorial_path)
        count = 0
        for raw in data.get("scores", []):
            if raw.get("tool_id") == tool_id and raw.get("category") == category and raw.get("is_active"):
                raw["is_active"] = False
                count += 1

        if count:
            self._write(self._editorial_path, data)
            logger.debug(f"Deactivated {count} editorial scores for {tool_id}/{category}")
        return count
