from datetime import UTC, datetime

from toolscore.consts import MAX_SCORE, MIN_SCORE


def _utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


def clamp_score(value: float) -> float:
    """Clamp a metric score into the displayable [0, 10] range."""
    return max(MIN_SCORE, min(MAX_SCORE, float(value)))
