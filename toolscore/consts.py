from pathlib import Path

DEFAULT_DATA_DIR = (Path(__file__).parent.parent.resolve() / "data").absolute().resolve()

# Score bounds for every metric, whatever its source
MIN_SCORE = 0.0
MAX_SCORE = 10.0
NEUTRAL_SCORE = 5.0  # Midpoint shown when nothing better is known

# Resolver
CONFIDENCE_THRESHOLD = 70.0  # Aggregated scores below this fall back to editorial/default

# Confidence scoring
REVIEW_VOLUME_SATURATION = 20  # Review count at which volume stops adding confidence
VARIANCE_SCALE = 4.0  # Mean metric variance at which consistency halves
MAX_CONFIDENCE = 100.0

# Comparison
MIN_COMPARE_TOOLS = 2
MAX_COMPARE_TOOLS = 3

# Editorial scores
MAX_EDITORIAL_NOTES_LENGTH = 1000

# Rounding applied to persisted statistics
STATS_DECIMALS = 2

# Fallback reasons surfaced to the UI
FALLBACK_LOW_CONFIDENCE = "Low confidence score"
FALLBACK_NO_AGGREGATED = "No aggregated scores"
FALLBACK_NO_SCORES = "No aggregated or editorial scores"

# Environment variables
ENV_DATABASE_URL = "TOOLSCORE_DATABASE_URL"
ENV_CONFIDENCE_THRESHOLD = "TOOLSCORE_CONFIDENCE_THRESHOLD"
ENV_NEUTRAL_SCORE = "TOOLSCORE_NEUTRAL_SCORE"
ENV_VOLUME_SATURATION = "TOOLSCORE_VOLUME_SATURATION"
