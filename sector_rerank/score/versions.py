"""Scoring version constants and weights."""

RERANK_CALC_VERSION = "sector_rerank_v1"

# Sector score = volume/sentiment split
SECTOR_WEIGHTS = {
    "volume": 0.5,
    "sentiment": 0.5,
}

# Adjusted score = baseline/sector-aggregate split
BLEND_WEIGHTS = {
    "baseline": 0.5,
    "sector": 0.5,
}

VOLUME_POINTS_PER_ARTICLE = 10.0
VOLUME_CAP = 100.0

# Used when sentiment is unscored or a baseline is missing
NEUTRAL_SENTIMENT = 50.0
DEFAULT_BASELINE = 50.0

# Per-sector sentiment breakdown needs at least this many articles
MIN_BREAKDOWN_ARTICLES = 2
