"""Sector scoring: coverage volume + sentiment of matched articles."""
from __future__ import annotations

import math
from collections.abc import Sequence

from sector_rerank.models import Article, SectorSentiment, SentimentLabel
from sector_rerank.score.matcher import filter_by_sector
from sector_rerank.score.taxonomy import Taxonomy
from sector_rerank.score.versions import (
    MIN_BREAKDOWN_ARTICLES,
    NEUTRAL_SENTIMENT,
    SECTOR_WEIGHTS,
    VOLUME_CAP,
    VOLUME_POINTS_PER_ARTICLE,
)


def volume_score(matched_articles: Sequence[Article]) -> float:
    """10 points per matched article, capped at 100."""
    return min(len(matched_articles) * VOLUME_POINTS_PER_ARTICLE, VOLUME_CAP)


def sentiment_average(matched_articles: Sequence[Article]) -> float:
    """Mean sentiment_score over scored articles.

    Unscored articles (None or <= 0) are excluded, not counted as zero.
    Returns the neutral midpoint (50) when nothing is scored.
    """
    scored = [a.sentiment_score for a in matched_articles if a.is_scored]
    if not scored:
        return NEUTRAL_SENTIMENT
    return sum(scored) / len(scored)


def score_sector(matched_articles: Sequence[Article]) -> float | None:
    """Return a 0-100 sector score, or None when nothing matched.

    None means "insufficient evidence" and must not be treated as 0.
    """
    if not matched_articles:
        return None

    w = SECTOR_WEIGHTS
    return w["volume"] * volume_score(matched_articles) + w["sentiment"] * sentiment_average(matched_articles)


def _percent(part: int, total: int) -> int:
    # Half-up, not banker's rounding
    return math.floor(part * 100 / total + 0.5)


def sector_sentiment_breakdown(
    articles: Sequence[Article],
    taxonomy: Taxonomy,
    min_articles: int = MIN_BREAKDOWN_ARTICLES,
) -> list[SectorSentiment]:
    """Sentiment distribution per sector, in taxonomy order.

    Sectors with fewer than min_articles matches are left out.
    """
    results: list[SectorSentiment] = []

    for sector_id, definition in taxonomy.items():
        matched = filter_by_sector(articles, definition.keywords)
        total = len(matched)
        if total == 0 or total < min_articles:
            continue

        positive = sum(1 for a in matched if a.sentiment_label is SentimentLabel.POSITIVE)
        negative = sum(1 for a in matched if a.sentiment_label is SentimentLabel.NEGATIVE)
        neutral = sum(1 for a in matched if a.sentiment_label is SentimentLabel.NEUTRAL)

        results.append(SectorSentiment(
            sector_id=sector_id,
            label=definition.label,
            positive=_percent(positive, total),
            neutral=_percent(neutral, total),
            negative=_percent(negative, total),
            article_count=total,
        ))

    return results
