"""Score blender: baseline score + sector-filtered news evidence.

blend() is a pure function of its inputs. Recomputing with the same entity,
articles, selection and taxonomy always yields an equal ScoringResult.

Fallbacks (never errors):
  - empty selection            -> baseline passed through, mix from full pool
  - no sector matched anything -> same as empty selection
  - missing baseline           -> 50 midpoint
  - no scored sentiment        -> 50 midpoint (see sector.sentiment_average)
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from sector_rerank.models import (
    Article,
    Entity,
    ScoreStatus,
    ScoringResult,
    SentimentLabel,
    SentimentMix,
    Trend,
)
from sector_rerank.score.matcher import filter_by_sector
from sector_rerank.score.sector import score_sector
from sector_rerank.score.taxonomy import Taxonomy
from sector_rerank.score.versions import BLEND_WEIGHTS, DEFAULT_BASELINE

logger = logging.getLogger(__name__)


def sentiment_mix(articles: Iterable[Article]) -> SentimentMix:
    """Count positive/neutral/negative labels."""
    counts = {label: 0 for label in SentimentLabel}
    for article in articles:
        counts[article.sentiment_label] += 1
    return SentimentMix(
        positive=counts[SentimentLabel.POSITIVE],
        neutral=counts[SentimentLabel.NEUTRAL],
        negative=counts[SentimentLabel.NEGATIVE],
    )


def trend_for(mix: SentimentMix) -> Trend:
    if mix.positive > mix.negative:
        return Trend.UPWARD
    if mix.negative > mix.positive:
        return Trend.DOWNWARD
    return Trend.STABLE


def effective_baseline(entity: Entity) -> float:
    """Baseline score, or the 50 midpoint when it is unknown."""
    if entity.baseline_score is None:
        return DEFAULT_BASELINE
    return float(entity.baseline_score)


def _unadjusted(
    entity: Entity,
    articles: Sequence[Article],
    status: ScoreStatus,
    sector_scores: dict[str, float | None],
    matched_count: int,
) -> ScoringResult:
    mix = sentiment_mix(articles)
    return ScoringResult(
        entity_id=entity.id,
        adjusted_score=effective_baseline(entity),
        matched_article_count=matched_count,
        sentiment_mix=mix,
        trend=trend_for(mix),
        status=status,
        baseline_defaulted=entity.baseline_score is None,
        aggregate_sector_score=None,
        sector_scores=sector_scores,
    )


def blend(
    entity: Entity,
    articles: Sequence[Article],
    selection: Iterable[str],
    taxonomy: Taxonomy,
) -> ScoringResult:
    """Recompute an entity's score restricted to the selected sectors.

    articles is the entity's full (unfiltered) article pool. Raises
    ConfigurationError if the selection names a sector the taxonomy does
    not define.
    """
    articles = list(articles)
    # Unknown ids fail before any scoring
    sectors = taxonomy.resolve(selection)

    if not sectors:
        return _unadjusted(entity, articles, ScoreStatus.UNFILTERED, {}, len(articles))

    sector_scores: dict[str, float | None] = {}
    matched_union: dict[str, Article] = {}

    for definition in sectors:
        matched = filter_by_sector(articles, definition.keywords)
        sector_scores[definition.id] = score_sector(matched)
        for article in matched:
            matched_union.setdefault(article.id, article)

    defined = [s for s in sector_scores.values() if s is not None]

    if not defined:
        logger.debug(
            "%s: no articles matched sectors %s, keeping baseline",
            entity.id, ", ".join(sector_scores),
        )
        return _unadjusted(entity, articles, ScoreStatus.INSUFFICIENT_SECTOR_DATA, sector_scores, 0)

    aggregate = sum(defined) / len(defined)
    baseline = effective_baseline(entity)
    w = BLEND_WEIGHTS
    adjusted = w["baseline"] * baseline + w["sector"] * aggregate

    matched_articles = list(matched_union.values())
    mix = sentiment_mix(matched_articles)

    logger.debug(
        "%s: adjusted=%.2f (baseline=%.2f, sector_aggregate=%.2f, matched=%d)",
        entity.id, adjusted, baseline, aggregate, len(matched_articles),
    )

    return ScoringResult(
        entity_id=entity.id,
        adjusted_score=adjusted,
        matched_article_count=len(matched_articles),
        sentiment_mix=mix,
        trend=trend_for(mix),
        status=ScoreStatus.ADJUSTED,
        baseline_defaulted=entity.baseline_score is None,
        aggregate_sector_score=aggregate,
        sector_scores=sector_scores,
    )
