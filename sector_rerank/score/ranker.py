"""Ranking by adjusted score."""
from __future__ import annotations

from collections.abc import Mapping, Sequence

from sector_rerank.models import Entity, RankedEntity, ScoringResult
from sector_rerank.score.blend import effective_baseline


def _adjusted_or_baseline(entity: Entity, scoring_results: Mapping[str, ScoringResult]) -> float:
    result = scoring_results.get(entity.id)
    if result is None:
        return effective_baseline(entity)
    return result.adjusted_score


def rank(
    entities: Sequence[Entity],
    scoring_results: Mapping[str, ScoringResult],
) -> list[Entity]:
    """Order entities by adjusted score, highest first.

    Ties keep their input order (sorted() is stable). Entities without a
    result rank by their baseline, or the 50 midpoint if that is unknown.
    """
    return sorted(entities, key=lambda e: -_adjusted_or_baseline(e, scoring_results))


def rank_positions(
    entities: Sequence[Entity],
    scoring_results: Mapping[str, ScoringResult],
) -> list[RankedEntity]:
    """Rank entities and report each one's movement versus baseline order.

    rank and baseline_rank are 1-based list positions (ties are not
    shared). rank_change > 0 means the entity moved up after adjustment.
    """
    baseline_order = sorted(entities, key=lambda e: -effective_baseline(e))
    baseline_rank = {e.id: i + 1 for i, e in enumerate(baseline_order)}

    ranked: list[RankedEntity] = []
    for i, entity in enumerate(rank(entities, scoring_results)):
        result = scoring_results.get(entity.id)
        if result is None:
            raise KeyError(f"No scoring result for entity {entity.id!r}")
        position = i + 1
        ranked.append(RankedEntity(
            entity=entity,
            result=result,
            rank=position,
            baseline_rank=baseline_rank[entity.id],
            rank_change=baseline_rank[entity.id] - position,
        ))
    return ranked
