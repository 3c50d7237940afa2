"""Ranking packet builder: recompute every entity, then rank them together."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Callable

from sector_rerank.models import Article, Entity, RankedEntity, ScoringResult
from sector_rerank.score.blend import blend, effective_baseline
from sector_rerank.score.ranker import rank_positions
from sector_rerank.score.taxonomy import Taxonomy
from sector_rerank.score.versions import RERANK_CALC_VERSION


@dataclass(frozen=True)
class RankingPacket:
    """Snapshot of one recomputation across the whole entity universe."""
    calc_version: str
    taxonomy_version: str
    selection: tuple[str, ...]
    rows: tuple[RankedEntity, ...] = field(default_factory=tuple)

    @property
    def rank_total(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict:
        return {
            "calc_version": self.calc_version,
            "taxonomy_version": self.taxonomy_version,
            "selection": list(self.selection),
            "rank_total": self.rank_total,
            "rankings": [
                {
                    "rank": row.rank,
                    "baseline_rank": row.baseline_rank,
                    "rank_change": row.rank_change,
                    "id": row.entity.id,
                    "name": row.entity.name,
                    "baseline_score": row.entity.baseline_score,
                    **{k: v for k, v in row.result.to_dict().items() if k != "entity_id"},
                }
                for row in self.rows
            ],
        }


def recompute_rankings(
    entities: Sequence[Entity],
    articles_by_entity: Mapping[str, Sequence[Article]],
    selection: Iterable[str],
    taxonomy: Taxonomy,
    log_fn: Callable[[str], None] = lambda msg: None,
) -> RankingPacket:
    """Blend every entity against the selection and rank the results.

    Entities with no articles are scored against an empty pool. Must be
    called with all entities at once so ranks are comparable.
    """
    selected = tuple(d.id for d in taxonomy.resolve(selection))
    label = ", ".join(selected) if selected else "none"
    log_fn(f"Recomputing {len(entities)} entities (sectors: {label})...")

    results: dict[str, ScoringResult] = {}
    for entity in entities:
        result = blend(entity, articles_by_entity.get(entity.id, ()), selected, taxonomy)
        results[entity.id] = result
        log_fn(
            f"  {entity.id}: adjusted={result.adjusted_score:.1f} "
            f"(baseline={effective_baseline(entity):.1f}, matched={result.matched_article_count}, "
            f"trend={result.trend.value}, status={result.status.value})"
        )

    log_fn("Ranking...")
    rows = rank_positions(entities, results)

    return RankingPacket(
        calc_version=RERANK_CALC_VERSION,
        taxonomy_version=taxonomy.version,
        selection=selected,
        rows=tuple(rows),
    )
