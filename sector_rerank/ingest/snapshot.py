"""Local snapshot loader.

A snapshot is a JSON file exported by the dashboard backend:

    {
      "entities": [{"id": "KE", "name": "Kenya", "baseline_score": 61.2}, ...],
      "articles": [{"id": "a1", "entity_id": "KE", "topics": ["Energy"],
                    "sentiment_label": "positive", "sentiment_score": 80}, ...]
    }

Articles without an entity_id, or pointing at an unknown entity, are kept
out of every pool and counted in Snapshot.orphaned_articles.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ValidationError

from sector_rerank.models import Article, Entity

logger = logging.getLogger(__name__)


class SnapshotError(ValueError):
    """The snapshot file is missing or malformed."""


class _SnapshotFile(BaseModel):
    entities: list[Entity]
    articles: list[Article] = []


@dataclass(frozen=True)
class Snapshot:
    entities: tuple[Entity, ...]
    articles_by_entity: dict[str, tuple[Article, ...]] = field(default_factory=dict)
    orphaned_articles: int = 0


def parse_snapshot(data: dict) -> Snapshot:
    try:
        parsed = _SnapshotFile.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Invalid snapshot: {e}") from e

    entity_ids: set[str] = set()
    duplicates: list[str] = []
    for entity in parsed.entities:
        if entity.id in entity_ids:
            duplicates.append(entity.id)
        entity_ids.add(entity.id)
    if duplicates:
        raise SnapshotError(f"Duplicate entity id(s) in snapshot: {', '.join(sorted(set(duplicates)))}")

    grouped: dict[str, list[Article]] = {e.id: [] for e in parsed.entities}
    orphaned = 0

    for article in parsed.articles:
        if article.entity_id is None or article.entity_id not in entity_ids:
            orphaned += 1
            continue
        grouped[article.entity_id].append(article)

    if orphaned:
        logger.warning("Snapshot has %d article(s) with no known entity", orphaned)

    return Snapshot(
        entities=tuple(parsed.entities),
        articles_by_entity={eid: tuple(arts) for eid, arts in grouped.items()},
        orphaned_articles=orphaned,
    )


def load_snapshot(path: Path | str) -> Snapshot:
    """Read and validate a snapshot JSON file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        raise SnapshotError(f"Snapshot not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON ({path}): {e}") from e

    return parse_snapshot(data)
