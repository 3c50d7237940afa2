"""Sector taxonomy: sector id -> topic keywords.

The taxonomy is configuration, loaded once from a versioned JSON file and
passed explicitly into the engine. It is never mutated after construction.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, Field, ValidationError

from sector_rerank.errors import ConfigurationError
from sector_rerank.models import Keyword, SectorDefinition

logger = logging.getLogger(__name__)


class _SectorEntry(BaseModel):
    label: str = ""
    keywords: list[Keyword] = Field(min_length=1)


class _TaxonomyFile(BaseModel):
    version: str = ""
    sectors: dict[str, _SectorEntry] = Field(min_length=1)


class Taxonomy(Mapping[str, SectorDefinition]):
    """Read-only, ordered mapping of sector id to SectorDefinition."""

    def __init__(self, definitions: Iterable[SectorDefinition], version: str = "") -> None:
        sectors: dict[str, SectorDefinition] = {}
        for definition in definitions:
            if definition.id in sectors:
                raise ConfigurationError(f"Duplicate sector id in taxonomy: {definition.id!r}")
            sectors[definition.id] = definition
        if not sectors:
            raise ConfigurationError("Taxonomy must define at least one sector")
        self._sectors = MappingProxyType(sectors)
        self.version = version

    def __getitem__(self, sector_id: str) -> SectorDefinition:
        return self._sectors[sector_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sectors)

    def __len__(self) -> int:
        return len(self._sectors)

    def __repr__(self) -> str:
        return f"Taxonomy(version={self.version!r}, sectors={list(self._sectors)!r})"

    def resolve(self, selection: Iterable[str]) -> list[SectorDefinition]:
        """Validate a selection and return its definitions in taxonomy order.

        Every id is checked before anything is returned, so a single unknown
        id fails the whole selection.
        """
        if isinstance(selection, str):
            selection = [selection]
        selected = frozenset(selection)
        unknown = sorted(s for s in selected if s not in self._sectors)
        if unknown:
            raise ConfigurationError(
                f"Unknown sector(s) {', '.join(repr(s) for s in unknown)}; "
                f"known sectors: {', '.join(self._sectors)}"
            )
        return [d for sid, d in self._sectors.items() if sid in selected]


def taxonomy_from_dict(data: dict) -> Taxonomy:
    """Build a Taxonomy from the parsed JSON config structure."""
    try:
        parsed = _TaxonomyFile.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid sector taxonomy: {e}") from e

    definitions = [
        SectorDefinition(id=sector_id, label=entry.label or sector_id, keywords=tuple(entry.keywords))
        for sector_id, entry in parsed.sectors.items()
    ]
    return Taxonomy(definitions, version=parsed.version)


def load_taxonomy(path: Path | str | None = None) -> Taxonomy:
    """Load the sector taxonomy config (defaults to Settings.taxonomy_path)."""
    if path is None:
        from sector_rerank.config import get_settings
        path = get_settings().taxonomy_path

    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError as e:
        raise ConfigurationError(f"Sector taxonomy not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Sector taxonomy is not valid JSON ({path}): {e}") from e

    taxonomy = taxonomy_from_dict(data)
    logger.debug("Loaded taxonomy %s with %d sectors from %s", taxonomy.version, len(taxonomy), path)
    return taxonomy
