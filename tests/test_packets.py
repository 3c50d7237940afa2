"""Tests for whole-universe recomputation and the ranking packet."""
from __future__ import annotations

import pytest

from sector_rerank.errors import ConfigurationError
from sector_rerank.models import Article, Entity, ScoreStatus, SectorDefinition, SentimentLabel
from sector_rerank.packets.ranking_packets import recompute_rankings
from sector_rerank.score.taxonomy import Taxonomy
from sector_rerank.score.versions import RERANK_CALC_VERSION


@pytest.fixture
def taxonomy() -> Taxonomy:
    return Taxonomy(
        [
            SectorDefinition(id="energy", label="Energy", keywords=("energy", "solar")),
            SectorDefinition(id="tourism", label="Tourism", keywords=("tourism",)),
        ],
        version="test_v1",
    )


@pytest.fixture
def universe() -> tuple[list[Entity], dict[str, list[Article]]]:
    entities = [
        Entity(id="KE", name="Kenya", baseline_score=60.0),
        Entity(id="GH", name="Ghana", baseline_score=58.0),
        Entity(id="NA", name="Namibia", baseline_score=None),
    ]
    articles = {
        "KE": [
            Article(id="k1", topics=("Tourism",), sentiment_label=SentimentLabel.NEGATIVE, sentiment_score=20.0),
        ],
        "GH": [
            Article(id="g1", topics=("Solar",), sentiment_label=SentimentLabel.POSITIVE, sentiment_score=90.0),
            Article(id="g2", topics=("Energy",), sentiment_label=SentimentLabel.POSITIVE, sentiment_score=85.0),
            Article(id="g3", topics=("Energy",), sentiment_label=SentimentLabel.POSITIVE, sentiment_score=95.0),
        ],
    }
    return entities, articles


def test_empty_selection_ranks_by_baseline(universe, taxonomy):
    entities, articles = universe
    packet = recompute_rankings(entities, articles, [], taxonomy)

    assert [r.entity.id for r in packet.rows] == ["KE", "GH", "NA"]
    assert all(r.rank_change == 0 for r in packet.rows)
    assert all(r.result.status is ScoreStatus.UNFILTERED for r in packet.rows)
    assert packet.selection == ()


def test_energy_selection_reorders(universe, taxonomy):
    entities, articles = universe
    logs: list[str] = []
    packet = recompute_rankings(entities, articles, {"energy"}, taxonomy, logs.append)

    # GH: volume 30, sentiment 90 -> 60; adjusted 0.5*58 + 0.5*60 = 59
    # KE and NA have no energy coverage and keep baseline / midpoint
    by_id = {r.entity.id: r for r in packet.rows}
    assert by_id["GH"].result.adjusted_score == pytest.approx(59.0)
    assert by_id["KE"].result.adjusted_score == 60.0
    assert by_id["NA"].result.adjusted_score == 50.0
    assert [r.entity.id for r in packet.rows] == ["KE", "GH", "NA"]

    assert packet.calc_version == RERANK_CALC_VERSION
    assert packet.taxonomy_version == "test_v1"
    assert packet.selection == ("energy",)
    assert packet.rank_total == 3
    assert logs[0].startswith("Recomputing 3 entities")
    assert any("GH: adjusted=59.0" in line for line in logs)


def test_entity_without_articles(universe, taxonomy):
    entities, articles = universe
    packet = recompute_rankings(entities, articles, {"tourism"}, taxonomy)
    na = next(r for r in packet.rows if r.entity.id == "NA")
    assert na.result.status is ScoreStatus.INSUFFICIENT_SECTOR_DATA
    assert na.result.baseline_defaulted is True


def test_unknown_sector_fails_whole_recompute(universe, taxonomy):
    entities, articles = universe
    with pytest.raises(ConfigurationError):
        recompute_rankings(entities, articles, {"mining"}, taxonomy)


def test_packet_to_dict(universe, taxonomy):
    entities, articles = universe
    data = recompute_rankings(entities, articles, {"energy"}, taxonomy).to_dict()

    assert data["rank_total"] == 3
    assert data["selection"] == ["energy"]
    first = data["rankings"][0]
    assert first["rank"] == 1
    assert first["id"] == "KE"
    assert first["name"] == "Kenya"
    assert first["status"] == "insufficient_sector_data"
    assert "entity_id" not in first
