"""Tests for the local snapshot loader."""
from __future__ import annotations

import json

import pytest

from sector_rerank.ingest.snapshot import SnapshotError, load_snapshot, parse_snapshot
from sector_rerank.models import SentimentLabel


def _snapshot_data() -> dict:
    return {
        "entities": [
            {"id": "KE", "name": "Kenya", "baseline_score": 61.5},
            {"id": "GH", "name": "Ghana"},
        ],
        "articles": [
            {"id": "a1", "entity_id": "KE", "topics": ["Energy"], "sentiment_label": "positive",
             "sentiment_score": 80, "published_at": "2026-10-01T08:00:00Z"},
            {"id": "a2", "entity_id": "GH", "topics": [], "sentiment_label": "negative"},
            {"id": "a3", "entity_id": "KE", "topics": ["Solar"], "sentiment_label": "neutral"},
            {"id": "a4", "entity_id": "ZZ", "topics": ["Energy"]},
            {"id": "a5", "topics": ["Energy"]},
        ],
    }


def test_groups_articles_by_entity_in_file_order():
    snap = parse_snapshot(_snapshot_data())

    assert [e.id for e in snap.entities] == ["KE", "GH"]
    assert [a.id for a in snap.articles_by_entity["KE"]] == ["a1", "a3"]
    assert [a.id for a in snap.articles_by_entity["GH"]] == ["a2"]
    assert snap.orphaned_articles == 2


def test_parses_fields():
    snap = parse_snapshot(_snapshot_data())
    article = snap.articles_by_entity["KE"][0]

    assert article.topics == ("Energy",)
    assert article.sentiment_label is SentimentLabel.POSITIVE
    assert article.sentiment_score == 80.0
    assert article.published_at is not None
    assert snap.entities[1].baseline_score is None


def test_entity_with_no_articles_has_empty_pool():
    data = _snapshot_data()
    data["entities"].append({"id": "NA", "name": "Namibia"})
    snap = parse_snapshot(data)
    assert snap.articles_by_entity["NA"] == ()


def test_invalid_label_rejected():
    data = _snapshot_data()
    data["articles"][0]["sentiment_label"] = "ecstatic"
    with pytest.raises(SnapshotError):
        parse_snapshot(data)


def test_missing_entities_rejected():
    with pytest.raises(SnapshotError):
        parse_snapshot({"articles": []})


def test_load_from_file(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps(_snapshot_data()))
    snap = load_snapshot(path)
    assert len(snap.entities) == 2


def test_load_missing_file(tmp_path):
    with pytest.raises(SnapshotError, match="not found"):
        load_snapshot(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[")
    with pytest.raises(SnapshotError, match="not valid JSON"):
        load_snapshot(path)


def test_duplicate_entity_ids_rejected():
    data = _snapshot_data()
    data["entities"].append({"id": "KE", "name": "Kenya (again)", "baseline_score": 40.0})
    with pytest.raises(SnapshotError, match="Duplicate entity id"):
        parse_snapshot(data)
