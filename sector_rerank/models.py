from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints


# Blank keywords would match every topic
Keyword = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class SentimentLabel(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Trend(str, Enum):
    UPWARD = "upward"
    DOWNWARD = "downward"
    STABLE = "stable"


class ScoreStatus(str, Enum):
    UNFILTERED = "unfiltered"  # empty selection, baseline passed through
    INSUFFICIENT_SECTOR_DATA = "insufficient_sector_data"  # no sector matched
    ADJUSTED = "adjusted"


class Entity(BaseModel):
    """A ranked subject (a country)."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    baseline_score: float | None = None


class Article(BaseModel):
    """A news article tagged with topics and sentiment.

    sentiment_score is on a 0-100 scale; None or <= 0 means unscored.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    topics: tuple[str, ...] = ()
    sentiment_label: SentimentLabel = SentimentLabel.NEUTRAL
    sentiment_score: float | None = None
    published_at: datetime | None = None
    entity_id: str | None = None
    title: str = ""

    @property
    def is_scored(self) -> bool:
        return self.sentiment_score is not None and self.sentiment_score > 0


class SectorDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str = ""
    keywords: tuple[Keyword, ...] = Field(min_length=1)


@dataclass(frozen=True)
class SentimentMix:
    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.neutral + self.negative

    def to_dict(self) -> dict:
        return {
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
        }


@dataclass(frozen=True)
class ScoringResult:
    """Per-entity output of one recomputation."""
    entity_id: str
    adjusted_score: float
    matched_article_count: int
    sentiment_mix: SentimentMix
    trend: Trend
    status: ScoreStatus
    baseline_defaulted: bool = False
    aggregate_sector_score: float | None = None
    sector_scores: dict[str, float | None] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "entity_id": self.entity_id,
            "adjusted_score": self.adjusted_score,
            "matched_article_count": self.matched_article_count,
            "sentiment_mix": self.sentiment_mix.to_dict(),
            "trend": self.trend.value,
            "status": self.status.value,
            "baseline_defaulted": self.baseline_defaulted,
            "aggregate_sector_score": self.aggregate_sector_score,
            "sector_scores": dict(self.sector_scores),
        }


@dataclass(frozen=True)
class SectorSentiment:
    """Sentiment distribution for one sector, in whole percentages."""
    sector_id: str
    label: str
    positive: int
    neutral: int
    negative: int
    article_count: int


@dataclass(frozen=True)
class RankedEntity:
    entity: Entity
    result: ScoringResult
    rank: int  # 1 = best
    baseline_rank: int
    rank_change: int  # positive = moved up versus baseline order
