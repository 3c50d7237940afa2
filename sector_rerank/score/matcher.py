"""Topic-to-sector matching."""
from __future__ import annotations

from collections.abc import Iterable, Sequence

from sector_rerank.models import Article


def matches(article: Article, sector_keywords: Sequence[str]) -> bool:
    """Return True if any article topic matches any sector keyword.

    Case-insensitive, bidirectional substring containment: topic
    "Renewable Energy Policy" matches keyword "Energy", and topic "oil"
    matches keyword "oil and gas". Short keywords over-match (e.g. "tech"
    inside "biotechnology"); that breadth is kept as-is.
    """
    if not sector_keywords:
        raise ValueError("sector_keywords must be non-empty")

    keywords = [kw.lower() for kw in sector_keywords]
    for topic in article.topics:
        topic_lower = topic.lower()
        for kw in keywords:
            if kw in topic_lower or topic_lower in kw:
                return True
    return False


def filter_by_sector(articles: Iterable[Article], sector_keywords: Sequence[str]) -> list[Article]:
    """Keep matching articles, preserving input order."""
    return [a for a in articles if matches(a, sector_keywords)]
