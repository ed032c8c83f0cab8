"""
Core data types for Digest Trends.

This module defines the structures passed between the feed client, the topic
aggregator and the extraction cascade:
- Item: One news item as delivered by the digest feed
- ArticleSummary: Read-only projection of an Item inside a topic
- Topic: A ranked cluster of items sharing a term
- TrendingResult: The envelope returned for a trending query
- ExtractedDocument: Title, text and metadata pulled out of one HTML page
"""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any


Score = int | float


@dataclass(frozen=True)
class Item:
    """A news item from the digest feed.

    Attributes:
        title: The item headline, empty string if the feed omitted it
        url: Link to the original article
        source: Source identifier (feed's `source_id`, else `source`)
        published_at: Optional ISO 8601 timestamp as delivered by the feed
        score: Relevance score, 0 when absent or not numeric
        id: Optional identifier assigned by the feed
    """
    title: str = ""
    url: str | None = None
    source: str | None = None
    published_at: str | None = None
    score: Score = 0
    id: Any = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Item:
        return cls(
            title=str(data.get("title") or ""),
            url=data.get("url"),
            source=data.get("source_id") or data.get("source"),
            published_at=data.get("published_at"),
            score=_coerce_score(data.get("score")),
            id=data.get("id"),
        )


@dataclass(frozen=True)
class ArticleSummary:
    title: str
    url: str | None
    source: str | None
    published_at: str | None
    score: Score

    @classmethod
    def from_item(cls, item: Item) -> ArticleSummary:
        return cls(
            title=item.title,
            url=item.url,
            source=item.source,
            published_at=item.published_at,
            score=item.score,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "source": self.source,
            "published_at": self.published_at,
            "score": self.score,
        }


@dataclass
class Topic:
    """A trending topic derived from a batch of items.

    Attributes:
        topic: The shared term (single word or two-word phrase)
        mention_count: Number of distinct items whose title yields the term
        top_articles: Highest-scoring contributing items, at most five
    """
    topic: str
    mention_count: int
    top_articles: list[ArticleSummary] = field(default_factory=list)

    @property
    def top_score(self) -> Score:
        return self.top_articles[0].score if self.top_articles else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "mention_count": self.mention_count,
            "top_articles": [article.to_dict() for article in self.top_articles],
        }


@dataclass
class TrendingResult:
    hours: int
    topics: list[Topic] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.topics)

    def to_dict(self) -> dict[str, Any]:
        return {
            "hours": self.hours,
            "count": self.count,
            "topics": [topic.to_dict() for topic in self.topics],
        }


@dataclass
class ExtractedDocument:
    """Structured content extracted from one HTML payload.

    published_at is None rather than an empty string when no date was found,
    so callers can tell "unknown" apart from "empty".
    """
    title: str = ""
    content: str = ""
    source: str = ""
    published_at: str | None = None
    word_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "source": self.source,
            "published_at": self.published_at,
            "word_count": self.word_count,
        }


def _coerce_score(value: Any) -> Score:
    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0
    return score if math.isfinite(score) else 0
