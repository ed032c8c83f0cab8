"""
Trending topic aggregation.

Items are grouped by every term their title yields, groups below a minimum
number of distinct items are dropped as incidental word overlap, and the rest
are ranked by volume first and peak relevance second.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .terms import DEFAULT_STOPWORDS, extract_terms
from .types import ArticleSummary, Item, Topic


def derive_topics(
    items: Sequence[Item],
    top_n: int = 10,
    *,
    stopwords: Iterable[str] = DEFAULT_STOPWORDS,
    min_mentions: int = 3,
    max_articles: int = 5,
    min_token_length: int = 3,
    min_unigram_length: int = 5,
) -> list[Topic]:
    """Derive ranked trending topics from a batch of items.

    Each item contributes at most once to a term, even when the term shows up
    twice in its title. Ranking is mention count descending, then the score
    of each topic's best article descending; remaining ties keep the order in
    which terms were first seen.

    Args:
        items: Items to aggregate, in feed order
        top_n: Maximum number of topics to return; zero or less returns none
        stopwords: Words excluded from term extraction
        min_mentions: Minimum number of distinct items for a topic to survive
        max_articles: Number of top articles kept per topic

    Returns:
        At most ``top_n`` topics
    """
    if top_n <= 0:
        return []

    stop = frozenset(stopwords)
    by_term: dict[str, list[Item]] = {}
    for item in items:
        terms = extract_terms(item.title, stop, min_token_length, min_unigram_length)
        for term in dict.fromkeys(terms):
            by_term.setdefault(term, []).append(item)

    topics = [
        _build_topic(term, grouped, max_articles)
        for term, grouped in by_term.items()
        if len(grouped) >= min_mentions
    ]
    topics.sort(key=lambda topic: (topic.mention_count, topic.top_score), reverse=True)
    return topics[:top_n]


def _build_topic(term: str, grouped: list[Item], max_articles: int) -> Topic:
    # sorted() with reverse=True is still stable for equal scores
    ranked = sorted(grouped, key=lambda item: item.score, reverse=True)
    return Topic(
        topic=term,
        mention_count=len(grouped),
        top_articles=[ArticleSummary.from_item(item) for item in ranked[:max_articles]],
    )
