"""
Trending topic resolution with a primary/fallback acquisition chain.

Items are acquired by trying an ordered list of strategies until one
succeeds:
1. trending: the feed's pre-aggregated trending endpoint
2. items: the generic ranked item listing over the same window

Whichever strategy succeeds, its items are aggregated locally into topics.
Callers only see the final topic list; if every strategy fails a single
TrendingUnavailable is raised.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
import logging
from typing import Any

from .config import TopicsConfig, TrendingConfig
from .core.topics import derive_topics
from .core.types import Item, TrendingResult
from .errors import TrendingUnavailable, UpstreamUnavailable
from .feed.client import FeedClient
from .logging_utils import get_logger, log_event

logger = get_logger(__name__)

Strategy = tuple[str, Callable[[], Awaitable[list[Item]]]]


def fetch_limit(limit: int, cfg: TrendingConfig | None = None) -> int:
    """Number of raw items to request for ``limit`` topics.

    Examples:
        >>> fetch_limit(1)
        50
        >>> fetch_limit(20)
        200
        >>> fetch_limit(100)
        300
    """
    cfg = cfg or TrendingConfig()
    return max(cfg.fetch_min, min(limit * cfg.fetch_multiplier, cfg.fetch_max))


def items_from_payload(payload: Any) -> list[Item]:
    """Parse the ``items`` array of a feed payload; anything else is empty."""
    raw = payload.get("items") if isinstance(payload, dict) else None
    if not isinstance(raw, list):
        return []
    return [Item.from_dict(entry) for entry in raw if isinstance(entry, dict)]


def build_strategies(
    client: FeedClient,
    hours: int,
    size: int,
    region: str | None = None,
    category: str | None = None,
) -> list[Strategy]:
    """Build the ordered acquisition strategies for one trending query."""

    async def from_trending() -> list[Item]:
        payload = await client.trending(hours=hours, limit=size, region=region, category=category)
        return items_from_payload(payload)

    async def from_ranked_items() -> list[Item]:
        payload = await client.ranked_items(
            since_hours=hours, limit=size, region=region, category=category
        )
        return items_from_payload(payload)

    return [("trending", from_trending), ("items", from_ranked_items)]


async def first_successful(strategies: list[Strategy]) -> list[Item]:
    """Run strategies in order and return the items of the first that succeeds.

    Raises:
        TrendingUnavailable: If every strategy raised UpstreamUnavailable
    """
    errors: dict[str, UpstreamUnavailable] = {}
    for name, strategy in strategies:
        try:
            items = await strategy()
        except UpstreamUnavailable as exc:
            errors[name] = exc
            log_event(
                logger,
                f"Trending strategy '{name}' failed",
                level=logging.WARNING,
                event="trending_strategy_failed",
                strategy=name,
                error=str(exc),
                status_code=exc.status_code,
            )
            continue
        log_event(
            logger,
            f"Trending items acquired via '{name}'",
            level=logging.DEBUG,
            event="trending_strategy_succeeded",
            strategy=name,
            items=len(items),
        )
        return items
    raise TrendingUnavailable(errors)


async def resolve_trending_topics(
    client: FeedClient,
    hours: int | None = None,
    limit: int | None = None,
    region: str | None = None,
    category: str | None = None,
    *,
    trending_cfg: TrendingConfig | None = None,
    topics_cfg: TopicsConfig | None = None,
) -> TrendingResult:
    """Resolve trending topics for a recent window.

    Requests an enlarged batch of items (see ``fetch_limit``) so that
    aggregation has enough material, then derives at most ``limit`` topics.

    Args:
        client: Feed client used for both acquisition strategies
        hours: Trending window in hours
        limit: Maximum number of topics to return
        region: Optional region filter passed through to the feed
        category: Optional category filter passed through to the feed
        trending_cfg: Window defaults and retrieval sizing
        topics_cfg: Term extraction and topic thresholds

    Returns:
        TrendingResult with the window and ranked topics

    Raises:
        TrendingUnavailable: If both the trending endpoint and the item
            listing fail
    """
    trending_cfg = trending_cfg or TrendingConfig()
    topics_cfg = topics_cfg or TopicsConfig()
    hours = hours or trending_cfg.default_hours
    limit = limit or trending_cfg.default_limit
    size = fetch_limit(limit, trending_cfg)

    strategies = build_strategies(client, hours, size, region=region, category=category)
    items = await first_successful(strategies)

    topics = derive_topics(
        items,
        limit,
        stopwords=topics_cfg.stopwords(),
        min_mentions=topics_cfg.min_mentions,
        max_articles=topics_cfg.max_top_articles,
        min_token_length=topics_cfg.min_token_length,
        min_unigram_length=topics_cfg.min_unigram_length,
    )
    log_event(
        logger,
        "Trending topics resolved",
        event="trending_resolved",
        hours=hours,
        fetched=len(items),
        topics=len(topics),
    )
    return TrendingResult(hours=hours, topics=topics)
