"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- FeedConfig: Digest feed endpoint and HTTP settings
- TrendingConfig: Trending window and retrieval sizing
- TopicsConfig: Term extraction and topic thresholds
- ExtractConfig: Article extraction settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml

from .core.terms import DEFAULT_STOPWORDS


@dataclass
class FeedConfig:
    """Configuration for the upstream digest feed.

    Attributes:
        base_url: Base URL of the digest service
        base_url_env: Environment variable that overrides base_url when set
        user_agent: HTTP User-Agent header string
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
    """

    base_url: str = "https://clawdigest.live"
    base_url_env: str = "CLAWDIGEST_URL"
    user_agent: str = "digest-trends/0.1 (+https://clawdigest.live)"
    timeout_seconds: float = 20.0
    trust_env: bool = True


@dataclass
class TrendingConfig:
    """Configuration for trending topic queries.

    The feed is asked for ``limit * fetch_multiplier`` items, clamped to
    ``[fetch_min, fetch_max]``, so aggregation has enough raw items to form
    clusters even when only a few topics are requested.

    Attributes:
        default_hours: Trending window used when the caller gives none
        default_limit: Number of topics returned when the caller gives none
        fetch_multiplier: Items requested per wanted topic
        fetch_min: Lower bound on items requested
        fetch_max: Upper bound on items requested
    """

    default_hours: int = 24
    default_limit: int = 20
    fetch_multiplier: int = 10
    fetch_min: int = 50
    fetch_max: int = 300


@dataclass
class TopicsConfig:
    """Configuration for term extraction and topic thresholds.

    Attributes:
        min_mentions: Minimum distinct items for a topic to be reported
        max_top_articles: Articles kept per topic
        min_token_length: Shortest token kept from a title
        min_unigram_length: Shortest token also used as a single-word term
        extra_stopwords: Words excluded in addition to the built-in list
    """

    min_mentions: int = 3
    max_top_articles: int = 5
    min_token_length: int = 3
    min_unigram_length: int = 5
    extra_stopwords: list[str] = field(default_factory=list)

    def stopwords(self) -> frozenset[str]:
        return DEFAULT_STOPWORDS | {word.lower() for word in self.extra_stopwords}


@dataclass
class ExtractConfig:
    """Configuration for article extraction.

    Attributes:
        reader: Structured reader tried before the metadata fallbacks
                ("trafilatura", "readability" or "none")
    """

    reader: str = "trafilatura"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Path of the log file
    """

    level: str = "WARNING"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "digest-trends.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    trending: TrendingConfig = field(default_factory=TrendingConfig)
    topics: TopicsConfig = field(default_factory=TopicsConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig, skipping unknown keys."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            # keys a section does not define are ignored
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "feed": {
            "base_url": cfg.feed.base_url,
            "base_url_env": cfg.feed.base_url_env,
            "user_agent": cfg.feed.user_agent,
            "timeout_seconds": cfg.feed.timeout_seconds,
            "trust_env": cfg.feed.trust_env,
        },
        "trending": {
            "default_hours": cfg.trending.default_hours,
            "default_limit": cfg.trending.default_limit,
            "fetch_multiplier": cfg.trending.fetch_multiplier,
            "fetch_min": cfg.trending.fetch_min,
            "fetch_max": cfg.trending.fetch_max,
        },
        "topics": {
            "min_mentions": cfg.topics.min_mentions,
            "max_top_articles": cfg.topics.max_top_articles,
            "min_token_length": cfg.topics.min_token_length,
            "min_unigram_length": cfg.topics.min_unigram_length,
            "extra_stopwords": list(cfg.topics.extra_stopwords),
        },
        "extract": {
            "reader": cfg.extract.reader,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        feed=FeedConfig(**data["feed"]),
        trending=TrendingConfig(**data["trending"]),
        topics=TopicsConfig(**data["topics"]),
        extract=ExtractConfig(**data["extract"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_feed_url(cfg: FeedConfig) -> str:
    """Get the feed base URL from the environment or config, without trailing slash."""
    url = os.getenv(cfg.base_url_env) or cfg.base_url
    return url.rstrip("/")
