"""
Command-line interface for Digest Trends.

Uses Typer to expose the trending, article, latest, search and sources
operations. Every command prints its JSON result to stdout; errors are
reported on stderr with a non-zero exit status. Supports loading .env files
for the feed URL override.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
import typer
from rich.console import Console

from .config import AppConfig, load_config
from .errors import DigestError
from .extract.extractor import parse_article
from .feed.client import FeedClient
from .logging_utils import setup_logging
from .trending import resolve_trending_topics

app = typer.Typer(add_completion=False, help="Trending topics and article extraction for a news digest feed.")
console = Console()
err_console = Console(stderr=True)

ConfigOption = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")


def _bootstrap(config: Path | None, log_level: str | None) -> AppConfig:
    load_dotenv()
    cfg = load_config(str(config) if config else None)
    if log_level:
        cfg.logging.level = log_level
    setup_logging(cfg.logging)
    return cfg


def _emit(coro: Any) -> None:
    try:
        data = asyncio.run(coro)
    except DigestError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    if hasattr(data, "to_dict"):
        data = data.to_dict()
    console.print_json(data=data)


@app.command()
def trending(
    hours: int | None = typer.Option(None, "--hours", min=1, max=168, help="Trending window in hours."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, max=100, help="Number of topics."),
    region: str | None = typer.Option(None, "--region"),
    category: str | None = typer.Option(None, "--category"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Show trending topics with mention counts and top articles."""
    cfg = _bootstrap(config, log_level)
    client = FeedClient(cfg.feed)
    _emit(
        resolve_trending_topics(
            client,
            hours=hours,
            limit=limit,
            region=region,
            category=category,
            trending_cfg=cfg.trending,
            topics_cfg=cfg.topics,
        )
    )


@app.command()
def article(
    url: str = typer.Argument(..., help="Article URL to fetch."),
    reader: str | None = typer.Option(
        None, "--reader", help="Structured reader: trafilatura, readability or none."
    ),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Fetch an article URL and extract readable text and metadata."""
    cfg = _bootstrap(config, log_level)
    if reader:
        cfg.extract.reader = reader
    _emit(parse_article(FeedClient(cfg.feed), url, cfg.extract.reader))


@app.command()
def latest(
    source: str | None = typer.Option(None, "--source"),
    category: str | None = typer.Option(None, "--category"),
    region: str | None = typer.Option(None, "--region"),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, max=100),
    offset: int | None = typer.Option(None, "--offset", min=0),
    sort: str | None = typer.Option(None, "--sort", help="score or date."),
    from_: str | None = typer.Option(None, "--from"),
    to: str | None = typer.Option(None, "--to"),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """List latest or top items with filters."""
    if sort is not None and sort not in ("score", "date"):
        raise typer.BadParameter("sort must be 'score' or 'date'", param_hint="--sort")
    cfg = _bootstrap(config, log_level)
    _emit(
        FeedClient(cfg.feed).latest(
            source=source,
            category=category,
            region=region,
            limit=limit,
            offset=offset,
            sort=sort,
            from_=from_,
            to=to,
        )
    )


@app.command()
def search(
    q: str = typer.Argument(..., help="Search query."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, max=100),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """Search items by query string."""
    cfg = _bootstrap(config, log_level)
    _emit(FeedClient(cfg.feed).search(q, limit=limit))


@app.command()
def sources(
    region: str | None = typer.Option(None, "--region", help="Region substring filter."),
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
):
    """List the source catalog."""
    cfg = _bootstrap(config, log_level)
    _emit(FeedClient(cfg.feed).sources(region))


if __name__ == "__main__":
    app()
