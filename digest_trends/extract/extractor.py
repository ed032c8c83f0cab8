"""
Article extraction with per-field fallback chains.

A structured reader pass runs first:
1. trafilatura: bare extraction with title, site name and main text (default)
2. readability: Mozilla's readability algorithm via readability-lxml
3. none: skip the reader and rely on page metadata only

Each output field then walks its own ordered list of candidates and keeps the
first non-empty value. A reader that raises is logged and treated as having
found nothing, so the metadata and selector fallbacks still run.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup
import trafilatura
from readability import Document

from ..core.types import ExtractedDocument
from ..feed.client import FeedClient
from ..logging_utils import get_logger, log_event

logger = get_logger(__name__)

Candidate = Callable[[], str | None]

_WHITESPACE_RE = re.compile(r"\s+")
_CONTENT_TAGS = ("article", "main", "body")
_NON_CONTENT_TAGS = ["script", "style", "noscript"]


@dataclass
class ReaderResult:
    """What a structured reader found; any field may be missing."""

    title: str | None = None
    text: str | None = None
    site_name: str | None = None


def extract_document(html: str, url: str, reader: str = "trafilatura") -> ExtractedDocument:
    """Extract title, content, source and publish date from an HTML page.

    Args:
        html: The fetched HTML payload
        url: The URL the payload was fetched from, used for the source fallback
        reader: Name of the structured reader to try first

    Returns:
        ExtractedDocument; fields that no strategy could fill are empty, and
        published_at is None when no date was found

    Examples:
        >>> doc = extract_document(html, "https://www.example.com/story")
        >>> doc.source
        'example.com'
    """
    parsed = _run_reader(reader, html, url)
    soup = BeautifulSoup(html or "", "html.parser")

    title = _first_present(
        [
            lambda: parsed.title,
            lambda: _meta(soup, property="og:title"),
            lambda: _meta(soup, name="twitter:title"),
            lambda: soup.title.get_text().strip() if soup.title else None,
        ]
    )
    source = _first_present(
        [
            lambda: parsed.site_name,
            lambda: _meta(soup, property="og:site_name"),
            lambda: _hostname(url),
        ]
    )
    published_at = _first_present(
        [
            lambda: _meta(soup, property="article:published_time"),
            lambda: _meta(soup, name="pubdate"),
            lambda: _meta(soup, name="date"),
            lambda: _time_datetime(soup),
        ]
    )
    # Runs last: the selector fallback strips non-content tags from the tree
    content = _first_present(
        [
            lambda: (parsed.text or "").strip(),
            lambda: _selector_text(soup),
        ]
    )

    return ExtractedDocument(
        title=title or "",
        content=content or "",
        source=source or "",
        published_at=published_at,
        word_count=count_words(content or ""),
    )


async def parse_article(client: FeedClient, url: str, reader: str = "trafilatura") -> ExtractedDocument:
    """Fetch an article URL and extract readable text and metadata.

    Raises:
        ArticleFetchError: If the page could not be fetched
    """
    html = await client.fetch_text(url)
    document = extract_document(html, url, reader)
    log_event(
        logger,
        "Article extracted",
        event="article_extracted",
        url=url,
        word_count=document.word_count,
        has_date=document.published_at is not None,
    )
    return document


def count_words(content: str) -> int:
    return len(content.split())


def _first_present(candidates: list[Candidate]) -> str | None:
    """Return the first non-empty candidate value, as found."""
    for candidate in candidates:
        value = candidate()
        if value:
            return value
    return None


def _run_reader(name: str, html: str, url: str) -> ReaderResult:
    reader = _get_reader(name)
    if reader is None:
        return ReaderResult()
    try:
        return reader(html, url)
    except Exception as exc:  # noqa: BLE001
        log_event(
            logger,
            f"Reader '{name}' failed, using metadata fallbacks",
            level=logging.DEBUG,
            event="reader_failed",
            reader=name,
            url=url,
            error=f"{type(exc).__name__}: {exc}",
        )
        return ReaderResult()


def _get_reader(name: str) -> Callable[[str, str], ReaderResult] | None:
    """Get the reader function for a given name, or None to skip the pass."""
    if name == "trafilatura":
        return _read_trafilatura
    if name == "readability":
        return _read_readability
    return None


def _read_trafilatura(html: str, url: str) -> ReaderResult:
    result = trafilatura.bare_extraction(html, url=url, with_metadata=True)
    if result is None:
        return ReaderResult()
    data = result if isinstance(result, dict) else result.as_dict()
    return ReaderResult(
        title=data.get("title"),
        text=data.get("text"),
        site_name=data.get("sitename"),
    )


def _read_readability(html: str, url: str) -> ReaderResult:
    doc = Document(html, url=url)
    title = doc.short_title()
    # readability-lxml reports a missing title with a placeholder
    if title == "[no-title]":
        title = None
    text = BeautifulSoup(doc.summary(), "html.parser").get_text()
    return ReaderResult(title=title, text=_collapse(text))


def _meta(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    return tag.get("content")


def _time_datetime(soup: BeautifulSoup) -> str | None:
    tag = soup.find("time", attrs={"datetime": True})
    if tag is None:
        return None
    return tag.get("datetime")


def _hostname(url: str) -> str | None:
    try:
        host = urlparse(url).hostname
    except ValueError:
        return None
    if not host:
        return None
    return host[4:] if host.startswith("www.") else host


def _selector_text(soup: BeautifulSoup) -> str | None:
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    for name in _CONTENT_TAGS:
        elements = soup.find_all(name)
        # Fragments parsed without a <body> still have body text
        if not elements and name == "body":
            elements = [soup]
        text = _collapse("".join(element.get_text() for element in elements))
        if text:
            return text
    return None


def _collapse(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()
