"""
Digest Trends - trending topics and article extraction for a news digest feed.

This package pulls short news items from a digest feed, clusters them by
shared keywords and phrases into ranked trending topics, and extracts
readable text and metadata from arbitrary article URLs.

Main entry point is the CLI via `digest-trends` command.

Example:
    $ digest-trends trending --hours 24 --limit 10
"""

__all__ = [
    "__version__",
    "derive_topics",
    "extract_terms",
    "extract_document",
    "resolve_trending_topics",
]
__version__ = "0.1.0"

from .core.terms import extract_terms
from .core.topics import derive_topics
from .extract.extractor import extract_document
from .trending import resolve_trending_topics
