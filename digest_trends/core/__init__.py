"""
Core domain models and topic derivation.

This package contains data types and the term extraction and aggregation
logic, independent of how items are fetched.
"""

from .types import ArticleSummary, ExtractedDocument, Item, Topic, TrendingResult
from .terms import DEFAULT_STOPWORDS, decode_entities, extract_terms
from .topics import derive_topics

__all__ = [
    "Item",
    "ArticleSummary",
    "Topic",
    "TrendingResult",
    "ExtractedDocument",
    "DEFAULT_STOPWORDS",
    "decode_entities",
    "extract_terms",
    "derive_topics",
]
