"""
Article content extraction.

This package turns fetched HTML into an ExtractedDocument using a
structured reader pass followed by metadata and selector fallbacks.
"""

from .extractor import ReaderResult, count_words, extract_document, parse_article

__all__ = ["ReaderResult", "count_words", "extract_document", "parse_article"]
