"""
Digest feed access.

This package wraps the digest feed JSON API and raw article fetching.
"""

from .catalog import filter_sources
from .client import FeedClient

__all__ = ["FeedClient", "filter_sources"]
