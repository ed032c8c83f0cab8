"""Exception types raised by feed queries and article fetching."""

from __future__ import annotations


class DigestError(Exception):
    """Base class for all errors surfaced to callers."""


class UpstreamUnavailable(DigestError):
    """A feed query failed (transport error, non-success status or bad JSON)."""

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TrendingUnavailable(DigestError):
    """Every trending acquisition strategy failed.

    Attributes:
        errors: Mapping of strategy name to the error it raised, in the
            order the strategies were attempted
    """

    def __init__(self, errors: dict[str, UpstreamUnavailable]):
        detail = "; ".join(f"{name}: {exc}" for name, exc in errors.items())
        super().__init__(f"Trending topics unavailable ({detail})")
        self.errors = errors


class ArticleFetchError(DigestError):
    """Fetching the raw HTML of an article failed."""

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
