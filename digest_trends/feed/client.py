"""
HTTP client for the digest feed and for raw article pages.

All requests go through httpx.AsyncClient, one client per call. Feed queries
return parsed JSON; any failure (transport error, non-success status,
undecodable body) is raised as UpstreamUnavailable. Article fetches return the
response text and raise ArticleFetchError on failure.
"""

from __future__ import annotations

from typing import Any

import httpx

from ..config import FeedConfig, get_feed_url
from ..errors import ArticleFetchError, UpstreamUnavailable
from ..logging_utils import get_logger
from .catalog import filter_sources

logger = get_logger(__name__)

JSON_ACCEPT = "application/json"
HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class FeedClient:
    """Client for the digest feed JSON API.

    Attributes:
        cfg: Feed endpoint and HTTP settings
        base_url: Resolved base URL (environment override applied)
    """

    def __init__(self, cfg: FeedConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self.base_url = get_feed_url(cfg)
        self._transport = transport

    def _client(self, accept: str, follow_redirects: bool = False) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.cfg.timeout_seconds,
            headers={"User-Agent": self.cfg.user_agent, "Accept": accept},
            follow_redirects=follow_redirects,
            trust_env=self.cfg.trust_env,
            transport=self._transport,
        )

    async def get_json(self, path: str, query: dict[str, Any] | None = None) -> Any:
        """Query a feed endpoint and return its decoded JSON body.

        Args:
            path: Endpoint path such as "/api/items"
            query: Query parameters; None and empty-string values are dropped

        Raises:
            UpstreamUnavailable: On transport failure, non-success status or
                a body that is not valid JSON
        """
        params = _clean_query(query or {})
        url = f"{self.base_url}{path}"
        try:
            async with self._client(JSON_ACCEPT) as client:
                resp = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable(f"{type(exc).__name__}: {exc}", url=url) from exc

        if not resp.is_success:
            raise UpstreamUnavailable(
                f"API {resp.status_code} for {resp.url}", url=str(resp.url), status_code=resp.status_code
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamUnavailable(
                f"Invalid JSON from {resp.url}: {exc}", url=str(resp.url), status_code=resp.status_code
            ) from exc

    async def latest(
        self,
        source: str | None = None,
        category: str | None = None,
        region: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        sort: str | None = None,
        from_: str | None = None,
        to: str | None = None,
    ) -> Any:
        """List latest or top items with filters."""
        return await self.get_json(
            "/api/items",
            {
                "source": source,
                "category": category,
                "region": region,
                "limit": limit,
                "offset": offset,
                "sort": sort,
                "from": from_,
                "to": to,
            },
        )

    async def search(self, q: str, limit: int | None = None) -> Any:
        return await self.get_json("/api/search", {"q": q, "limit": limit})

    async def trending(
        self,
        hours: int,
        limit: int,
        region: str | None = None,
        category: str | None = None,
    ) -> Any:
        """Query the pre-aggregated trending endpoint."""
        return await self.get_json(
            "/api/trending",
            {"hours": hours, "limit": limit, "region": region, "category": category},
        )

    async def ranked_items(
        self,
        since_hours: int,
        limit: int,
        region: str | None = None,
        category: str | None = None,
    ) -> Any:
        """List items ranked by score within a recent window."""
        return await self.get_json(
            "/api/items",
            {
                "region": region,
                "category": category,
                "limit": limit,
                "sort": "score",
                "sinceHours": since_hours,
            },
        )

    async def sources(self, region: str | None = None) -> Any:
        data = await self.get_json("/api/sources")
        return filter_sources(data, region)

    async def fetch_text(self, url: str) -> str:
        """Fetch the textual payload of an arbitrary URL, following redirects.

        Raises:
            ArticleFetchError: On transport failure or non-success status
        """
        try:
            async with self._client(HTML_ACCEPT, follow_redirects=True) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise ArticleFetchError(f"{type(exc).__name__}: {exc}", url=url) from exc

        if not resp.is_success:
            raise ArticleFetchError(
                f"Fetch {resp.status_code} for {url}", url=url, status_code=resp.status_code
            )
        logger.debug("Fetched %s (%d bytes)", url, len(resp.content))
        return resp.text


def _clean_query(query: dict[str, Any]) -> dict[str, str]:
    return {key: str(value) for key, value in query.items() if value is not None and value != ""}
