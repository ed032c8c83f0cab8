"""Source catalog helpers."""

from __future__ import annotations

from typing import Any


DEFAULT_REGION = "us"


def filter_sources(data: Any, region: str | None) -> Any:
    """Keep only catalog sources whose region contains ``region``.

    Matching is a case-insensitive substring test. Sources without a region
    belong to the default region. The payload's ``count`` is rewritten to the
    filtered length; without a region the payload is returned unchanged.
    """
    if not region or not isinstance(data, dict):
        return data
    wanted = str(region).lower()
    sources = data.get("sources") or []
    kept = [source for source in sources if wanted in _region(source)]
    return {**data, "sources": kept, "count": len(kept)}


def _region(source: Any) -> str:
    region = source.get("region") if isinstance(source, dict) else None
    return str(region or DEFAULT_REGION).lower()

