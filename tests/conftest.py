from __future__ import annotations

import httpx
import pytest

from digest_trends.config import FeedConfig
from digest_trends.feed.client import FeedClient


@pytest.fixture(autouse=True)
def _no_feed_url_override(monkeypatch):
    monkeypatch.delenv("CLAWDIGEST_URL", raising=False)


@pytest.fixture
def make_client():
    """Build a FeedClient whose requests are answered by ``handler``."""

    def _make(handler) -> FeedClient:
        cfg = FeedConfig(base_url="https://feed.test/", trust_env=False)
        return FeedClient(cfg, transport=httpx.MockTransport(handler))

    return _make
