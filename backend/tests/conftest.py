"""
Pytest fixtures for gqlfetch tests. HTTP is served by httpx.MockTransport,
so no GraphQL server is needed.
"""

from __future__ import annotations

import sys
from pathlib import Path

import httpx
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from gqlfetch.config import Settings
from gqlfetch.services.graphql import GraphQLConfig


class RecordingTransport(httpx.MockTransport):
    """MockTransport that replays queued outcomes and records requests."""

    def __init__(self, outcomes: list[httpx.Response | Exception]):
        self.outcomes = list(outcomes)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )


@pytest.fixture
def make_transport():
    def _make(*outcomes: httpx.Response | Exception) -> RecordingTransport:
        return RecordingTransport(list(outcomes))

    return _make


@pytest.fixture
def fast_config() -> GraphQLConfig:
    """Client config that retries without sleeping."""
    return GraphQLConfig(max_retries=3, backoff_factor=0.0)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    """Default settings with no YAML file and no inherited env overrides."""
    for key in ("GRAPHQL__ENDPOINT_URL", "REQUEST__QUERY", "LOGFIRE_TOKEN"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(config_path=tmp_path / "missing.yaml")
    settings.graphql.backoff_factor = 0.0
    return settings
