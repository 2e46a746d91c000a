"""Pytest fixtures for the short drama gateway tests."""

import random

import httpx
import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_admin_config_store, get_fallback_handler, get_shortdrama_client
from src.api.main import app
from src.database.redis import AdminConfigStore
from src.fallback_handler import FallbackHandler
from src.integrations.clients.real_http.shortdrama import ShortDramaClient
from src.utils.config_loader import UpstreamConfig


class RecordingUpstream:
    """httpx.MockTransport handler that records every request it receives."""

    def __init__(self, handler=None):
        self.requests = []
        self.handler = handler or (lambda request: httpx.Response(503, json={"error": "down"}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def upstream_config():
    return UpstreamConfig(
        base_url="https://upstream.test/",
        headers={"X-Client": "gateway-tests"},
        timeout_seconds=5.0,
        path_timeouts={"/vod/parse/all": 60.0},
    )


@pytest.fixture
def upstream():
    """Upstream that answers 503 until a test installs its own handler."""
    return RecordingUpstream()


@pytest.fixture
def shortdrama_client(upstream, upstream_config):
    return ShortDramaClient(upstream_config, transport=httpx.MockTransport(upstream))


@pytest.fixture
def admin_store():
    return AdminConfigStore()


@pytest.fixture
def client(shortdrama_client, admin_store):
    app.dependency_overrides[get_shortdrama_client] = lambda: shortdrama_client
    app.dependency_overrides[get_fallback_handler] = lambda: FallbackHandler(rng=random.Random(1234))
    app.dependency_overrides[get_admin_config_store] = lambda: admin_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
