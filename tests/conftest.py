"""
Shared pytest fixtures for ChatKit proxy tests.

This module provides common fixtures including:
- UpstreamStub: Fake ChatKit sessions API served through httpx.MockTransport
- Proxy configuration and SessionProxy instances wired to the stub
- FastAPI test client utilities
"""

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chatkit_proxy.config.provider import ProxyConfig, StaticConfigProvider
from chatkit_proxy.main import create_app
from chatkit_proxy.modules.session import SessionProxy
from chatkit_proxy.modules.upstream import ChatKitClient

TEST_API_KEY = "sk-test-123"
TEST_WORKFLOW_ID = "wf_default"


# =============================================================================
# Upstream Mocking Infrastructure
# =============================================================================

@dataclass
class UpstreamCall:
    """Record of a request made to the fake upstream."""
    method: str
    url: str
    headers: Dict[str, str]
    body: Any


@dataclass
class UpstreamStub:
    """
    Fake ChatKit sessions API.

    Usage:
        def test_something(upstream):
            upstream.respond(422, {"error": {"message": "bad request"}})
            ...
            assert upstream.call_count == 1
    """
    status_code: int = 200
    payload: Any = field(default_factory=lambda: {
        "client_secret": "ek_fresh",
        "expires_after": {"anchor": "created_at", "seconds": 600},
    })
    raw_body: Optional[bytes] = None
    error: Optional[Exception] = None
    calls: List[UpstreamCall] = field(default_factory=list)

    def respond(self, status_code: int, payload: Any = None, raw_body: Optional[bytes] = None) -> "UpstreamStub":
        self.status_code = status_code
        self.payload = payload
        self.raw_body = raw_body
        return self

    def fail_with(self, error: Exception) -> "UpstreamStub":
        self.error = error
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(UpstreamCall(
            method=request.method,
            url=str(request.url),
            headers=dict(request.headers),
            body=json.loads(request.content) if request.content else None,
        ))
        if self.error is not None:
            raise self.error
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> UpstreamCall:
        return self.calls[-1]


@pytest.fixture
def upstream():
    """Fake upstream returning a fresh client secret by default."""
    return UpstreamStub()


@pytest.fixture
def proxy_config():
    return ProxyConfig(
        api_key=TEST_API_KEY,
        api_base="https://chatkit.test",
        default_workflow_id=TEST_WORKFLOW_ID,
    )


@pytest.fixture
def session_proxy(proxy_config, upstream):
    """SessionProxy wired to the fake upstream with deterministic visitor ids."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    client = ChatKitClient(proxy_config, http_client)
    return SessionProxy(proxy_config, client, id_factory=lambda: "visitor-1")


# =============================================================================
# FastAPI Test Client Utilities
# =============================================================================

@pytest.fixture
def make_client(upstream):
    """
    Factory fixture building a TestClient for a given ProxyConfig.

    The lifespan runs on enter, so the session proxy is initialized.
    """
    clients = []

    def _make(config: ProxyConfig) -> TestClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
        app = create_app(StaticConfigProvider(config), http_client=http_client)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, proxy_config):
    return make_client(proxy_config)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Tests exercising the full HTTP stack"
    )
