"""
Parse SDK Test Configuration
----------------------------
Shared fixtures and configuration for all tests.

Real network I/O is blocked; every test talks to an httpx.MockTransport.
"""

import sys
from pathlib import Path
from typing import Callable, List

import httpx
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from parse_sdk import Client, Credentials  # noqa: E402


# =============================================================================
# Test Isolation: Block Side Effects
# =============================================================================

@pytest.fixture(autouse=True)
def block_network(monkeypatch):
    """
    Block real HTTP traffic during tests.

    Any request that reaches httpx's default transport raises instead of
    touching the network.
    """
    def _blocked(self, request):
        raise RuntimeError(
            f"Real network access is forbidden during tests: {request.method} {request.url}"
        )

    monkeypatch.setattr(httpx.HTTPTransport, "handle_request", _blocked)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def credentials() -> Credentials:
    """Distinctive key values so redaction is easy to assert."""
    return Credentials(
        application_id="app-id-123",
        javascript_key="js-key-456",
        master_key="master-key-789",
        rest_api_key="rest-key-012",
    )


class RecordingHandler:
    """MockTransport handler that records requests and replies from a callable."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def make_client(credentials):
    """
    Build a Client over a MockTransport.

    Usage:
        client, handler = make_client(lambda req: httpx.Response(200, json={}))
    """
    created = []

    def _make(respond, redact: bool = False):
        handler = RecordingHandler(respond)
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        created.append(http_client)
        return Client(credentials, http_client=http_client, redact=redact), handler

    yield _make

    for http_client in created:
        http_client.close()
