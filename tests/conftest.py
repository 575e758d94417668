"""
Shared pytest fixtures for Typeauth tests.

This module provides common fixtures including:
- FakeTypeauthService: Stand-in for the remote service behind httpx.MockTransport
- Canned verification payloads
- Inbound request builders
"""

import json
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union
from unittest.mock import AsyncMock

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typeauth import InboundRequest  # noqa: E402


# =============================================================================
# Remote Service Mocking Infrastructure
# =============================================================================

ServiceReply = Union[httpx.Response, Exception, Callable[[httpx.Request], httpx.Response]]


def verdict_payload(
    success: bool = True,
    valid: bool = True,
    message: str = "",
    enabled: bool = True,
    remaining: int = 100,
    ratelimit_remaining: int = 10,
) -> Dict[str, Any]:
    """Build a service payload with a single verdict record."""
    return {
        "success": success,
        "message": message,
        "data": [
            {
                "valid": valid,
                "enabled": enabled,
                "remaining": remaining,
                "ratelimit": {"remaining": ratelimit_remaining},
            }
        ],
    }


@dataclass
class FakeTypeauthService:
    """
    Scripted replacement for the Typeauth service.

    Replies are consumed in order; the last one repeats once the script
    runs out. An Exception reply is raised from the transport, which is
    how connection failures and timeouts surface in httpx.

    Usage:
        def test_something(fake_service):
            fake_service.reply(httpx.Response(200, json=verdict_payload()))
            client = Typeauth(app_id="app", http_client=fake_service.client())
            ...
            assert fake_service.call_count == 1
    """
    replies: List[ServiceReply] = field(default_factory=list)
    requests: List[httpx.Request] = field(default_factory=list)

    def reply(self, *replies: ServiceReply) -> "FakeTypeauthService":
        """Append replies to the script. Returns self for chaining."""
        self.replies.extend(replies)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.replies:
            return httpx.Response(200, json=verdict_payload())

        index = min(len(self.requests), len(self.replies)) - 1
        reply = self.replies[index]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply) and not isinstance(reply, httpx.Response):
            return reply(request)
        return reply

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def body(self, index: int = -1) -> Dict[str, Any]:
        """Decoded JSON body of a recorded request."""
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_service():
    """Fresh scripted service per test."""
    return FakeTypeauthService()


@pytest.fixture
def no_sleep():
    """Backoff replacement that records delays without waiting."""
    return AsyncMock(return_value=None)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2024-01-01T00:00:00Z."""
    return lambda: 1704067200.0


# =============================================================================
# Inbound Request Builders
# =============================================================================

def make_request(
    headers: Optional[Dict[str, str]] = None,
    url: str = "https://example.com/api/items?page=2",
    method: str = "GET",
    remote_address: Optional[str] = "203.0.113.7",
) -> InboundRequest:
    return InboundRequest.build(url=url, method=method, headers=headers, remote_address=remote_address)


@pytest.fixture
def bearer_request():
    """Inbound request carrying ``Authorization: Bearer mock-token``."""
    return make_request({"Authorization": "Bearer mock-token", "User-Agent": "pytest"})


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Tests wiring the full pipeline against a fake service"
    )


@pytest.fixture
def payload():
    """Factory for service payloads, see ``verdict_payload``."""
    return verdict_payload


@pytest.fixture
def request_factory():
    """Factory for inbound requests, see ``make_request``."""
    return make_request
