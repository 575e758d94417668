"""
Tests for the FastAPI Typeauth middleware.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from typeauth import AuthResult, Typeauth
from typeauth.modules.middleware import TypeauthMiddleware, create_typeauth_middleware


def build_app(middleware) -> FastAPI:
    app = FastAPI()
    app.middleware("http")(middleware)

    @app.get("/items")
    async def items(request: Request):
        return {"authenticated": getattr(request.state, "typeauth_authenticated", False)}

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture
def accepting_client():
    client = AsyncMock()
    client.authenticate = AsyncMock(return_value=AuthResult[bool].success(True))
    return client


@pytest.fixture
def rejecting_client():
    client = AsyncMock()
    client.authenticate = AsyncMock(
        return_value=AuthResult[bool].failure("Missing token", docs="https://docs.typeauth.com/errors/missing-token")
    )
    return client


def test_authenticated_request_reaches_handler(accepting_client):
    """Test that accepted requests proceed with state set."""
    app = build_app(create_typeauth_middleware(accepting_client))

    with TestClient(app) as http:
        response = http.get("/items", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 200
    assert response.json() == {"authenticated": True}
    accepting_client.authenticate.assert_awaited_once()


def test_rejected_request_gets_error_body(rejecting_client):
    """Test that failures short-circuit with the AuthResult error."""
    app = build_app(create_typeauth_middleware(rejecting_client))

    with TestClient(app) as http:
        response = http.get("/items")

    assert response.status_code == 401
    assert response.json() == {
        "error": {"message": "Missing token", "docs": "https://docs.typeauth.com/errors/missing-token"}
    }


def test_custom_error_status(rejecting_client):
    """Test that the rejection status is configurable."""
    app = build_app(create_typeauth_middleware(rejecting_client, error_status=403))

    with TestClient(app) as http:
        response = http.get("/items")

    assert response.status_code == 403


def test_health_is_skipped_by_default(rejecting_client):
    """Test that default skip paths bypass authentication."""
    app = build_app(create_typeauth_middleware(rejecting_client))

    with TestClient(app) as http:
        response = http.get("/health")

    assert response.status_code == 200
    rejecting_client.authenticate.assert_not_awaited()


def test_wildcard_skip_path(rejecting_client):
    """Test that '*' skips every method on a path."""
    middleware = TypeauthMiddleware(rejecting_client, skip_paths={"/items": ["*"]})
    app = build_app(middleware)

    with TestClient(app) as http:
        response = http.get("/items")

    assert response.status_code == 200
    assert response.json() == {"authenticated": False}


def test_middleware_with_real_client(fake_service, payload):
    """Test the Starlette request adapter end to end."""
    fake_service.reply(httpx.Response(200, json=payload()))
    client = Typeauth(app_id="mock-app-id", http_client=fake_service.client())
    app = build_app(create_typeauth_middleware(client))

    with TestClient(app) as http:
        response = http.get("/items?page=2", headers={"Authorization": "Bearer mock-token"})

    assert response.status_code == 200
    body = fake_service.body()
    assert body["token"] == "mock-token"
    assert body["appID"] == "mock-app-id"
    assert body["telemetry"]["url"] == "http://testserver/items?page=2"
    assert body["telemetry"]["method"] == "GET"
    assert body["telemetry"]["ipaddress"] == "testclient"
    assert body["telemetry"]["headers"]["authorization"] == "Bearer mock-token"
