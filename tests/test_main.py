"""Integration tests for the main application."""

import pytest
from fastapi.testclient import TestClient

from vector_store_mcp.config import get_settings
from vector_store_mcp.exceptions import VectorStoreMCPError
from vector_store_mcp.main import app


def test_health_check():
    """Test health check endpoint."""
    client = TestClient(app)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "app": get_settings().APP_NAME}


def test_lifespan_manages_http_client():
    """The shared client has no client-side timeout and is closed on shutdown."""
    with TestClient(app) as client:
        http_client = client.app.state.http_client
        assert http_client.timeout.connect is None
        assert http_client.timeout.read is None
        assert http_client.is_closed is False
    assert http_client.is_closed is True


def test_mcp_routes_mounted():
    assert app.url_path_for("mcp_jsonrpc") == "/mcp"
    assert app.url_path_for("mcp_jsonrpc_path_key", api_key="sk-abc") == "/mcp/sk-abc"
    assert app.url_path_for("mcp_credential_check") == "/mcp/credential"


@pytest.mark.parametrize("path", ["/mcp", "/mcp/sk-abc"])
def test_cors_preflight(path):
    """Preflight requests are answered without reaching the JSON-RPC handler."""
    client = TestClient(app)
    response = client.options(
        path,
        headers={
            "Origin": "https://client.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type, authorization",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]
    assert "authorization" in response.headers["access-control-allow-headers"].lower()
    assert response.headers["access-control-max-age"] == "86400"


def test_cors_headers_on_simple_request():
    client = TestClient(app)
    response = client.get("/health", headers={"Origin": "https://client.example"})
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.asyncio
async def test_server_error_handler():
    """VectorStoreMCPError is rendered as a 500 with its code."""
    handler = app.exception_handlers[VectorStoreMCPError]
    response = await handler(None, VectorStoreMCPError("boom", code="BROKEN"))
    assert response.status_code == 500
    assert response.body == b'{"error":"BROKEN","message":"boom"}'
