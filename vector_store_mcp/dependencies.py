"""Global dependencies for the application."""

from typing import Annotated

import httpx
from fastapi import Depends, Header, Request

from vector_store_mcp.config import Settings, get_settings
from vector_store_mcp.gateway.service import VectorStoreGateway
from vector_store_mcp.gateway.transport import GatewayConfig


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Dependency to get the global shared HTTP client.

    This client is initialized in main.py lifespan and shared across requests
    to enable connection pooling (keep-alive).

    Args:
        request: The FastAPI request object.

    Returns:
        The global httpx.AsyncClient instance.
    """
    return request.app.state.http_client


def parse_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an 'Authorization: Bearer <token>' header value.

    Returns None when the header is missing or not a bearer header.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


async def get_api_key(
    settings: Annotated[Settings, Depends(get_settings)],
    authorization: Annotated[str | None, Header()] = None,
) -> str | None:
    """Resolve the upstream API key for this request.

    The caller's bearer token wins; the configured OPENAI_API_KEY is the
    fallback. Returns None when neither is available.
    """
    return parse_bearer_token(authorization) or settings.OPENAI_API_KEY or None


def build_gateway(
    api_key: str | None,
    client: httpx.AsyncClient,
    settings: Settings,
) -> VectorStoreGateway | None:
    """Create a gateway bound to one credential, or None without one."""
    if not api_key:
        return None
    config = GatewayConfig(
        api_key=api_key,
        base_url=settings.OPENAI_BASE_URL,
        beta_header=settings.OPENAI_BETA_HEADER,
    )
    return VectorStoreGateway(config, client)


async def get_gateway(
    api_key: Annotated[str | None, Depends(get_api_key)],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> VectorStoreGateway | None:
    """Dependency returning a per-request gateway for the caller's credential."""
    return build_gateway(api_key, client, settings)
