"""Business logic for MCP protocol handlers."""

import json
from typing import Any

from vector_store_mcp.audit import audit_tool_invocation
from vector_store_mcp.config import Settings
from vector_store_mcp.gateway.errors import UpstreamError
from vector_store_mcp.gateway.exceptions import MissingCredentialError
from vector_store_mcp.gateway.schemas import GatewayFailure
from vector_store_mcp.gateway.service import VectorStoreGateway

from .schemas import (
    MCPContent,
    MCPInitializeParams,
    MCPToolCallResult,
    MCPToolListResult,
)
from .tools import get_tool, list_mcp_tools


async def handle_initialize(params: MCPInitializeParams, settings: Settings) -> dict[str, Any]:
    """Handle initialize request.

    Args:
        params: Initialize parameters from client.
        settings: Application settings holding server identity.

    Returns:
        Server initialization response.
    """
    return {
        "protocolVersion": settings.MCP_PROTOCOL_VERSION,
        "capabilities": {
            "tools": {
                "listChanged": False  # Static tool catalogue
            }
        },
        "serverInfo": {
            "name": settings.MCP_SERVER_NAME,
            "version": settings.MCP_SERVER_VERSION,
        },
    }


async def handle_tools_list() -> MCPToolListResult:
    """Handle tools/list request."""
    return MCPToolListResult(tools=list_mcp_tools())


def _success_result(data: Any) -> MCPToolCallResult:
    return MCPToolCallResult(
        content=[MCPContent(type="text", text=json.dumps(data, indent=2))],
        isError=False,
    )


async def handle_tools_call(
    gateway: VectorStoreGateway | None,
    name: str,
    arguments: dict[str, Any],
    request_id: str | int | None = None,
) -> MCPToolCallResult | UpstreamError:
    """Handle tools/call request.

    Arguments are validated before a gateway is required, so malformed
    calls fail without touching the network.

    Args:
        gateway: Gateway bound to the caller's credential, or None when no
            credential is available.
        name: Tool name to invoke.
        arguments: Raw tool arguments.
        request_id: JSON-RPC id, used for the audit event.

    Returns:
        MCPToolCallResult with the upstream JSON as text, or the
        UpstreamError describing the failure.

    Raises:
        ToolNotFoundError: If the tool is not in the catalogue.
        InvalidToolArgumentsError: If arguments fail validation.
        MissingCredentialError: If no gateway is available.
    """
    async with audit_tool_invocation(request_id, name) as audit_ctx:
        tool = get_tool(name)
        params = tool.parse_arguments(arguments)
        if gateway is None:
            raise MissingCredentialError()

        result = await tool.invoke(gateway, params)
        if isinstance(result, GatewayFailure):
            audit_ctx.mark_error(result.error.kind.value)
            return result.error
        return _success_result(result.data)
