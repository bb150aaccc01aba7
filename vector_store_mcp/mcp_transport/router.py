"""HTTP JSON-RPC transport for the MCP protocol."""

import json
import logging
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from vector_store_mcp.config import Settings, get_settings
from vector_store_mcp.dependencies import build_gateway, get_gateway, get_http_client
from vector_store_mcp.gateway.errors import ErrorKind, UpstreamError, jsonrpc_code_for
from vector_store_mcp.gateway.exceptions import (
    InvalidToolArgumentsError,
    MissingCredentialError,
    ToolNotFoundError,
)
from vector_store_mcp.gateway.service import VectorStoreGateway

from .schemas import (
    MCPErrorCodes,
    MCPInitializeParams,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPToolCallParams,
)
from .service import handle_initialize, handle_tools_call, handle_tools_list


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mcp", tags=["mcp"])


def _jsonrpc_error_response(
    request_id: str | int | None,
    code: int,
    message: str,
    status_code: int = 200,
    data: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MCPJSONRPCResponse.error_response(
            id=request_id, code=code, message=message, data=data,
        ).model_dump(),
    )


def _kind_error(request_id: str | int | None, kind: ErrorKind, message: str) -> MCPJSONRPCResponse:
    return MCPJSONRPCResponse.error_response(
        id=request_id,
        code=jsonrpc_code_for(kind),
        message=message,
        data={"kind": kind.value, "details": None},
    )


async def dispatch(
    rpc_request: MCPJSONRPCRequest,
    gateway: VectorStoreGateway | None,
    settings: Settings,
) -> MCPJSONRPCResponse | None:
    """Route one JSON-RPC request to its MCP handler.

    Returns None for notifications, which get no response body.
    """
    method = rpc_request.method
    params = rpc_request.params or {}
    request_id = rpc_request.id

    try:
        if method == "initialize":
            try:
                init_params = MCPInitializeParams(**params)
            except ValidationError as e:
                return MCPJSONRPCResponse.error_response(
                    id=request_id,
                    code=MCPErrorCodes.INVALID_PARAMS,
                    message=f"Invalid initialize params: {e.errors()[0]['msg']}",
                )
            result = await handle_initialize(init_params, settings)
            return MCPJSONRPCResponse.success(request_id, result)

        elif method == "notifications/initialized":
            # Client is confirming initialization, just acknowledge
            return None

        elif method == "tools/list":
            result = await handle_tools_list()
            return MCPJSONRPCResponse.success(request_id, result.model_dump(exclude_none=True))

        elif method == "tools/call":
            try:
                call_params = MCPToolCallParams(**params)
            except ValidationError as e:
                return MCPJSONRPCResponse.error_response(
                    id=request_id,
                    code=MCPErrorCodes.INVALID_PARAMS,
                    message=f"Invalid tools/call params: {e.errors()[0]['msg']}",
                )

            try:
                outcome = await handle_tools_call(
                    gateway=gateway,
                    name=call_params.name,
                    arguments=call_params.arguments,
                    request_id=request_id,
                )
            except ToolNotFoundError as e:
                return MCPJSONRPCResponse.error_response(
                    id=request_id, code=MCPErrorCodes.METHOD_NOT_FOUND, message=e.message,
                )
            except InvalidToolArgumentsError as e:
                return MCPJSONRPCResponse.error_response(
                    id=request_id, code=MCPErrorCodes.INVALID_PARAMS, message=e.message,
                )
            except MissingCredentialError as e:
                return _kind_error(request_id, ErrorKind.UNAUTHORIZED, e.message)

            if isinstance(outcome, UpstreamError):
                return MCPJSONRPCResponse(id=request_id, error=outcome.to_jsonrpc_error())
            return MCPJSONRPCResponse.success(request_id, outcome.model_dump(exclude_none=True))

        else:
            return MCPJSONRPCResponse.error_response(
                id=request_id,
                code=MCPErrorCodes.METHOD_NOT_FOUND,
                message=f"Method not found: {method}",
            )

    except Exception as e:
        logger.error(f"Internal error processing {method}: {e}", exc_info=True)
        return MCPJSONRPCResponse.error_response(
            id=request_id,
            code=MCPErrorCodes.INTERNAL_ERROR,
            message=f"Internal error: {str(e)}",
        )


async def _handle_jsonrpc_post(
    request: Request,
    gateway: VectorStoreGateway | None,
    settings: Settings,
):
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _jsonrpc_error_response(
            request_id=None,
            code=MCPErrorCodes.PARSE_ERROR,
            message="Invalid JSON in request body",
            status_code=400,
        )

    if not isinstance(body, dict):
        return _jsonrpc_error_response(
            request_id=None,
            code=MCPErrorCodes.INVALID_REQUEST,
            message="Request body must be a JSON-RPC 2.0 object",
            status_code=400,
        )

    try:
        rpc_request = MCPJSONRPCRequest(**body)
    except ValidationError:
        request_id = body.get("id")
        return _jsonrpc_error_response(
            request_id=request_id if isinstance(request_id, (str, int)) else None,
            code=MCPErrorCodes.INVALID_REQUEST,
            message="Invalid JSON-RPC 2.0 request",
            status_code=400,
        )

    response = await dispatch(rpc_request, gateway, settings)
    if response is None:
        return Response(status_code=202)
    return response.model_dump()


@router.post("", operation_id="mcp_jsonrpc")
async def mcp_endpoint(
    request: Request,
    gateway: Annotated[VectorStoreGateway | None, Depends(get_gateway)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Handle JSON-RPC 2.0 messages.

    The upstream key comes from the bearer header, or the configured
    OPENAI_API_KEY.
    """
    return await _handle_jsonrpc_post(request, gateway, settings)


@router.post("/{api_key}", operation_id="mcp_jsonrpc_path_key")
async def mcp_path_key_endpoint(
    api_key: str,
    request: Request,
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Handle JSON-RPC 2.0 messages for clients configured with /mcp/{api_key}.

    The key in the path is used as-is; headers and settings are ignored.
    """
    gateway = build_gateway(api_key, client, settings)
    return await _handle_jsonrpc_post(request, gateway, settings)


@router.get("/credential", operation_id="mcp_credential_check")
async def credential_check(
    gateway: Annotated[VectorStoreGateway | None, Depends(get_gateway)],
):
    """Report whether the caller's credential is accepted upstream."""
    if gateway is None:
        return {"valid": False}
    return {"valid": await gateway.validate_api_key()}
