"""Exceptions raised before a request ever reaches the upstream API."""

from vector_store_mcp.exceptions import VectorStoreMCPError


class GatewayError(VectorStoreMCPError):
    """Base exception for gateway-specific errors."""
    pass


class ToolNotFoundError(GatewayError):
    """Raised when a tools/call names a tool that is not in the catalogue.

    Attributes:
        tool_name: Name of the tool that was not found.
    """

    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Unknown tool: {tool_name}",
            code="TOOL_NOT_FOUND"
        )
        self.tool_name = tool_name


class InvalidToolArgumentsError(GatewayError):
    """Raised when tool arguments fail parameter validation.

    Attributes:
        tool_name: Tool whose arguments were rejected.
        detail: Description of the offending fields.
    """

    def __init__(self, tool_name: str, detail: str):
        super().__init__(
            message=f"Invalid arguments for '{tool_name}': {detail}",
            code="INVALID_PARAMS"
        )
        self.tool_name = tool_name
        self.detail = detail


class MissingCredentialError(GatewayError):
    """Raised when no upstream API key is available for a tool call."""

    def __init__(self):
        super().__init__(
            message=(
                "OpenAI API key is required. Send 'Authorization: Bearer <key>' "
                "or set OPENAI_API_KEY."
            ),
            code="MISSING_CREDENTIAL"
        )
