"""Upstream error taxonomy and its mapping onto JSON-RPC error codes."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorKind(str, Enum):
    """Fixed set of failure kinds surfaced to callers."""
    
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL = "INTERNAL"


_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
}

# JSON-RPC codes per error kind. Custom codes live in -32000..-32099.
ERROR_KIND_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHORIZED: -32001,
    ErrorKind.FORBIDDEN: -32002,
    ErrorKind.NOT_FOUND: -32003,
    ErrorKind.RATE_LIMITED: -32004,
    ErrorKind.INTERNAL: -32603,
}


def classify_status(status_code: int) -> ErrorKind:
    """Map a non-2xx HTTP status onto an error kind.
    
    Args:
        status_code: HTTP status returned by the upstream API.
        
    Returns:
        The matching ErrorKind; anything unlisted is INTERNAL.
    """
    return _STATUS_KINDS.get(status_code, ErrorKind.INTERNAL)


def jsonrpc_code_for(kind: ErrorKind) -> int:
    """Return the JSON-RPC error code used for an error kind."""
    return ERROR_KIND_CODES[kind]


class UpstreamError(BaseModel):
    """A classified upstream failure.
    
    Attributes:
        kind: Stable error kind callers branch on.
        message: Human-readable message, upstream's own text when available.
        status_code: HTTP status if a response was received.
        details: Raw upstream error payload or failure description.
    """
    
    kind: ErrorKind
    message: str
    status_code: int | None = None
    details: Any | None = Field(default=None, description="Diagnostic payload")

    @property
    def jsonrpc_code(self) -> int:
        return jsonrpc_code_for(self.kind)

    def to_jsonrpc_error(self) -> dict[str, Any]:
        """Render as a JSON-RPC error object."""
        return {
            "code": self.jsonrpc_code,
            "message": self.message,
            "data": {"kind": self.kind.value, "details": self.details},
        }
