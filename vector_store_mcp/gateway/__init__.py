"""Gateway module - request building, upstream transport and error normalization."""

from .errors import ErrorKind, UpstreamError, ERROR_KIND_CODES, classify_status, jsonrpc_code_for
from .exceptions import (
    GatewayError,
    ToolNotFoundError,
    InvalidToolArgumentsError,
    MissingCredentialError,
)
from .schemas import (
    GatewayFailure,
    GatewayResult,
    GatewaySuccess,
    OperationKind,
    UpstreamRequest,
)
from .batch import BatchStatus, FileBatchSnapshot, is_valid_transition
from .transport import GatewayConfig, UpstreamTransport
from .service import VectorStoreGateway


__all__ = [
    # Errors
    "ErrorKind",
    "UpstreamError",
    "ERROR_KIND_CODES",
    "classify_status",
    "jsonrpc_code_for",
    # Exceptions
    "GatewayError",
    "ToolNotFoundError",
    "InvalidToolArgumentsError",
    "MissingCredentialError",
    # Schemas
    "GatewayFailure",
    "GatewayResult",
    "GatewaySuccess",
    "OperationKind",
    "UpstreamRequest",
    # Batches
    "BatchStatus",
    "FileBatchSnapshot",
    "is_valid_transition",
    # Transport / service
    "GatewayConfig",
    "UpstreamTransport",
    "VectorStoreGateway",
]
