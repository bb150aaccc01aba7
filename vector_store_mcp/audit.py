"""Structured audit events for tool invocations."""

import time
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncGenerator

import structlog

# Configure structured logger
logger = structlog.get_logger("audit")


class AuditStatus(str, Enum):
    """Outcome of a tool invocation."""

    success = "success"
    error = "error"


class AuditContext:
    """Tracks timing and outcome of one tool invocation.

    Attributes:
        request_id: JSON-RPC request id, if the client sent one.
        tool_name: Which tool is being invoked.
        start_time: When the invocation started.
        status: Final status of the invocation.
        error_kind: Error kind or code if failed.
    """

    def __init__(self, request_id: str | int | None, tool_name: str) -> None:
        self.request_id = request_id
        self.tool_name = tool_name
        self.start_time = time.perf_counter()
        self.status = AuditStatus.success
        self.error_kind: str | None = None

    def mark_error(self, error_kind: str) -> None:
        """Mark the invocation as failed.

        Args:
            error_kind: Error kind (e.g. "NOT_FOUND") or dispatcher code.
        """
        self.status = AuditStatus.error
        self.error_kind = error_kind

    @property
    def duration_ms(self) -> int:
        """Calculate duration in milliseconds."""
        elapsed = time.perf_counter() - self.start_time
        return int(elapsed * 1000)


def log_tool_invocation(context: AuditContext) -> None:
    """Emit the audit event for a finished invocation."""
    logger.info(
        "tool_invocation",
        request_id=context.request_id,
        tool_name=context.tool_name,
        status=context.status.value,
        duration_ms=context.duration_ms,
        error_kind=context.error_kind,
    )


@asynccontextmanager
async def audit_tool_invocation(
    request_id: str | int | None,
    tool_name: str,
) -> AsyncGenerator[AuditContext, None]:
    """Context manager for auditing tool invocations.

    Tracks timing and logs when the context exits. An exception escaping
    the block marks the invocation as failed before it is re-raised.

    Example:
        async with audit_tool_invocation(req_id, "vector-store-get") as ctx:
            result = await gateway.get_vector_store(params)
            if not result.ok:
                ctx.mark_error(result.error.kind.value)
    """
    context = AuditContext(request_id, tool_name)
    try:
        yield context
    except Exception as e:
        if context.status is AuditStatus.success:
            context.mark_error(getattr(e, "code", type(e).__name__))
        raise
    finally:
        log_tool_invocation(context)
