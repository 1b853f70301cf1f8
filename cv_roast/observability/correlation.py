"""
Per-request correlation IDs.

The ID lives in a ContextVar so it follows the request through awaits and
into run_in_threadpool workers, and is stamped on every log record by
CorrelationIdFilter.

Dependencies: contextvars
System role: Request tracing
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: ID supplied by the caller; a fresh uuid4 when empty

    Returns:
        str: The bound ID
    """
    value = correlation_id or uuid.uuid4().hex
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
