"""
Helpers for logging recovered failures.

Context values are summarized before they reach a log record so uploaded
bytes and extracted document text never end up in the logs verbatim.

Dependencies: logging (stdlib)
System role: Log context sanitizing for degraded paths
"""

import logging
from typing import Any

MAX_VALUE_CHARS = 200


def safe_log_value(value: Any, max_length: int = MAX_VALUE_CHARS) -> str:
    """
    Render a context value as a short string.

    Args:
        value: Anything passed as log context
        max_length: Cut-off for the rendered string

    Returns:
        str: Bytes and containers summarized by size, other values via str()
    """
    if value is None:
        return "None"
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"{type(value).__name__}({len(value)} items)"

    try:
        text = str(value)
    except Exception as e:
        return f"<unrenderable {type(e).__name__}>"
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    level: int = logging.WARNING,
    **context: Any,
) -> None:
    """
    Log an exception the caller has recovered from.

    The request keeps going (usually on fallback content), so the default
    level is WARNING and the traceback is attached only at ERROR and above.

    Args:
        logger: Module logger
        message: Log message
        exc: Recovered exception
        level: Log level
        **context: Extra fields attached to the record
    """
    extra = {key: safe_log_value(value) for key, value in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.log(level, message, extra=extra, exc_info=exc if level >= logging.ERROR else None)
