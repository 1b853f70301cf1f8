"""
Request middleware: correlation IDs and access logging.

CorrelationMiddleware must be the outermost of the two so the access log
lines carry the request's ID.

Dependencies: fastapi, starlette, cv_roast.observability.correlation
System role: Per-request observability
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cv_roast.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One access log line per request, plus the failure if the handler raised."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        context = {
            "method": request.method,
            "path": request.url.path,
            "content_length": request.headers.get("content-length"),
        }

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{route} - unhandled {type(e).__name__}",
                extra={**context, "duration_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise

        logger.info(
            f"{route} - {response.status_code}",
            extra={**context, "status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds X-Correlation-ID (or a fresh ID) for the request and echoes it back."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
