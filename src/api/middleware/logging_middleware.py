"""
Request/response logging middleware with correlation ID tracking.

This middleware:
- Generates or extracts request IDs for correlation
- Logs all incoming requests and outgoing responses with timing
- Adds request ID to response headers for tracing
"""
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logger import (
    get_logger,
    new_request_id,
    set_correlation_context,
    clear_correlation_context,
)
from src.utils.metrics import error_count

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for API request/response logging.

    The request ID comes from the X-Request-ID header when present and is
    generated otherwise; it is bound to every downstream log entry.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process each request with logging and correlation context."""
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        set_correlation_context(
            request_id=request_id,
            prompt_id=request.headers.get("X-Prompt-ID"),
        )

        start_time = time.time()

        logger.info(
            "api.request.start",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
            duration_ms = int((time.time() - start_time) * 1000)

            logger.info(
                "api.request.complete",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration_ms = int((time.time() - start_time) * 1000)
            error_count.labels(error_type=type(e).__name__, component="api").inc()

            logger.error(
                "api.request.error",
                method=request.method,
                path=request.url.path,
                duration_ms=duration_ms,
                error_detail=str(e),
                error_type=type(e).__name__,
            )
            raise

        finally:
            # Prevent leakage between requests
            clear_correlation_context()
