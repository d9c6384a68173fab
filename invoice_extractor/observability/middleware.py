"""
FastAPI middleware for observability.

Correlation ID propagation and request logging. Job polling and health checks
hit the API every second or two, so successful ones are logged at DEBUG.

Dependencies: fastapi, starlette
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from invoice_extractor.observability.correlation import set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"

QUIET_PATH_MARKERS = ("/jobs/", "/health")


def request_log_level(method: str, path: str, status_code: int) -> int:
    """INFO for normal traffic, DEBUG for successful polls, WARNING for errors."""
    if status_code >= 500:
        return logging.WARNING
    if method == "GET" and status_code < 400 and any(marker in path for marker in QUIET_PATH_MARKERS):
        return logging.DEBUG
    return logging.INFO


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next):
        """
        Log each request once, after the response, with timing.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response object
        """
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - Unhandled {type(e).__name__}",
                extra={
                    "method": method,
                    "path": path,
                    "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
                },
            )
            raise

        logger.log(
            request_log_level(method, path, response.status_code),
            f"{method} {path} - {response.status_code}",
            extra={
                "status_code": response.status_code,
                "process_time_ms": round((time.perf_counter() - start_time) * 1000, 2),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response
