"""Correlation ID middleware."""
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import get_logger
from .metrics import http_requests_total, http_request_duration_seconds

CORRELATION_HEADER = "X-Correlation-ID"

logger = get_logger(__name__)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Bind a correlation id to each request's log context and echo it back.

    Requests that fail with an unhandled exception are counted and logged here,
    but their 500 response is built by the outermost error middleware and so
    carries no correlation header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

        start_time = time.time()
        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, time.time() - start_time)
            raise

        self._record(request, response.status_code, time.time() - start_time)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    @staticmethod
    def _record(request: Request, status: int, duration: float) -> None:
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        http_requests_total.labels(method=request.method, endpoint=endpoint, status=status).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=endpoint).observe(duration)

        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=status,
            latency_ms=int(duration * 1000),
        )
