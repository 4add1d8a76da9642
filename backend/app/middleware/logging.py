"""
Notekeeper Backend — Request Logging Middleware
=================================================

What:  One access log line per HTTP request, with status and duration.
How:   Logs to the `notekeeper.access` logger after the response is built.
       Structured fields are passed through `extra` for JSON formatters.

Log level by status:
    5xx                                  → ERROR
    400, 409, configured not-found code  → INFO (rejections the handlers expect:
                                           missing fields, duplicates, unknown ids)
    other 4xx                            → WARNING (unknown routes, wrong methods)
    everything else                      → INFO

What we log vs what we DON'T log (privacy):
    Log: method, path, status, duration, IP, request ID
    Don't log: request bodies (note titles and text are user content)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")


def access_log_level(status: int) -> int:
    """Map a response status to the level of its access log line."""
    if status >= 500:
        return logging.ERROR
    if status in (400, 409, settings.not_found_status_code):
        return logging.INFO
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each /notes request; /health is polled and skipped."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path == "/health":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # request.client is None under ASGITransport
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            access_log_level(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
