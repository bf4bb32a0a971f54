"""
Request logging middleware.

Provides:
- **Request ID injection**: every request/response carries an
  ``X-Request-ID`` header, and every log line written while serving the
  request carries the same ID.
- **Request logging**: one log line per request with method, path, status
  and wall-clock duration.
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lab_system.core.logging import request_id_ctx

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Requests slower than this are logged at WARNING.
SLOW_REQUEST_MS = 500


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Injects a unique request ID into every request/response cycle.

    An ``X-Request-ID`` supplied by the client or gateway is reused;
    otherwise a new UUID4 is generated.  The ID is stored on
    ``request.state.request_id`` and in ``request_id_ctx`` for the
    duration of the request, then echoed in the response header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every HTTP request and adds an ``X-Process-Time`` header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms:.2f}ms"

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "elapsed_ms": round(elapsed_ms, 2),
        }
        if elapsed_ms > SLOW_REQUEST_MS:
            logger.warning(
                "%s %s -> %d in %.2fms (SLOW)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                extra=extra,
            )
        else:
            logger.info(
                "%s %s -> %d in %.2fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                extra=extra,
            )

        return response
