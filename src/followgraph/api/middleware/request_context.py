"""Request-context middleware — request id, timing and the access log line.

For every request:

- ``X-Request-ID`` is taken from the caller or generated, stored on
  ``request.state.request_id`` and bound into the structlog context so every
  log line emitted while serving the request carries it.
- The elapsed time is returned as ``X-Process-Time-Ms``.
- One ``request_completed`` event is logged with method, path, status and
  duration.  Health probes are logged at debug level only.

Tags:
    api, middleware, request-id, timing, access-log
"""

from __future__ import annotations

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from followgraph.core.logging import bind_context, get_logger, unbind_context

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request id and timing to every request/response cycle."""

    def __init__(self, app: ASGIApp, *, quiet_prefixes: tuple[str, ...] = ("/health",)) -> None:
        super().__init__(app)
        self._quiet_prefixes = quiet_prefixes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        bind_context(request_id=request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            log = logger.debug if request.url.path.startswith(self._quiet_prefixes) else logger.info
            log(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                duration_ms=elapsed_ms,
            )
        finally:
            unbind_context("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)
        return response
