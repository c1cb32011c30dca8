"""
Error handlers — map followgraph errors to RFC 7807 responses.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from followgraph.api.schemas.common import ErrorDetail, ProblemDetail
from followgraph.core.errors import FollowgraphError
from followgraph.core.logging import get_logger

logger = get_logger(__name__)

# ── Error code → HTTP status mapping ─────────────────────────────────────

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "NOT_FOUND": 404,
    "UNAUTHORIZED": 401,
    "CONFLICT": 409,
    "UNAVAILABLE": 503,
    "CONFIG_INVALID": 500,
    "INTERNAL": 500,
}


def status_for_error_code(code: str) -> int:
    """Resolve an error code to HTTP status, defaulting to 500."""
    return ERROR_CODE_TO_STATUS.get(code, 500)


def problem_response(
    *,
    status: int,
    title: str,
    detail: str = "",
    instance: str = "",
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a RFC 7807 JSON error response."""
    body = ProblemDetail(title=title, status=status, detail=detail, instance=instance)
    if errors:
        body.errors = [ErrorDetail(**e) for e in errors]
    return JSONResponse(
        status_code=status,
        content=body.model_dump(),
        headers=headers,
        media_type="application/problem+json",
    )


async def followgraph_error_handler(request: Request, exc: FollowgraphError) -> JSONResponse:
    """Render a :class:`FollowgraphError` using its ``code``."""
    status = status_for_error_code(exc.code)
    if status >= 500:
        logger.error("request_failed", path=request.url.path, **exc.to_dict())
    return problem_response(
        status=status,
        title=exc.message,
        instance=str(request.url.path),
        errors=[{"code": exc.code, "message": exc.message}],
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — returns 500 with ProblemDetail."""
    logger.error("unhandled_exception", path=request.url.path, error_type=type(exc).__name__, exc_info=exc)
    return problem_response(
        status=500,
        title="Internal Server Error",
        detail=str(exc) if request.app.state.settings.debug else "An unexpected error occurred.",
        instance=str(request.url.path),
    )
