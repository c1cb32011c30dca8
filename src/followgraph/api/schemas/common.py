"""
Common API schemas — RFC 7807 problem details.

Every non-2xx response produced by followgraph itself is a
:class:`ProblemDetail`.

Doc-Types: API_REFERENCE
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Structured error detail for field-level or nested errors."""

    code: str = Field(description="Machine-readable error code (e.g., 'NOT_FOUND')")
    message: str = Field(description="Human-readable error description")
    field: str | None = Field(default=None, description="Field path if error is field-specific")


class ProblemDetail(BaseModel):
    """RFC 7807 «Problem Details for HTTP APIs».

    Error Codes:
        - ``NOT_FOUND`` (404): A referenced user does not exist
        - ``UNAUTHORIZED`` (401): Missing or invalid bearer token
        - ``CONFLICT`` (409): Operation conflicts with current state
        - ``UNAVAILABLE`` (503): Dependency unavailable
        - ``INTERNAL`` (500): Unexpected server error

    Example:
        {
            "type": "about:blank",
            "title": "User not found: randomuser",
            "status": 404,
            "detail": "",
            "instance": "/api/v1/connections/randomuser/randomfollower",
            "errors": []
        }
    """

    type: str = Field(default="about:blank", description="Error type URI (usually 'about:blank')")
    title: str = Field(description="Short human-readable error summary")
    status: int = Field(description="HTTP status code (e.g., 401, 404, 500)")
    detail: str = Field(default="", description="Human-readable explanation of the error")
    instance: str = Field(default="", description="URI of the failing request")
    errors: list[ErrorDetail] = Field(default_factory=list, description="Nested error details")
