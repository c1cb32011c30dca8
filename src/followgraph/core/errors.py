"""
Structured error types for followgraph.

Every failure the service knows about is a :class:`FollowgraphError` carrying
a machine-readable ``code``, an :class:`ErrorCategory`, a retry hint and a
free-form context dict.  The API layer maps ``code`` to an HTTP status, so a
new error type only needs the right code to be rendered correctly.

Manifesto:
    - **Typed taxonomy:** one class per failure kind the service reasons about
    - **Absorb where detected:** only ``UserNotFoundError`` crosses the API
      boundary; duplicate inserts and directory outages are handled in the
      layer that sees them
    - **Error chaining:** the underlying exception is kept as ``cause``

Architecture:
    ::

        FollowgraphError (code, category, retryable, context, cause)
        ├── UserNotFoundError           NOT_FOUND      → 404
        ├── ConstraintViolationError    CONFLICT       (absorbed by service)
        ├── DownstreamUnavailableError  UNAVAILABLE    (absorbed by directory client)
        ├── AuthTokenInvalidError       UNAUTHORIZED   → 401 on protected paths
        └── ConfigError                 CONFIG_INVALID (startup refused)

Tags:
    error-handling, exception-hierarchy, followgraph

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and alert routing."""

    NETWORK = "NETWORK"
    DATABASE = "DATABASE"
    SOURCE = "SOURCE"
    CONFIG = "CONFIG"
    AUTH = "AUTH"
    INTERNAL = "INTERNAL"


class FollowgraphError(Exception):
    """Base exception for all followgraph errors.

    Subclasses set ``default_code``, ``default_category`` and
    ``default_retryable``; callers normally only pass a message.
    """

    default_code: str = "INTERNAL"
    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context: dict[str, Any] = dict(context or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, code={self.code})"


class UserNotFoundError(FollowgraphError):
    """A referenced user id failed the directory existence check."""

    default_code = "NOT_FOUND"
    default_category = ErrorCategory.SOURCE

    def __init__(self, user: str, message: str | None = None):
        super().__init__(message or f"User not found: {user}", context={"user": user})
        self.user = user


class ConstraintViolationError(FollowgraphError):
    """The store rejected a write because it would break a unique constraint."""

    default_code = "CONFLICT"
    default_category = ErrorCategory.DATABASE


class DownstreamUnavailableError(FollowgraphError):
    """A dependency service could not be reached or answered badly."""

    default_code = "UNAVAILABLE"
    default_category = ErrorCategory.NETWORK
    default_retryable = True


class AuthTokenInvalidError(FollowgraphError):
    """A bearer token failed signature verification or could not be parsed."""

    default_code = "UNAUTHORIZED"
    default_category = ErrorCategory.AUTH


class ConfigError(FollowgraphError):
    """Invalid or missing configuration."""

    default_code = "CONFIG_INVALID"
    default_category = ErrorCategory.CONFIG


__all__ = [
    "AuthTokenInvalidError",
    "ConfigError",
    "ConstraintViolationError",
    "DownstreamUnavailableError",
    "ErrorCategory",
    "FollowgraphError",
    "UserNotFoundError",
]
