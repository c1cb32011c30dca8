"""Tests for ``followgraph.core.errors``."""

from __future__ import annotations

import pytest

from followgraph.core.errors import (
    AuthTokenInvalidError,
    ConfigError,
    ConstraintViolationError,
    DownstreamUnavailableError,
    ErrorCategory,
    FollowgraphError,
    UserNotFoundError,
)


class TestFollowgraphError:
    def test_defaults(self):
        err = FollowgraphError("boom")
        assert err.message == "boom"
        assert err.code == "INTERNAL"
        assert err.category is ErrorCategory.INTERNAL
        assert err.retryable is False
        assert err.context == {}
        assert str(err) == "boom"

    def test_overrides(self):
        err = FollowgraphError("x", code="CUSTOM", category=ErrorCategory.NETWORK, retryable=True)
        assert err.code == "CUSTOM"
        assert err.category is ErrorCategory.NETWORK
        assert err.retryable is True

    def test_cause_is_chained(self):
        root = ValueError("bad")
        err = FollowgraphError("wrapped", cause=root)
        assert err.__cause__ is root
        assert err.to_dict()["cause"] == "bad"

    def test_to_dict(self):
        d = FollowgraphError("x", context={"k": 1}).to_dict()
        assert d == {
            "error_type": "FollowgraphError",
            "code": "INTERNAL",
            "message": "x",
            "category": "INTERNAL",
            "retryable": False,
            "context": {"k": 1},
        }

    def test_repr(self):
        assert repr(FollowgraphError("x")) == "FollowgraphError('x', code=INTERNAL)"


class TestSubclasses:
    def test_user_not_found(self):
        err = UserNotFoundError("randomuser")
        assert err.user == "randomuser"
        assert err.code == "NOT_FOUND"
        assert "randomuser" in err.message
        assert err.context == {"user": "randomuser"}

    @pytest.mark.parametrize(
        ("cls", "code", "retryable"),
        [
            (ConstraintViolationError, "CONFLICT", False),
            (DownstreamUnavailableError, "UNAVAILABLE", True),
            (AuthTokenInvalidError, "UNAUTHORIZED", False),
            (ConfigError, "CONFIG_INVALID", False),
        ],
    )
    def test_codes(self, cls, code, retryable):
        err = cls("x")
        assert isinstance(err, FollowgraphError)
        assert err.code == code
        assert err.retryable is retryable
