"""Tests for ``followgraph.security.tokens``."""

from __future__ import annotations

import time

import jwt
import pytest

from followgraph.core.errors import AuthTokenInvalidError
from followgraph.security.identity import ANONYMOUS_TEST_IDENTITY
from followgraph.security.tokens import authenticate, extract_bearer, issue_token, verify_token

SECRET = "unit-test-secret-unit-test-secret-0123"


class TestExtractBearer:
    def test_bearer(self):
        assert extract_bearer("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize("value", [None, "", "Basic dXNlcjpwYXNz", "bearer abc"])
    def test_not_bearer(self, value):
        assert extract_bearer(value) is None


class TestVerifyToken:
    def test_valid(self):
        token = issue_token("johndoe", SECRET)
        identity = verify_token(token, SECRET)
        assert identity.subject == "johndoe"
        assert identity.credential == token
        assert identity.authenticated is True

    def test_wrong_secret(self):
        token = issue_token("johndoe", SECRET)
        with pytest.raises(AuthTokenInvalidError):
            verify_token(token, "another-secret-another-secret-0123456")

    def test_expired(self):
        token = issue_token("johndoe", SECRET, exp=int(time.time()) - 60)
        with pytest.raises(AuthTokenInvalidError):
            verify_token(token, SECRET)

    def test_missing_sub(self):
        token = jwt.encode({"name": "john"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthTokenInvalidError):
            verify_token(token, SECRET)

    def test_garbage(self):
        with pytest.raises(AuthTokenInvalidError) as exc_info:
            verify_token("not-a-jwt", SECRET)
        assert exc_info.value.code == "UNAUTHORIZED"

    def test_algorithm_not_accepted(self):
        token = issue_token("johndoe", SECRET, algorithm="HS512")
        with pytest.raises(AuthTokenInvalidError):
            verify_token(token, SECRET, algorithms=["HS256"])


class TestAuthenticate:
    def test_bearer_wins_over_test_profile(self):
        token = issue_token("johndoe", SECRET)
        identity = authenticate(f"Bearer {token}", secret=SECRET, test_profile=True)
        assert identity is not None
        assert identity.subject == "johndoe"

    def test_no_header_test_profile(self):
        assert authenticate(None, secret=SECRET, test_profile=True) is ANONYMOUS_TEST_IDENTITY

    def test_no_header(self):
        assert authenticate(None, secret=SECRET) is None

    def test_invalid_token_raises(self):
        with pytest.raises(AuthTokenInvalidError):
            authenticate("Bearer nope", secret=SECRET, test_profile=True)
