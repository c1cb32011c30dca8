"""Bearer token verification.

Tokens are JWTs signed with a shared symmetric secret.  The ``sub`` claim
becomes the caller identity and the raw token is kept as the credential that
is forwarded on outbound calls.

:func:`authenticate` holds the whole decision for one request and is kept
free of any HTTP framework types so it can be tested on its own.
"""

from __future__ import annotations

from collections.abc import Sequence

import jwt

from followgraph.core.errors import AuthTokenInvalidError
from followgraph.security.identity import ANONYMOUS_TEST_IDENTITY, Identity

BEARER_PREFIX = "Bearer "
DEFAULT_ALGORITHMS: tuple[str, ...] = ("HS256", "HS384", "HS512")


def extract_bearer(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer <token>`` header value."""
    if authorization and authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):].strip()
    return None


def verify_token(
    token: str,
    secret: str,
    algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
) -> Identity:
    """Verify *token* against *secret* and return the identity it carries.

    Raises:
        AuthTokenInvalidError: Bad signature, expired, malformed, or no
            ``sub`` claim.
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=list(algorithms),
            options={"require": ["sub"]},
        )
    except jwt.PyJWTError as exc:
        raise AuthTokenInvalidError(f"Invalid bearer token: {exc}", cause=exc) from exc

    subject = claims.get("sub")
    if not isinstance(subject, str) or not subject:
        raise AuthTokenInvalidError("Invalid bearer token: empty subject")
    return Identity(subject=subject, credential=token, authenticated=True)


def authenticate(
    authorization: str | None,
    *,
    secret: str,
    test_profile: bool = False,
    algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
) -> Identity | None:
    """Resolve the caller identity from an ``Authorization`` header value.

    - Bearer token present: verify it; errors propagate as
      :class:`AuthTokenInvalidError`.
    - No bearer token and the test profile is active: the fixed ``"test"``
      identity, with no credential.
    - Otherwise ``None`` (unauthenticated).
    """
    token = extract_bearer(authorization)
    if token is not None:
        return verify_token(token, secret, algorithms)
    if test_profile:
        return ANONYMOUS_TEST_IDENTITY
    return None


def issue_token(subject: str, secret: str, *, algorithm: str = "HS256", **claims: object) -> str:
    """Sign a token for *subject*. Used by tests and local tooling."""
    return jwt.encode({"sub": subject, **claims}, secret, algorithm=algorithm)
