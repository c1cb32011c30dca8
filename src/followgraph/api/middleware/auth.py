"""
Bearer-token authentication middleware.

Runs on every request:

1. ``Authorization: Bearer <jwt>`` → verify against the shared secret; the
   ``sub`` claim becomes the caller and the raw token is kept for
   forwarding on outbound calls.
2. No bearer header → the fixed ``"test"`` identity when the test profile is
   active, otherwise anonymous.

The resolved identity is stored on ``request.state.identity`` and bound to
the request context for the duration of the call.  The route policy then
decides whether an identity is required:

- Connections API (``{prefix}/connections/**``): open; the identity only
  serves to authorise the outbound directory lookups.  An invalid token is
  logged and the request continues anonymously.
- Rest of ``/api/**``: authenticated; missing or invalid token → 401.
- Everything else (health, docs): open.

Tags:
    api, middleware, authentication, jwt, bearer
"""

from __future__ import annotations

from collections.abc import Sequence

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from followgraph.api.middleware.errors import problem_response
from followgraph.core.errors import AuthTokenInvalidError
from followgraph.core.logging import bind_context, get_logger, unbind_context
from followgraph.security.identity import Identity, reset_identity, set_identity
from followgraph.security.policy import RoutePolicy, default_route_policy
from followgraph.security.tokens import DEFAULT_ALGORITHMS, authenticate

logger = get_logger(__name__)

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


class BearerAuthMiddleware(BaseHTTPMiddleware):
    """Resolve the caller identity and enforce the route policy.

    Parameters
    ----------
    app:
        The ASGI application to wrap.
    token_secret:
        Shared HMAC secret bearer tokens are signed with.
    test_profile:
        Grant the fixed ``"test"`` identity to requests without a token.
    policy:
        Route policy; defaults to :func:`default_route_policy`.
    algorithms:
        Accepted signing algorithms.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        token_secret: str,
        test_profile: bool = False,
        policy: RoutePolicy | None = None,
        algorithms: Sequence[str] = DEFAULT_ALGORITHMS,
    ) -> None:
        super().__init__(app)
        self._secret = token_secret
        self._test_profile = test_profile
        self._policy = policy or default_route_policy()
        self._algorithms = tuple(algorithms)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        protected = self._policy.requires_authentication(path)

        identity: Identity | None
        try:
            identity = authenticate(
                request.headers.get("Authorization"),
                secret=self._secret,
                test_profile=self._test_profile,
                algorithms=self._algorithms,
            )
        except AuthTokenInvalidError as exc:
            logger.warning("auth_token_rejected", path=path, protected=protected, error=exc.message)
            if protected:
                return problem_response(
                    status=401,
                    title="Unauthorized",
                    detail="Invalid bearer token.",
                    instance=path,
                    headers=_WWW_AUTHENTICATE,
                )
            identity = None

        if protected and (identity is None or not identity.authenticated):
            return problem_response(
                status=401,
                title="Unauthorized",
                detail="Missing bearer token.",
                instance=path,
                headers=_WWW_AUTHENTICATE,
            )

        request.state.identity = identity
        token = set_identity(identity)
        if identity is not None:
            bind_context(subject=identity.subject)
        try:
            return await call_next(request)
        finally:
            if identity is not None:
                unbind_context("subject")
            reset_identity(token)
