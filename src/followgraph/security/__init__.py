"""Inbound authentication: identities, bearer tokens and route policy."""

from followgraph.security.identity import (
    ANONYMOUS_TEST_IDENTITY,
    Identity,
    bind_identity,
    current_identity,
)
from followgraph.security.policy import Access, RoutePolicy, RouteRule, default_route_policy
from followgraph.security.tokens import authenticate, extract_bearer, issue_token, verify_token

__all__ = [
    "ANONYMOUS_TEST_IDENTITY",
    "Access",
    "Identity",
    "RoutePolicy",
    "RouteRule",
    "authenticate",
    "bind_identity",
    "current_identity",
    "default_route_policy",
    "extract_bearer",
    "issue_token",
    "verify_token",
]
