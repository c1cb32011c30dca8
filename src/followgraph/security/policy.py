"""Route policy — which paths require an authenticated caller.

Rules are evaluated in order and the first matching pattern wins, so more
specific prefixes must come before broader ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Access(str, Enum):
    PERMIT = "permit"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class RouteRule:
    pattern: re.Pattern[str]
    access: Access

    def matches(self, path: str) -> bool:
        return self.pattern.search(path) is not None


@dataclass(frozen=True)
class RoutePolicy:
    """Ordered list of :class:`RouteRule`; unmatched paths get ``default``."""

    rules: tuple[RouteRule, ...] = field(default_factory=tuple)
    default: Access = Access.PERMIT

    def access_for(self, path: str) -> Access:
        for rule in self.rules:
            if rule.matches(path):
                return rule.access
        return self.default

    def requires_authentication(self, path: str) -> bool:
        return self.access_for(path) is Access.AUTHENTICATED


def _prefix_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(prefix.rstrip('/'))}(/|$)")


def default_route_policy(api_prefix: str = "/api/v1") -> RoutePolicy:
    """Connections API open to everyone, rest of ``/api`` authenticated, anything else open."""
    return RoutePolicy(
        rules=(
            RouteRule(_prefix_pattern(f"{api_prefix}/connections"), Access.PERMIT),
            RouteRule(_prefix_pattern("/api"), Access.AUTHENTICATED),
        ),
        default=Access.PERMIT,
    )
