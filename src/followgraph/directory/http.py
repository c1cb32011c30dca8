"""Shared httpx client for outbound service calls.

Keep one client per service process; do not create per-request.  The client
forwards the caller's bearer credential: when the request being served has an
authenticated identity with a token, every outbound request gets
``Authorization: Bearer <token>``.
"""

from __future__ import annotations

import httpx

from followgraph.core.settings import DirectorySettings
from followgraph.security.identity import current_identity


def directory_timeout(settings: DirectorySettings) -> httpx.Timeout:
    return httpx.Timeout(
        connect=settings.connect_timeout_s,
        read=settings.read_timeout_s,
        write=settings.read_timeout_s,
        pool=settings.connect_timeout_s,
    )


def default_limits() -> httpx.Limits:
    return httpx.Limits(max_connections=100, max_keepalive_connections=20)


def forward_credential(request: httpx.Request) -> None:
    """Request hook: add the current caller's bearer token, if any."""
    identity = current_identity()
    if identity is not None and identity.authenticated and identity.credential:
        request.headers["Authorization"] = f"Bearer {identity.credential}"


def build_http_client(
    settings: DirectorySettings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Create the process-wide client used for directory lookups."""
    return httpx.Client(
        timeout=directory_timeout(settings),
        limits=default_limits(),
        headers={"Accept": "application/json"},
        event_hooks={"request": [forward_credential]},
        transport=transport,
    )
