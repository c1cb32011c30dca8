"""
User directory client — "does this user id exist?".

Every read and write of the follow graph first confirms the referenced
accounts with the user directory service.  That call crosses the network, so
the client is built to fail closed: any problem (no instance, timeout,
refused connection, HTTP error status, body that is not a user) yields
``False``.  The caller then reports "user not found"; it never hangs and
never stores an edge for an account nobody could confirm.

Architecture:
    ::

        UserDirectoryClient.exists(user_id)
          │
          ├── cache hit (fresh)? ─────────────► True
          │
          ├── resolve //users/api/v1/users/{id}  (StaticServiceRegistry, round-robin)
          ├── GET via shared httpx.Client        (10s connect/read, bearer forwarded)
          ├── 2xx + JSON object with "id"? ─────► store if cacheable ─► True
          │
          └── anything else ───► log warning ───► False   (no retry)

Caching:
    Only confirmed users are cached, for as long as the response says it is
    fresh (``Cache-Control: max-age`` or ``Expires``).  ``no-store`` and
    ``no-cache`` responses are never stored.  Keys use the logical service
    URL so all instances share entries.

Tags:
    http-client, service-discovery, fail-closed, cache
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from followgraph.core.cache import CacheBackend
from followgraph.core.errors import DownstreamUnavailableError
from followgraph.core.logging import get_logger
from followgraph.directory.discovery import ServiceResolver, resolve_service_url

logger = get_logger(__name__)


class UserDirectory(Protocol):
    def exists(self, user_id: str) -> bool:
        """True only if the directory confirmed *user_id*. Never raises."""
        ...


def _parse_cache_control(value: str) -> dict[str, str | None]:
    directives: dict[str, str | None] = {}
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        name, _, arg = part.partition("=")
        directives[name.strip().lower()] = arg.strip().strip('"') if arg else None
    return directives


def freshness_lifetime(headers: Mapping[str, str], *, now: datetime | None = None) -> float | None:
    """Seconds a response may be reused, or ``None`` if it must not be stored."""
    cc = _parse_cache_control(headers.get("cache-control", ""))
    if "no-store" in cc or "no-cache" in cc:
        return None

    if "max-age" in cc:
        try:
            max_age = int(cc["max-age"] or "")
        except ValueError:
            return None
        return float(max_age) if max_age > 0 else None

    expires = headers.get("expires")
    if expires:
        try:
            expires_at = parsedate_to_datetime(expires)
        except (TypeError, ValueError):
            return None
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        reference = now or datetime.now(UTC)
        date_header = headers.get("date")
        if date_header:
            try:
                reference = parsedate_to_datetime(date_header)
            except (TypeError, ValueError):
                pass
        lifetime = (expires_at - reference).total_seconds()
        return lifetime if lifetime > 0 else None

    return None


class UserDirectoryClient:
    """Existence checks against the user directory service.

    Parameters
    ----------
    http_client:
        Shared ``httpx.Client`` (timeouts and credential forwarding are
        configured on it, see :func:`followgraph.directory.http.build_http_client`).
    resolver:
        Picks the instance that serves each call.
    service_name:
        Logical name of the directory service.
    cache:
        Optional response cache for confirmed users.
    """

    USER_PATH = "/api/v1/users/{user_id}"

    def __init__(
        self,
        http_client: httpx.Client,
        resolver: ServiceResolver,
        *,
        service_name: str = "users",
        cache: CacheBackend | None = None,
    ) -> None:
        self.http_client = http_client
        self.resolver = resolver
        self.service_name = service_name
        self.cache = cache

    def logical_url(self, user_id: str) -> str:
        path = self.USER_PATH.format(user_id=quote(user_id, safe=""))
        return f"//{self.service_name}{path}"

    def exists(self, user_id: str) -> bool:
        try:
            self.fetch_user(user_id)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "user_lookup_failed",
                user=user_id,
                service=self.service_name,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return False
        return True

    def fetch_user(self, user_id: str) -> dict[str, Any]:
        """Fetch the directory record for *user_id*.

        Raises:
            DownstreamUnavailableError: No instance, or the body is not a user.
            httpx.HTTPError: Transport failure or non-2xx status.
            ValueError: Body is not JSON.
        """
        logical_url = self.logical_url(user_id)
        cache_key = f"GET {logical_url}"

        if self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("user_lookup_cached", user=user_id)
                return cached

        url = resolve_service_url(self.resolver, logical_url)
        logger.debug("user_lookup", user=user_id, url=url)
        t0 = time.perf_counter()
        response = self.http_client.get(url)
        response.raise_for_status()

        body = response.json()
        if not isinstance(body, dict) or not body.get("id"):
            raise DownstreamUnavailableError(
                f"Malformed user record from {self.service_name}",
                context={"url": url},
            )

        logger.debug(
            "user_found",
            user=user_id,
            latency_ms=int((time.perf_counter() - t0) * 1000),
        )

        if self.cache is not None:
            ttl = freshness_lifetime(response.headers)
            if ttl:
                self.cache.set(cache_key, body, ttl_seconds=ttl)
        return body


__all__ = ["UserDirectory", "UserDirectoryClient", "freshness_lifetime"]
