"""Client-side service discovery and load balancing.

Outbound calls address services by logical name (``//users/api/v1/...``).
A :class:`ServiceResolver` picks one running instance per call; the static
registry cycles round-robin through the instances configured for a name.
"""

from __future__ import annotations

import itertools
import threading
from collections.abc import Iterator, Mapping, Sequence
from typing import Protocol
from urllib.parse import urlsplit

from followgraph.core.errors import DownstreamUnavailableError


class ServiceResolver(Protocol):
    def choose(self, service_name: str) -> str:
        """Return the base URL of one running instance of *service_name*.

        Raises:
            DownstreamUnavailableError: No instance is known.
        """
        ...


class StaticServiceRegistry:
    """Round-robin resolver over a fixed ``name → [base_url, ...]`` table."""

    def __init__(self, instances: Mapping[str, Sequence[str]]) -> None:
        self._instances = {
            name: tuple(url.rstrip("/") for url in urls)
            for name, urls in instances.items()
            if urls
        }
        self._cycles: dict[str, Iterator[str]] = {
            name: itertools.cycle(urls) for name, urls in self._instances.items()
        }
        self._lock = threading.Lock()

    def instances(self, service_name: str) -> tuple[str, ...]:
        return self._instances.get(service_name, ())

    def choose(self, service_name: str) -> str:
        with self._lock:
            cycle = self._cycles.get(service_name)
            if cycle is None:
                raise DownstreamUnavailableError(
                    f"No running instance of service {service_name!r}",
                    context={"service": service_name},
                )
            return next(cycle)


def resolve_service_url(resolver: ServiceResolver, logical_url: str) -> str:
    """Turn ``//<service>/<path>`` into ``<instance-base-url>/<path>``.

    URLs that already carry a scheme are returned unchanged.
    """
    parts = urlsplit(logical_url)
    if parts.scheme:
        return logical_url
    if not parts.netloc:
        raise ValueError(f"Not a service URL: {logical_url!r}")
    base = resolver.choose(parts.netloc)
    target = parts.path or "/"
    if parts.query:
        target = f"{target}?{parts.query}"
    return f"{base}{target}"
