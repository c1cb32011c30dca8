"""
Caching abstraction with in-memory and on-disk backends.

Used by the user directory client to avoid repeating lookups for ids that
were confirmed recently.

Architecture:
    ::

        CacheBackend (Protocol)
        ├── InMemoryCache  — single-process, bounded LRU
        └── DiskCache      — diskcache-backed, bounded by a byte budget

        API: get(key) → value | None
             set(key, value, ttl_seconds=None)
             delete(key)
             exists(key) → bool
             clear()

Guardrails:
    ❌ DON'T: Cache without TTL (stale answers forever)
    ✅ DO: Pass the freshness lifetime the origin advertised as ``ttl_seconds``

Tags:
    cache, caching, diskcache, in-memory, ttl
"""

from __future__ import annotations

import shutil
import tempfile
import threading
import time
from collections import OrderedDict
from pathlib import Path
from typing import Any, Protocol

import diskcache


class CacheBackend(Protocol):
    """Protocol for cache backend implementations.

    Keys are strings, values are picklable/JSON-like structures.
    """

    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` if missing or expired."""
        ...

    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        """Store a value with optional TTL (``None`` → backend default)."""
        ...

    def delete(self, key: str) -> None:
        """Remove a key. No-op if it does not exist."""
        ...

    def exists(self, key: str) -> bool:
        """Check if a key exists and has not expired."""
        ...

    def clear(self) -> None:
        """Remove all keys."""
        ...


# ------------------------------------------------------------------ #
# In-Memory Cache
# ------------------------------------------------------------------ #


class InMemoryCache:
    """Bounded in-memory cache with TTL support and LRU eviction.

    Example:
        cache = InMemoryCache(max_size=500, default_ttl_seconds=60)
        cache.set("GET //users/api/v1/users/johndoe", {"id": "johndoe"})
    """

    def __init__(self, *, max_size: int = 10_000, default_ttl_seconds: float | None = 3600):
        self._store: OrderedDict[str, tuple[Any, float | None]] = OrderedDict()
        self._max_size = max_size
        self._default_ttl = default_ttl_seconds
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and time.monotonic() > expires_at:
                del self._store[key]
                return None
            self._store.move_to_end(key)
            return value

    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        expires_at = (time.monotonic() + ttl) if ttl else None
        with self._lock:
            if key not in self._store and len(self._store) >= self._max_size:
                self._store.popitem(last=False)
            self._store[key] = (value, expires_at)
            self._store.move_to_end(key)

    def delete(self, key: str) -> None:
        with self._lock:
            self._store.pop(key, None)

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def size(self) -> int:
        """Return current number of cached keys."""
        return len(self._store)


# ------------------------------------------------------------------ #
# Disk Cache
# ------------------------------------------------------------------ #


class DiskCache:
    """On-disk cache bounded by a byte budget.

    Backed by :class:`diskcache.Cache`, which is safe for concurrent use from
    multiple threads and processes and culls old entries once
    ``size_limit_bytes`` is exceeded.

    Attributes:
        directory: Where cache files live.  When ``None`` a temp dir is
            created and removed again by :meth:`close`.
        size_limit_bytes: Total on-disk budget.
    """

    def __init__(
        self,
        directory: str | Path | None = None,
        *,
        size_limit_bytes: int = 10 * 1024 * 1024,
        default_ttl_seconds: float | None = None,
    ):
        self._owns_directory = directory is None
        if directory is None:
            directory = tempfile.mkdtemp(prefix="httpcache-")
        self.directory = Path(directory)
        self.size_limit_bytes = size_limit_bytes
        self._default_ttl = default_ttl_seconds
        self._cache = diskcache.Cache(str(self.directory), size_limit=size_limit_bytes)

    def get(self, key: str) -> Any | None:
        return self._cache.get(key, default=None)

    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl
        self._cache.set(key, value, expire=ttl)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def exists(self, key: str) -> bool:
        return key in self._cache

    def clear(self) -> None:
        self._cache.clear()

    def volume(self) -> int:
        """Return the estimated on-disk size in bytes."""
        return self._cache.volume()

    def close(self) -> None:
        self._cache.close()
        if self._owns_directory:
            shutil.rmtree(self.directory, ignore_errors=True)


__all__ = [
    "CacheBackend",
    "DiskCache",
    "InMemoryCache",
]
