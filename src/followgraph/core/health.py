"""Health check endpoints.

Provides:
- **Response models** — ``HealthResponse``, ``CheckResult``, ``LivenessResponse``.
- **``HealthCheck``** — one named dependency probe with ``required`` /
  ``timeout_s`` knobs.  Probes are plain blocking callables; they run in
  worker threads so a slow database never stalls the event loop.
- **``database_check()``** / **``directory_check()``** — the two probes
  followgraph wires up.
- **``create_health_router()``** — ``/health``, ``/health/ready`` and
  ``/health/live`` for container orchestrators.

The user directory is an optional check and only verifies that instances
are configured: the service keeps answering (with "user not found") while
the directory is down, so it must not be reported as unhealthy for that.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from sqlalchemy import text
from sqlalchemy.engine import Engine

from followgraph.directory.discovery import StaticServiceRegistry

_START_TIME = time.monotonic()

HealthStatus = Literal["healthy", "degraded", "unhealthy"]


# ── Response Models ──────────────────────────────────────────────────────


class CheckResult(BaseModel):
    """Outcome of one probe."""

    status: HealthStatus
    latency_ms: float | None = None
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Body of ``GET /health`` and ``GET /health/ready``."""

    status: HealthStatus = "healthy"
    service: str = ""
    version: str = ""
    uptime_s: float = Field(default_factory=lambda: round(time.monotonic() - _START_TIME, 1))
    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    checks: dict[str, CheckResult] = Field(default_factory=dict)


class LivenessResponse(BaseModel):
    status: str = "alive"


# ── Probes ───────────────────────────────────────────────────────────────


@dataclass
class HealthCheck:
    """A named dependency probe.

    ``probe`` returns a dict of details on success and raises on failure.
    A failing ``required`` check makes the service ``unhealthy``; a failing
    optional one only ``degraded``.
    """

    name: str
    probe: Callable[[], dict[str, Any]]
    required: bool = True
    timeout_s: float = 5.0

    async def run(self) -> CheckResult:
        start = time.monotonic()
        try:
            details = await asyncio.wait_for(asyncio.to_thread(self.probe), timeout=self.timeout_s)
        except TimeoutError:
            return CheckResult(status="unhealthy", error=f"timed out after {self.timeout_s}s")
        except Exception as exc:  # noqa: BLE001
            return CheckResult(
                status="unhealthy",
                latency_ms=round((time.monotonic() - start) * 1000, 2),
                error=str(exc)[:200],
            )
        return CheckResult(
            status="healthy",
            latency_ms=round((time.monotonic() - start) * 1000, 2),
            details=details or {},
        )


def database_check(engine: Engine) -> HealthCheck:
    """Required probe: ``SELECT 1`` on *engine*."""

    def _ping() -> dict[str, Any]:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"dialect": engine.dialect.name}

    return HealthCheck(name="database", probe=_ping)


def directory_check(registry: StaticServiceRegistry, service_name: str) -> HealthCheck:
    """Optional probe: at least one instance of the user directory is configured."""

    def _instances() -> dict[str, Any]:
        instances = registry.instances(service_name)
        if not instances:
            raise LookupError(f"no instance configured for {service_name!r}")
        return {"service": service_name, "instances": len(instances)}

    return HealthCheck(name="directory", probe=_instances, required=False)


async def run_checks(checks: list[HealthCheck]) -> dict[str, CheckResult]:
    """Run every probe concurrently."""
    results = await asyncio.gather(*(check.run() for check in checks))
    return {check.name: result for check, result in zip(checks, results, strict=True)}


def overall_status(results: dict[str, CheckResult], checks: list[HealthCheck]) -> HealthStatus:
    failed = [check for check in checks if results[check.name].status != "healthy"]
    if any(check.required for check in failed):
        return "unhealthy"
    return "degraded" if failed else "healthy"


# ── Router Factory ───────────────────────────────────────────────────────


def create_health_router(
    service_name: str,
    version: str,
    checks: list[HealthCheck] | None = None,
    prefix: str = "/health",
) -> APIRouter:
    """Create an ``APIRouter`` with ``{prefix}``, ``{prefix}/ready`` and ``{prefix}/live``.

    ``{prefix}`` answers 503 only when a required check fails;
    ``{prefix}/ready`` answers 503 unless every check passes.
    """
    router = APIRouter(tags=["health"])
    probes: list[HealthCheck] = list(checks or [])

    async def _evaluate() -> HealthResponse:
        results = await run_checks(probes)
        return HealthResponse(
            status=overall_status(results, probes),
            service=service_name,
            version=version,
            checks=results,
        )

    @router.get(prefix, response_model=HealthResponse)
    async def health() -> JSONResponse:
        body = await _evaluate()
        return JSONResponse(body.model_dump(), status_code=503 if body.status == "unhealthy" else 200)

    @router.get(f"{prefix}/ready", response_model=HealthResponse)
    async def readiness() -> JSONResponse:
        body = await _evaluate()
        return JSONResponse(body.model_dump(), status_code=200 if body.status == "healthy" else 503)

    @router.get(f"{prefix}/live", response_model=LivenessResponse)
    async def liveness() -> LivenessResponse:
        return LivenessResponse()

    return router
