"""Tests for ``followgraph.core.health`` — probes, aggregation and router."""

from __future__ import annotations

import time

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from followgraph.core.health import (
    CheckResult,
    HealthCheck,
    create_health_router,
    database_check,
    directory_check,
    overall_status,
    run_checks,
)
from followgraph.directory.discovery import StaticServiceRegistry


def _ok() -> dict:
    return {"ok": True}


def _fail() -> dict:
    raise ConnectionError("refused")


def _slow() -> dict:
    time.sleep(0.5)
    return {}


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_healthy(self):
        result = await HealthCheck("a", _ok).run()
        assert result.status == "healthy"
        assert result.details == {"ok": True}
        assert result.latency_ms is not None

    @pytest.mark.asyncio
    async def test_failure(self):
        result = await HealthCheck("db", _fail).run()
        assert result.status == "unhealthy"
        assert "refused" in result.error

    @pytest.mark.asyncio
    async def test_timeout(self):
        result = await HealthCheck("slow", _slow, timeout_s=0.05).run()
        assert result.status == "unhealthy"
        assert "timed out" in result.error

    @pytest.mark.asyncio
    async def test_run_checks_keyed_by_name(self):
        results = await run_checks([HealthCheck("a", _ok), HealthCheck("b", _fail)])
        assert results["a"].status == "healthy"
        assert results["b"].status == "unhealthy"


class TestProbes:
    @pytest.mark.asyncio
    async def test_database(self, engine):
        result = await database_check(engine).run()
        assert result.status == "healthy"
        assert result.details == {"dialect": "sqlite"}

    @pytest.mark.asyncio
    async def test_directory_configured(self):
        check = directory_check(StaticServiceRegistry({"users": ["http://a", "http://b"]}), "users")
        result = await check.run()
        assert check.required is False
        assert result.details == {"service": "users", "instances": 2}

    @pytest.mark.asyncio
    async def test_directory_missing(self):
        result = await directory_check(StaticServiceRegistry({}), "users").run()
        assert result.status == "unhealthy"


class TestOverallStatus:
    def test_required_down(self):
        checks = [HealthCheck("db", _ok, required=True)]
        assert overall_status({"db": CheckResult(status="unhealthy")}, checks) == "unhealthy"

    def test_optional_down(self):
        checks = [HealthCheck("directory", _ok, required=False)]
        assert overall_status({"directory": CheckResult(status="unhealthy")}, checks) == "degraded"

    def test_no_checks(self):
        assert overall_status({}, []) == "healthy"


class TestRouter:
    @pytest.fixture
    def client(self):
        app = FastAPI()
        app.include_router(
            create_health_router(
                "followgraph",
                version="0.1.0",
                checks=[HealthCheck("db", _ok), HealthCheck("directory", _fail, required=False)],
            )
        )
        return TestClient(app)

    def test_health_endpoint(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["service"] == "followgraph"
        assert body["status"] == "degraded"
        assert set(body["checks"]) == {"db", "directory"}

    def test_ready_endpoint(self, client):
        assert client.get("/health/ready").status_code == 503

    def test_live_endpoint(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_required_failure_is_503(self):
        app = FastAPI()
        app.include_router(create_health_router("followgraph", "0.1.0", checks=[HealthCheck("db", _fail)]))
        resp = TestClient(app).get("/health")
        assert resp.status_code == 503
        assert resp.json()["status"] == "unhealthy"
