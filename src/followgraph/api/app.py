"""
FastAPI application factory.

``create_app()`` wires middleware, routers, error handlers, and
lifespan events into a single ``FastAPI`` instance.

Manifesto:
    The app factory is the single composition root — the engine, the
    shared HTTP client, the lookup cache and the user directory client are
    built here and parked on ``app.state`` so the rest of the codebase never
    constructs them itself.

Tags:
    api, app-factory, composition-root, FastAPI

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from followgraph.api.middleware.auth import BearerAuthMiddleware
from followgraph.api.middleware.errors import followgraph_error_handler, unhandled_exception_handler
from followgraph.api.middleware.request_context import RequestContextMiddleware
from followgraph.core.cache import DiskCache
from followgraph.core.errors import ConfigError, FollowgraphError
from followgraph.core.health import create_health_router, database_check, directory_check
from followgraph.core.logging import get_logger
from followgraph.core.orm.session import create_followgraph_engine, init_schema, session_factory
from followgraph.core.settings import FollowgraphSettings, get_settings
from followgraph.directory.client import UserDirectory, UserDirectoryClient
from followgraph.directory.discovery import StaticServiceRegistry
from followgraph.directory.http import build_http_client
from followgraph.security.policy import default_route_policy

log = get_logger("followgraph.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan — startup / shutdown hooks."""
    log.info("followgraph API starting", version=app.version)

    init_schema(app.state.engine)
    log.info("database_initialized", url=app.state.engine.url.render_as_string(hide_password=True))

    yield

    http_client: httpx.Client | None = app.state.http_client
    if http_client is not None:
        http_client.close()
    cache: DiskCache | None = app.state.lookup_cache
    if cache is not None:
        cache.close()
    log.info("followgraph API shutting down")


def _build_directory(
    app: FastAPI, settings: FollowgraphSettings, registry: StaticServiceRegistry
) -> UserDirectory:
    """Build the user directory client and keep its resources on ``app.state``."""
    directory_settings = settings.directory
    http_client = build_http_client(directory_settings)
    cache = None
    if directory_settings.cache_enabled:
        cache = DiskCache(
            directory_settings.cache_dir,
            size_limit_bytes=directory_settings.cache_size_bytes,
        )
    app.state.http_client = http_client
    app.state.lookup_cache = cache
    return UserDirectoryClient(
        http_client,
        registry,
        service_name=directory_settings.service_name,
        cache=cache,
    )


def create_app(
    settings: FollowgraphSettings | None = None,
    *,
    directory: UserDirectory | None = None,
    engine: Engine | None = None,
) -> FastAPI:
    """Build and return a fully-configured FastAPI application.

    Parameters
    ----------
    settings : FollowgraphSettings | None
        Override settings (useful for testing).  When ``None`` the cached
        singleton from :func:`get_settings` is used.
    directory : UserDirectory | None
        Existence oracle to use instead of the HTTP client built from
        ``settings.directory``.
    engine : Engine | None
        Database engine to use instead of one built from the settings.

    Raises
    ------
    ConfigError
        ``security.token_secret`` is empty, so no bearer token could verify.
    """

    settings = settings or get_settings()
    if not settings.security.token_secret:
        raise ConfigError(
            "security.token_secret must not be empty",
            context={"setting": "FOLLOWGRAPH_SECURITY__TOKEN_SECRET"},
        )

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
        docs_url=f"{settings.api_prefix}/docs",
        redoc_url=f"{settings.api_prefix}/redoc",
        openapi_url=f"{settings.api_prefix}/openapi.json",
    )

    # Stash settings on app state for middleware access
    app.state.settings = settings

    # ── Storage ──────────────────────────────────────────────────────
    if engine is None:
        if settings.database_url is None:
            Path(settings.data_dir).expanduser().mkdir(parents=True, exist_ok=True)
        engine = create_followgraph_engine(settings.resolved_database_url())
    app.state.engine = engine
    app.state.session_factory = session_factory(engine)

    # ── User directory ───────────────────────────────────────────────
    app.state.http_client = None
    app.state.lookup_cache = None
    registry = StaticServiceRegistry(settings.directory.instances)
    app.state.registry = registry
    app.state.directory = directory if directory is not None else _build_directory(app, settings, registry)

    # ── Middleware (innermost first; the last one added runs first) ──────
    app.add_middleware(
        BearerAuthMiddleware,
        token_secret=settings.security.token_secret,
        test_profile=settings.test_profile,
        policy=default_route_policy(settings.api_prefix),
        algorithms=settings.security.token_algorithms,
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Exception handlers ───────────────────────────────────────────
    app.add_exception_handler(FollowgraphError, followgraph_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # ── Routers ──────────────────────────────────────────────────────
    from followgraph.api.routers import connections

    # Health endpoints at root level (no prefix) for container healthchecks
    app.include_router(
        create_health_router(
            "followgraph",
            version=settings.api_version,
            checks=[
                database_check(engine),
                directory_check(registry, settings.directory.service_name),
            ],
        ),
    )
    app.include_router(connections.router, prefix=settings.api_prefix, tags=["connections"])

    return app
