"""
FastAPI dependency injection — shared singletons and per-request factories.

Usage in routers::

    from followgraph.api.deps import Connections

    @router.get("/{user}")
    def followers(user: str, svc: Connections):
        ...

Manifesto:
    Dependency injection keeps routers thin.  Singletons (engine, directory
    client) are created once by the app factory and parked on
    ``app.state``; per-request objects (session, repository, service) are
    built here.

Tags:
    api, dependency-injection, singletons

Doc-Types:
    api-reference
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from followgraph.core.repositories.connections import EdgeRepository
from followgraph.directory.client import UserDirectory
from followgraph.services.connections import ConnectionService

# ── Database session (per-request) ───────────────────────────────────────


def get_session(request: Request) -> Generator[Session, None, None]:
    """Yield a session for the request lifespan.

    Commits what is left pending when the endpoint returns and rolls back
    when it raises.
    """
    session = request.app.state.session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_repository(session: Annotated[Session, Depends(get_session)]) -> EdgeRepository:
    return EdgeRepository(session)


# ── User directory (singleton) ───────────────────────────────────────────


def get_directory(request: Request) -> UserDirectory:
    return request.app.state.directory


# ── Connection service (per-request) ─────────────────────────────────────


def get_connection_service(
    repository: Annotated[EdgeRepository, Depends(get_repository)],
    directory: Annotated[UserDirectory, Depends(get_directory)],
) -> ConnectionService:
    return ConnectionService(repository, directory)


Connections = Annotated[ConnectionService, Depends(get_connection_service)]
