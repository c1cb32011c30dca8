"""SQLAlchemy engine factory, session factory and schema bootstrap.

This module provides:

* ``create_followgraph_engine`` -- Create a SA engine from a URL.
* ``FollowgraphSession``        -- Session with ``expire_on_commit=False``.
* ``session_factory``           -- ``sessionmaker`` producing those sessions.
* ``init_schema``               -- Create all tables (idempotent).
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine as _sa_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from followgraph.core.orm.base import FollowgraphBase


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def create_followgraph_engine(
    url: str = "sqlite:///followgraph.db",
    *,
    echo: bool = False,
    pool_size: int | None = None,
    max_overflow: int | None = None,
    pool_timeout: int | None = None,
    **kwargs: Any,
) -> Engine:
    """Create a SQLAlchemy engine with sane defaults.

    Parameters
    ----------
    url:
        Database URL (``sqlite:///…``, ``postgresql://…``, etc.)
    echo:
        If ``True``, log all SQL to stdout.
    pool_size, max_overflow, pool_timeout:
        Connection pool parameters (ignored for SQLite).
    **kwargs:
        Extra arguments forwarded to ``sqlalchemy.create_engine``.
    """
    if url.startswith("sqlite"):
        # Requests are served from a thread pool.
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if _is_memory_sqlite(url):
            # One shared connection, otherwise every checkout sees an empty database.
            kwargs.setdefault("poolclass", StaticPool)

        engine = _sa_create_engine(url, echo=echo, **kwargs)

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection: Any, _rec: Any) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    pool_kwargs: dict[str, Any] = {"pool_pre_ping": True}
    if pool_size is not None:
        pool_kwargs["pool_size"] = pool_size
    if max_overflow is not None:
        pool_kwargs["max_overflow"] = max_overflow
    if pool_timeout is not None:
        pool_kwargs["pool_timeout"] = pool_timeout

    return _sa_create_engine(url, echo=echo, **pool_kwargs, **kwargs)


class FollowgraphSession(Session):
    """Pre-configured session with ``expire_on_commit=False``.

    Prevents lazy-load surprises after commit.
    """

    def __init__(self, bind: Engine | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("expire_on_commit", False)
        super().__init__(bind=bind, **kwargs)


def session_factory(engine: Engine) -> sessionmaker[FollowgraphSession]:
    """Return a ``sessionmaker`` bound to *engine* that produces ``FollowgraphSession`` instances."""
    return sessionmaker(bind=engine, class_=FollowgraphSession)


def init_schema(engine: Engine) -> None:
    """Create every followgraph table that does not exist yet."""
    # Registers the mapped tables on the metadata.
    import followgraph.core.orm.tables  # noqa: F401

    FollowgraphBase.metadata.create_all(engine)
