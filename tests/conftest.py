"""
Shared pytest fixtures for followgraph tests.

This module provides:
- An in-memory SQLite engine with the schema created
- ``StubDirectory``, a scriptable stand-in for the user directory
- The app wired with the ``test`` profile, and a ``TestClient`` for it
- ``seeded``: the sample follow graph used by the API scenarios

Usage:
    Fixtures are auto-discovered by pytest.  Simply use them as function
    arguments::

        def test_something(client, directory):
            directory.known = {"johndoe"}
            ...
"""

from __future__ import annotations

from collections.abc import Generator, Iterable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from followgraph.api.app import create_app
from followgraph.core.orm.session import create_followgraph_engine, init_schema, session_factory
from followgraph.core.repositories.connections import EdgeRepository
from followgraph.core.settings import DirectorySettings, FollowgraphSettings

SEED_EDGES: list[tuple[str, str]] = [
    ("johndoe", "jojobizarre"),
    ("johndoe", "laracroft"),
    ("lonelyguy", "lonelyguy"),
]


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if test_path.parts and test_path.parts[0] == "api":
            item.add_marker(pytest.mark.integration)
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# User directory stub
# =============================================================================


class StubDirectory:
    """In-process user directory.

    ``known=None`` confirms every id; otherwise only ids in ``known`` exist.
    Every lookup is recorded in ``calls``.
    """

    def __init__(self, known: Iterable[str] | None = None) -> None:
        self.known: set[str] | None = set(known) if known is not None else None
        self.calls: list[str] = []

    def exists(self, user_id: str) -> bool:
        self.calls.append(user_id)
        return self.known is None or user_id in self.known


@pytest.fixture
def directory() -> StubDirectory:
    return StubDirectory()


# =============================================================================
# Storage
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    eng = create_followgraph_engine("sqlite://")
    init_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    sess = session_factory(engine)()
    yield sess
    sess.close()


@pytest.fixture
def repository(session: Session) -> EdgeRepository:
    return EdgeRepository(session)


@pytest.fixture
def seeded(repository: EdgeRepository) -> EdgeRepository:
    """Repository pre-populated with :data:`SEED_EDGES`, in that order."""
    for user, follower in SEED_EDGES:
        repository.insert_edge(user, follower)
    return repository


# =============================================================================
# Application
# =============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> FollowgraphSettings:
    return FollowgraphSettings(
        profiles=["test"],
        database_url="sqlite://",
        data_dir=tmp_path,
        directory=DirectorySettings(cache_enabled=False),
    )


@pytest.fixture
def app(settings: FollowgraphSettings, directory: StubDirectory, engine: Engine):
    return create_app(settings, directory=directory, engine=engine)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
