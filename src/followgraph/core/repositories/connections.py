"""Edge store — persistence for the follow graph.

``EdgeRepository`` exposes exactly the operations the connection service
needs and nothing else.  It never checks that users exist; that is the
caller's job.

Tags:
    repository, sqlalchemy, follow-graph

Doc-Types:
    api-reference
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from followgraph.core.errors import ConstraintViolationError
from followgraph.core.logging import get_logger
from followgraph.core.orm.tables import ConnectionTable

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed follow edge: ``follower`` follows ``user``."""

    id: int
    user: str
    follower: str
    created: datetime.datetime

    @classmethod
    def from_row(cls, row: ConnectionTable) -> Edge:
        return cls(id=row.id, user=row.user, follower=row.follower, created=row.created)


class EdgeRepository:
    """Reads and writes edges through a SQLAlchemy session.

    Listings are ordered by ``created`` ascending; ``id`` only breaks ties
    between edges stamped with the same instant.  Each write commits its own
    transaction.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_followers(self, user: str) -> list[str]:
        """Followers of *user*, oldest edge first. Empty list if none."""
        stmt = (
            select(ConnectionTable.follower)
            .where(ConnectionTable.user == user)
            .order_by(ConnectionTable.created, ConnectionTable.id)
        )
        return list(self.session.scalars(stmt))

    def list_followings(self, user: str) -> list[str]:
        """Accounts *user* follows, oldest edge first."""
        stmt = (
            select(ConnectionTable.user)
            .where(ConnectionTable.follower == user)
            .order_by(ConnectionTable.created, ConnectionTable.id)
        )
        return list(self.session.scalars(stmt))

    def find_edge(self, user: str, follower: str) -> Edge | None:
        stmt = select(ConnectionTable).where(
            ConnectionTable.user == user,
            ConnectionTable.follower == follower,
        )
        row = self.session.scalars(stmt).one_or_none()
        return Edge.from_row(row) if row is not None else None

    def insert_edge(self, user: str, follower: str) -> Edge:
        """Insert the edge ``(user, follower)``.

        Raises:
            ConstraintViolationError: The pair already exists.  The
                session is rolled back and remains usable.
        """
        row = ConnectionTable(user=user, follower=follower)
        self.session.add(row)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConstraintViolationError(
                f"Connection already exists: {user} <- {follower}",
                context={"user": user, "follower": follower},
                cause=exc,
            ) from exc
        logger.debug("edge_inserted", user=user, follower=follower, edge_id=row.id)
        return Edge.from_row(row)

    def delete_edge(self, user: str, follower: str) -> None:
        """Delete the edge ``(user, follower)`` whether or not it exists."""
        result = self.session.execute(
            delete(ConnectionTable).where(
                ConnectionTable.user == user,
                ConnectionTable.follower == follower,
            )
        )
        self.session.commit()
        logger.debug("edge_deleted", user=user, follower=follower, rows=result.rowcount)


__all__ = ["Edge", "EdgeRepository"]
