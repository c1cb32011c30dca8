"""SQLAlchemy 2.0 table definitions for followgraph.

A single table holds the follow graph: one row per directed edge
``(user, follower)`` meaning *follower follows user*.  The pair is unique;
``created`` is set once at insert and drives listing order.

Usage::

    from followgraph.core.orm import FollowgraphBase

    engine = create_engine("sqlite:///followgraph.db")
    FollowgraphBase.metadata.create_all(engine)
"""

from __future__ import annotations

import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from followgraph.core.orm.base import FollowgraphBase

USER_ID_MAX_LENGTH = 64


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


class ConnectionTable(FollowgraphBase):
    __tablename__ = "connections"
    __table_args__ = (
        UniqueConstraint("user", "follower", name="uq_connections_user_follower"),
        Index("ix_connections_user_created", "user", "created"),
        Index("ix_connections_follower_created", "follower", "created"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), nullable=False)
    follower: Mapped[str] = mapped_column(String(USER_ID_MAX_LENGTH), nullable=False)
    created: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<ConnectionTable(user={self.user!r}, follower={self.follower!r})>"


__all__ = ["USER_ID_MAX_LENGTH", "ConnectionTable", "utcnow"]
