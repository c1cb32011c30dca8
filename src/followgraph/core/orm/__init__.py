"""SQLAlchemy 2.0 ORM layer for followgraph.

Modules
-------
base        FollowgraphBase (declarative base)
session     Engine factory, FollowgraphSession, init_schema
tables      ConnectionTable (the follow graph)
"""

from __future__ import annotations

from followgraph.core.orm.base import FollowgraphBase
from followgraph.core.orm.session import (
    FollowgraphSession,
    create_followgraph_engine,
    init_schema,
    session_factory,
)
from followgraph.core.orm.tables import USER_ID_MAX_LENGTH, ConnectionTable

__all__ = [
    "USER_ID_MAX_LENGTH",
    "ConnectionTable",
    "FollowgraphBase",
    "FollowgraphSession",
    "create_followgraph_engine",
    "init_schema",
    "session_factory",
]
