"""Declarative base for all followgraph ORM models.

Uses SQLAlchemy 2.0 ``DeclarativeBase`` with a ``type_annotation_map`` so
``Mapped`` columns can use plain Python types.
"""

from __future__ import annotations

import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase


class FollowgraphBase(DeclarativeBase):
    """Shared declarative base for every followgraph table.

    * ``str``   → ``String``
    * ``int``   → ``Integer``
    * ``datetime.datetime`` → ``DateTime(timezone=True)``
    """

    type_annotation_map = {
        str: String,
        int: Integer,
        datetime.datetime: DateTime(timezone=True),
    }
