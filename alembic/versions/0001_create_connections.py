"""create connections table

Revision ID: 0001
Revises:
Create Date: 2026-10-18
"""
from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "connections",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user", sa.String(length=64), nullable=False),
        sa.Column("follower", sa.String(length=64), nullable=False),
        sa.Column("created", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user", "follower", name="uq_connections_user_follower"),
    )
    op.create_index("ix_connections_user_created", "connections", ["user", "created"])
    op.create_index("ix_connections_follower_created", "connections", ["follower", "created"])


def downgrade() -> None:
    op.drop_index("ix_connections_follower_created", table_name="connections")
    op.drop_index("ix_connections_user_created", table_name="connections")
    op.drop_table("connections")
