"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "owners",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(256), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "sneakers",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("owner_id", sa.String(64), sa.ForeignKey("owners.id"), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("address", sa.String(1024), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("image", sa.String(1024), nullable=False),
        sa.Column("lat", sa.Float(), nullable=False),
        sa.Column("lng", sa.Float(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_sneakers_owner_id", "sneakers", ["owner_id"])

    # Membership set kept in step with sneakers.owner_id by the service
    op.create_table(
        "owner_sneakers",
        sa.Column("owner_id", sa.String(64), sa.ForeignKey("owners.id"), primary_key=True),
        sa.Column("sneaker_id", sa.String(64), sa.ForeignKey("sneakers.id"), primary_key=True),
        sa.UniqueConstraint("sneaker_id", name="uq_owner_sneakers_sneaker_id"),
    )


def downgrade() -> None:
    op.drop_table("owner_sneakers")
    op.drop_index("ix_sneakers_owner_id", table_name="sneakers")
    op.drop_table("sneakers")
    op.drop_table("owners")
