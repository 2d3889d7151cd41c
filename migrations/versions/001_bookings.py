"""Bookings table

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

Changes:
  - Create bookings table (one row per confirmed booking, any service type)
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id",            sa.Integer(),     primary_key=True, autoincrement=True),
        sa.Column("reference",     sa.String(36),    nullable=False),
        sa.Column("service_type",  sa.String(30),    nullable=False),
        sa.Column("status",        sa.String(20),    nullable=False, server_default="confirmed"),
        sa.Column("customer_name", sa.String(255),   nullable=False),
        sa.Column("email",         sa.String(255),   nullable=False),
        sa.Column("phone",         sa.String(20),    nullable=False),
        sa.Column("telegram_id",   sa.BigInteger(),  nullable=True),
        sa.Column("selection",     sa.JSON(),        nullable=False),
        sa.Column("participants",  sa.JSON(),        nullable=False),
        sa.Column("total_price",   sa.Integer(),     nullable=False),
        sa.Column("card_last4",    sa.String(4),     nullable=False),
        sa.Column("created_at",    sa.DateTime(),    nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_reference",    "bookings", ["reference"], unique=True)
    op.create_index("ix_bookings_service_type", "bookings", ["service_type"])
    op.create_index("ix_bookings_telegram_id",  "bookings", ["telegram_id"])


def downgrade() -> None:
    op.drop_index("ix_bookings_telegram_id",  table_name="bookings")
    op.drop_index("ix_bookings_service_type", table_name="bookings")
    op.drop_index("ix_bookings_reference",    table_name="bookings")
    op.drop_table("bookings")
