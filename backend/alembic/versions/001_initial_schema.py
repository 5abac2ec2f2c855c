"""Initial schema - survivors, trade_items, ownership, infection_reports.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "survivors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("age", sa.Integer, nullable=False),
        sa.Column("gender", sa.String(20), nullable=False),
        sa.Column("latitude", sa.Float, nullable=False),
        sa.Column("longitude", sa.Float, nullable=False),
        sa.Column("infected", sa.Boolean, nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "trade_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("points", sa.Integer, nullable=False),
        sa.CheckConstraint("points >= 0", name="ck_trade_items_points_non_negative"),
    )

    op.create_table(
        "ownership",
        sa.Column(
            "survivor_id", sa.Integer,
            sa.ForeignKey("survivors.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "item_id", sa.Integer,
            sa.ForeignKey("trade_items.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.CheckConstraint("quantity >= 0", name="ck_ownership_quantity_non_negative"),
    )

    op.create_table(
        "infection_reports",
        sa.Column(
            "accuser_id", sa.Integer,
            sa.ForeignKey("survivors.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "accused_id", sa.Integer,
            sa.ForeignKey("survivors.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True),
            nullable=False, server_default=sa.func.now(),
        ),
        sa.CheckConstraint("accuser_id <> accused_id", name="ck_infection_reports_not_self"),
    )
    op.create_index(
        "ix_infection_reports_accused_id", "infection_reports", ["accused_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_infection_reports_accused_id", table_name="infection_reports")
    op.drop_table("infection_reports")
    op.drop_table("ownership")
    op.drop_table("trade_items")
    op.drop_table("survivors")
