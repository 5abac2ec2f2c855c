"""Seed the default trade item catalogue.

Revision ID: 002_seed_trade_items
Revises: 001_initial
Create Date: 2026-10-12

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.db.seed import DEFAULT_TRADE_ITEMS

revision: str = "002_seed_trade_items"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_trade_items = sa.table(
    "trade_items",
    sa.column("name", sa.String),
    sa.column("points", sa.Integer),
)


def upgrade() -> None:
    op.bulk_insert(_trade_items, DEFAULT_TRADE_ITEMS)


def downgrade() -> None:
    op.execute(
        _trade_items.delete().where(
            _trade_items.c.name.in_([row["name"] for row in DEFAULT_TRADE_ITEMS]),
        ),
    )
