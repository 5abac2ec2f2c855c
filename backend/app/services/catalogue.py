"""Catalogue - read-only lookups of trade items by id and by name.

Invariants:
    - Never writes (seeding lives in db/seed.py)
    - Every lookup hits the database: callers get values as of their own transaction
"""

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain_types import Points
from app.models.trade_item import TradeItem


class Catalogue:
    """Item id -> point value lookups over the trade_items table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def existing_ids(self, item_ids: Iterable[int]) -> set[int]:
        ids = set(item_ids)
        if not ids:
            return set()
        result = await self.db.execute(
            select(TradeItem.id).where(TradeItem.id.in_(ids)),
        )
        return set(result.scalars().all())

    async def points_by_id(self, item_ids: Iterable[int]) -> dict[int, Points]:
        ids = set(item_ids)
        if not ids:
            return {}
        result = await self.db.execute(
            select(TradeItem.id, TradeItem.points).where(TradeItem.id.in_(ids)),
        )
        return {item_id: Points(points) for item_id, points in result.all()}

    async def ids_by_name(self, names: Iterable[str]) -> dict[str, int]:
        wanted = set(names)
        if not wanted:
            return {}
        result = await self.db.execute(
            select(TradeItem.name, TradeItem.id).where(TradeItem.name.in_(wanted)),
        )
        return {name: item_id for name, item_id in result.all()}

    async def list_items(self) -> list[TradeItem]:
        result = await self.db.execute(select(TradeItem).order_by(TradeItem.id))
        return list(result.scalars().all())
