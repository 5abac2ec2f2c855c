"""Catalogue Seed - default trade items inserted into an empty catalogue.

Invariants:
    - seed_trade_items is a no-op when any item already exists
    - DEFAULT_TRADE_ITEMS matches the rows inserted by migration 002
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.trade_item import TradeItem

logger = logging.getLogger(__name__)

DEFAULT_TRADE_ITEMS: list[dict] = [
    {"name": "Fiji Water", "points": 14},
    {"name": "Campbell Soup", "points": 12},
    {"name": "First Aid Pouch", "points": 10},
    {"name": "AK47", "points": 8},
]


async def seed_trade_items(db: AsyncSession) -> int:
    """Insert DEFAULT_TRADE_ITEMS if the catalogue is empty. Returns rows inserted."""
    existing = await db.scalar(select(func.count()).select_from(TradeItem))
    if existing:
        return 0
    db.add_all(TradeItem(**row) for row in DEFAULT_TRADE_ITEMS)
    await db.commit()
    logger.info(f"Seeded {len(DEFAULT_TRADE_ITEMS)} trade items")
    return len(DEFAULT_TRADE_ITEMS)
