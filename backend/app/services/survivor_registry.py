"""Survivor Registry - registration with starting inventory, lookup, location updates.

Invariants:
    - A survivor is registered with at least one catalogue item, every quantity > 0
    - Item names are resolved against the catalogue; unknown names are all reported at once
    - Registration (survivor row + ownership lines) commits as one unit
    - Location updates touch latitude/longitude only
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import (
    InvalidItemQuantityError,
    MissingItemsError,
    ResourceNotFoundError,
    UnknownItemsError,
)
from app.infrastructure.database import atomic
from app.models.ownership import OwnershipLine
from app.models.survivor import Survivor
from app.schemas.survivor import InventoryItemIn, LocationUpdate, SurvivorCreate
from app.services.catalogue import Catalogue

logger = logging.getLogger(__name__)


async def load_survivor(db: AsyncSession, survivor_id: int) -> Survivor | None:
    """Fresh survivor row with inventory (and item details) and received reports."""
    result = await db.execute(
        select(Survivor)
        .where(Survivor.id == survivor_id)
        .options(
            selectinload(Survivor.ownership_lines).selectinload(OwnershipLine.item),
            selectinload(Survivor.reports_received),
        )
        .execution_options(populate_existing=True),
    )
    return result.scalar_one_or_none()


class SurvivorRegistry:
    """Survivor records and their starting inventory."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.catalogue = Catalogue(db)

    async def register(self, body: SurvivorCreate) -> Survivor:
        lines = await self._resolve_items(body.items)
        async with atomic(self.db, "register_survivor"):
            survivor = Survivor(
                name=body.name,
                age=body.age,
                gender=body.gender.value,
                latitude=body.latitude,
                longitude=body.longitude,
                infected=False,
                ownership_lines=[
                    OwnershipLine(item_id=item_id, quantity=quantity)
                    for item_id, quantity in lines
                ],
            )
            self.db.add(survivor)
            await self.db.flush()
            survivor_id = survivor.id
        logger.info(
            f"Survivor {survivor_id} registered with {len(lines)} item lines",
            extra={"survivor_id": survivor_id},
        )
        return await self.get(survivor_id)

    async def get(self, survivor_id: int) -> Survivor:
        survivor = await load_survivor(self.db, survivor_id)
        if survivor is None:
            raise ResourceNotFoundError("Survivor", survivor_id)
        return survivor

    async def update_location(
        self, survivor_id: int, body: LocationUpdate,
    ) -> Survivor:
        async with atomic(self.db, "update_location"):
            survivor = await self.get(survivor_id)
            survivor.latitude = body.latitude
            survivor.longitude = body.longitude
        return survivor

    async def _resolve_items(
        self, items: list[InventoryItemIn],
    ) -> list[tuple[int, int]]:
        """Map item names to ids, merging duplicate names. Returns (item_id, quantity)."""
        if not items:
            raise MissingItemsError()

        ids = await self.catalogue.ids_by_name(item.name for item in items)
        unknown = [item.name for item in items if item.name not in ids]
        if unknown:
            raise UnknownItemsError(unknown)

        invalid = [(item.name, item.quantity) for item in items if item.quantity <= 0]
        if invalid:
            raise InvalidItemQuantityError(invalid)

        merged: dict[int, int] = {}
        for item in items:
            item_id = ids[item.name]
            merged[item_id] = merged.get(item_id, 0) + item.quantity
        return sorted(merged.items())
