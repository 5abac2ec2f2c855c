"""Ledger Store - atomic reads and writes of (survivor, item) -> quantity.

Invariants:
    - decrement never takes a line below zero: the guarded UPDATE matches no row
      instead, and that surfaces as StorageFailureError (never a silent clamp)
    - increment is a single INSERT ... ON CONFLICT DO UPDATE (no read-then-write race)
    - Methods never commit: the caller owns the transaction (see infrastructure.database.atomic)
    - lock_survivors takes row locks in ascending id order

Design Decisions:
    - Row locks on the survivors rows, not the ownership rows: a destination
      line may not exist yet, the survivor row always does
    - SQLite ignores FOR UPDATE; its single-writer lock serializes instead
"""

import logging
from typing import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import StorageFailureError
from app.db.dialect import insert_for
from app.models.ownership import OwnershipLine
from app.models.survivor import Survivor

logger = logging.getLogger(__name__)


class LedgerStore:
    """Per-survivor inventory ledger over the ownership table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def survivor_ids(self, survivor_ids: Iterable[int]) -> set[int]:
        """Subset of `survivor_ids` that exist."""
        ids = set(survivor_ids)
        result = await self.db.execute(
            select(Survivor.id).where(Survivor.id.in_(ids)),
        )
        return set(result.scalars().all())

    async def lock_survivors(self, survivor_ids: Iterable[int]) -> set[int]:
        """SELECT ... FOR UPDATE on the survivors rows. Returns the ids found."""
        result = await self.db.execute(
            select(Survivor.id)
            .where(Survivor.id.in_(set(survivor_ids)))
            .order_by(Survivor.id)
            .with_for_update(),
        )
        return set(result.scalars().all())

    async def owned_quantity(self, survivor_id: int, item_id: int) -> int:
        quantity = await self.db.scalar(
            select(OwnershipLine.quantity).where(
                OwnershipLine.survivor_id == survivor_id,
                OwnershipLine.item_id == item_id,
            ),
        )
        return quantity or 0

    async def holdings(
        self, survivor_id: int, item_ids: Iterable[int] | None = None,
    ) -> dict[int, int]:
        """item id -> quantity owned, optionally restricted to `item_ids`."""
        query = select(OwnershipLine.item_id, OwnershipLine.quantity).where(
            OwnershipLine.survivor_id == survivor_id,
        )
        if item_ids is not None:
            query = query.where(OwnershipLine.item_id.in_(set(item_ids)))
        result = await self.db.execute(query)
        return {item_id: quantity for item_id, quantity in result.all()}

    async def decrement(self, survivor_id: int, item_id: int, quantity: int) -> None:
        """Remove `quantity` from a line; aborts the unit if the line cannot cover it."""
        result = await self.db.execute(
            update(OwnershipLine)
            .where(
                OwnershipLine.survivor_id == survivor_id,
                OwnershipLine.item_id == item_id,
                OwnershipLine.quantity >= quantity,
            )
            .values(quantity=OwnershipLine.quantity - quantity)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            logger.error(
                f"Ledger decrement refused: survivor {survivor_id} item {item_id} "
                f"by {quantity}",
                extra={"survivor_id": survivor_id, "item_id": item_id},
            )
            raise StorageFailureError(
                f"ownership of item {item_id} by survivor {survivor_id} "
                f"cannot cover {quantity}",
                "decrement",
            )

    async def increment(self, survivor_id: int, item_id: int, quantity: int) -> None:
        """Add `quantity` to a line, creating it on first acquisition."""
        stmt = insert_for(self.db, OwnershipLine).values(
            survivor_id=survivor_id, item_id=item_id, quantity=quantity,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["survivor_id", "item_id"],
            set_={"quantity": stmt.table.c.quantity + stmt.excluded.quantity},
        )
        await self.db.execute(stmt)
