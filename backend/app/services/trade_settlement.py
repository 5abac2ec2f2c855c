"""Trade Settlement - validates and executes a two-party barter against the ledger.

Invariants:
    - Validation order is fixed: item existence, then ownership, then value equality
    - Point values for the value check are re-read from the catalogue at that step
    - execute applies A -> B and B -> A transfers in ONE transaction: all or nothing
    - settle locks both survivors, validates and executes inside the same transaction,
      so no concurrent trade can change ownership between check and write
    - Nothing but ownership lines is mutated

Design Decisions:
    - validate/execute stay public for callers that drive the phases themselves;
      execute's guarded decrement still refuses to go below zero
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ExchangeError, ResourceNotFoundError
from app.core.trade_offers import (
    TradeOffer,
    check_items_exist,
    check_ownership,
    check_value_equality,
    transfer_plan,
)
from app.infrastructure.database import atomic
from app.services.catalogue import Catalogue
from app.services.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


class TradeSettlement:
    """Trade validator and executor over one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.catalogue = Catalogue(db)
        self.ledger = LedgerStore(db)

    async def validate(
        self,
        offer_a: TradeOffer,
        offer_b: TradeOffer,
        existing_survivors: set[int] | None = None,
    ) -> tuple[TradeOffer, TradeOffer]:
        """Run the three gates. Raises the first failure, performs no writes.

        `existing_survivors` is the set of survivor ids already read in this
        transaction (e.g. by the row lock); when omitted it is queried here.
        """
        known = await self.catalogue.existing_ids(offer_a.item_ids + offer_b.item_ids)
        check_items_exist(offer_a, offer_b, known)

        existing = existing_survivors
        if existing is None:
            existing = await self.ledger.survivor_ids(
                [offer_a.survivor_id, offer_b.survivor_id],
            )
        for offer in (offer_a, offer_b):
            if offer.survivor_id not in existing:
                raise ResourceNotFoundError("Survivor", offer.survivor_id)
            holdings = await self.ledger.holdings(offer.survivor_id, offer.item_ids)
            check_ownership(offer, holdings)

        points = await self.catalogue.points_by_id(offer_a.item_ids + offer_b.item_ids)
        check_value_equality(offer_a, offer_b, points)
        return offer_a, offer_b

    async def execute(self, offer_a: TradeOffer, offer_b: TradeOffer) -> None:
        """Apply both directional transfers atomically. Offers must be validated."""
        async with atomic(self.db, "trade"):
            await self._apply_transfers(offer_a, offer_b)
        logger.info(
            f"Trade executed between survivors {offer_a.survivor_id} "
            f"and {offer_b.survivor_id}",
        )

    async def settle(self, offer_a: TradeOffer, offer_b: TradeOffer) -> None:
        """Lock, validate and execute in a single transaction."""
        try:
            async with atomic(self.db, "trade"):
                locked = await self.ledger.lock_survivors(
                    [offer_a.survivor_id, offer_b.survivor_id],
                )
                await self.validate(offer_a, offer_b, existing_survivors=locked)
                await self._apply_transfers(offer_a, offer_b)
        except ExchangeError as e:
            logger.info(
                f"Trade between survivors {offer_a.survivor_id} and "
                f"{offer_b.survivor_id} rejected: {e}",
                extra={"error_code": e.code},
            )
            raise
        logger.info(
            f"Trade settled between survivors {offer_a.survivor_id} "
            f"and {offer_b.survivor_id}",
        )

    async def _apply_transfers(
        self, offer_a: TradeOffer, offer_b: TradeOffer,
    ) -> None:
        for transfer in transfer_plan(offer_a, offer_b):
            await self.ledger.decrement(
                transfer.source, transfer.item_id, transfer.quantity,
            )
            await self.ledger.increment(
                transfer.destination, transfer.item_id, transfer.quantity,
            )
