"""Trade Offers - pure validation and transfer planning for a two-party barter.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Checks raise the first violation as a typed ExchangeError, return None on success
    - An offer holds each item id once (duplicates merged), quantities > 0
    - transfer_plan lists A -> B transfers before B -> A transfers

Design Decisions:
    - The shell reads catalogue/ledger state and hands plain mappings in; the
      checks here never see a session
"""

from dataclasses import dataclass
from typing import Collection, Iterable, Mapping, NamedTuple

from app.core.domain_types import ItemId, Points, Quantity, SurvivorId
from app.core.errors import (
    InsufficientInventoryError,
    InvalidOfferQuantityError,
    TradeValueMismatchError,
    UnknownTradeItemsError,
)


class OfferLine(NamedTuple):
    item_id: ItemId
    quantity: Quantity


class Transfer(NamedTuple):
    source: SurvivorId
    destination: SurvivorId
    item_id: ItemId
    quantity: Quantity


@dataclass(frozen=True)
class TradeOffer:
    """One survivor's side of a trade."""
    survivor_id: SurvivorId
    lines: tuple[OfferLine, ...]

    @classmethod
    def build(
        cls, survivor_id: int, items: Iterable[tuple[int, int]],
    ) -> "TradeOffer":
        """Merge duplicate item ids and order lines by item id."""
        merged: dict[int, int] = {}
        for item_id, quantity in items:
            if quantity <= 0:
                raise InvalidOfferQuantityError(survivor_id, item_id, quantity)
            merged[item_id] = merged.get(item_id, 0) + quantity
        return cls(
            survivor_id=SurvivorId(survivor_id),
            lines=tuple(
                OfferLine(ItemId(i), Quantity(q)) for i, q in sorted(merged.items())
            ),
        )

    @property
    def item_ids(self) -> list[ItemId]:
        return [line.item_id for line in self.lines]


def find_missing_items(
    offers: Iterable[TradeOffer], known_item_ids: Collection[int],
) -> list[ItemId]:
    """All referenced item ids absent from the catalogue, deduplicated and ascending."""
    missing = {
        item_id
        for offer in offers
        for item_id in offer.item_ids
        if item_id not in known_item_ids
    }
    return sorted(missing)


def check_items_exist(
    offer_a: TradeOffer, offer_b: TradeOffer, known_item_ids: Collection[int],
) -> None:
    """Step 1: every item id in either offer must exist."""
    missing = find_missing_items((offer_a, offer_b), known_item_ids)
    if missing:
        raise UnknownTradeItemsError(missing)


def check_ownership(offer: TradeOffer, holdings: Mapping[int, int]) -> None:
    """Step 2: the survivor owns at least the offered quantity of each item.

    `holdings` maps item id to owned quantity; absent items count as 0.
    The first shortfall (by item id) is reported.
    """
    for line in offer.lines:
        owned = holdings.get(line.item_id, 0)
        if owned < line.quantity:
            raise InsufficientInventoryError(
                survivor_id=offer.survivor_id,
                item_id=line.item_id,
                requested=line.quantity,
                owned=owned,
            )


def offer_total(offer: TradeOffer, points: Mapping[int, Points]) -> Points:
    """Aggregate point value of an offer."""
    return Points(sum(line.quantity * points[line.item_id] for line in offer.lines))


def check_value_equality(
    offer_a: TradeOffer, offer_b: TradeOffer, points: Mapping[int, Points],
) -> None:
    """Step 3: both offers are worth the same number of points."""
    total_a = offer_total(offer_a, points)
    total_b = offer_total(offer_b, points)
    if total_a != total_b:
        raise TradeValueMismatchError(
            survivor_a=offer_a.survivor_id,
            total_a=total_a,
            survivor_b=offer_b.survivor_id,
            total_b=total_b,
        )


def transfer_plan(offer_a: TradeOffer, offer_b: TradeOffer) -> list[Transfer]:
    """Directional transfers that settle the trade: A's lines to B, then B's to A."""
    plan = [
        Transfer(offer_a.survivor_id, offer_b.survivor_id, line.item_id, line.quantity)
        for line in offer_a.lines
    ]
    plan.extend(
        Transfer(offer_b.survivor_id, offer_a.survivor_id, line.item_id, line.quantity)
        for line in offer_b.lines
    )
    return plan
