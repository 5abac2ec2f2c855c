"""Trade Offers - tests for the pure trade validation and transfer planning.

Tests cover:
    - TradeOffer.build merges duplicate item ids and rejects non-positive quantities
    - check_items_exist reports every missing id from both offers, once, ascending
    - check_ownership reports the first shortfall, absent lines count as 0
    - check_value_equality compares aggregate points
    - transfer_plan lists A -> B transfers before B -> A
"""

import pytest

from app.core.errors import (
    InsufficientInventoryError,
    InvalidOfferQuantityError,
    TradeValueMismatchError,
    UnknownTradeItemsError,
)
from app.core.trade_offers import (
    OfferLine,
    TradeOffer,
    Transfer,
    check_items_exist,
    check_ownership,
    check_value_equality,
    find_missing_items,
    offer_total,
    transfer_plan,
)

POINTS = {1: 10, 2: 8, 3: 9, 4: 5}


# ─── TradeOffer.build ────────────────────────────────────────────

def test_build_merges_duplicate_items_and_orders_by_id():
    offer = TradeOffer.build(7, [(4, 1), (1, 2), (4, 3)])
    assert offer.survivor_id == 7
    assert offer.lines == (OfferLine(1, 2), OfferLine(4, 4))


def test_build_rejects_non_positive_quantity():
    with pytest.raises(InvalidOfferQuantityError) as exc:
        TradeOffer.build(7, [(1, 0)])
    assert exc.value.http_status == 400
    assert exc.value.details == {"survivor_id": 7, "item_id": 1, "quantity": 0}

    with pytest.raises(InvalidOfferQuantityError):
        TradeOffer.build(7, [(3, 2), (1, -2)])


def test_item_ids_follow_line_order():
    offer = TradeOffer.build(1, [(3, 1), (2, 1)])
    assert offer.item_ids == [2, 3]


# ─── existence ───────────────────────────────────────────────────

def test_find_missing_items_combines_both_offers_deduplicated_and_sorted():
    a = TradeOffer.build(1, [(999, 2), (1, 1)])
    b = TradeOffer.build(2, [(666, 2), (999, 1)])
    assert find_missing_items((a, b), POINTS.keys()) == [666, 999]


def test_check_items_exist_raises_with_all_missing_ids():
    a = TradeOffer.build(1, [(999, 2)])
    b = TradeOffer.build(2, [(666, 2)])
    with pytest.raises(UnknownTradeItemsError) as exc:
        check_items_exist(a, b, POINTS.keys())
    assert exc.value.item_ids == [666, 999]
    assert exc.value.details == {"item_ids": [666, 999]}


def test_check_items_exist_passes_when_all_known():
    a = TradeOffer.build(1, [(1, 2)])
    b = TradeOffer.build(2, [(4, 4)])
    assert check_items_exist(a, b, POINTS.keys()) is None


# ─── ownership ───────────────────────────────────────────────────

def test_check_ownership_reports_requested_and_owned():
    offer = TradeOffer.build(1, [(1, 2)])
    with pytest.raises(InsufficientInventoryError) as exc:
        check_ownership(offer, {1: 1})
    err = exc.value
    assert (err.survivor_id, err.item_id, err.requested, err.owned) == (1, 1, 2, 1)
    assert "survivor 1 does not have enough of item 1 (requested 2, owned 1)" in err.message


def test_check_ownership_treats_missing_line_as_zero():
    offer = TradeOffer.build(2, [(3, 2)])
    with pytest.raises(InsufficientInventoryError) as exc:
        check_ownership(offer, {})
    assert exc.value.owned == 0


def test_check_ownership_stops_at_first_shortfall():
    offer = TradeOffer.build(1, [(1, 5), (2, 5)])
    with pytest.raises(InsufficientInventoryError) as exc:
        check_ownership(offer, {1: 1, 2: 1})
    assert exc.value.item_id == 1


def test_check_ownership_accepts_exact_quantity():
    offer = TradeOffer.build(1, [(1, 5)])
    assert check_ownership(offer, {1: 5}) is None


# ─── value equality ──────────────────────────────────────────────

def test_offer_total_sums_quantity_times_points():
    offer = TradeOffer.build(1, [(1, 2), (4, 3)])
    assert offer_total(offer, POINTS) == 2 * 10 + 3 * 5


def test_check_value_equality_passes_on_equal_totals():
    a = TradeOffer.build(1, [(1, 2)])   # 20
    b = TradeOffer.build(2, [(4, 4)])   # 20
    assert check_value_equality(a, b, POINTS) is None


def test_check_value_equality_raises_with_both_totals():
    a = TradeOffer.build(1, [(1, 3)])   # 30
    b = TradeOffer.build(2, [(3, 2)])   # 18
    with pytest.raises(TradeValueMismatchError) as exc:
        check_value_equality(a, b, POINTS)
    assert exc.value.details == {
        "survivor_a": 1, "total_a": 30, "survivor_b": 2, "total_b": 18,
    }
    assert "survivor 1 total 30, survivor 2 total 18" in exc.value.message


def test_breaking_either_side_fails_value_check():
    a = TradeOffer.build(1, [(1, 2)])
    for broken in ([(4, 3)], [(4, 5)]):
        b = TradeOffer.build(2, broken)
        with pytest.raises(TradeValueMismatchError):
            check_value_equality(a, b, POINTS)


# ─── transfer_plan ───────────────────────────────────────────────

def test_transfer_plan_moves_a_to_b_then_b_to_a():
    a = TradeOffer.build(1, [(1, 2)])
    b = TradeOffer.build(2, [(4, 4), (2, 1)])
    assert transfer_plan(a, b) == [
        Transfer(1, 2, 1, 2),
        Transfer(2, 1, 2, 1),
        Transfer(2, 1, 4, 4),
    ]
