"""Trade Routes - the barter entrypoint.

Invariants:
    - Both offers are settled in one transaction (TradeSettlement.settle)
    - Success returns a confirmation only; failures surface as typed ExchangeErrors
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.trade import TradeRequest, TradeResponse
from app.services.trade_settlement import TradeSettlement

router = APIRouter(prefix="/api/v1/trades", tags=["trades"])


@router.post("", response_model=TradeResponse)
async def perform_trade(
    body: TradeRequest, db: AsyncSession = Depends(get_db),
):
    """Exchange items between two survivors at equal point value."""
    offer_a, offer_b = body.to_offers()
    await TradeSettlement(db).settle(offer_a, offer_b)
    return TradeResponse()
