"""Trade Item Routes - read-only catalogue listing."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.trade_item import TradeItemResponse
from app.services.catalogue import Catalogue

router = APIRouter(prefix="/api/v1/trade-items", tags=["trade-items"])


@router.get("", response_model=list[TradeItemResponse])
async def list_trade_items(db: AsyncSession = Depends(get_db)):
    items = await Catalogue(db).list_items()
    return [TradeItemResponse.model_validate(item) for item in items]
