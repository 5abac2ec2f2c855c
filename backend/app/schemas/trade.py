"""Trade Schemas - request shape for the trade entrypoint.

Invariants:
    - Each side names a survivor and at least one (item id, quantity > 0) line
    - The two sides name different survivors
    - to_offers() hands the core merged, ordered TradeOffer values
"""

from pydantic import BaseModel, Field, model_validator

from app.core.trade_offers import TradeOffer


class TradeLineIn(BaseModel):
    id: int
    quantity: int = Field(gt=0)


class TradeSideIn(BaseModel):
    id: int
    items: list[TradeLineIn] = Field(min_length=1)

    def to_offer(self) -> TradeOffer:
        return TradeOffer.build(
            self.id, ((line.id, line.quantity) for line in self.items),
        )


class TradeRequest(BaseModel):
    survivor1: TradeSideIn
    survivor2: TradeSideIn

    @model_validator(mode="after")
    def validate_distinct_survivors(self):
        if self.survivor1.id == self.survivor2.id:
            raise ValueError("a survivor cannot trade with themselves")
        return self

    def to_offers(self) -> tuple[TradeOffer, TradeOffer]:
        return self.survivor1.to_offer(), self.survivor2.to_offer()


class TradeResponse(BaseModel):
    message: str = "trade successful"
