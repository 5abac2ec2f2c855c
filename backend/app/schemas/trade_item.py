"""Trade Item Schemas - public catalogue entries."""

from pydantic import BaseModel, ConfigDict


class TradeItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    points: int
