"""TradeItem ORM - one entry of the read-only item catalogue.

Invariants:
    - name is unique
    - points >= 0 (CHECK constraint)
    - Immutable once referenced by ownership or a trade
"""

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TradeItem(Base):
    """Catalogue item with a fixed point value."""
    __tablename__ = "trade_items"
    __table_args__ = (
        CheckConstraint("points >= 0", name="ck_trade_items_points_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
