"""OwnershipLine ORM - quantity of one item held by one survivor.

Invariants:
    - Composite primary key (survivor_id, item_id): one line per pair
    - quantity >= 0 (CHECK constraint, also guarded by every decrement)
    - The only mutable quantity state in the system

Design Decisions:
    - A line that reaches zero is kept with quantity 0 rather than deleted
"""

from sqlalchemy import CheckConstraint, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class OwnershipLine(Base):
    """Ledger row: survivor owns `quantity` of item."""
    __tablename__ = "ownership"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_ownership_quantity_non_negative"),
    )

    survivor_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("survivors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("trade_items.id", ondelete="CASCADE"),
        primary_key=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    survivor: Mapped["Survivor"] = relationship(
        "Survivor", back_populates="ownership_lines",
    )
    item: Mapped["TradeItem"] = relationship("TradeItem", lazy="selectin")
