"""Survivor ORM - a registered survivor and the aggregate root of its inventory.

Invariants:
    - id is an autoincrement integer primary key
    - infected only moves false -> true (written by the infection tally alone)
    - latitude in [-90, 90], longitude in [-180, 180] (checked at the API boundary)

Design Decisions:
    - ownership_lines and reports_received load eagerly via selectin: the
      survivor view always renders both
"""

from sqlalchemy import Boolean, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Survivor(Base):
    """Survivor aggregate root - owns ownership lines, receives infection reports."""
    __tablename__ = "survivors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(20), nullable=False)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)
    infected: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    # Relationships
    ownership_lines: Mapped[list["OwnershipLine"]] = relationship(
        "OwnershipLine", back_populates="survivor",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="OwnershipLine.item_id",
    )
    reports_received: Mapped[list["InfectionReport"]] = relationship(
        "InfectionReport",
        foreign_keys="InfectionReport.accused_id",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="InfectionReport.created_at",
    )
