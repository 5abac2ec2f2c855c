"""InfectionReport ORM - a directed accusation edge (accuser -> accused).

Invariants:
    - Composite primary key (accuser_id, accused_id): at most one edge per ordered pair
    - accuser_id != accused_id (CHECK constraint, also rejected before any IO)
    - Both ends reference existing survivors
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class InfectionReport(Base):
    """Accusation edge recorded by the infection tally."""
    __tablename__ = "infection_reports"
    __table_args__ = (
        CheckConstraint("accuser_id <> accused_id", name="ck_infection_reports_not_self"),
    )

    accuser_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("survivors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    accused_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("survivors.id", ondelete="CASCADE"),
        primary_key=True,
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
