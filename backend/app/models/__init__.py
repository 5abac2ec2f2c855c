"""ORM Models - SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Survivor is the aggregate root for ownership lines and received reports

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.survivor import Survivor  # noqa: F401
from app.models.trade_item import TradeItem  # noqa: F401
from app.models.ownership import OwnershipLine  # noqa: F401
from app.models.infection_report import InfectionReport  # noqa: F401
