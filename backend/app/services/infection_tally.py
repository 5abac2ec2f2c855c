"""Infection Tally - records accusations and flags survivors infected at the threshold.

Invariants:
    - Self-accusation is rejected before any IO
    - One edge per (accuser, accused): a repeat accusation is a no-op, not an error
    - Edge insert, distinct-accuser count and flag update share one transaction that
      holds a row lock on the accused survivor (no lost updates between accusers)
    - infected only ever moves false -> true
    - Edges keep accumulating after a survivor is infected
"""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError, UnknownAccuserError
from app.core.infection_rules import check_not_self_accusation, next_infected_state
from app.db.dialect import insert_for
from app.infrastructure.database import atomic
from app.models.infection_report import InfectionReport
from app.models.survivor import Survivor
from app.services.survivor_registry import load_survivor

logger = logging.getLogger(__name__)


class InfectionTally:
    """Accusation edges and the infected flag they drive."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def accuse(
        self, accuser_id: int, accused_id: int, note: str | None = None,
    ) -> Survivor:
        """Record an accusation and return the accused survivor, freshly loaded."""
        check_not_self_accusation(accuser_id, accused_id)

        async with atomic(self.db, "infection_report"):
            was_infected = await self._lock_accused(accused_id)
            accuser_exists = await self.db.scalar(
                select(Survivor.id).where(Survivor.id == accuser_id),
            )
            if accuser_exists is None:
                raise UnknownAccuserError(accuser_id)

            inserted = await self._record_edge(accuser_id, accused_id, note)
            accusers = await self.count_accusers(accused_id)
            flagged = (
                not was_infected
                and next_infected_state(was_infected, accusers)
            )
            if flagged:
                await self.db.execute(
                    update(Survivor)
                    .where(Survivor.id == accused_id, Survivor.infected.is_(False))
                    .values(infected=True)
                    .execution_options(synchronize_session=False),
                )

        if inserted:
            logger.info(
                f"Survivor {accuser_id} reported survivor {accused_id} "
                f"({accusers} distinct reports)",
                extra={"accuser_id": accuser_id, "accused_id": accused_id},
            )
        if flagged:
            logger.warning(
                f"Survivor {accused_id} flagged as infected",
                extra={"survivor_id": accused_id},
            )
        return await load_survivor(self.db, accused_id)

    async def count_accusers(self, accused_id: int) -> int:
        count = await self.db.scalar(
            select(func.count(func.distinct(InfectionReport.accuser_id))).where(
                InfectionReport.accused_id == accused_id,
            ),
        )
        return count or 0

    async def _lock_accused(self, accused_id: int) -> bool:
        """Row-lock the accused survivor; returns its current infected flag."""
        result = await self.db.execute(
            select(Survivor.infected)
            .where(Survivor.id == accused_id)
            .with_for_update(),
        )
        infected = result.scalar_one_or_none()
        if infected is None:
            raise ResourceNotFoundError("Survivor", accused_id)
        return infected

    async def _record_edge(
        self, accuser_id: int, accused_id: int, note: str | None,
    ) -> bool:
        """Insert the edge unless it exists. Returns True when a row was added."""
        stmt = (
            insert_for(self.db, InfectionReport)
            .values(accuser_id=accuser_id, accused_id=accused_id, note=note)
            .on_conflict_do_nothing(
                index_elements=["accuser_id", "accused_id"],
            )
        )
        try:
            result = await self.db.execute(stmt)
        except IntegrityError as e:
            # accuser deleted between the existence check and the insert
            raise UnknownAccuserError(accuser_id) from e
        return result.rowcount == 1
