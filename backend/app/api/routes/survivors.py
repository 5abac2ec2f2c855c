"""Survivor Routes - registration, lookup, location updates and infection reports.

Invariants:
    - Request bodies are validated by Pydantic before reaching the handler
    - Business rules live in services (SurvivorRegistry, InfectionTally)
    - Every handler responds with the survivor view (SurvivorResponse)
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.schemas.survivor import (
    InfectionReportCreate,
    LocationUpdate,
    SurvivorCreate,
    SurvivorResponse,
)
from app.services.infection_tally import InfectionTally
from app.services.survivor_registry import SurvivorRegistry

router = APIRouter(prefix="/api/v1/survivors", tags=["survivors"])


@router.post(
    "", response_model=SurvivorResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_survivor(
    body: SurvivorCreate, db: AsyncSession = Depends(get_db),
):
    """Register a survivor with a starting inventory."""
    survivor = await SurvivorRegistry(db).register(body)
    return SurvivorResponse.from_model(survivor)


@router.get("/{survivor_id}", response_model=SurvivorResponse)
async def get_survivor(
    survivor_id: int, db: AsyncSession = Depends(get_db),
):
    survivor = await SurvivorRegistry(db).get(survivor_id)
    return SurvivorResponse.from_model(survivor)


@router.patch("/{survivor_id}/location", response_model=SurvivorResponse)
async def update_location(
    survivor_id: int, body: LocationUpdate, db: AsyncSession = Depends(get_db),
):
    """Update a survivor's last known location."""
    survivor = await SurvivorRegistry(db).update_location(survivor_id, body)
    return SurvivorResponse.from_model(survivor)


@router.post("/{survivor_id}/reports", response_model=SurvivorResponse)
async def report_infection(
    survivor_id: int,
    body: InfectionReportCreate,
    db: AsyncSession = Depends(get_db),
):
    """Report `survivor_id` as infected on behalf of body.reporter_id."""
    survivor = await InfectionTally(db).accuse(
        body.reporter_id, survivor_id, body.note,
    )
    return SurvivorResponse.from_model(survivor)
