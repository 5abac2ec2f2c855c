"""Survivor Schemas - Pydantic models with field-level validation for survivor endpoints.

Invariants:
    - SurvivorCreate.name: 1-255 chars, stripped, non-empty
    - SurvivorCreate.gender: case-insensitive, one of Gender
    - latitude in [-90, 90], longitude in [-180, 180]
    - LocationUpdate accepts exactly latitude and longitude (extra fields rejected)
    - Item presence and quantity rules are enforced by SurvivorRegistry, which
      reports them as typed errors
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.domain_types import Gender


class InventoryItemIn(BaseModel):
    """Starting inventory line, item referenced by catalogue name."""
    name: str = Field(min_length=1, max_length=255)
    quantity: int


class SurvivorCreate(BaseModel):
    """Survivor registration."""
    name: str = Field(min_length=1, max_length=255)
    age: int = Field(ge=0)
    gender: Gender
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    items: list[InventoryItemIn] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("gender", mode="before")
    @classmethod
    def lower_gender(cls, v):
        return v.lower() if isinstance(v, str) else v


class LocationUpdate(BaseModel):
    """Last known location, nothing else may be patched."""
    model_config = ConfigDict(extra="forbid")

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class InfectionReportCreate(BaseModel):
    """Accusation body; the accused survivor comes from the path."""
    reporter_id: int
    note: str | None = Field(None, max_length=2000)


class InventoryLineResponse(BaseModel):
    item_id: int
    name: str
    points: int
    quantity: int


class InfectionReportResponse(BaseModel):
    accuser_id: int
    note: str | None = None
    created_at: datetime


class SurvivorResponse(BaseModel):
    """Survivor view - profile, infected flag, inventory and received reports."""
    id: int
    name: str
    age: int
    gender: str
    latitude: float
    longitude: float
    infected: bool
    inventory: list[InventoryLineResponse]
    reports_received: list[InfectionReportResponse]

    @classmethod
    def from_model(cls, survivor) -> "SurvivorResponse":
        return cls(
            id=survivor.id,
            name=survivor.name,
            age=survivor.age,
            gender=survivor.gender,
            latitude=survivor.latitude,
            longitude=survivor.longitude,
            infected=survivor.infected,
            inventory=[
                InventoryLineResponse(
                    item_id=line.item_id,
                    name=line.item.name,
                    points=line.item.points,
                    quantity=line.quantity,
                )
                for line in survivor.ownership_lines
            ],
            reports_received=[
                InfectionReportResponse(
                    accuser_id=report.accuser_id,
                    note=report.note,
                    created_at=report.created_at,
                )
                for report in survivor.reports_received
            ],
        )
