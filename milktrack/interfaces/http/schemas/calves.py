from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from milktrack.interfaces.http.schemas.common import StoreStateMixin
from milktrack.interfaces.http.schemas.records import (
    FeedingRecordResponse,
    GrowthMilestoneResponse,
    NoteResponse,
    VaccinationResponse,
)


class CalfCreate(BaseModel):
    name: str = ""
    birth_date: DtDate | None = None
    mother_cow_id: str = ""
    gender: str = "female"
    weight: Decimal = Decimal("0")


class CalfUpdate(BaseModel):
    name: str | None = None
    birth_date: DtDate | None = None
    mother_cow_id: str | None = None
    gender: str | None = None
    weight: Decimal | None = None


class CalfResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    birth_date: DtDate | None
    mother_cow_id: str
    gender: str
    weight: Decimal | None
    feeding_records: list[FeedingRecordResponse]
    vaccinations: list[VaccinationResponse]
    growth_milestones: list[GrowthMilestoneResponse]
    notes: list[NoteResponse]


class CalfListResponse(StoreStateMixin):
    items: list[CalfResponse]


class CalfOptionsResponse(BaseModel):
    feeding_types: list[str]
    vaccination_types: list[str]
    milestones: list[str]
