from __future__ import annotations

from datetime import date as DtDate

from pydantic import BaseModel, ConfigDict

from milktrack.interfaces.http.schemas.common import StoreStateMixin
from milktrack.interfaces.http.schemas.records import (
    FeedingScheduleResponse,
    MilkYieldResponse,
    NoteResponse,
    TreatmentResponse,
    VaccinationResponse,
)


class CowCreate(BaseModel):
    name: str = ""
    breed: str = ""
    birth_date: DtDate | None = None
    genetic_info: str = ""
    health_history: str = ""
    unique_traits: str = ""


class CowUpdate(BaseModel):
    name: str | None = None
    breed: str | None = None
    birth_date: DtDate | None = None
    genetic_info: str | None = None
    health_history: str | None = None
    unique_traits: str | None = None


class CowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    breed: str
    birth_date: DtDate | None
    genetic_info: str
    health_history: str
    unique_traits: str
    vaccinations: list[VaccinationResponse]
    treatments: list[TreatmentResponse]
    milk_production: list[MilkYieldResponse]
    feeding_schedule: list[FeedingScheduleResponse]
    notes: list[NoteResponse]


class CowListResponse(StoreStateMixin):
    items: list[CowResponse]


class CowAlertsResponse(BaseModel):
    alerts: list[str]
