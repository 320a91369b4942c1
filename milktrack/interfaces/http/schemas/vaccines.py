from __future__ import annotations

from datetime import date as DtDate

from pydantic import BaseModel, ConfigDict, Field

from milktrack.interfaces.http.schemas.common import StoreStateMixin


class VaccineCreate(BaseModel):
    name: str = ""
    description: str = ""
    recommended_age: int | None = Field(default=None, description="Months")
    recommended_situation: str = ""
    frequency: str = ""


class VaccineUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    recommended_age: int | None = None
    recommended_situation: str | None = None
    frequency: str | None = None


class VaccineResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    description: str
    recommended_age: int | None
    recommended_situation: str
    frequency: str


class VaccineListResponse(StoreStateMixin):
    items: list[VaccineResponse]
    deleted: list[VaccineResponse] = []


class VaccinationRecordCreate(BaseModel):
    cow_id: str = ""
    vaccine_ids: list[str] = []
    date: DtDate | None = None
    lot: str = ""
    administrator: str = ""
    notes: str = ""


class VaccinationRecordUpdate(BaseModel):
    cow_id: str | None = None
    vaccine_ids: list[str] | None = None
    date: DtDate | None = None
    lot: str | None = None
    administrator: str | None = None
    notes: str | None = None


class SideEffectsUpdate(BaseModel):
    side_effects: str | None = None


class VaccinationRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    cow_id: str
    vaccine_ids: list[str]
    date: DtDate | None
    lot: str
    administrator: str
    notes: str
    side_effects: str | None


class VaccinationRecordListResponse(StoreStateMixin):
    items: list[VaccinationRecordResponse]


class ScheduledVaccinationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    record_id: str | None
    cow_id: str
    vaccine_id: str
    vaccine_name: str
    last_date: DtDate
    next_date: DtDate | None
    vaccine_deleted: bool
    reason: str | None


class VaccinationScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    upcoming: list[ScheduledVaccinationResponse]
    overdue: list[ScheduledVaccinationResponse]
    unscheduled: list[ScheduledVaccinationResponse]
