from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from milktrack.interfaces.http.schemas.common import StoreStateMixin


class PregnantCowCreate(BaseModel):
    name: str = ""
    breeding_date: DtDate | None = None
    weight: Decimal | None = None
    health: str = ""
    activity: str = ""


class PregnantCowUpdate(BaseModel):
    name: str | None = None
    breeding_date: DtDate | None = None
    weight: Decimal | None = None
    health: str | None = None
    activity: str | None = None


class PregnancyNoteCreate(BaseModel):
    note: str = ""


class PregnantCowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    breeding_date: DtDate | None
    weight: Decimal | None
    health: str
    activity: str
    estimated_due_date: DtDate | None
    notes: list[str]


class PregnancyOverview(PregnantCowResponse):
    days_until_due: int | None
    progress_percent: int | None
    alerts: list[str]
    recommendations: list[str]


class PregnancyListResponse(StoreStateMixin):
    items: list[PregnancyOverview]
