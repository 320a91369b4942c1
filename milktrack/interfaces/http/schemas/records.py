from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class VaccinationPayload(BaseModel):
    date: DtDate | None = None
    type: str = ""


class VaccinationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    type: str


class NotePayload(BaseModel):
    content: str = ""
    # defaults to today when omitted
    date: DtDate | None = None


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    content: str


class TreatmentPayload(BaseModel):
    date: DtDate | None = None
    description: str = ""
    medication: str = ""


class TreatmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    description: str
    medication: str


class MilkYieldPayload(BaseModel):
    date: DtDate | None = None
    amount: Decimal | None = None


class MilkYieldResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    amount: Decimal | None


class FeedingSchedulePayload(BaseModel):
    feed_type: str = ""
    frequency: str = ""
    amount: Decimal | None = None


class FeedingScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    feed_type: str
    frequency: str
    amount: Decimal | None


class FeedingRecordPayload(BaseModel):
    date: DtDate | None = None
    type: str = ""
    amount: Decimal | None = None
    unit: str = "litros"


class FeedingRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    type: str
    amount: Decimal | None
    unit: str


class GrowthMilestonePayload(BaseModel):
    date: DtDate | None = None
    description: str = ""


class GrowthMilestoneResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    date: DtDate | None
    description: str
