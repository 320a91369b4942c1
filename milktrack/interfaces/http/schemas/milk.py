from __future__ import annotations

from datetime import date as DtDate
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from milktrack.interfaces.http.schemas.common import StoreStateMixin


class MilkCowCreate(BaseModel):
    name: str = ""
    tag: str = ""


class MilkCowUpdate(BaseModel):
    name: str | None = None
    tag: str | None = None


class MilkCowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    tag: str


class MilkCowListResponse(StoreStateMixin):
    items: list[MilkCowResponse]


class MilkQualitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    fat: Decimal | None = None
    protein: Decimal | None = None


class ProductionCreate(BaseModel):
    cow_id: str = ""
    date: DtDate | None = None
    morning: Decimal | None = None
    afternoon: Decimal | None = None
    evening: Decimal | None = None
    quality: MilkQualitySchema | None = None


class ProductionUpdate(BaseModel):
    cow_id: str | None = None
    date: DtDate | None = None
    morning: Decimal | None = None
    afternoon: Decimal | None = None
    evening: Decimal | None = None
    quality: MilkQualitySchema | None = None


class ProductionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    cow_id: str
    date: DtDate | None
    morning: Decimal
    afternoon: Decimal
    evening: Decimal
    total: Decimal
    quality: MilkQualitySchema | None


class ProductionListResponse(StoreStateMixin):
    items: list[ProductionResponse]


class ProductionPointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    label: str
    total: Decimal


class ProductionSeriesResponse(BaseModel):
    period: str
    points: list[ProductionPointResponse]


class ProductionDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    cow_id: str
    cow_name: str
    total: Decimal


class ProductionDetailsResponse(BaseModel):
    date: DtDate
    items: list[ProductionDetailResponse]


class IncidentCreate(BaseModel):
    # "general" or null for herd-wide incidents
    cow_id: str | None = None
    date: DtDate | None = None
    description: str = ""
    type: str = "other"


class IncidentUpdate(BaseModel):
    cow_id: str | None = None
    date: DtDate | None = None
    description: str | None = None
    type: str | None = None


class IncidentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    cow_id: str | None
    date: DtDate | None
    description: str
    type: str


class IncidentListResponse(StoreStateMixin):
    items: list[IncidentResponse]
