from __future__ import annotations

from datetime import date as DtDate

from pydantic import BaseModel, ConfigDict

from milktrack.interfaces.http.schemas.common import StoreStateMixin


class InseminationCreate(BaseModel):
    cow_id: str = ""
    bull_id: str = ""
    date: DtDate | None = None


class InseminationUpdate(BaseModel):
    cow_id: str | None = None
    bull_id: str | None = None
    date: DtDate | None = None


class InseminationNotesUpdate(BaseModel):
    notes: str = ""


class InseminationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    cow_id: str
    bull_id: str
    date: DtDate | None
    has_birthed: bool
    notes: str


class InseminationListResponse(StoreStateMixin):
    items: list[InseminationResponse]


class CheckResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    cow_id: str
    insemination_id: str
    date: DtDate | None
    check_number: int


class CheckListResponse(StoreStateMixin):
    items: list[CheckResponse]


class CheckCompletionResponse(BaseModel):
    completed_id: str
    next_check: CheckResponse | None
