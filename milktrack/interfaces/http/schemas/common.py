from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from milktrack.application.stores.base import EntityStore
from milktrack.application.stores.notices import NoticeKind


class NoticeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    kind: NoticeKind
    message: str


class StoreStateMixin(BaseModel):
    notice: NoticeResponse | None = None
    can_undo: bool = False


def store_state(store: EntityStore, *, can_undo: bool | None = None) -> dict:
    notice = store.notices.current()
    return {
        "notice": NoticeResponse.model_validate(notice) if notice else None,
        "can_undo": store.can_undo if can_undo is None else can_undo,
    }
