from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NotificationPreferencesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    email: bool
    sms: bool
    app: bool


class NotificationPreferencesUpdate(BaseModel):
    email: bool | None = None
    sms: bool | None = None
    app: bool | None = None
