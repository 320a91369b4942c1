from __future__ import annotations

from fastapi import APIRouter, Depends

from milktrack.application.stores.preferences import PreferencesStore
from milktrack.interfaces.http.deps import get_preferences_store
from milktrack.interfaces.http.schemas.preferences import (
    NotificationPreferencesResponse,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/notifications", response_model=NotificationPreferencesResponse)
async def get_notification_settings(store: PreferencesStore = Depends(get_preferences_store)):
    return NotificationPreferencesResponse.model_validate(store.notifications)


@router.put("/notifications", response_model=NotificationPreferencesResponse)
async def update_notification_settings(
    payload: NotificationPreferencesUpdate,
    store: PreferencesStore = Depends(get_preferences_store),
):
    updates = payload.model_dump(exclude_unset=True)
    updated = await store.update_notifications(updates)
    return NotificationPreferencesResponse.model_validate(updated)
