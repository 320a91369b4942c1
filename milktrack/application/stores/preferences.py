from __future__ import annotations

from dataclasses import replace
from typing import Any

from milktrack.application.stores.base import EntityCollection, EntityStore
from milktrack.domain.models.notification_preferences import (
    COLLECTION,
    DOCUMENT_ID,
    NotificationPreferences,
)


class PreferencesStore(EntityStore):
    """Notification toggles; stored only, nothing is delivered."""

    name = "preferences"
    load_failure = "Error al cargar la configuración. Por favor, intenta de nuevo."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.settings = self.collection(COLLECTION, NotificationPreferences)

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.settings]

    @property
    def notifications(self) -> NotificationPreferences:
        return self.settings.find(DOCUMENT_ID) or NotificationPreferences()

    async def update_notifications(self, changes: dict[str, Any]) -> NotificationPreferences:
        async with self.action(
            "update notification preferences",
            success="Configuración guardada exitosamente.",
            failure="Error al guardar la configuración. Por favor, intenta de nuevo.",
        ):
            updated = replace(self.notifications, **changes)
            await self.gateway.upsert(
                self.owner_id, COLLECTION, DOCUMENT_ID, updated.to_document()
            )
            self.settings.replace_all(
                [s for s in self.settings.items if s.id != DOCUMENT_ID] + [updated]
            )
            return updated
