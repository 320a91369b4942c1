from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from milktrack.application.stores.base import (
    EntityCollection,
    EntityMessages,
    EntityStore,
    require_fields,
    require_undo_entry,
)
from milktrack.domain.models.insemination import (
    CHECKS_COLLECTION,
    COLLECTION,
    Check,
    Insemination,
)
from milktrack.domain.services.schedule import first_check, next_check

logger = logging.getLogger(__name__)

INSEMINATION_MESSAGES = EntityMessages(
    noun="la inseminación",
    created="Inseminación registrada exitosamente.",
    updated="Inseminación actualizada exitosamente.",
    deleted="Inseminación eliminada exitosamente.",
    restored="Inseminación restaurada exitosamente.",
)

REQUIRED_FIELDS = {
    "cow_id": "Por favor, complete todos los campos requeridos.",
    "bull_id": "Por favor, complete todos los campos requeridos.",
    "date": "Por favor, complete todos los campos requeridos.",
}


class ReproductionStore(EntityStore):
    """Inseminations and the pregnancy checks scheduled for each of them."""

    name = "reproduction"
    load_failure = "Error al cargar las inseminaciones. Por favor, intenta de nuevo."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.inseminations = self.collection(COLLECTION, Insemination)
        self.checks = self.collection(CHECKS_COLLECTION, Check)

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.inseminations, self.checks]

    def checks_for(self, insemination_id: str) -> list[Check]:
        return [c for c in self.checks.items if c.insemination_id == insemination_id]

    def validate(self, insemination: Insemination) -> None:
        require_fields(insemination, REQUIRED_FIELDS)

    async def record(self, insemination: Insemination) -> Insemination:
        """Store the insemination and schedule its first check."""
        async with self.action(
            "record insemination",
            success=INSEMINATION_MESSAGES.created,
            failure="Error al registrar la inseminación. Por favor, intenta de nuevo.",
        ):
            self.validate(insemination)
            insemination.has_birthed = False
            created = await self.inseminations.create(insemination)
            await self.checks.create(first_check(created))
            return created

    async def edit(self, insemination_id: str, changes: dict[str, Any]) -> Insemination:
        async with self.action(
            "update insemination",
            success=INSEMINATION_MESSAGES.updated,
            failure=INSEMINATION_MESSAGES.failure("actualizar"),
        ):
            updated = replace(self.inseminations.require(insemination_id), **changes)
            self.validate(updated)
            await self.inseminations.update(updated)
            for check in self.checks_for(insemination_id):
                if check.cow_id != updated.cow_id:
                    await self.checks.patch(check.id, {"cow_id": updated.cow_id})
            return updated

    async def update_notes(self, insemination_id: str, notes: str) -> Insemination:
        async with self.action(
            "update insemination notes",
            success="Notas actualizadas exitosamente.",
            failure="Error al actualizar las notas. Por favor, intenta de nuevo.",
        ):
            return await self.inseminations.patch(insemination_id, {"notes": notes or ""})

    async def mark_birthed(self, insemination_id: str) -> Insemination:
        """Flag the birth and drop the checks still pending for the cycle."""
        async with self.action(
            "mark insemination birthed",
            success="Inseminación marcada como nacida exitosamente.",
            failure=(
                "Error al marcar la inseminación como nacida. Por favor, intenta de nuevo."
            ),
        ):
            updated = await self.inseminations.patch(insemination_id, {"has_birthed": True})
            for check in self.checks_for(insemination_id):
                await self.checks.delete(check.id)
            return updated

    async def delete(self, insemination_id: str) -> Insemination:
        async with self.action(
            "delete insemination",
            success=INSEMINATION_MESSAGES.deleted,
            failure=INSEMINATION_MESSAGES.failure("eliminar"),
        ):
            pending = self.checks_for(insemination_id)
            removed = await self.inseminations.delete(insemination_id)
            self.inseminations.undo.remember(removed, dependents=pending)
            for check in pending:
                await self.checks.delete(check.id)
            return removed

    async def restore(self) -> Insemination:
        async with self.action(
            "restore insemination",
            success=INSEMINATION_MESSAGES.restored,
            failure=INSEMINATION_MESSAGES.failure("restaurar"),
        ):
            entry = require_undo_entry(self.inseminations)
            restored = await self.inseminations.create(replace(entry.record, id=None))
            for check in entry.dependents:
                await self.checks.create(replace(check, id=None, insemination_id=restored.id))
            self.inseminations.undo.discard(entry)
            logger.info(
                "Restored insemination %s as %s with %d checks",
                entry.record.id,
                restored.id,
                len(entry.dependents),
            )
            return restored

    async def complete_check(self, check_id: str) -> Check | None:
        """Close a check and schedule the following one, if any."""
        async with self.action(
            "complete check",
            success="Chequeo completado exitosamente.",
            failure="Error al completar el chequeo. Por favor, intenta de nuevo.",
        ):
            completed = await self.checks.delete(check_id)
            follow_up = next_check(completed)
            if follow_up is None:
                return None
            return await self.checks.create(follow_up)
