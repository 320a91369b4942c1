from __future__ import annotations

from typing import Any

from milktrack.application.errors import ValidationError
from milktrack.application.stores.base import (
    EntityCollection,
    EntityMessages,
    EntityStore,
)
from milktrack.domain.models.pregnant_cow import COLLECTION, PregnantCow
from milktrack.domain.value_objects.pregnancy import Activity, Health

PREGNANCY_MESSAGES = EntityMessages(
    noun="la vaca",
    created="La vaca ha sido agregada correctamente.",
    updated="Los datos de la vaca han sido actualizados correctamente.",
    deleted="La vaca ha sido eliminada correctamente.",
    restored="La eliminación de la vaca ha sido deshecha.",
)


class PregnancyStore(EntityStore):
    name = "pregnancies"
    load_failure = "No se pudieron cargar las vacas preñadas. Por favor, intenta de nuevo."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.cows = self.collection(COLLECTION, PregnantCow)

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.cows]

    def validate(self, cow: PregnantCow) -> None:
        """Collect every problem instead of stopping at the first one."""
        errors: list[str] = []
        if not (cow.name or "").strip():
            errors.append("El nombre de la vaca es requerido.")
        if cow.breeding_date is None:
            errors.append("La fecha de inseminación es requerida.")
        elif cow.breeding_date > self.today():
            errors.append("La fecha de inseminación no puede ser futura.")
        if cow.weight is None:
            errors.append("El peso de la vaca es requerido.")
        elif cow.weight <= 0:
            errors.append("El peso debe ser un valor positivo.")
        if cow.health not in {h.value for h in Health}:
            errors.append("El estado de salud es requerido.")
        if cow.activity not in {a.value for a in Activity}:
            errors.append("El nivel de actividad física es requerido.")
        if errors:
            raise ValidationError(errors[0], details={"errors": errors})

    async def register(self, cow: PregnantCow) -> PregnantCow:
        return await self.create_in(self.cows, cow, PREGNANCY_MESSAGES, self.validate)

    async def edit(self, cow_id: str, changes: dict[str, Any]) -> PregnantCow:
        # replace() re-runs __post_init__, so the due date follows the breeding date
        return await self.update_in(self.cows, cow_id, changes, PREGNANCY_MESSAGES, self.validate)

    async def remove(self, cow_id: str) -> PregnantCow:
        return await self.delete_in(self.cows, cow_id, PREGNANCY_MESSAGES)

    async def restore(self) -> PregnantCow:
        return await self.restore_in(self.cows, PREGNANCY_MESSAGES)

    async def add_note(self, cow_id: str, note: str) -> PregnantCow:
        async with self.action(
            "add pregnancy note",
            success="La nota ha sido agregada correctamente.",
            failure="Error al agregar la nota. Por favor, intenta de nuevo.",
        ):
            content = (note or "").strip()
            if not content:
                raise ValidationError("La nota no puede estar vacía.")
            current = self.cows.require(cow_id)
            return await self.cows.patch(cow_id, {"notes": [*current.notes, content]})
