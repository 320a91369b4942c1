from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from milktrack.application.errors import ValidationError
from milktrack.application.stores.base import (
    EntityCollection,
    EntityMessages,
    EntityStore,
    reject_future,
    require_fields,
    require_undo_entry,
)
from milktrack.domain.models.vaccine import (
    COLLECTION,
    RECORDS_COLLECTION,
    VaccinationRecord,
    Vaccine,
    VaccineLookup,
)
from milktrack.domain.services.schedule import VaccinationSchedule, vaccination_schedule

logger = logging.getLogger(__name__)

VACCINE_MESSAGES = EntityMessages(
    noun="la vacuna",
    created="Nueva vacuna añadida exitosamente.",
    updated="Vacuna actualizada exitosamente.",
    deleted="Vacuna eliminada permanentemente del catálogo.",
    restored="Vacuna restaurada exitosamente.",
)

RECORD_MESSAGES = EntityMessages(
    noun="el registro de vacunación",
    created="Registro de vacunación añadido exitosamente.",
    updated="Registro de vacunación actualizado exitosamente.",
    deleted="Registro de vacunación eliminado exitosamente.",
    restored="Registro de vacunación restaurado exitosamente.",
)

MISSING_VACCINE_FIELDS = "Por favor, complete todos los campos de la vacuna."
MISSING_RECORD_FIELDS = "Por favor, complete todos los campos requeridos."
FUTURE_VACCINATION = "La fecha de vacunación no puede ser superior a la fecha actual."


class VaccineStore(EntityStore):
    """Vaccine catalog and the vaccination records that reference it."""

    name = "vaccines"
    load_failure = "Error al cargar las vacunas. Por favor, intenta de nuevo."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.vaccines = self.collection(COLLECTION, Vaccine)
        self.records = self.collection(RECORDS_COLLECTION, VaccinationRecord)
        # catalog entries deleted in this session, still shown on old records
        self.deleted_vaccines: list[Vaccine] = []

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.vaccines, self.records]

    def lookup(self) -> VaccineLookup:
        return VaccineLookup(catalog=self.vaccines.items, deleted=self.deleted_vaccines)

    def schedule(self) -> VaccinationSchedule:
        return vaccination_schedule(self.records.items, self.lookup(), self.today())

    def validate_vaccine(self, vaccine: Vaccine) -> None:
        require_fields(
            vaccine,
            {
                "name": MISSING_VACCINE_FIELDS,
                "description": MISSING_VACCINE_FIELDS,
                "recommended_age": MISSING_VACCINE_FIELDS,
                "recommended_situation": MISSING_VACCINE_FIELDS,
                "frequency": MISSING_VACCINE_FIELDS,
            },
        )
        if vaccine.recommended_age < 0:
            raise ValidationError("La edad recomendada no puede ser negativa.")

    def validate_record(self, record: VaccinationRecord) -> None:
        require_fields(
            record,
            {
                "cow_id": MISSING_RECORD_FIELDS,
                "vaccine_ids": MISSING_RECORD_FIELDS,
                "date": MISSING_RECORD_FIELDS,
                "lot": MISSING_RECORD_FIELDS,
                "administrator": MISSING_RECORD_FIELDS,
            },
        )
        reject_future(record.date, self.today(), FUTURE_VACCINATION)

    async def add_vaccine(self, vaccine: Vaccine) -> Vaccine:
        return await self.create_in(self.vaccines, vaccine, VACCINE_MESSAGES, self.validate_vaccine)

    async def edit_vaccine(self, vaccine_id: str, changes: dict[str, Any]) -> Vaccine:
        return await self.update_in(
            self.vaccines, vaccine_id, changes, VACCINE_MESSAGES, self.validate_vaccine
        )

    async def delete_vaccine(self, vaccine_id: str) -> Vaccine:
        """Remove a catalog entry; records pointing at it are left as they are."""
        removed = await self.delete_in(self.vaccines, vaccine_id, VACCINE_MESSAGES)
        self.deleted_vaccines.append(removed)
        return removed

    async def restore_vaccine(self) -> Vaccine:
        """Re-create the last deleted vaccine and point its records at the new id."""
        async with self.action(
            "restore vaccine",
            success=VACCINE_MESSAGES.restored,
            failure=VACCINE_MESSAGES.failure("restaurar"),
        ):
            entry = require_undo_entry(self.vaccines)
            old_id = entry.record.id
            restored = await self.vaccines.create(replace(entry.record, id=None))
            for record in list(self.records.items):
                if old_id in record.vaccine_ids:
                    vaccine_ids = [restored.id if v == old_id else v for v in record.vaccine_ids]
                    await self.records.patch(record.id, {"vaccine_ids": vaccine_ids})
            self.vaccines.undo.discard(entry)
            self.deleted_vaccines = [v for v in self.deleted_vaccines if v.id != old_id]
            logger.info("Restored vaccine %s as %s", old_id, restored.id)
            return restored

    async def add_record(self, record: VaccinationRecord) -> VaccinationRecord:
        return await self.create_in(self.records, record, RECORD_MESSAGES, self.validate_record)

    async def edit_record(self, record_id: str, changes: dict[str, Any]) -> VaccinationRecord:
        """Full rewrite of a record; the document is created again if it vanished."""
        async with self.action(
            "update vaccination record",
            success=RECORD_MESSAGES.updated,
            failure=RECORD_MESSAGES.failure("actualizar"),
        ):
            updated = replace(self.records.require(record_id), **changes)
            self.validate_record(updated)
            return await self.records.upsert(updated)

    async def record_side_effects(
        self, record_id: str, side_effects: str | None
    ) -> VaccinationRecord:
        async with self.action(
            "record side effects",
            success="Efectos secundarios registrados exitosamente.",
            failure="Error al registrar los efectos secundarios. Por favor, intenta de nuevo.",
        ):
            return await self.records.patch(record_id, {"side_effects": side_effects or None})

    async def delete_record(self, record_id: str) -> VaccinationRecord:
        return await self.delete_in(self.records, record_id, RECORD_MESSAGES)

    async def restore_record(self) -> VaccinationRecord:
        return await self.restore_in(self.records, RECORD_MESSAGES)
