from __future__ import annotations

from typing import Any

from milktrack.application.errors import ValidationError
from milktrack.application.stores.base import (
    EntityMessages,
    reject_future,
    require_fields,
)
from milktrack.application.stores.sub_records import ParentRecordStore
from milktrack.domain.models.cow import COLLECTION, Cow
from milktrack.domain.models.sub_records import (
    FeedingSchedule,
    MilkYield,
    Note,
    Treatment,
    Vaccination,
)
from milktrack.domain.services.schedule import cow_medical_alerts

COW_MESSAGES = EntityMessages(
    noun="la vaca",
    created="Vaca registrada exitosamente",
    updated="Información de la vaca actualizada exitosamente",
    deleted="Vaca eliminada exitosamente",
    restored="Eliminación de vaca deshecha",
)

FUTURE_BIRTH_DATE = "Error: La fecha de nacimiento no puede ser en el futuro"
MISSING_FEEDING_FIELDS = "Por favor, complete todos los campos del horario de alimentación"


class CowStore(ParentRecordStore):
    name = "cows"
    load_failure = "Error al cargar las vacas. Por favor, intente de nuevo."
    messages = COW_MESSAGES

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.parents = self.collection(COLLECTION, Cow)

    @property
    def cows(self) -> list[Cow]:
        return self.parents.items

    def validate(self, cow: Cow) -> None:
        require_fields(
            cow,
            {
                "name": "Por favor, complete todos los campos requeridos",
                "breed": "Por favor, complete todos los campos requeridos",
                "birth_date": "Por favor, complete todos los campos requeridos",
            },
        )
        reject_future(cow.birth_date, self.today(), FUTURE_BIRTH_DATE)

    async def register(self, cow: Cow) -> Cow:
        return await self.create(cow, self.validate)

    async def edit(self, cow_id: str, changes: dict[str, Any]) -> Cow:
        return await self.update(cow_id, changes, self.validate)

    def search(self, query: str) -> Cow | None:
        """Exact, case-insensitive match on id or name."""
        needle = query.strip().lower()
        if not needle:
            return None
        for cow in self.cows:
            if (cow.id or "").lower() == needle or cow.name.lower() == needle:
                return cow
        return None

    def medical_alerts(self) -> list[str]:
        return cow_medical_alerts(self.cows, self.today())

    async def add_vaccination(self, cow_id: str, vaccination: Vaccination) -> Vaccination:
        return await self.add_sub_record(
            cow_id,
            "vaccinations",
            vaccination,
            success="Vacunación agregada exitosamente",
            failure="Error al agregar la vacunación. Por favor, intente de nuevo.",
            validate=lambda r: require_fields(
                r,
                {
                    "type": "Por favor, complete todos los campos de la vacunación",
                    "date": "Por favor, complete todos los campos de la vacunación",
                },
            ),
        )

    async def add_treatment(self, cow_id: str, treatment: Treatment) -> Treatment:
        return await self.add_sub_record(
            cow_id,
            "treatments",
            treatment,
            success="Tratamiento agregado exitosamente",
            failure="Error al agregar el tratamiento. Por favor, intente de nuevo.",
            validate=lambda r: require_fields(
                r,
                {
                    "description": "Por favor, complete todos los campos del tratamiento",
                    "date": "Por favor, complete todos los campos del tratamiento",
                    "medication": "Por favor, complete todos los campos del tratamiento",
                },
            ),
        )

    async def add_milk_production(self, cow_id: str, entry: MilkYield) -> MilkYield:
        return await self.add_sub_record(
            cow_id,
            "milk_production",
            entry,
            success="Producción de leche registrada exitosamente",
            failure="Error al registrar la producción de leche. Por favor, intente de nuevo.",
            validate=lambda r: require_fields(
                r,
                {
                    "date": "Por favor, complete todos los campos de producción de leche",
                    "amount": "Por favor, complete todos los campos de producción de leche",
                },
            ),
        )

    async def add_feeding_schedule(self, cow_id: str, schedule: FeedingSchedule) -> FeedingSchedule:
        return await self.add_sub_record(
            cow_id,
            "feeding_schedule",
            schedule,
            success="Horario de alimentación agregado exitosamente",
            failure="Error al agregar el horario de alimentación. Por favor, intente de nuevo.",
            validate=lambda r: require_fields(
                r, dict.fromkeys(("feed_type", "frequency", "amount"), MISSING_FEEDING_FIELDS)
            ),
        )

    async def add_note(self, cow_id: str, note: Note) -> Note:
        def _validate(record: Note) -> None:
            content = (record.content or "").strip()
            if not content:
                raise ValidationError("Por favor, ingrese una nota válida")
            record.content = content
            if record.date is None:
                record.date = self.today()

        return await self.add_sub_record(
            cow_id,
            "notes",
            note,
            success="Nota agregada exitosamente",
            failure="Error al agregar la nota. Por favor, intente de nuevo.",
            validate=_validate,
        )
