from __future__ import annotations

from decimal import Decimal
from typing import Any

from milktrack.application.errors import ValidationError
from milktrack.application.stores.base import EntityMessages, require_fields
from milktrack.application.stores.sub_records import ParentRecordStore
from milktrack.domain.models.calf import COLLECTION, Calf
from milktrack.domain.models.sub_records import FeedingRecord, GrowthMilestone, Note, Vaccination
from milktrack.domain.value_objects.categories import FeedUnit, Gender

CALF_MESSAGES = EntityMessages(
    noun="la cría",
    created="Cría agregada exitosamente.",
    updated="Cría actualizada exitosamente.",
    deleted="Cría eliminada exitosamente.",
    restored="Cría restaurada exitosamente.",
)

RECORD_ADDED = "Registro agregado exitosamente."


def _record_failure(kind: str) -> str:
    return f"Error al agregar el registro de {kind}. Por favor, intenta de nuevo."


class CalfStore(ParentRecordStore):
    name = "calves"
    load_failure = "Error al cargar las crías. Por favor, intenta de nuevo."
    messages = CALF_MESSAGES

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.parents = self.collection(COLLECTION, Calf)

    @property
    def calves(self) -> list[Calf]:
        return self.parents.items

    def validate(self, calf: Calf) -> None:
        require_fields(
            calf,
            {
                "name": "El nombre de la cría es requerido.",
                "birth_date": "La fecha de nacimiento es requerida.",
            },
        )
        if calf.gender not in {g.value for g in Gender}:
            raise ValidationError("El género debe ser 'male' o 'female'.")
        if calf.weight is not None and calf.weight < 0:
            raise ValidationError("El peso no puede ser negativo.")

    async def register(self, calf: Calf) -> Calf:
        return await self.create(calf, self.validate)

    async def edit(self, calf_id: str, changes: dict[str, Any]) -> Calf:
        return await self.update(calf_id, changes, self.validate)

    async def add_feeding_record(self, calf_id: str, record: FeedingRecord) -> FeedingRecord:
        def _validate(r: FeedingRecord) -> None:
            require_fields(r, {"date": "La fecha es requerida.", "type": "El tipo es requerido."})
            if not isinstance(r.amount, Decimal) or not r.amount.is_finite():
                raise ValidationError("La cantidad debe ser un número válido")
            if r.unit not in {u.value for u in FeedUnit}:
                raise ValidationError("La unidad debe ser 'litros' o 'kilos'.")

        return await self.add_sub_record(
            calf_id,
            "feeding_records",
            record,
            success=RECORD_ADDED,
            failure=_record_failure("alimentación"),
            validate=_validate,
        )

    async def add_vaccination(self, calf_id: str, vaccination: Vaccination) -> Vaccination:
        return await self.add_sub_record(
            calf_id,
            "vaccinations",
            vaccination,
            success=RECORD_ADDED,
            failure=_record_failure("vacunación"),
            validate=lambda r: require_fields(
                r, {"date": "La fecha es requerida.", "type": "El tipo es requerido."}
            ),
        )

    async def add_growth_milestone(
        self, calf_id: str, milestone: GrowthMilestone
    ) -> GrowthMilestone:
        return await self.add_sub_record(
            calf_id,
            "growth_milestones",
            milestone,
            success=RECORD_ADDED,
            failure=_record_failure("hito de crecimiento"),
            validate=lambda r: require_fields(
                r,
                {"date": "La fecha es requerida.", "description": "La descripción es requerida."},
            ),
        )

    async def add_note(self, calf_id: str, note: Note) -> Note:
        def _validate(r: Note) -> None:
            r.content = (r.content or "").strip()
            if not r.content:
                raise ValidationError("La nota no puede estar vacía.")
            if r.date is None:
                r.date = self.today()

        return await self.add_sub_record(
            calf_id,
            "notes",
            note,
            success="Nota agregada exitosamente.",
            failure="Error al agregar la nota. Por favor, intenta de nuevo.",
            validate=_validate,
        )
