from __future__ import annotations

from datetime import date
from typing import Any

from milktrack.application.errors import ValidationError
from milktrack.application.stores.base import (
    EntityCollection,
    EntityMessages,
    EntityStore,
    require_fields,
)
from milktrack.domain.models.milk_production import (
    COWS_COLLECTION,
    INCIDENTS_COLLECTION,
    PRODUCTIONS_COLLECTION,
    MilkCow,
    MilkIncident,
    MilkProductionRecord,
)
from milktrack.domain.services.production import (
    ProductionDetail,
    ProductionPeriod,
    ProductionPoint,
    production_details,
    production_series,
)
from milktrack.domain.value_objects.categories import IncidentType

MILK_COW_MESSAGES = EntityMessages(
    noun="la vaca",
    created="Vaca agregada exitosamente.",
    updated="Vaca actualizada exitosamente.",
    deleted="Vaca eliminada exitosamente.",
    restored="Eliminación de vaca deshecha.",
)

PRODUCTION_MESSAGES = EntityMessages(
    noun="el registro de producción",
    created="Producción de leche registrada exitosamente.",
    updated="Producción actualizada exitosamente.",
    deleted="Registro de producción eliminado exitosamente.",
    restored="Eliminación de registro de producción deshecha.",
)

INCIDENT_MESSAGES = EntityMessages(
    noun="el incidente",
    created="Incidente registrado exitosamente.",
    updated="Incidente actualizado exitosamente.",
    deleted="Incidente eliminado exitosamente.",
    restored="Eliminación de incidente deshecha.",
)

GENERAL_INCIDENT = "general"


class MilkStore(EntityStore):
    """Milking herd, daily production records and milking incidents."""

    name = "milk"
    load_failure = "Error al cargar los datos. Por favor, intente de nuevo."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.cows = self.collection(COWS_COLLECTION, MilkCow)
        self.productions = self.collection(PRODUCTIONS_COLLECTION, MilkProductionRecord)
        self.incidents = self.collection(INCIDENTS_COLLECTION, MilkIncident)

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.cows, self.productions, self.incidents]

    # Validation

    def validate_cow(self, cow: MilkCow) -> None:
        message = "Por favor, complete todos los campos de la vaca."
        require_fields(cow, {"name": message, "tag": message})

    def validate_production(self, record: MilkProductionRecord) -> None:
        message = "Por favor, seleccione una vaca y una fecha."
        require_fields(record, {"cow_id": message, "date": message})
        for amount in (record.morning, record.afternoon, record.evening):
            if amount < 0:
                raise ValidationError("Las cantidades de leche no pueden ser negativas.")
        record.recompute_total()

    def validate_incident(self, incident: MilkIncident) -> None:
        message = "Por favor, complete todos los campos del incidente."
        require_fields(incident, {"date": message, "description": message})
        if not incident.type:
            incident.type = IncidentType.OTHER.value
        if incident.type not in {t.value for t in IncidentType}:
            raise ValidationError("Tipo de incidente no válido.")
        if incident.cow_id in ("", GENERAL_INCIDENT):
            incident.cow_id = None

    # Milk cows

    async def add_cow(self, cow: MilkCow) -> MilkCow:
        return await self.create_in(self.cows, cow, MILK_COW_MESSAGES, self.validate_cow)

    async def edit_cow(self, cow_id: str, changes: dict[str, Any]) -> MilkCow:
        return await self.update_in(
            self.cows, cow_id, changes, MILK_COW_MESSAGES, self.validate_cow
        )

    async def delete_cow(self, cow_id: str) -> MilkCow:
        return await self.delete_in(self.cows, cow_id, MILK_COW_MESSAGES)

    async def restore_cow(self) -> MilkCow:
        return await self.restore_in(self.cows, MILK_COW_MESSAGES)

    # Production records

    async def add_production(self, record: MilkProductionRecord) -> MilkProductionRecord:
        return await self.create_in(
            self.productions, record, PRODUCTION_MESSAGES, self.validate_production
        )

    async def edit_production(
        self, record_id: str, changes: dict[str, Any]
    ) -> MilkProductionRecord:
        # replace() re-runs __post_init__, keeping total in step with the shifts
        return await self.update_in(
            self.productions, record_id, changes, PRODUCTION_MESSAGES, self.validate_production
        )

    async def delete_production(self, record_id: str) -> MilkProductionRecord:
        return await self.delete_in(self.productions, record_id, PRODUCTION_MESSAGES)

    async def restore_production(self) -> MilkProductionRecord:
        return await self.restore_in(self.productions, PRODUCTION_MESSAGES)

    def series(self, period: ProductionPeriod | str) -> list[ProductionPoint]:
        return production_series(self.productions.items, period)

    def details(self, day: date) -> list[ProductionDetail]:
        return production_details(self.productions.items, self.cows.items, day)

    # Incidents

    async def add_incident(self, incident: MilkIncident) -> MilkIncident:
        return await self.create_in(
            self.incidents, incident, INCIDENT_MESSAGES, self.validate_incident
        )

    async def edit_incident(self, incident_id: str, changes: dict[str, Any]) -> MilkIncident:
        return await self.update_in(
            self.incidents, incident_id, changes, INCIDENT_MESSAGES, self.validate_incident
        )

    async def delete_incident(self, incident_id: str) -> MilkIncident:
        return await self.delete_in(self.incidents, incident_id, INCIDENT_MESSAGES)

    async def restore_incident(self) -> MilkIncident:
        return await self.restore_in(self.incidents, INCIDENT_MESSAGES)
