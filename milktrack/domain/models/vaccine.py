from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping

from milktrack.utils.datetime_tz import format_date, parse_date

COLLECTION = "vaccines"
RECORDS_COLLECTION = "vaccinationRecords"


@dataclass(slots=True)
class Vaccine:
    name: str
    description: str
    recommended_age: int
    recommended_situation: str
    frequency: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "recommended_age": self.recommended_age,
            "recommended_situation": self.recommended_situation,
            "frequency": self.frequency,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Vaccine:
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            description=data.get("description", ""),
            recommended_age=int(data.get("recommended_age") or 0),
            recommended_situation=data.get("recommended_situation", ""),
            frequency=data.get("frequency", ""),
        )


@dataclass(slots=True)
class VaccinationRecord:
    cow_id: str
    vaccine_ids: list[str]
    date: date
    lot: str
    administrator: str
    notes: str = ""
    side_effects: str | None = None
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "cow_id": self.cow_id,
            "vaccine_ids": list(self.vaccine_ids),
            "date": format_date(self.date),
            "lot": self.lot,
            "administrator": self.administrator,
            "notes": self.notes,
            "side_effects": self.side_effects,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> VaccinationRecord:
        return cls(
            id=doc_id,
            cow_id=data.get("cow_id", ""),
            vaccine_ids=list(data.get("vaccine_ids") or []),
            date=parse_date(data.get("date")),
            lot=data.get("lot", ""),
            administrator=data.get("administrator", ""),
            notes=data.get("notes") or "",
            side_effects=data.get("side_effects"),
        )


@dataclass(slots=True)
class VaccineLookup:
    """Resolves vaccine ids against the catalog, remembering deleted entries."""

    catalog: list[Vaccine]
    deleted: list[Vaccine] = field(default_factory=list)

    def find(self, vaccine_id: str) -> Vaccine | None:
        for vaccine in self.catalog:
            if vaccine.id == vaccine_id:
                return vaccine
        for vaccine in self.deleted:
            if vaccine.id == vaccine_id:
                return vaccine
        return None

    def is_deleted(self, vaccine_id: str) -> bool:
        return not any(v.id == vaccine_id for v in self.catalog)
