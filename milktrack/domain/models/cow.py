from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, ClassVar, Mapping

from milktrack.domain.models.sub_records import (
    FeedingSchedule,
    MilkYield,
    Note,
    Treatment,
    Vaccination,
)
from milktrack.utils.datetime_tz import format_date, parse_date

COLLECTION = "cows"


@dataclass(slots=True)
class Cow:
    name: str
    breed: str
    birth_date: date
    genetic_info: str = ""
    health_history: str = ""
    unique_traits: str = ""
    vaccinations: list[Vaccination] = field(default_factory=list)
    treatments: list[Treatment] = field(default_factory=list)
    milk_production: list[MilkYield] = field(default_factory=list)
    feeding_schedule: list[FeedingSchedule] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    id: str | None = None

    # sub-collection name -> (attribute, record type)
    SUB_COLLECTIONS: ClassVar[dict[str, tuple[str, type]]] = {
        "vaccinations": ("vaccinations", Vaccination),
        "treatments": ("treatments", Treatment),
        "milk_production": ("milk_production", MilkYield),
        "feeding_schedule": ("feeding_schedule", FeedingSchedule),
        "notes": ("notes", Note),
    }

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "breed": self.breed,
            "birth_date": format_date(self.birth_date),
            "genetic_info": self.genetic_info,
            "health_history": self.health_history,
            "unique_traits": self.unique_traits,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Cow:
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            breed=data.get("breed", ""),
            birth_date=parse_date(data.get("birth_date")),
            genetic_info=data.get("genetic_info", ""),
            health_history=data.get("health_history", ""),
            unique_traits=data.get("unique_traits", ""),
        )
