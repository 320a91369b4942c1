from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, ClassVar, Mapping

from milktrack.domain.models.sub_records import (
    FeedingRecord,
    GrowthMilestone,
    Note,
    Vaccination,
)
from milktrack.domain.value_objects.quantity import to_decimal, to_document_value
from milktrack.utils.datetime_tz import format_date, parse_date

COLLECTION = "calves"


@dataclass(slots=True)
class Calf:
    name: str
    birth_date: date
    mother_cow_id: str = ""
    gender: str = "female"
    weight: Decimal = Decimal("0")
    feeding_records: list[FeedingRecord] = field(default_factory=list)
    vaccinations: list[Vaccination] = field(default_factory=list)
    growth_milestones: list[GrowthMilestone] = field(default_factory=list)
    notes: list[Note] = field(default_factory=list)
    id: str | None = None

    SUB_COLLECTIONS: ClassVar[dict[str, tuple[str, type]]] = {
        "feeding_records": ("feeding_records", FeedingRecord),
        "vaccinations": ("vaccinations", Vaccination),
        "growth_milestones": ("growth_milestones", GrowthMilestone),
        "notes": ("notes", Note),
    }

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "birth_date": format_date(self.birth_date),
            "mother_cow_id": self.mother_cow_id,
            "gender": self.gender,
            "weight": to_document_value(self.weight),
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Calf:
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            birth_date=parse_date(data.get("birth_date")),
            mother_cow_id=data.get("mother_cow_id", ""),
            gender=data.get("gender", "female"),
            weight=to_decimal(data.get("weight"), default=Decimal("0")),
        )
