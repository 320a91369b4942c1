from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Mapping

from milktrack.domain.value_objects.quantity import to_decimal, to_document_value
from milktrack.utils.datetime_tz import format_date, parse_date

COLLECTION = "pregnantCows"

GESTATION_DAYS = 280


@dataclass(slots=True)
class PregnantCow:
    name: str
    breeding_date: date
    weight: Decimal
    health: str
    activity: str
    estimated_due_date: date | None = None
    notes: list[str] = field(default_factory=list)
    id: str | None = None

    def __post_init__(self) -> None:
        self.refresh_due_date()

    def refresh_due_date(self) -> None:
        """Recompute the persisted due date from the breeding date."""
        if self.breeding_date is None:
            self.estimated_due_date = None
            return
        self.estimated_due_date = self.breeding_date + timedelta(days=GESTATION_DAYS)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "breeding_date": format_date(self.breeding_date),
            "weight": to_document_value(self.weight),
            "health": self.health,
            "activity": self.activity,
            "estimated_due_date": format_date(self.estimated_due_date),
            "notes": list(self.notes),
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> PregnantCow:
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            breeding_date=parse_date(data.get("breeding_date")),
            weight=to_decimal(data.get("weight"), default=Decimal("0")),
            health=data.get("health", ""),
            activity=data.get("activity", ""),
            notes=list(data.get("notes") or []),
        )
