from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from milktrack.domain.value_objects.quantity import ZERO, to_decimal, to_document_value
from milktrack.utils.datetime_tz import format_date, parse_date

COWS_COLLECTION = "milkCows"
PRODUCTIONS_COLLECTION = "milkProductions"
INCIDENTS_COLLECTION = "milkIncidents"


@dataclass(slots=True)
class MilkCow:
    name: str
    tag: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"name": self.name, "tag": self.tag}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> MilkCow:
        return cls(id=doc_id, name=data.get("name", ""), tag=data.get("tag", ""))


@dataclass(slots=True)
class MilkQuality:
    fat: Decimal | None = None
    protein: Decimal | None = None


@dataclass(slots=True)
class MilkProductionRecord:
    cow_id: str
    date: date
    morning: Decimal = ZERO
    afternoon: Decimal = ZERO
    evening: Decimal = ZERO
    total: Decimal = ZERO
    quality: MilkQuality | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        # missing amounts count as zero
        self.morning = self.morning if self.morning is not None else ZERO
        self.afternoon = self.afternoon if self.afternoon is not None else ZERO
        self.evening = self.evening if self.evening is not None else ZERO
        self.recompute_total()

    def recompute_total(self) -> None:
        self.total = self.morning + self.afternoon + self.evening

    def to_document(self) -> dict[str, Any]:
        quality = self.quality or MilkQuality()
        return {
            "cow_id": self.cow_id,
            "date": format_date(self.date),
            "morning": to_document_value(self.morning),
            "afternoon": to_document_value(self.afternoon),
            "evening": to_document_value(self.evening),
            "total": to_document_value(self.total),
            "quality": {
                "fat": to_document_value(quality.fat),
                "protein": to_document_value(quality.protein),
            },
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> MilkProductionRecord:
        quality = data.get("quality") or {}
        return cls(
            id=doc_id,
            cow_id=data.get("cow_id", ""),
            date=parse_date(data.get("date")),
            morning=to_decimal(data.get("morning"), default=ZERO),
            afternoon=to_decimal(data.get("afternoon"), default=ZERO),
            evening=to_decimal(data.get("evening"), default=ZERO),
            quality=MilkQuality(
                fat=to_decimal(quality.get("fat")),
                protein=to_decimal(quality.get("protein")),
            ),
        )


@dataclass(slots=True)
class MilkIncident:
    date: date
    description: str
    type: str = "other"
    # None means the incident concerns the whole herd
    cow_id: str | None = None
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "cow_id": self.cow_id,
            "date": format_date(self.date),
            "description": self.description,
            "type": self.type,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> MilkIncident:
        return cls(
            id=doc_id,
            cow_id=data.get("cow_id"),
            date=parse_date(data.get("date")),
            description=data.get("description", ""),
            type=data.get("type") or "other",
        )
