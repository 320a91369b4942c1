from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping

from milktrack.domain.value_objects.quantity import to_decimal, to_document_value
from milktrack.utils.datetime_tz import format_date, parse_date


@dataclass(slots=True)
class Vaccination:
    date: date
    type: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"date": format_date(self.date), "type": self.type}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Vaccination:
        return cls(id=doc_id, date=parse_date(data.get("date")), type=data.get("type", ""))


@dataclass(slots=True)
class Treatment:
    date: date
    description: str
    medication: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "date": format_date(self.date),
            "description": self.description,
            "medication": self.medication,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Treatment:
        return cls(
            id=doc_id,
            date=parse_date(data.get("date")),
            description=data.get("description", ""),
            medication=data.get("medication", ""),
        )


@dataclass(slots=True)
class MilkYield:
    """Legacy per-cow yield entry kept on the cow record."""

    date: date
    amount: Decimal
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"date": format_date(self.date), "amount": to_document_value(self.amount)}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> MilkYield:
        return cls(
            id=doc_id,
            date=parse_date(data.get("date")),
            amount=to_decimal(data.get("amount"), default=Decimal("0")),
        )


@dataclass(slots=True)
class FeedingSchedule:
    feed_type: str
    frequency: str
    amount: Decimal
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "feed_type": self.feed_type,
            "frequency": self.frequency,
            "amount": to_document_value(self.amount),
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> FeedingSchedule:
        return cls(
            id=doc_id,
            feed_type=data.get("feed_type", ""),
            frequency=data.get("frequency", ""),
            amount=to_decimal(data.get("amount"), default=Decimal("0")),
        )


@dataclass(slots=True)
class Note:
    date: date
    content: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"date": format_date(self.date), "content": self.content}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Note:
        return cls(id=doc_id, date=parse_date(data.get("date")), content=data.get("content", ""))


@dataclass(slots=True)
class FeedingRecord:
    date: date
    type: str
    amount: Decimal
    unit: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "date": format_date(self.date),
            "type": self.type,
            "amount": to_document_value(self.amount),
            "unit": self.unit,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> FeedingRecord:
        return cls(
            id=doc_id,
            date=parse_date(data.get("date")),
            type=data.get("type", ""),
            amount=to_decimal(data.get("amount"), default=Decimal("0")),
            unit=data.get("unit", "litros"),
        )


@dataclass(slots=True)
class GrowthMilestone:
    date: date
    description: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {"date": format_date(self.date), "description": self.description}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> GrowthMilestone:
        return cls(
            id=doc_id,
            date=parse_date(data.get("date")),
            description=data.get("description", ""),
        )
