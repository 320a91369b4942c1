from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from milktrack.utils.datetime_tz import format_date, parse_date

COLLECTION = "inseminations"
CHECKS_COLLECTION = "checks"

LAST_CHECK_NUMBER = 9


@dataclass(slots=True)
class Insemination:
    cow_id: str
    bull_id: str
    date: date
    has_birthed: bool = False
    notes: str = ""
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        return {
            "cow_id": self.cow_id,
            "bull_id": self.bull_id,
            "date": format_date(self.date),
            "has_birthed": self.has_birthed,
            "notes": self.notes,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Insemination:
        return cls(
            id=doc_id,
            cow_id=data.get("cow_id", ""),
            bull_id=data.get("bull_id", ""),
            date=parse_date(data.get("date")),
            has_birthed=bool(data.get("has_birthed", False)),
            notes=data.get("notes") or "",
        )


@dataclass(slots=True)
class Check:
    """Scheduled pregnancy check-up belonging to one insemination."""

    cow_id: str
    insemination_id: str
    date: date
    check_number: int
    id: str | None = None

    @property
    def is_last(self) -> bool:
        return self.check_number >= LAST_CHECK_NUMBER

    def to_document(self) -> dict[str, Any]:
        return {
            "cow_id": self.cow_id,
            "insemination_id": self.insemination_id,
            "date": format_date(self.date),
            "check_number": self.check_number,
        }

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> Check:
        return cls(
            id=doc_id,
            cow_id=data.get("cow_id", ""),
            insemination_id=data.get("insemination_id", ""),
            date=parse_date(data.get("date")),
            check_number=int(data.get("check_number", 1)),
        )
