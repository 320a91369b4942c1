from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable

from milktrack.domain.models.milk_production import MilkCow, MilkProductionRecord
from milktrack.domain.value_objects.quantity import ZERO, round_cents

UNKNOWN_COW_LABEL = "Desconocido"


class ProductionPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(slots=True)
class ProductionPoint:
    label: str
    total: Decimal


@dataclass(slots=True)
class ProductionDetail:
    cow_id: str
    cow_name: str
    total: Decimal


def week_bucket(day: date) -> str:
    # Week of the month, not ISO week
    return f"{day.year}-W{(day.day - 1) // 7 + 1}"


def month_bucket(day: date) -> str:
    return day.isoformat()[:7]


def daily_totals(records: Iterable[MilkProductionRecord]) -> list[ProductionPoint]:
    totals: dict[str, Decimal] = {}
    for record in records:
        key = record.date.isoformat()
        totals[key] = totals.get(key, ZERO) + record.total
    return sorted(
        (ProductionPoint(label=key, total=value) for key, value in totals.items()),
        key=lambda p: p.label,
    )


def _bucket_means(records: Iterable[MilkProductionRecord], bucket) -> list[ProductionPoint]:
    sums: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    for record in records:
        key = bucket(record.date)
        sums[key] = sums.get(key, ZERO) + record.total
        counts[key] = counts.get(key, 0) + 1
    points = [
        ProductionPoint(label=key, total=round_cents(sums[key] / counts[key])) for key in sums
    ]
    return sorted(points, key=lambda p: p.label)


def weekly_averages(records: Iterable[MilkProductionRecord]) -> list[ProductionPoint]:
    """Mean record total per week-of-month bucket."""
    return _bucket_means(records, week_bucket)


def monthly_averages(records: Iterable[MilkProductionRecord]) -> list[ProductionPoint]:
    """Mean record total per calendar month."""
    return _bucket_means(records, month_bucket)


def production_series(
    records: Iterable[MilkProductionRecord], period: ProductionPeriod | str
) -> list[ProductionPoint]:
    period = ProductionPeriod(period)
    if period is ProductionPeriod.DAILY:
        return daily_totals(records)
    if period is ProductionPeriod.WEEKLY:
        return weekly_averages(records)
    return monthly_averages(records)


def production_details(
    records: Iterable[MilkProductionRecord],
    cows: Iterable[MilkCow],
    day: date,
) -> list[ProductionDetail]:
    names = {cow.id: cow.name for cow in cows}
    return [
        ProductionDetail(
            cow_id=record.cow_id,
            cow_name=names.get(record.cow_id, UNKNOWN_COW_LABEL),
            total=record.total,
        )
        for record in records
        if record.date == day
    ]
