from __future__ import annotations

from datetime import date
from decimal import Decimal

from milktrack.domain.models.milk_production import MilkCow, MilkProductionRecord
from milktrack.domain.services.production import (
    ProductionPeriod,
    daily_totals,
    monthly_averages,
    production_details,
    production_series,
    week_bucket,
    weekly_averages,
)


def _record(cow_id: str, day: date, morning: str, evening: str = "0") -> MilkProductionRecord:
    return MilkProductionRecord(
        cow_id=cow_id, date=day, morning=Decimal(morning), evening=Decimal(evening)
    )


RECORDS = [
    _record("c1", date(2024, 5, 1), "10", "5"),
    _record("c2", date(2024, 5, 1), "8"),
    _record("c1", date(2024, 5, 9), "12"),
    _record("c1", date(2024, 6, 2), "7", "3.5"),
]


def test_total_is_sum_of_shifts():
    record = MilkProductionRecord(
        cow_id="c1", date=date(2024, 5, 1), morning=None, evening=Decimal("4")
    )
    assert record.morning == Decimal("0")
    assert record.total == Decimal("4")


def test_week_bucket_uses_day_of_month():
    assert week_bucket(date(2024, 5, 1)) == "2024-W1"
    assert week_bucket(date(2024, 5, 7)) == "2024-W1"
    assert week_bucket(date(2024, 5, 8)) == "2024-W2"
    assert week_bucket(date(2024, 5, 31)) == "2024-W5"


def test_daily_totals_sum_records_per_date():
    points = daily_totals(RECORDS)
    assert [(p.label, p.total) for p in points] == [
        ("2024-05-01", Decimal("23")),
        ("2024-05-09", Decimal("12")),
        ("2024-06-02", Decimal("10.5")),
    ]


def test_weekly_averages_are_means_not_sums():
    points = weekly_averages(RECORDS)
    # W1 mixes May 1 and June 2 records: (15 + 8 + 10.5) / 3
    assert [(p.label, p.total) for p in points] == [
        ("2024-W1", Decimal("11.17")),
        ("2024-W2", Decimal("12.00")),
    ]


def test_monthly_averages():
    points = monthly_averages(RECORDS)
    assert [(p.label, p.total) for p in points] == [
        ("2024-05", Decimal("11.67")),
        ("2024-06", Decimal("10.50")),
    ]


def test_production_series_dispatches_on_period():
    assert production_series(RECORDS, "daily") == daily_totals(RECORDS)
    assert production_series(RECORDS, ProductionPeriod.MONTHLY) == monthly_averages(RECORDS)


def test_production_details_label_unknown_cows():
    cows = [MilkCow(name="Blanca", tag="A-1", id="c1")]
    details = production_details(RECORDS, cows, date(2024, 5, 1))
    assert [(d.cow_id, d.cow_name, d.total) for d in details] == [
        ("c1", "Blanca", Decimal("15")),
        ("c2", "Desconocido", Decimal("8")),
    ]
