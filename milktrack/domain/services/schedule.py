"""Date arithmetic behind pregnancies, check-ups and vaccinations.

Every function here is pure: the caller passes "today" explicitly.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from milktrack.domain.models.cow import Cow
from milktrack.domain.models.insemination import LAST_CHECK_NUMBER, Check, Insemination
from milktrack.domain.models.pregnant_cow import GESTATION_DAYS, PregnantCow
from milktrack.domain.models.vaccine import VaccinationRecord, VaccineLookup
from milktrack.domain.value_objects.pregnancy import Activity, Health

CHECK_INTERVAL_DAYS = 30
DUE_SOON_DAYS = 30
DIET_ADJUSTMENT_DAYS = 60

# frequency text -> months until the next dose
VACCINATION_FREQUENCIES: dict[str, int] = {
    "anual": 12,
    "semestral": 6,
}

NO_RECURRENCE_REASON = "no recurrence configured"
DELETED_VACCINE_REASON = "vaccine no longer in catalog"
DELETED_VACCINE_NAME = "Vacuna eliminada"


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def due_date(breeding_date: date) -> date:
    return breeding_date + timedelta(days=GESTATION_DAYS)


def days_until(target: date, today: date) -> int:
    return (target - today).days


def progress_percent(breeding_date: date, today: date) -> int:
    elapsed = (today - breeding_date).days
    ratio = Decimal(elapsed) * 100 / Decimal(GESTATION_DAYS)
    percent = int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return max(0, min(percent, 100))


def _days_until_due(cow: PregnantCow, today: date) -> int:
    return days_until(cow.estimated_due_date or due_date(cow.breeding_date), today)


def pregnancy_alerts(cow: PregnantCow, today: date) -> list[str]:
    alerts: list[str] = []
    if _days_until_due(cow, today) <= DUE_SOON_DAYS:
        alerts.append("Preparar para el parto inminente")
    if cow.health == Health.POOR.value:
        alerts.append("Atención médica urgente requerida")
    elif cow.health == Health.FAIR.value:
        alerts.append("Programar revisión veterinaria")
    if cow.activity == Activity.LOW.value:
        alerts.append("Monitorear actividad reducida")
    elif cow.activity == Activity.HIGH.value:
        alerts.append("Vigilar posible estrés por exceso de actividad")
    return alerts


def pregnancy_recommendations(cow: PregnantCow, today: date) -> list[str]:
    remaining = _days_until_due(cow, today)
    recommendations: list[str] = []
    if remaining <= DIET_ADJUSTMENT_DAYS:
        recommendations.append("Ajustar dieta para preparación al parto")
    if remaining <= DUE_SOON_DAYS:
        recommendations.append("Preparar área de parto")
    if cow.health == Health.GOOD.value:
        recommendations.append("Mantener rutina de cuidados actual")
    elif cow.health == Health.FAIR.value:
        recommendations.append("Aumentar supervisión y considerar suplementos")
    else:
        recommendations.append("Seguir estrictamente las indicaciones veterinarias")
    if cow.activity == Activity.NORMAL.value:
        recommendations.append("Mantener nivel de actividad actual")
    elif cow.activity == Activity.LOW.value:
        recommendations.append("Fomentar ejercicio moderado supervisado")
    else:
        recommendations.append("Proporcionar espacios tranquilos para descanso")
    return recommendations


def first_check(insemination: Insemination) -> Check:
    if insemination.id is None:
        raise ValueError("insemination must be persisted before scheduling checks")
    return Check(
        cow_id=insemination.cow_id,
        insemination_id=insemination.id,
        date=insemination.date + timedelta(days=CHECK_INTERVAL_DAYS),
        check_number=1,
    )


def next_check(check: Check) -> Check | None:
    """Follow-up for a completed check, or None once the last check is done."""
    if check.check_number >= LAST_CHECK_NUMBER:
        return None
    return Check(
        cow_id=check.cow_id,
        insemination_id=check.insemination_id,
        date=check.date + timedelta(days=CHECK_INTERVAL_DAYS),
        check_number=check.check_number + 1,
    )


def next_vaccination_date(last_date: date, frequency: str | None) -> date | None:
    months = VACCINATION_FREQUENCIES.get((frequency or "").strip().lower())
    if months is None:
        return None
    return add_months(last_date, months)


@dataclass(slots=True)
class ScheduledVaccination:
    record_id: str | None
    cow_id: str
    vaccine_id: str
    vaccine_name: str
    last_date: date
    next_date: date | None
    vaccine_deleted: bool = False
    reason: str | None = None


@dataclass(slots=True)
class VaccinationSchedule:
    upcoming: list[ScheduledVaccination] = field(default_factory=list)
    overdue: list[ScheduledVaccination] = field(default_factory=list)
    unscheduled: list[ScheduledVaccination] = field(default_factory=list)


def vaccination_schedule(
    records: Iterable[VaccinationRecord],
    vaccines: VaccineLookup,
    today: date,
) -> VaccinationSchedule:
    schedule = VaccinationSchedule()
    for record in records:
        for vaccine_id in record.vaccine_ids:
            vaccine = vaccines.find(vaccine_id)
            if vaccine is None:
                schedule.unscheduled.append(
                    ScheduledVaccination(
                        record_id=record.id,
                        cow_id=record.cow_id,
                        vaccine_id=vaccine_id,
                        vaccine_name=DELETED_VACCINE_NAME,
                        last_date=record.date,
                        next_date=None,
                        vaccine_deleted=True,
                        reason=DELETED_VACCINE_REASON,
                    )
                )
                continue
            next_date = next_vaccination_date(record.date, vaccine.frequency)
            entry = ScheduledVaccination(
                record_id=record.id,
                cow_id=record.cow_id,
                vaccine_id=vaccine_id,
                vaccine_name=vaccine.name,
                last_date=record.date,
                next_date=next_date,
                vaccine_deleted=vaccines.is_deleted(vaccine_id),
            )
            if next_date is None:
                entry.reason = NO_RECURRENCE_REASON
                schedule.unscheduled.append(entry)
            elif next_date >= today:
                schedule.upcoming.append(entry)
            else:
                schedule.overdue.append(entry)
    schedule.upcoming.sort(key=lambda e: e.next_date)
    schedule.overdue.sort(key=lambda e: e.next_date)
    return schedule


def cow_medical_alerts(cows: Iterable[Cow], today: date) -> list[str]:
    alerts: list[str] = []
    for cow in cows:
        for vaccination in cow.vaccinations:
            if vaccination.date is not None and vaccination.date <= today:
                alerts.append(
                    f"Alerta: La vaca {cow.name} (ID: {cow.id}) necesita la vacuna "
                    f"{vaccination.type}"
                )
    return alerts
