from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from milktrack.application.errors import ConflictError, GatewayError, NotFound, ValidationError
from milktrack.application.interfaces.gateway import ParentRef, collection_path
from milktrack.application.stores.base import StoreOptions
from milktrack.application.stores.calves import CalfStore
from milktrack.application.stores.cows import FUTURE_BIRTH_DATE, CowStore
from milktrack.application.stores.milk import MilkStore
from milktrack.application.stores.notices import NoticeKind
from milktrack.application.stores.pregnancies import PregnancyStore
from milktrack.application.stores.preferences import PreferencesStore
from milktrack.application.stores.reproduction import ReproductionStore
from milktrack.application.stores.vaccines import FUTURE_VACCINATION, VaccineStore
from milktrack.domain.models.calf import Calf
from milktrack.domain.models.cow import Cow
from milktrack.domain.models.insemination import Check, Insemination
from milktrack.domain.models.milk_production import MilkIncident, MilkProductionRecord
from milktrack.domain.models.pregnant_cow import PregnantCow
from milktrack.domain.models.sub_records import FeedingRecord, Note, Vaccination
from milktrack.domain.models.vaccine import VaccinationRecord, Vaccine

OWNER = "owner-1"


def _cow(name: str = "Manchas") -> Cow:
    return Cow(name=name, breed="Holstein", birth_date=date(2020, 3, 1))


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


async def test_create_appends_without_refetch(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    cow = await store.register(_cow())
    assert cow.id is not None
    assert store.cows == [cow]
    assert [op for op, _ in gateway.calls] == ["create"]
    assert store.notices.current().kind is NoticeKind.SUCCESS


async def test_validation_runs_before_any_gateway_call(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    future = Cow(name="Nube", breed="Jersey", birth_date=date(2024, 6, 16))
    with pytest.raises(ValidationError) as exc:
        await store.register(future)
    assert exc.value.message == FUTURE_BIRTH_DATE
    assert gateway.calls == []
    assert store.cows == []
    assert store.notices.current().message == FUTURE_BIRTH_DATE
    assert store.busy is False


async def test_gateway_failure_leaves_cache_untouched(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    cow = await store.register(_cow())
    gateway.failing = {"update"}
    with pytest.raises(GatewayError):
        await store.edit(cow.id, {"breed": "Jersey"})
    assert store.cows[0].breed == "Holstein"
    notice = store.notices.current()
    assert notice.kind is NoticeKind.ERROR
    assert notice.message == "Error al actualizar la vaca. Por favor, intenta de nuevo."


async def test_update_of_unknown_id_is_not_found(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    with pytest.raises(NotFound):
        await store.edit("missing", {"breed": "Jersey"})


async def test_load_failure_keeps_previous_cache(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    await store.register(_cow())
    gateway.failing = {"list"}
    assert await store.load() is False
    assert [c.name for c in store.cows] == ["Manchas"]
    assert store.notices.current().message == store.load_failure


async def test_second_action_while_busy_is_rejected(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    store.busy = True
    with pytest.raises(ConflictError) as exc:
        await store.register(_cow())
    assert exc.value.code == "store_busy"
    assert exc.value.details == {"store": store.name}
    with pytest.raises(ConflictError):
        await store.reconcile()
    assert gateway.calls == []


async def test_search_matches_id_or_name_exactly(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    cow = await store.register(_cow("Manchas"))
    assert store.search("manchas") is cow
    assert store.search(cow.id.upper()) is cow
    assert store.search("Manch") is None


async def test_restore_mints_new_id_and_single_slot_wins(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    first = await store.register(_cow("A"))
    second = await store.register(_cow("B"))
    await store.delete(first.id)
    await store.delete(second.id)

    restored = await store.restore()
    assert restored.name == "B"
    assert restored.id not in (first.id, second.id)
    assert not store.can_undo
    with pytest.raises(NotFound):
        await store.restore()


async def test_failed_restore_keeps_entry_for_retry(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    cow = await store.register(_cow())
    await store.delete(cow.id)
    gateway.failing = {"create"}
    with pytest.raises(GatewayError):
        await store.restore()
    assert store.can_undo
    gateway.failing = set()
    restored = await store.restore()
    assert restored.name == cow.name
    assert not store.can_undo


async def test_cow_delete_cascades_and_restore_repoints_sub_records(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    cow = await store.register(_cow())
    note = await store.add_note(cow.id, Note(date=None, content="  Revisar pezuña "))
    await store.add_vaccination(cow.id, Vaccination(date=date(2024, 6, 1), type="Aftosa"))
    assert note.content == "Revisar pezuña"
    assert note.date == date(2024, 6, 15)
    old_ref = ParentRef("cows", cow.id)
    assert len(gateway.docs(OWNER, "notes", old_ref)) == 1

    await store.delete(cow.id)
    assert store.cows == []
    assert gateway.docs(OWNER, "notes", old_ref) == {}
    assert gateway.docs(OWNER, "vaccinations", old_ref) == {}

    restored = await store.restore()
    new_ref = ParentRef("cows", restored.id)
    assert [n.content for n in restored.notes] == ["Revisar pezuña"]
    assert [v.type for v in restored.vaccinations] == ["Aftosa"]
    assert len(gateway.docs(OWNER, "notes", new_ref)) == 1

    reloaded = CowStore(gateway, OWNER, today=today)
    assert await reloaded.load() is True
    assert [v.type for v in reloaded.cows[0].vaccinations] == ["Aftosa"]
    assert reloaded.medical_alerts() == [
        f"Alerta: La vaca Manchas (ID: {restored.id}) necesita la vacuna Aftosa"
    ]


async def test_sub_record_for_unknown_parent(gateway, today):
    store = CowStore(gateway, OWNER, today=today)
    with pytest.raises(NotFound):
        await store.add_note("missing", Note(date=None, content="hola"))


async def test_calf_feeding_amount_must_be_numeric(gateway, today):
    store = CalfStore(gateway, OWNER, today=today)
    calf = await store.register(Calf(name="Pinta", birth_date=date(2024, 5, 1)))
    with pytest.raises(ValidationError) as exc:
        await store.add_feeding_record(
            calf.id, FeedingRecord(date=date(2024, 6, 1), type="Heno", amount=None, unit="kilos")
        )
    assert exc.value.message == "La cantidad debe ser un número válido"
    record = await store.add_feeding_record(
        calf.id,
        FeedingRecord(date=date(2024, 6, 1), type="Heno", amount=Decimal("2.5"), unit="kilos"),
    )
    assert store.calves[0].feeding_records == [record]


async def test_calf_weight_cannot_be_negative(gateway, today):
    store = CalfStore(gateway, OWNER, today=today)
    with pytest.raises(ValidationError):
        await store.register(Calf(name="Pinta", birth_date=date(2024, 5, 1), weight=Decimal("-1")))


async def test_stale_store_reloads_on_access(gateway, today):
    clock = FakeClock()
    store = CalfStore(
        gateway,
        OWNER,
        options=StoreOptions(stale_after_seconds=60),
        clock=clock,
        today=today,
    )
    await store.ensure_fresh()
    gateway.paths.setdefault(collection_path(OWNER, "calves"), {})["ext-1"] = {
        "name": "Pinta",
        "birth_date": "2024-05-01",
        "gender": "female",
        "weight": "35",
    }
    await store.ensure_fresh()
    assert store.calves == []

    clock.now += timedelta(seconds=61)
    await store.ensure_fresh()
    assert [c.name for c in store.calves] == ["Pinta"]


async def test_writes_are_rejected_while_stale_reload_runs(gateway, today):
    clock = FakeClock()
    store = CowStore(
        gateway, OWNER, options=StoreOptions(stale_after_seconds=60), clock=clock, today=today
    )
    await store.ensure_fresh()
    await store.register(_cow("Luna"))

    entered = asyncio.Event()
    release = asyncio.Event()
    plain_list = gateway.list

    async def slow_list(*args, **kwargs):
        entered.set()
        await release.wait()
        return await plain_list(*args, **kwargs)

    gateway.list = slow_list
    clock.now += timedelta(seconds=61)
    reload = asyncio.create_task(store.ensure_fresh())
    await entered.wait()

    assert store.busy is True
    with pytest.raises(ConflictError):
        await store.register(_cow("Estrella"))
    release.set()
    await reload

    assert store.busy is False
    await store.register(_cow("Estrella"))
    assert sorted(c.name for c in store.cows) == ["Estrella", "Luna"]
    assert len(gateway.docs(OWNER, "cows")) == len(store.cows)


async def test_notice_expires_after_ttl(gateway, today):
    clock = FakeClock()
    store = CowStore(
        gateway, OWNER, options=StoreOptions(notice_ttl_seconds=8), clock=clock, today=today
    )
    await store.register(_cow())
    clock.now += timedelta(seconds=7)
    assert store.notices.current() is not None
    clock.now += timedelta(seconds=1)
    assert store.notices.current() is None


async def test_pregnancy_validation_reports_every_error(gateway, today):
    store = PregnancyStore(gateway, OWNER, today=today)
    invalid = PregnantCow(
        name=" ",
        breeding_date=date(2024, 7, 1),
        weight=Decimal("0"),
        health="",
        activity="Normal",
    )
    with pytest.raises(ValidationError) as exc:
        await store.register(invalid)
    assert exc.value.details["errors"] == [
        "El nombre de la vaca es requerido.",
        "La fecha de inseminación no puede ser futura.",
        "El peso debe ser un valor positivo.",
        "El estado de salud es requerido.",
    ]
    assert gateway.calls == []


async def test_pregnancy_edit_moves_due_date_and_notes_append(gateway, today):
    store = PregnancyStore(gateway, OWNER, today=today)
    cow = await store.register(
        PregnantCow(
            name="Lola",
            breeding_date=date(2024, 1, 1),
            weight=Decimal("510"),
            health="Buena",
            activity="Normal",
        )
    )
    updated = await store.edit(cow.id, {"breeding_date": date(2024, 2, 1)})
    assert updated.estimated_due_date == date(2024, 11, 7)
    doc = gateway.docs(OWNER, "pregnantCows")[cow.id]
    assert doc["estimated_due_date"] == "2024-11-07"

    await store.add_note(cow.id, "Revisión ok")
    noted = await store.add_note(cow.id, "Come bien")
    assert noted.notes == ["Revisión ok", "Come bien"]
    assert gateway.docs(OWNER, "pregnantCows")[cow.id]["notes"] == ["Revisión ok", "Come bien"]


async def test_insemination_lifecycle(gateway, today):
    store = ReproductionStore(gateway, OWNER, today=today)
    ins = await store.record(Insemination(cow_id="cow-1", bull_id="bull-7", date=date(2024, 1, 1)))
    [check] = store.checks_for(ins.id)
    assert (check.check_number, check.date) == (1, date(2024, 1, 31))

    follow_up = await store.complete_check(check.id)
    assert (follow_up.check_number, follow_up.date) == (2, date(2024, 3, 1))
    assert store.checks_for(ins.id) == [follow_up]

    await store.edit(ins.id, {"cow_id": "cow-2"})
    assert store.checks_for(ins.id)[0].cow_id == "cow-2"

    await store.delete(ins.id)
    assert store.checks.items == []
    assert gateway.docs(OWNER, "checks") == {}

    restored = await store.restore()
    assert restored.id != ins.id
    [moved] = store.checks_for(restored.id)
    assert (moved.check_number, moved.cow_id) == (2, "cow-2")

    birthed = await store.mark_birthed(restored.id)
    assert birthed.has_birthed is True
    assert store.checks_for(restored.id) == []


async def test_completing_last_check_schedules_nothing(gateway, today):
    store = ReproductionStore(gateway, OWNER, today=today)
    last = await store.checks.create(
        Check(cow_id="cow-1", insemination_id="ins-1", date=date(2024, 9, 1), check_number=9)
    )
    assert await store.complete_check(last.id) is None
    assert store.checks.items == []


async def test_deleted_vaccine_still_resolves_in_schedule(gateway, today):
    store = VaccineStore(gateway, OWNER, today=today)
    vaccine = await store.add_vaccine(Vaccine("Aftosa", "Fiebre aftosa", 6, "Todas", "anual"))
    record = await store.add_record(
        VaccinationRecord("cow-1", [vaccine.id], date(2023, 6, 1), "L-1", "Dr. Ruiz")
    )
    await store.delete_vaccine(vaccine.id)

    schedule = store.schedule()
    [overdue] = schedule.overdue
    assert overdue.record_id == record.id
    assert overdue.vaccine_deleted is True
    assert overdue.next_date == date(2024, 6, 1)

    restored = await store.restore_vaccine()
    assert store.deleted_vaccines == []
    assert store.records.items[0].vaccine_ids == [restored.id]
    assert gateway.docs(OWNER, "vaccinationRecords")[record.id]["vaccine_ids"] == [restored.id]

    [overdue] = store.schedule().overdue
    assert overdue.vaccine_id == restored.id
    assert overdue.vaccine_deleted is False
    assert store.schedule().unscheduled == []


async def test_records_of_unknown_vaccines_stay_in_schedule(gateway, today):
    gateway.paths[collection_path(OWNER, "vaccinationRecords")] = {
        "rec-1": {
            "cow_id": "cow-1",
            "vaccine_ids": ["gone"],
            "date": "2024-01-10",
            "lot": "L-1",
            "administrator": "Ana",
        }
    }
    store = VaccineStore(gateway, OWNER, today=today)
    await store.load()

    [entry] = store.schedule().unscheduled
    assert entry.record_id == "rec-1"
    assert entry.vaccine_deleted is True
    assert entry.next_date is None


async def test_vaccine_undo_with_nothing_deleted_posts_notice(gateway, today):
    store = VaccineStore(gateway, OWNER, today=today)
    with pytest.raises(NotFound) as exc:
        await store.restore_vaccine()
    assert exc.value.code == "nothing_to_undo"
    assert store.notices.current().kind is NoticeKind.ERROR
    assert store.busy is False


async def test_vaccination_record_rules(gateway, today):
    store = VaccineStore(gateway, OWNER, today=today)
    with pytest.raises(ValidationError) as exc:
        await store.add_record(VaccinationRecord("cow-1", ["v-1"], date(2024, 6, 16), "L-1", "Ana"))
    assert exc.value.message == FUTURE_VACCINATION
    with pytest.raises(ValidationError):
        await store.add_record(VaccinationRecord("cow-1", [], date(2024, 6, 1), "L-1", "Ana"))

    record = await store.add_record(
        VaccinationRecord("cow-1", ["v-1"], date(2024, 6, 1), "L-1", "Ana")
    )
    await store.record_side_effects(record.id, "Fiebre leve")
    assert gateway.docs(OWNER, "vaccinationRecords")[record.id]["side_effects"] == "Fiebre leve"

    del gateway.paths[collection_path(OWNER, "vaccinationRecords")][record.id]
    edited = await store.edit_record(record.id, {"lot": "L-2"})
    assert gateway.docs(OWNER, "vaccinationRecords")[record.id]["lot"] == "L-2"
    assert edited.side_effects == "Fiebre leve"


async def test_milk_production_totals_and_incident_defaults(gateway, today):
    store = MilkStore(gateway, OWNER, today=today)
    record = await store.add_production(
        MilkProductionRecord(cow_id="c1", date=date(2024, 6, 1), morning=Decimal("10.5"))
    )
    assert record.total == Decimal("10.5")
    updated = await store.edit_production(record.id, {"evening": Decimal("4")})
    assert updated.total == Decimal("14.5")
    with pytest.raises(ValidationError):
        await store.edit_production(record.id, {"morning": Decimal("-1")})

    incident = await store.add_incident(
        MilkIncident(date=date(2024, 6, 2), description="Corte de luz", type="", cow_id="general")
    )
    assert incident.type == "other"
    assert incident.cow_id is None


async def test_notification_preferences_default_and_upsert(gateway, today):
    store = PreferencesStore(gateway, OWNER, today=today)
    await store.load()
    assert (store.notifications.email, store.notifications.sms, store.notifications.app) == (
        True,
        False,
        True,
    )
    await store.update_notifications({"email": False})
    assert gateway.docs(OWNER, "settings")["notifications"] == {
        "email": False,
        "sms": False,
        "app": True,
    }
    assert store.notifications.email is False
