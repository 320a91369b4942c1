from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from milktrack.application.stores.vaccines import VaccineStore
from milktrack.domain.models.vaccine import VaccinationRecord, Vaccine
from milktrack.interfaces.http.deps import get_vaccine_store
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.vaccines import (
    SideEffectsUpdate,
    VaccinationRecordCreate,
    VaccinationRecordListResponse,
    VaccinationRecordResponse,
    VaccinationRecordUpdate,
    VaccinationScheduleResponse,
    VaccineCreate,
    VaccineListResponse,
    VaccineResponse,
    VaccineUpdate,
)

router = APIRouter(prefix="/vaccines", tags=["vaccines"])


def _catalog(store: VaccineStore) -> VaccineListResponse:
    return VaccineListResponse(
        items=[VaccineResponse.model_validate(v) for v in store.vaccines.items],
        deleted=[VaccineResponse.model_validate(v) for v in store.deleted_vaccines],
        **store_state(store, can_undo=store.vaccines.undo.can_undo),
    )


@router.get("/", response_model=VaccineListResponse)
async def list_vaccines(store: VaccineStore = Depends(get_vaccine_store)):
    return _catalog(store)


@router.post("/", response_model=VaccineResponse, status_code=status.HTTP_201_CREATED)
async def add_vaccine(payload: VaccineCreate, store: VaccineStore = Depends(get_vaccine_store)):
    vaccine = await store.add_vaccine(Vaccine(**payload.model_dump()))
    return VaccineResponse.model_validate(vaccine)


@router.post("/undo", response_model=VaccineResponse)
async def undo_delete_vaccine(store: VaccineStore = Depends(get_vaccine_store)):
    vaccine = await store.restore_vaccine()
    return VaccineResponse.model_validate(vaccine)


@router.post("/refresh", response_model=VaccineListResponse)
async def refresh_vaccines(store: VaccineStore = Depends(get_vaccine_store)):
    await store.reconcile()
    return _catalog(store)


@router.get("/records", response_model=VaccinationRecordListResponse)
async def list_records(store: VaccineStore = Depends(get_vaccine_store)):
    return VaccinationRecordListResponse(
        items=[VaccinationRecordResponse.model_validate(r) for r in store.records.items],
        **store_state(store, can_undo=store.records.undo.can_undo),
    )


@router.post(
    "/records",
    response_model=VaccinationRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_record(
    payload: VaccinationRecordCreate, store: VaccineStore = Depends(get_vaccine_store)
):
    record = await store.add_record(VaccinationRecord(**payload.model_dump()))
    return VaccinationRecordResponse.model_validate(record)


@router.get("/schedule", response_model=VaccinationScheduleResponse)
async def vaccination_schedule(store: VaccineStore = Depends(get_vaccine_store)):
    return VaccinationScheduleResponse.model_validate(store.schedule())


@router.post("/records/undo", response_model=VaccinationRecordResponse)
async def undo_delete_record(store: VaccineStore = Depends(get_vaccine_store)):
    record = await store.restore_record()
    return VaccinationRecordResponse.model_validate(record)


@router.put("/records/{record_id}", response_model=VaccinationRecordResponse)
async def update_record(
    record_id: str,
    payload: VaccinationRecordUpdate,
    store: VaccineStore = Depends(get_vaccine_store),
):
    record = await store.edit_record(record_id, payload.model_dump(exclude_unset=True))
    return VaccinationRecordResponse.model_validate(record)


@router.put("/records/{record_id}/side-effects", response_model=VaccinationRecordResponse)
async def update_side_effects(
    record_id: str,
    payload: SideEffectsUpdate,
    store: VaccineStore = Depends(get_vaccine_store),
):
    record = await store.record_side_effects(record_id, payload.side_effects)
    return VaccinationRecordResponse.model_validate(record)


@router.delete("/records/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(record_id: str, store: VaccineStore = Depends(get_vaccine_store)):
    await store.delete_record(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{vaccine_id}", response_model=VaccineResponse)
async def update_vaccine(
    vaccine_id: str, payload: VaccineUpdate, store: VaccineStore = Depends(get_vaccine_store)
):
    vaccine = await store.edit_vaccine(vaccine_id, payload.model_dump(exclude_unset=True))
    return VaccineResponse.model_validate(vaccine)


@router.delete("/{vaccine_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vaccine(vaccine_id: str, store: VaccineStore = Depends(get_vaccine_store)):
    await store.delete_vaccine(vaccine_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
