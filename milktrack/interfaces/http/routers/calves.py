from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from milktrack.application.stores.calves import CalfStore
from milktrack.domain.models.calf import Calf
from milktrack.domain.models.sub_records import FeedingRecord, GrowthMilestone, Note, Vaccination
from milktrack.domain.value_objects.categories import (
    FEEDING_TYPE_OPTIONS,
    MILESTONE_OPTIONS,
    VACCINATION_TYPE_OPTIONS,
)
from milktrack.interfaces.http.deps import get_calf_store
from milktrack.interfaces.http.schemas.calves import (
    CalfCreate,
    CalfListResponse,
    CalfOptionsResponse,
    CalfResponse,
    CalfUpdate,
)
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.records import (
    FeedingRecordPayload,
    FeedingRecordResponse,
    GrowthMilestonePayload,
    GrowthMilestoneResponse,
    NotePayload,
    NoteResponse,
    VaccinationPayload,
    VaccinationResponse,
)

router = APIRouter(prefix="/calves", tags=["calves"])


def _list_response(store: CalfStore) -> CalfListResponse:
    return CalfListResponse(
        items=[CalfResponse.model_validate(calf) for calf in store.calves],
        **store_state(store),
    )


@router.get("/", response_model=CalfListResponse)
async def list_calves(store: CalfStore = Depends(get_calf_store)):
    return _list_response(store)


@router.get("/options", response_model=CalfOptionsResponse)
async def calf_options():
    return CalfOptionsResponse(
        feeding_types=list(FEEDING_TYPE_OPTIONS),
        vaccination_types=list(VACCINATION_TYPE_OPTIONS),
        milestones=list(MILESTONE_OPTIONS),
    )


@router.post("/", response_model=CalfResponse, status_code=status.HTTP_201_CREATED)
async def register_calf(payload: CalfCreate, store: CalfStore = Depends(get_calf_store)):
    calf = await store.register(Calf(**payload.model_dump()))
    return CalfResponse.model_validate(calf)


@router.put("/{calf_id}", response_model=CalfResponse)
async def update_calf(
    calf_id: str, payload: CalfUpdate, store: CalfStore = Depends(get_calf_store)
):
    calf = await store.edit(calf_id, payload.model_dump(exclude_unset=True))
    return CalfResponse.model_validate(calf)


@router.delete("/{calf_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_calf(calf_id: str, store: CalfStore = Depends(get_calf_store)):
    await store.delete(calf_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/undo", response_model=CalfResponse)
async def undo_delete_calf(store: CalfStore = Depends(get_calf_store)):
    calf = await store.restore()
    return CalfResponse.model_validate(calf)


@router.post("/refresh", response_model=CalfListResponse)
async def refresh_calves(store: CalfStore = Depends(get_calf_store)):
    await store.reconcile()
    return _list_response(store)


@router.post(
    "/{calf_id}/feeding-records",
    response_model=FeedingRecordResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_feeding_record(
    calf_id: str, payload: FeedingRecordPayload, store: CalfStore = Depends(get_calf_store)
):
    record = await store.add_feeding_record(calf_id, FeedingRecord(**payload.model_dump()))
    return FeedingRecordResponse.model_validate(record)


@router.post(
    "/{calf_id}/vaccinations",
    response_model=VaccinationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_vaccination(
    calf_id: str, payload: VaccinationPayload, store: CalfStore = Depends(get_calf_store)
):
    record = await store.add_vaccination(calf_id, Vaccination(**payload.model_dump()))
    return VaccinationResponse.model_validate(record)


@router.post(
    "/{calf_id}/growth-milestones",
    response_model=GrowthMilestoneResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_growth_milestone(
    calf_id: str, payload: GrowthMilestonePayload, store: CalfStore = Depends(get_calf_store)
):
    record = await store.add_growth_milestone(calf_id, GrowthMilestone(**payload.model_dump()))
    return GrowthMilestoneResponse.model_validate(record)


@router.post("/{calf_id}/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def add_note(calf_id: str, payload: NotePayload, store: CalfStore = Depends(get_calf_store)):
    record = await store.add_note(calf_id, Note(**payload.model_dump()))
    return NoteResponse.model_validate(record)
