from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from milktrack.application.errors import NotFound
from milktrack.application.stores.cows import CowStore
from milktrack.domain.models.cow import Cow
from milktrack.domain.models.sub_records import (
    FeedingSchedule,
    MilkYield,
    Note,
    Treatment,
    Vaccination,
)
from milktrack.interfaces.http.deps import get_cow_store
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.cows import (
    CowAlertsResponse,
    CowCreate,
    CowListResponse,
    CowResponse,
    CowUpdate,
)
from milktrack.interfaces.http.schemas.records import (
    FeedingSchedulePayload,
    FeedingScheduleResponse,
    MilkYieldPayload,
    MilkYieldResponse,
    NotePayload,
    NoteResponse,
    TreatmentPayload,
    TreatmentResponse,
    VaccinationPayload,
    VaccinationResponse,
)

router = APIRouter(prefix="/cows", tags=["cows"])


def _list_response(store: CowStore) -> CowListResponse:
    return CowListResponse(
        items=[CowResponse.model_validate(cow) for cow in store.cows],
        **store_state(store),
    )


@router.get("/", response_model=CowListResponse)
async def list_cows(store: CowStore = Depends(get_cow_store)):
    return _list_response(store)


@router.get("/search", response_model=CowResponse)
async def search_cow(q: str = Query(..., min_length=1), store: CowStore = Depends(get_cow_store)):
    cow = store.search(q)
    if cow is None:
        raise NotFound("No se encontró ninguna vaca con ese ID o nombre")
    return CowResponse.model_validate(cow)


@router.get("/alerts", response_model=CowAlertsResponse)
async def cow_alerts(store: CowStore = Depends(get_cow_store)):
    return CowAlertsResponse(alerts=store.medical_alerts())


@router.post("/", response_model=CowResponse, status_code=status.HTTP_201_CREATED)
async def register_cow(payload: CowCreate, store: CowStore = Depends(get_cow_store)):
    cow = await store.register(Cow(**payload.model_dump()))
    return CowResponse.model_validate(cow)


@router.put("/{cow_id}", response_model=CowResponse)
async def update_cow(cow_id: str, payload: CowUpdate, store: CowStore = Depends(get_cow_store)):
    cow = await store.edit(cow_id, payload.model_dump(exclude_unset=True))
    return CowResponse.model_validate(cow)


@router.delete("/{cow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cow(cow_id: str, store: CowStore = Depends(get_cow_store)):
    await store.delete(cow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/undo", response_model=CowResponse)
async def undo_delete_cow(store: CowStore = Depends(get_cow_store)):
    cow = await store.restore()
    return CowResponse.model_validate(cow)


@router.post("/refresh", response_model=CowListResponse)
async def refresh_cows(store: CowStore = Depends(get_cow_store)):
    await store.reconcile()
    return _list_response(store)


@router.post(
    "/{cow_id}/vaccinations",
    response_model=VaccinationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_vaccination(
    cow_id: str, payload: VaccinationPayload, store: CowStore = Depends(get_cow_store)
):
    record = await store.add_vaccination(cow_id, Vaccination(**payload.model_dump()))
    return VaccinationResponse.model_validate(record)


@router.post(
    "/{cow_id}/treatments",
    response_model=TreatmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_treatment(
    cow_id: str, payload: TreatmentPayload, store: CowStore = Depends(get_cow_store)
):
    record = await store.add_treatment(cow_id, Treatment(**payload.model_dump()))
    return TreatmentResponse.model_validate(record)


@router.post(
    "/{cow_id}/milk-production",
    response_model=MilkYieldResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_milk_production(
    cow_id: str, payload: MilkYieldPayload, store: CowStore = Depends(get_cow_store)
):
    record = await store.add_milk_production(cow_id, MilkYield(**payload.model_dump()))
    return MilkYieldResponse.model_validate(record)


@router.post(
    "/{cow_id}/feeding-schedule",
    response_model=FeedingScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_feeding_schedule(
    cow_id: str, payload: FeedingSchedulePayload, store: CowStore = Depends(get_cow_store)
):
    record = await store.add_feeding_schedule(cow_id, FeedingSchedule(**payload.model_dump()))
    return FeedingScheduleResponse.model_validate(record)


@router.post("/{cow_id}/notes", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def add_note(cow_id: str, payload: NotePayload, store: CowStore = Depends(get_cow_store)):
    record = await store.add_note(cow_id, Note(**payload.model_dump()))
    return NoteResponse.model_validate(record)
