from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Response, status

from milktrack.application.stores.pregnancies import PregnancyStore
from milktrack.domain.models.pregnant_cow import PregnantCow
from milktrack.domain.services.schedule import (
    days_until,
    pregnancy_alerts,
    pregnancy_recommendations,
    progress_percent,
)
from milktrack.interfaces.http.deps import get_pregnancy_store
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.pregnancies import (
    PregnancyListResponse,
    PregnancyNoteCreate,
    PregnancyOverview,
    PregnantCowCreate,
    PregnantCowResponse,
    PregnantCowUpdate,
)

router = APIRouter(prefix="/pregnancies", tags=["pregnancies"])


def _overview(cow: PregnantCow, today: date) -> PregnancyOverview:
    base = PregnantCowResponse.model_validate(cow).model_dump()
    if cow.breeding_date is None or cow.estimated_due_date is None:
        return PregnancyOverview(
            **base, days_until_due=None, progress_percent=None, alerts=[], recommendations=[]
        )
    return PregnancyOverview(
        **base,
        days_until_due=days_until(cow.estimated_due_date, today),
        progress_percent=progress_percent(cow.breeding_date, today),
        alerts=pregnancy_alerts(cow, today),
        recommendations=pregnancy_recommendations(cow, today),
    )


def _list_response(store: PregnancyStore) -> PregnancyListResponse:
    today = store.today()
    return PregnancyListResponse(
        items=[_overview(cow, today) for cow in store.cows.items],
        **store_state(store),
    )


@router.get("/", response_model=PregnancyListResponse)
async def list_pregnancies(store: PregnancyStore = Depends(get_pregnancy_store)):
    return _list_response(store)


@router.get("/{cow_id}", response_model=PregnancyOverview)
async def get_pregnancy(cow_id: str, store: PregnancyStore = Depends(get_pregnancy_store)):
    return _overview(store.cows.require(cow_id), store.today())


@router.post("/", response_model=PregnancyOverview, status_code=status.HTTP_201_CREATED)
async def register_pregnancy(
    payload: PregnantCowCreate, store: PregnancyStore = Depends(get_pregnancy_store)
):
    cow = await store.register(PregnantCow(**payload.model_dump()))
    return _overview(cow, store.today())


@router.put("/{cow_id}", response_model=PregnancyOverview)
async def update_pregnancy(
    cow_id: str,
    payload: PregnantCowUpdate,
    store: PregnancyStore = Depends(get_pregnancy_store),
):
    cow = await store.edit(cow_id, payload.model_dump(exclude_unset=True))
    return _overview(cow, store.today())


@router.delete("/{cow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pregnancy(cow_id: str, store: PregnancyStore = Depends(get_pregnancy_store)):
    await store.remove(cow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/undo", response_model=PregnancyOverview)
async def undo_delete_pregnancy(store: PregnancyStore = Depends(get_pregnancy_store)):
    cow = await store.restore()
    return _overview(cow, store.today())


@router.post("/refresh", response_model=PregnancyListResponse)
async def refresh_pregnancies(store: PregnancyStore = Depends(get_pregnancy_store)):
    await store.reconcile()
    return _list_response(store)


@router.post(
    "/{cow_id}/notes", response_model=PregnancyOverview, status_code=status.HTTP_201_CREATED
)
async def add_pregnancy_note(
    cow_id: str,
    payload: PregnancyNoteCreate,
    store: PregnancyStore = Depends(get_pregnancy_store),
):
    cow = await store.add_note(cow_id, payload.note)
    return _overview(cow, store.today())
