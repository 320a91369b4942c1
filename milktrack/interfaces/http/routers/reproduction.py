from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from milktrack.application.stores.reproduction import ReproductionStore
from milktrack.domain.models.insemination import Insemination
from milktrack.interfaces.http.deps import get_reproduction_store
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.reproduction import (
    CheckCompletionResponse,
    CheckListResponse,
    CheckResponse,
    InseminationCreate,
    InseminationListResponse,
    InseminationNotesUpdate,
    InseminationResponse,
    InseminationUpdate,
)

router = APIRouter(prefix="/reproduction", tags=["reproduction"])


def _insemination_list(store: ReproductionStore) -> InseminationListResponse:
    return InseminationListResponse(
        items=[InseminationResponse.model_validate(i) for i in store.inseminations.items],
        **store_state(store),
    )


@router.get("/inseminations", response_model=InseminationListResponse)
async def list_inseminations(store: ReproductionStore = Depends(get_reproduction_store)):
    return _insemination_list(store)


@router.post(
    "/inseminations",
    response_model=InseminationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_insemination(
    payload: InseminationCreate, store: ReproductionStore = Depends(get_reproduction_store)
):
    insemination = await store.record(Insemination(**payload.model_dump()))
    return InseminationResponse.model_validate(insemination)


@router.put("/inseminations/{insemination_id}", response_model=InseminationResponse)
async def update_insemination(
    insemination_id: str,
    payload: InseminationUpdate,
    store: ReproductionStore = Depends(get_reproduction_store),
):
    updated = await store.edit(insemination_id, payload.model_dump(exclude_unset=True))
    return InseminationResponse.model_validate(updated)


@router.put("/inseminations/{insemination_id}/notes", response_model=InseminationResponse)
async def update_insemination_notes(
    insemination_id: str,
    payload: InseminationNotesUpdate,
    store: ReproductionStore = Depends(get_reproduction_store),
):
    updated = await store.update_notes(insemination_id, payload.notes)
    return InseminationResponse.model_validate(updated)


@router.post("/inseminations/{insemination_id}/birth", response_model=InseminationResponse)
async def mark_insemination_birthed(
    insemination_id: str, store: ReproductionStore = Depends(get_reproduction_store)
):
    updated = await store.mark_birthed(insemination_id)
    return InseminationResponse.model_validate(updated)


@router.delete("/inseminations/{insemination_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_insemination(
    insemination_id: str, store: ReproductionStore = Depends(get_reproduction_store)
):
    await store.delete(insemination_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/inseminations/undo", response_model=InseminationResponse)
async def undo_delete_insemination(store: ReproductionStore = Depends(get_reproduction_store)):
    restored = await store.restore()
    return InseminationResponse.model_validate(restored)


@router.post("/inseminations/refresh", response_model=InseminationListResponse)
async def refresh_reproduction(store: ReproductionStore = Depends(get_reproduction_store)):
    await store.reconcile()
    return _insemination_list(store)


@router.get("/checks", response_model=CheckListResponse)
async def list_checks(
    insemination_id: str | None = Query(default=None),
    store: ReproductionStore = Depends(get_reproduction_store),
):
    checks = store.checks.items if insemination_id is None else store.checks_for(insemination_id)
    return CheckListResponse(
        items=[CheckResponse.model_validate(c) for c in checks],
        **store_state(store),
    )


@router.post("/checks/{check_id}/complete", response_model=CheckCompletionResponse)
async def complete_check(check_id: str, store: ReproductionStore = Depends(get_reproduction_store)):
    follow_up = await store.complete_check(check_id)
    return CheckCompletionResponse(
        completed_id=check_id,
        next_check=CheckResponse.model_validate(follow_up) if follow_up else None,
    )
