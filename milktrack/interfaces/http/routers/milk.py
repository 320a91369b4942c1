from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status

from milktrack.application.stores.milk import MilkStore
from milktrack.domain.models.milk_production import (
    MilkCow,
    MilkIncident,
    MilkProductionRecord,
    MilkQuality,
)
from milktrack.domain.services.production import ProductionPeriod
from milktrack.interfaces.http.deps import get_milk_store
from milktrack.interfaces.http.schemas.common import store_state
from milktrack.interfaces.http.schemas.milk import (
    IncidentCreate,
    IncidentListResponse,
    IncidentResponse,
    IncidentUpdate,
    MilkCowCreate,
    MilkCowListResponse,
    MilkCowResponse,
    MilkCowUpdate,
    ProductionCreate,
    ProductionDetailResponse,
    ProductionDetailsResponse,
    ProductionListResponse,
    ProductionPointResponse,
    ProductionResponse,
    ProductionSeriesResponse,
    ProductionUpdate,
)

router = APIRouter(prefix="/milk", tags=["milk"])


def _production_fields(data: dict[str, Any]) -> dict[str, Any]:
    if data.get("quality") is not None:
        data["quality"] = MilkQuality(**data["quality"])
    return data


# Milking herd


@router.get("/cows", response_model=MilkCowListResponse)
async def list_milk_cows(store: MilkStore = Depends(get_milk_store)):
    return MilkCowListResponse(
        items=[MilkCowResponse.model_validate(c) for c in store.cows.items],
        **store_state(store, can_undo=store.cows.undo.can_undo),
    )


@router.post("/cows", response_model=MilkCowResponse, status_code=status.HTTP_201_CREATED)
async def add_milk_cow(payload: MilkCowCreate, store: MilkStore = Depends(get_milk_store)):
    cow = await store.add_cow(MilkCow(**payload.model_dump()))
    return MilkCowResponse.model_validate(cow)


@router.post("/cows/undo", response_model=MilkCowResponse)
async def undo_delete_milk_cow(store: MilkStore = Depends(get_milk_store)):
    cow = await store.restore_cow()
    return MilkCowResponse.model_validate(cow)


@router.put("/cows/{cow_id}", response_model=MilkCowResponse)
async def update_milk_cow(
    cow_id: str, payload: MilkCowUpdate, store: MilkStore = Depends(get_milk_store)
):
    cow = await store.edit_cow(cow_id, payload.model_dump(exclude_unset=True))
    return MilkCowResponse.model_validate(cow)


@router.delete("/cows/{cow_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_milk_cow(cow_id: str, store: MilkStore = Depends(get_milk_store)):
    await store.delete_cow(cow_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Production records


@router.get("/productions", response_model=ProductionListResponse)
async def list_productions(store: MilkStore = Depends(get_milk_store)):
    return ProductionListResponse(
        items=[ProductionResponse.model_validate(p) for p in store.productions.items],
        **store_state(store, can_undo=store.productions.undo.can_undo),
    )


@router.post(
    "/productions", response_model=ProductionResponse, status_code=status.HTTP_201_CREATED
)
async def add_production(payload: ProductionCreate, store: MilkStore = Depends(get_milk_store)):
    record = await store.add_production(
        MilkProductionRecord(**_production_fields(payload.model_dump()))
    )
    return ProductionResponse.model_validate(record)


@router.get("/productions/series", response_model=ProductionSeriesResponse)
async def production_series(
    period: ProductionPeriod = Query(default=ProductionPeriod.DAILY),
    store: MilkStore = Depends(get_milk_store),
):
    points = store.series(period)
    return ProductionSeriesResponse(
        period=period.value,
        points=[ProductionPointResponse.model_validate(p) for p in points],
    )


@router.get("/productions/details", response_model=ProductionDetailsResponse)
async def production_details(
    day: date | None = Query(default=None, alias="date"),
    store: MilkStore = Depends(get_milk_store),
):
    day = day or store.today()
    return ProductionDetailsResponse(
        date=day,
        items=[ProductionDetailResponse.model_validate(d) for d in store.details(day)],
    )


@router.post("/productions/undo", response_model=ProductionResponse)
async def undo_delete_production(store: MilkStore = Depends(get_milk_store)):
    record = await store.restore_production()
    return ProductionResponse.model_validate(record)


@router.put("/productions/{record_id}", response_model=ProductionResponse)
async def update_production(
    record_id: str, payload: ProductionUpdate, store: MilkStore = Depends(get_milk_store)
):
    changes = _production_fields(payload.model_dump(exclude_unset=True))
    record = await store.edit_production(record_id, changes)
    return ProductionResponse.model_validate(record)


@router.delete("/productions/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_production(record_id: str, store: MilkStore = Depends(get_milk_store)):
    await store.delete_production(record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Incidents


@router.get("/incidents", response_model=IncidentListResponse)
async def list_incidents(store: MilkStore = Depends(get_milk_store)):
    return IncidentListResponse(
        items=[IncidentResponse.model_validate(i) for i in store.incidents.items],
        **store_state(store, can_undo=store.incidents.undo.can_undo),
    )


@router.post("/incidents", response_model=IncidentResponse, status_code=status.HTTP_201_CREATED)
async def add_incident(payload: IncidentCreate, store: MilkStore = Depends(get_milk_store)):
    incident = await store.add_incident(MilkIncident(**payload.model_dump()))
    return IncidentResponse.model_validate(incident)


@router.post("/incidents/undo", response_model=IncidentResponse)
async def undo_delete_incident(store: MilkStore = Depends(get_milk_store)):
    incident = await store.restore_incident()
    return IncidentResponse.model_validate(incident)


@router.put("/incidents/{incident_id}", response_model=IncidentResponse)
async def update_incident(
    incident_id: str, payload: IncidentUpdate, store: MilkStore = Depends(get_milk_store)
):
    incident = await store.edit_incident(incident_id, payload.model_dump(exclude_unset=True))
    return IncidentResponse.model_validate(incident)


@router.delete("/incidents/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_incident(incident_id: str, store: MilkStore = Depends(get_milk_store)):
    await store.delete_incident(incident_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh", response_model=ProductionListResponse)
async def refresh_milk(store: MilkStore = Depends(get_milk_store)):
    await store.reconcile()
    return ProductionListResponse(
        items=[ProductionResponse.model_validate(p) for p in store.productions.items],
        **store_state(store),
    )
