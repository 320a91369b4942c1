from __future__ import annotations

from fastapi import Depends, Request

from milktrack.application.errors import AuthError
from milktrack.application.stores.calves import CalfStore
from milktrack.application.stores.cows import CowStore
from milktrack.application.stores.milk import MilkStore
from milktrack.application.stores.pregnancies import PregnancyStore
from milktrack.application.stores.preferences import PreferencesStore
from milktrack.application.stores.registry import FarmStores, StoreRegistry
from milktrack.application.stores.reproduction import ReproductionStore
from milktrack.application.stores.vaccines import VaccineStore
from milktrack.config.settings import Settings
from milktrack.infrastructure.auth.context import AuthContext, StorageSession
from milktrack.infrastructure.auth.jwt_service import JWTService


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None or not context.is_authenticated:
        raise AuthError("Authentication required")
    return context


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings not configured")
    return settings


def get_storage_jwt(request: Request) -> JWTService:
    service = getattr(request.app.state, "storage_jwt", None)
    if service is None:
        raise RuntimeError("Storage session service not configured")
    return service


def get_store_registry(request: Request) -> StoreRegistry:
    registry = getattr(request.app.state, "store_registry", None)
    if registry is None:
        raise RuntimeError("Store registry not configured")
    return registry


async def get_storage_session(
    request: Request,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    storage_jwt: JWTService = Depends(get_storage_jwt),
) -> StorageSession:
    token = request.headers.get(settings.storage_session_header)
    if not token:
        raise AuthError("Missing storage session")
    claims = storage_jwt.decode_storage_session(token, subject=context.caller_id)
    return StorageSession(owner_id=context.caller_id, claims=claims)


async def get_farm_stores(
    session: StorageSession = Depends(get_storage_session),
    registry: StoreRegistry = Depends(get_store_registry),
) -> FarmStores:
    return registry.for_owner(session.owner_id)


async def get_cow_store(stores: FarmStores = Depends(get_farm_stores)) -> CowStore:
    await stores.cows.ensure_fresh()
    return stores.cows


async def get_calf_store(stores: FarmStores = Depends(get_farm_stores)) -> CalfStore:
    await stores.calves.ensure_fresh()
    return stores.calves


async def get_pregnancy_store(stores: FarmStores = Depends(get_farm_stores)) -> PregnancyStore:
    await stores.pregnancies.ensure_fresh()
    return stores.pregnancies


async def get_reproduction_store(
    stores: FarmStores = Depends(get_farm_stores),
) -> ReproductionStore:
    await stores.reproduction.ensure_fresh()
    return stores.reproduction


async def get_vaccine_store(stores: FarmStores = Depends(get_farm_stores)) -> VaccineStore:
    await stores.vaccines.ensure_fresh()
    return stores.vaccines


async def get_milk_store(stores: FarmStores = Depends(get_farm_stores)) -> MilkStore:
    await stores.milk.ensure_fresh()
    return stores.milk


async def get_preferences_store(stores: FarmStores = Depends(get_farm_stores)) -> PreferencesStore:
    await stores.preferences.ensure_fresh()
    return stores.preferences
