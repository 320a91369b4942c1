from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import asynccontextmanager
from datetime import date

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from milktrack.application.interfaces.gateway import PersistenceGateway
from milktrack.application.stores.base import StoreOptions
from milktrack.application.stores.registry import StoreRegistry
from milktrack.config.settings import Settings, get_settings
from milktrack.infrastructure.auth.jwt_service import JWTService
from milktrack.infrastructure.db.session import create_engine, create_session_factory
from milktrack.infrastructure.gateway.sqlalchemy_gateway import SQLAlchemyDocumentGateway
from milktrack.interfaces.http.deps import get_app_settings
from milktrack.interfaces.http.routers import auth as auth_router
from milktrack.interfaces.http.routers import calves, cows, milk, pregnancies, reproduction, vaccines
from milktrack.interfaces.http.routers import settings as settings_router
from milktrack.interfaces.middleware.auth_middleware import AuthMiddleware
from milktrack.interfaces.middleware.error_handler import register_error_handlers
from milktrack.utils.datetime_tz import local_today, resolve_tz


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    gateway: PersistenceGateway | None = None,
    today: Callable[[], date] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="MilkTrack Backend",
        version="0.1.0",
        description="Record keeping API for dairy herds",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.identity_jwt = JWTService(
        secret_key=settings.identity_secret_key.get_secret_value(),
        algorithm=settings.identity_algorithm,
        issuer=settings.identity_issuer,
        audience=settings.identity_audience,
    )
    app.state.storage_jwt = JWTService(
        secret_key=settings.get_storage_session_secret(),
        algorithm=settings.identity_algorithm,
        access_token_expires_minutes=settings.storage_session_expires_minutes,
    )
    app.state.gateway = gateway or SQLAlchemyDocumentGateway(app.state.session_factory)
    farm_tz = resolve_tz(settings.timezone)
    app.state.store_registry = StoreRegistry(
        app.state.gateway,
        options=StoreOptions(
            notice_ttl_seconds=settings.notice_ttl_seconds,
            undo_capacity=settings.undo_history_size,
            stale_after_seconds=settings.store_stale_after_seconds,
        ),
        cow_notice_ttl_seconds=settings.cow_notice_ttl_seconds,
        today=today or (lambda: local_today(farm_tz)),
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(auth_router.router)
    api.include_router(cows.router)
    api.include_router(calves.router)
    api.include_router(pregnancies.router)
    api.include_router(reproduction.router)
    api.include_router(vaccines.router)
    api.include_router(milk.router)
    api.include_router(settings_router.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
