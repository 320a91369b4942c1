from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from milktrack.config.settings import Settings
from milktrack.infrastructure.auth.context import AuthContext
from milktrack.infrastructure.auth.jwt_service import JWTService
from milktrack.interfaces.http.deps import get_app_settings, get_auth_context, get_storage_jwt
from milktrack.interfaces.http.schemas.auth import StorageSessionResponse

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post(
    "/storage-session",
    response_model=StorageSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_storage_session(
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    storage_jwt: JWTService = Depends(get_storage_jwt),
) -> StorageSessionResponse:
    """Trade the caller's identity token for a storage-scoped session."""
    token = storage_jwt.create_storage_session(subject=context.caller_id)
    logger.info("Issued storage session for %s", context.caller_id)
    return StorageSessionResponse(
        storage_session=token,
        owner_id=context.caller_id,
        expires_in=settings.storage_session_expires_minutes * 60,
        header=settings.storage_session_header,
    )
