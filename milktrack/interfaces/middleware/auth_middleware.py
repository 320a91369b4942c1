from __future__ import annotations

from typing import Iterable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from milktrack.application.errors import AuthError
from milktrack.config.settings import Settings
from milktrack.infrastructure.auth.context import AuthContext
from milktrack.infrastructure.auth.jwt_service import STORAGE_TOKEN_TYPE

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/docs",
    "/openapi.json",
    "/redoc",
)


class AuthMiddleware(BaseHTTPMiddleware):
    """Admits requests carrying a valid identity token from the identity provider."""

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        if any(request.url.path.startswith(path) for path in PUBLIC_PATHS):
            return await call_next(request)

        try:
            authorization = request.headers.get("Authorization")
            if not authorization:
                raise AuthError("Missing Authorization header")
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token:
                raise AuthError("Invalid Authorization header")
            identity_jwt = getattr(request.app.state, "identity_jwt", None)
            if identity_jwt is None:
                raise RuntimeError("Identity JWT service not configured")
            claims = identity_jwt.decode(token)
            if claims.get("typ") == STORAGE_TOKEN_TYPE:
                raise AuthError("Storage sessions cannot be used as identity tokens")

            subject = claims.get("sub")
            if not subject:
                raise AuthError("Token missing subject")
            request.state.auth_context = AuthContext(caller_id=str(subject), claims=claims)
            return await call_next(request)
        except AuthError as exc:
            payload = {"code": exc.code, "message": exc.message}
            if exc.details is not None:
                payload["details"] = exc.details
            return JSONResponse(status_code=exc.status_code, content=payload)
