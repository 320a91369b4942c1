from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Error carried to the HTTP layer as `{"code", "message", "details"}`."""

    code = "app_error"
    status_code = 400

    def __init__(self, message: str, *, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class AuthError(AppError):
    """Missing or rejected identity token or storage session."""

    code = "auth_error"
    status_code = 401


class NotFound(AppError):
    code = "not_found"
    status_code = 404


class NothingToUndo(NotFound):
    code = "nothing_to_undo"

    def __init__(self, collection: str) -> None:
        super().__init__("Nothing to undo", details={"collection": collection})
        self.collection = collection


class ValidationError(AppError):
    """Rejected input; `message` is already phrased for the farmer."""

    code = "validation_error"
    status_code = 422


class ConflictError(AppError):
    code = "conflict"
    status_code = 409


class StoreBusy(ConflictError):
    """A store already has an action or reload running for this owner."""

    code = "store_busy"

    def __init__(self, store: str) -> None:
        super().__init__("Another operation is in progress", details={"store": store})
        self.store = store


class GatewayError(AppError):
    """The document store could not complete a read or write."""

    code = "gateway_error"
    status_code = 502

    def __init__(
        self, message: str, *, path: str | None = None, details: Mapping[str, Any] | None = None
    ) -> None:
        if path is not None:
            details = {**(details or {}), "path": path}
        super().__init__(message, details=details)
        self.path = path


class InfrastructureError(AppError):
    code = "infrastructure_error"
    status_code = 500
