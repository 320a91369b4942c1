from __future__ import annotations

from pydantic import BaseModel


class StorageSessionResponse(BaseModel):
    storage_session: str
    token_type: str = "storage"
    owner_id: str
    expires_in: int
    header: str
