from __future__ import annotations

import itertools
import os
import sys
from collections.abc import AsyncIterator, Callable
from datetime import date
from pathlib import Path
from typing import Any, Mapping

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("IDENTITY_SECRET_KEY", "test-identity-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from milktrack.application.errors import GatewayError, NotFound
from milktrack.application.interfaces.gateway import Document, ParentRef, collection_path
from milktrack.config.settings import Settings
from milktrack.infrastructure.auth.jwt_service import JWTService
from milktrack.infrastructure.db.base import Base
from milktrack.infrastructure.db.orm import document  # noqa: F401
from milktrack.interfaces.http.main import create_app

TODAY = date(2024, 6, 15)
IDENTITY_SECRET = "test-identity-secret"


class InMemoryGateway:
    """Dict-backed gateway; operations listed in `failing` raise GatewayError."""

    def __init__(self) -> None:
        self.paths: dict[str, dict[str, dict[str, Any]]] = {}
        self.failing: set[str] = set()
        self.calls: list[tuple[str, str]] = []
        self._ids = itertools.count(1)

    def _enter(self, operation: str, path: str) -> dict[str, dict[str, Any]]:
        self.calls.append((operation, path))
        if operation in self.failing:
            raise GatewayError(f"Failed to {operation}. Please try again.", path=path)
        return self.paths.setdefault(path, {})

    def docs(self, owner_id: str, collection: str, parent: ParentRef | None = None) -> dict:
        return self.paths.get(collection_path(owner_id, collection, parent), {})

    async def list(self, owner_id, collection, parent=None):
        docs = self._enter("list", collection_path(owner_id, collection, parent))
        return [Document(id=doc_id, data=dict(data)) for doc_id, data in docs.items()]

    async def get(self, owner_id, collection, doc_id, parent=None):
        docs = self._enter("get", collection_path(owner_id, collection, parent))
        data = docs.get(doc_id)
        return Document(id=doc_id, data=dict(data)) if data is not None else None

    async def create(self, owner_id, collection, data: Mapping[str, Any], parent=None):
        docs = self._enter("create", collection_path(owner_id, collection, parent))
        doc_id = f"doc-{next(self._ids)}"
        docs[doc_id] = dict(data)
        return doc_id

    async def update(self, owner_id, collection, doc_id, patch, parent=None):
        docs = self._enter("update", collection_path(owner_id, collection, parent))
        if doc_id not in docs:
            raise NotFound(f"Document {doc_id} not found")
        docs[doc_id] = {**docs[doc_id], **dict(patch)}

    async def upsert(self, owner_id, collection, doc_id, data, parent=None):
        docs = self._enter("upsert", collection_path(owner_id, collection, parent))
        docs[doc_id] = {**docs.get(doc_id, {}), **dict(data)}

    async def delete(self, owner_id, collection, doc_id, parent=None):
        docs = self._enter("delete", collection_path(owner_id, collection, parent))
        docs.pop(doc_id, None)


@pytest.fixture()
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture()
def today() -> Callable[[], date]:
    return lambda: TODAY


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "identity_secret_key": IDENTITY_SECRET,
            "storage_session_secret_key": "test-storage-secret",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def app(test_settings: Settings, today):
    return create_app(settings=test_settings, today=today)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client


@pytest.fixture()
def token_factory(test_settings: Settings) -> Callable[[str], str]:
    identity = JWTService(
        secret_key=test_settings.identity_secret_key.get_secret_value(),
        algorithm=test_settings.identity_algorithm,
    )

    def _make(caller_id: str) -> str:
        return identity.create_access_token(subject=caller_id)

    return _make


@pytest.fixture()
def session_headers(app, client, token_factory):
    """Build headers carrying an identity token plus an exchanged storage session."""

    async def _make(caller_id: str = "farmer-1") -> dict[str, str]:
        auth = {"Authorization": f"Bearer {token_factory(caller_id)}"}
        resp = await client.post("/api/v1/auth/storage-session", headers=auth)
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return {**auth, body["header"]: body["storage_session"]}

    return _make
