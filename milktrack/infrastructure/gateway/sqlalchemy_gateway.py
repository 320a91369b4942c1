from __future__ import annotations

import logging
from typing import Any, Mapping
from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from milktrack.application.errors import GatewayError, NotFound
from milktrack.application.interfaces.gateway import (
    Document,
    ParentRef,
    PersistenceGateway,
    collection_path,
)
from milktrack.infrastructure.db.orm.document import DocumentORM

logger = logging.getLogger(__name__)


def mint_document_id() -> str:
    return uuid4().hex


class SQLAlchemyDocumentGateway(PersistenceGateway):
    """Document store on one `documents` table.

    Every call runs in its own session and commits on its own.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def _fail(self, operation: str, path: str, exc: Exception) -> GatewayError:
        logger.error("Gateway %s failed for %s: %s", operation, path, exc, exc_info=True)
        return GatewayError(f"Failed to {operation}. Please try again.", path=path)

    async def list(
        self, owner_id: str, collection: str, parent: ParentRef | None = None
    ) -> list[Document]:
        path = collection_path(owner_id, collection, parent)
        stmt = (
            select(DocumentORM)
            .where(DocumentORM.owner_id == owner_id, DocumentORM.path == path)
            .order_by(DocumentORM.created_at, DocumentORM.id)
        )
        try:
            async with self.session_factory() as session:
                res = await session.execute(stmt)
                rows = res.scalars().all()
        except SQLAlchemyError as exc:
            raise self._fail(f"list {collection}", path, exc) from exc
        return [Document(id=row.id, data=dict(row.data or {})) for row in rows]

    async def get(
        self, owner_id: str, collection: str, doc_id: str, parent: ParentRef | None = None
    ) -> Document | None:
        path = collection_path(owner_id, collection, parent)
        try:
            async with self.session_factory() as session:
                orm = await session.get(DocumentORM, (path, doc_id))
        except SQLAlchemyError as exc:
            raise self._fail(f"get {collection}", path, exc) from exc
        if orm is None:
            return None
        return Document(id=orm.id, data=dict(orm.data or {}))

    async def create(
        self,
        owner_id: str,
        collection: str,
        data: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> str:
        path = collection_path(owner_id, collection, parent)
        doc_id = mint_document_id()
        try:
            async with self.session_factory() as session:
                session.add(DocumentORM(path=path, id=doc_id, owner_id=owner_id, data=dict(data)))
                await session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"add {collection}", path, exc) from exc
        logger.debug("Created document %s/%s", path, doc_id)
        return doc_id

    async def update(
        self,
        owner_id: str,
        collection: str,
        doc_id: str,
        patch: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> None:
        path = collection_path(owner_id, collection, parent)
        try:
            async with self.session_factory() as session:
                orm = await session.get(DocumentORM, (path, doc_id))
                if orm is None:
                    raise NotFound(
                        f"Document {doc_id} not found", details={"path": path, "id": doc_id}
                    )
                # reassign so the JSON column is flagged as modified
                orm.data = {**(orm.data or {}), **dict(patch)}
                await session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"update {collection}", path, exc) from exc

    async def upsert(
        self,
        owner_id: str,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> None:
        path = collection_path(owner_id, collection, parent)
        try:
            async with self.session_factory() as session:
                orm = await session.get(DocumentORM, (path, doc_id))
                if orm is None:
                    session.add(
                        DocumentORM(path=path, id=doc_id, owner_id=owner_id, data=dict(data))
                    )
                else:
                    orm.data = {**(orm.data or {}), **dict(data)}
                await session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"save {collection}", path, exc) from exc

    async def delete(
        self, owner_id: str, collection: str, doc_id: str, parent: ParentRef | None = None
    ) -> None:
        path = collection_path(owner_id, collection, parent)
        stmt = delete(DocumentORM).where(DocumentORM.path == path, DocumentORM.id == doc_id)
        try:
            async with self.session_factory() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"delete {collection}", path, exc) from exc
