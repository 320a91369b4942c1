from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Any, Generic, Protocol, TypeVar

from milktrack.application.errors import (
    AppError,
    NotFound,
    NothingToUndo,
    StoreBusy,
    ValidationError,
)
from milktrack.application.interfaces.gateway import ParentRef, PersistenceGateway
from milktrack.application.stores.notices import NoticeBoard
from milktrack.application.stores.undo import UndoBuffer, UndoEntry
from milktrack.utils.datetime_tz import local_today, utcnow

logger = logging.getLogger(__name__)


class Record(Protocol):
    id: str | None

    def to_document(self) -> dict[str, Any]: ...


T = TypeVar("T", bound=Record)


@dataclass(frozen=True, slots=True)
class StoreOptions:
    notice_ttl_seconds: int = 5
    undo_capacity: int = 1
    stale_after_seconds: int = 300


@dataclass(frozen=True, slots=True)
class EntityMessages:
    """User-facing notices for one entity type."""

    noun: str
    created: str
    updated: str
    deleted: str
    restored: str

    def failure(self, verb: str) -> str:
        return f"Error al {verb} {self.noun}. Por favor, intenta de nuevo."


class EntityCollection(Generic[T]):
    """Cached copy of one gateway collection plus its undo buffer."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        owner_id: str,
        collection: str,
        model: type[T],
        *,
        undo_capacity: int = 1,
    ) -> None:
        self.gateway = gateway
        self.owner_id = owner_id
        self.collection = collection
        self.model = model
        self.items: list[T] = []
        self.undo: UndoBuffer[T] = UndoBuffer(undo_capacity)

    async def fetch(self, parent: ParentRef | None = None) -> list[T]:
        docs = await self.gateway.list(self.owner_id, self.collection, parent)
        return [self.model.from_document(doc.id, doc.data) for doc in docs]

    def replace_all(self, items: Iterable[T]) -> None:
        self.items = list(items)

    def find(self, record_id: str) -> T | None:
        for item in self.items:
            if item.id == record_id:
                return item
        return None

    def require(self, record_id: str) -> T:
        item = self.find(record_id)
        if item is None:
            raise NotFound(
                f"{self.collection} record {record_id} not found",
                details={"collection": self.collection, "id": record_id},
            )
        return item

    async def create(self, record: T) -> T:
        record.id = await self.gateway.create(self.owner_id, self.collection, record.to_document())
        self.items.append(record)
        return record

    async def update(self, record: T) -> T:
        """Write the full document, then swap the cached entry."""
        current = self.require(record.id)
        await self.gateway.update(self.owner_id, self.collection, record.id, record.to_document())
        self._swap(current, record)
        return record

    async def patch(self, record_id: str, changes: dict[str, Any]) -> T:
        """Write a partial document and apply the same changes to the cache."""
        current = self.require(record_id)
        updated = replace(current, **changes)
        document = updated.to_document()
        await self.gateway.update(
            self.owner_id,
            self.collection,
            record_id,
            {key: document[key] for key in changes if key in document},
        )
        self._swap(current, updated)
        return updated

    async def upsert(self, record: T) -> T:
        current = self.require(record.id)
        await self.gateway.upsert(self.owner_id, self.collection, record.id, record.to_document())
        self._swap(current, record)
        return record

    async def delete(self, record_id: str) -> T:
        current = self.require(record_id)
        await self.gateway.delete(self.owner_id, self.collection, record_id)
        self.items = [item for item in self.items if item is not current]
        return current

    def _swap(self, current: T, updated: T) -> None:
        self.items = [updated if item is current else item for item in self.items]


class EntityStore(ABC):
    """Base for the per-module caches.

    Subclasses list their collections in `collections()`; every user action
    runs inside `action()`, which serialises actions on the store, records a
    notice and re-raises failures.
    """

    name = "store"
    load_failure = "Error al cargar los datos. Por favor, intenta de nuevo."

    def __init__(
        self,
        gateway: PersistenceGateway,
        owner_id: str,
        *,
        options: StoreOptions | None = None,
        clock: Callable[[], datetime] = utcnow,
        today: Callable[[], date] = local_today,
    ) -> None:
        self.gateway = gateway
        self.owner_id = owner_id
        self.options = options or StoreOptions()
        self.notices = NoticeBoard(self.options.notice_ttl_seconds, clock=clock)
        self.busy = False
        self.loaded_at: datetime | None = None
        self._clock = clock
        self._today = today

    def today(self) -> date:
        return self._today()

    def collection(self, name: str, model: type[T]) -> EntityCollection[T]:
        return EntityCollection(
            self.gateway,
            self.owner_id,
            name,
            model,
            undo_capacity=self.options.undo_capacity,
        )

    @abstractmethod
    def collections(self) -> list[EntityCollection[Any]]:
        """Every collection cached by the store, in load order."""

    async def _fetch(self) -> list[list[Any]]:
        return [await coll.fetch() for coll in self.collections()]

    async def load(self) -> bool:
        """Replace every cached collection; failures leave the cache untouched."""
        try:
            snapshot = await self._fetch()
        except Exception as exc:
            logger.error(
                "Failed to load %s for owner %s: %s", self.name, self.owner_id, exc, exc_info=True
            )
            self.notices.error(self.load_failure)
            return False
        for coll, items in zip(self.collections(), snapshot):
            coll.replace_all(items)
        self.loaded_at = self._clock()
        logger.debug("Loaded %s for owner %s", self.name, self.owner_id)
        return True

    def is_stale(self) -> bool:
        if self.loaded_at is None:
            return True
        max_age = timedelta(seconds=self.options.stale_after_seconds)
        return self._clock() - self.loaded_at >= max_age

    async def ensure_fresh(self) -> None:
        if self.is_stale() and not self.busy:
            await self._exclusive_load()

    async def reconcile(self) -> bool:
        """Re-fetch everything to pick up writes made elsewhere."""
        if self.busy:
            raise StoreBusy(self.name)
        return await self._exclusive_load()

    async def _exclusive_load(self) -> bool:
        # actions arriving while the snapshot is in flight are rejected as busy
        self.busy = True
        try:
            return await self.load()
        finally:
            self.busy = False

    @property
    def can_undo(self) -> bool:
        return any(coll.undo.can_undo for coll in self.collections())

    @asynccontextmanager
    async def action(self, operation: str, *, success: str, failure: str) -> AsyncIterator[None]:
        if self.busy:
            raise StoreBusy(self.name)
        self.busy = True
        try:
            yield
        except AppError as exc:
            if exc.status_code < 500:
                logger.info(
                    "%s rejected for owner %s: %s", operation, self.owner_id, exc.message
                )
                self.notices.error(exc.message)
            else:
                logger.error(
                    "%s failed for owner %s: %s", operation, self.owner_id, exc, exc_info=True
                )
                self.notices.error(failure)
            raise
        except Exception as exc:
            logger.error("%s failed for owner %s: %s", operation, self.owner_id, exc, exc_info=True)
            self.notices.error(failure)
            raise
        else:
            self.notices.success(success)
        finally:
            self.busy = False

    # Generic CRUD inside the action boundary

    async def create_in(
        self,
        coll: EntityCollection[T],
        record: T,
        messages: EntityMessages,
        validate: Callable[[T], None] | None = None,
    ) -> T:
        async with self.action(
            f"create {coll.collection}",
            success=messages.created,
            failure=messages.failure("agregar"),
        ):
            if validate is not None:
                validate(record)
            return await coll.create(record)

    async def update_in(
        self,
        coll: EntityCollection[T],
        record_id: str,
        changes: dict[str, Any],
        messages: EntityMessages,
        validate: Callable[[T], None] | None = None,
    ) -> T:
        async with self.action(
            f"update {coll.collection}",
            success=messages.updated,
            failure=messages.failure("actualizar"),
        ):
            updated = replace(coll.require(record_id), **changes)
            if validate is not None:
                validate(updated)
            return await coll.update(updated)

    async def delete_in(
        self, coll: EntityCollection[T], record_id: str, messages: EntityMessages
    ) -> T:
        async with self.action(
            f"delete {coll.collection}",
            success=messages.deleted,
            failure=messages.failure("eliminar"),
        ):
            record = await coll.delete(record_id)
            coll.undo.remember(record)
            return record

    async def restore_in(self, coll: EntityCollection[T], messages: EntityMessages) -> T:
        async with self.action(
            f"restore {coll.collection}",
            success=messages.restored,
            failure=messages.failure("restaurar"),
        ):
            entry = require_undo_entry(coll)
            restored = await coll.create(replace(entry.record, id=None))
            coll.undo.discard(entry)
            return restored


def require_undo_entry(coll: EntityCollection[T]) -> UndoEntry[T]:
    entry = coll.undo.peek()
    if entry is None:
        raise NothingToUndo(coll.collection)
    return entry


def require_fields(record: Any, fields: dict[str, str]) -> None:
    """Raise ValidationError naming every blank field.

    `fields` maps attribute name to the message shown to the user.
    """
    errors = [message for attr, message in fields.items() if _is_blank(getattr(record, attr))]
    if errors:
        raise ValidationError(errors[0], details={"errors": errors})


def reject_future(value: date | None, today: date, message: str) -> None:
    if value is not None and value > today:
        raise ValidationError(message)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False
