from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable

from milktrack.application.errors import ValidationError
from milktrack.application.interfaces.gateway import ParentRef
from milktrack.application.stores.base import (
    EntityCollection,
    EntityMessages,
    EntityStore,
    require_undo_entry,
)

logger = logging.getLogger(__name__)


class ParentRecordStore(EntityStore):
    """Store for entities owning sub-collections (cows and calves).

    Sub-records live under `users/{owner}/{collection}/{parent_id}/{sub}`
    and are mirrored in list attributes of the parent model, as declared by
    the model's SUB_COLLECTIONS mapping.
    """

    parents: EntityCollection[Any]
    messages: EntityMessages

    def collections(self) -> list[EntityCollection[Any]]:
        return [self.parents]

    def _ref(self, parent_id: str) -> ParentRef:
        return ParentRef(collection=self.parents.collection, id=parent_id)

    def _sub_collections(self) -> dict[str, tuple[str, type]]:
        return self.parents.model.SUB_COLLECTIONS

    async def _fetch(self) -> list[list[Any]]:
        parents = await self.parents.fetch()
        for parent in parents:
            ref = self._ref(parent.id)
            for sub, (attr, model) in self._sub_collections().items():
                docs = await self.gateway.list(self.owner_id, sub, ref)
                setattr(parent, attr, [model.from_document(doc.id, doc.data) for doc in docs])
        return [parents]

    def _require_sub(self, sub: str) -> tuple[str, type]:
        try:
            return self._sub_collections()[sub]
        except KeyError as exc:
            raise ValidationError(
                f"Unknown sub-record type {sub}", details={"allowed": list(self._sub_collections())}
            ) from exc

    async def _write_sub(self, parent: Any, sub: str, record: Any) -> Any:
        attr, _ = self._require_sub(sub)
        record.id = await self.gateway.create(
            self.owner_id, sub, record.to_document(), self._ref(parent.id)
        )
        getattr(parent, attr).append(record)
        return record

    async def create(self, record: Any, validate: Callable[[Any], None] | None = None) -> Any:
        return await self.create_in(self.parents, record, self.messages, validate)

    async def update(
        self,
        record_id: str,
        changes: dict[str, Any],
        validate: Callable[[Any], None] | None = None,
    ) -> Any:
        return await self.update_in(self.parents, record_id, changes, self.messages, validate)

    async def add_sub_record(
        self,
        parent_id: str,
        sub: str,
        record: Any,
        *,
        success: str,
        failure: str,
        validate: Callable[[Any], None] | None = None,
    ) -> Any:
        async with self.action(f"add {sub}", success=success, failure=failure):
            self._require_sub(sub)
            parent = self.parents.require(parent_id)
            if validate is not None:
                validate(record)
            return await self._write_sub(parent, sub, record)

    async def delete(self, record_id: str) -> Any:
        """Delete the parent, then each of its sub-records one at a time."""
        async with self.action(
            f"delete {self.parents.collection}",
            success=self.messages.deleted,
            failure=self.messages.failure("eliminar"),
        ):
            record = await self.parents.delete(record_id)
            self.parents.undo.remember(record)
            ref = self._ref(record_id)
            for sub, (attr, _) in self._sub_collections().items():
                for child in getattr(record, attr):
                    await self.gateway.delete(self.owner_id, sub, child.id, ref)
            return record

    async def restore(self) -> Any:
        """Re-create the last deleted parent and its sub-records under a new id."""
        async with self.action(
            f"restore {self.parents.collection}",
            success=self.messages.restored,
            failure=self.messages.failure("restaurar"),
        ):
            entry = require_undo_entry(self.parents)
            snapshot = entry.record
            empty = {attr: [] for attr, _ in self._sub_collections().values()}
            restored = await self.parents.create(replace(snapshot, id=None, **empty))
            for sub, (attr, _) in self._sub_collections().items():
                for child in getattr(snapshot, attr):
                    await self._write_sub(restored, sub, replace(child, id=None))
            self.parents.undo.discard(entry)
            logger.info(
                "Restored %s %s as %s", self.parents.collection, snapshot.id, restored.id
            )
            return restored
