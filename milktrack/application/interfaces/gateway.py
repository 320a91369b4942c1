from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol


@dataclass(frozen=True, slots=True)
class ParentRef:
    """Selects the nested sub-collection of one parent document."""

    collection: str
    id: str


@dataclass(slots=True)
class Document:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


def collection_path(owner_id: str, collection: str, parent: ParentRef | None = None) -> str:
    if parent is None:
        return f"users/{owner_id}/{collection}"
    return f"users/{owner_id}/{parent.collection}/{parent.id}/{collection}"


class PersistenceGateway(Protocol):
    """Per-owner document store.

    `update` merges the patch shallowly and raises NotFound for a missing
    document; `delete` of a missing document is a no-op.
    """

    async def list(
        self, owner_id: str, collection: str, parent: ParentRef | None = None
    ) -> list[Document]: ...

    async def get(
        self, owner_id: str, collection: str, doc_id: str, parent: ParentRef | None = None
    ) -> Document | None: ...

    async def create(
        self,
        owner_id: str,
        collection: str,
        data: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> str: ...

    async def update(
        self,
        owner_id: str,
        collection: str,
        doc_id: str,
        patch: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> None: ...

    async def upsert(
        self,
        owner_id: str,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        parent: ParentRef | None = None,
    ) -> None: ...

    async def delete(
        self, owner_id: str, collection: str, doc_id: str, parent: ParentRef | None = None
    ) -> None: ...
