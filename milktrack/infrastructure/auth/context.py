from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class AuthContext:
    caller_id: str | None
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.caller_id)


@dataclass(slots=True)
class StorageSession:
    """Storage-scoped session bound to one caller."""

    owner_id: str
    claims: dict[str, Any] = field(default_factory=dict)
