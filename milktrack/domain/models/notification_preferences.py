from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

COLLECTION = "settings"
DOCUMENT_ID = "notifications"


@dataclass(slots=True)
class NotificationPreferences:
    email: bool = True
    sms: bool = False
    app: bool = True
    id: str | None = DOCUMENT_ID

    def to_document(self) -> dict[str, Any]:
        return {"email": self.email, "sms": self.sms, "app": self.app}

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> NotificationPreferences:
        defaults = cls()
        return cls(
            id=doc_id,
            email=bool(data.get("email", defaults.email)),
            sms=bool(data.get("sms", defaults.sms)),
            app=bool(data.get("app", defaults.app)),
        )
