from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from milktrack.utils.datetime_tz import utcnow


class NoticeKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(slots=True)
class Notice:
    kind: NoticeKind
    message: str
    created_at: datetime
    expires_at: datetime


class NoticeBoard:
    """Holds the latest user-facing notice until it auto-dismisses."""

    def __init__(self, ttl_seconds: int, *, clock: Callable[[], datetime] = utcnow) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._notice: Notice | None = None

    def post(self, kind: NoticeKind, message: str) -> Notice:
        now = self._clock()
        self._notice = Notice(kind=kind, message=message, created_at=now, expires_at=now + self.ttl)
        return self._notice

    def success(self, message: str) -> Notice:
        return self.post(NoticeKind.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.post(NoticeKind.ERROR, message)

    def current(self) -> Notice | None:
        if self._notice is not None and self._clock() >= self._notice.expires_at:
            self._notice = None
        return self._notice
