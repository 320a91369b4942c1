from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

# Default application timezone aligned with frontend
DEFAULT_TIMEZONE_NAME = "America/Guayaquil"
DEFAULT_TZ = ZoneInfo(DEFAULT_TIMEZONE_NAME)


def resolve_tz(name: str | None) -> ZoneInfo:
    if not name:
        return DEFAULT_TZ
    return ZoneInfo(name)


def local_today(tz: ZoneInfo | str | None = None) -> date:
    """Return the calendar date that is current in `tz` (DEFAULT_TZ when omitted)."""
    if tz is None or isinstance(tz, str):
        tz = resolve_tz(tz)
    return datetime.now(timezone.utc).astimezone(tz).date()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value: date | datetime | str | None) -> date | None:
    """Parse a stored date value.

    Accepts `YYYY-MM-DD` strings and full ISO datetimes (with optional
    trailing 'Z'); datetimes are reduced to their date part.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = str(value).strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return datetime.fromisoformat(s).date()


def format_date(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None
