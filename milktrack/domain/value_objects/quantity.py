from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def to_decimal(value: Any, *, default: Decimal | None = None) -> Decimal | None:
    """Coerce a stored or submitted quantity into a Decimal.

    Empty values return `default`. Anything that does not parse as a number
    raises ValueError.
    """
    if value is None or value == "":
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("quantity must be numeric")
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"quantity must be numeric: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"quantity must be numeric: {value!r}")
    return result


def to_document_value(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)
