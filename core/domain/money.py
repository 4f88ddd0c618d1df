from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

ZERO = Decimal("0")
HUNDRED = Decimal("100")
_CENT = Decimal("0.01")


def to_decimal(value: Any) -> Decimal:
    """Coerce amounts to Decimal without passing through binary floats."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = repr(value)
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"Invalid monetary amount: {value!r}") from exc


def round2(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def has_cent_precision(value: Decimal) -> bool:
    """True when ``value`` fits a two-decimal money column without rounding."""
    return value == value.quantize(_CENT)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= ZERO:
        return round2(ZERO)
    return round2(part / whole * HUNDRED)


__all__ = ["ZERO", "HUNDRED", "to_decimal", "round2", "has_cent_precision", "percentage"]
