"""Integer XOF arithmetic.  Rounding is half-up, matching the invoices."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: Decimal | int | float) -> int:
    """Round to the nearest whole XOF, ties away from zero."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def percent_of(amount: int, pct: float) -> int:
    """``round(amount × pct / 100)`` computed in Decimal to avoid float drift."""
    return round_half_up(Decimal(amount) * Decimal(str(pct)) / Decimal(100))
