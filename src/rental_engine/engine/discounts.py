"""DiscountEngine — at most one discount, on the day-based portion only."""

from __future__ import annotations

from rental_engine.config.policy import DiscountConfig
from rental_engine.engine.money import percent_of
from rental_engine.models.results import DiscountResult


def select_discount(
    rental_days: int,
    standard: DiscountConfig,
    long_stay: DiscountConfig | None = None,
) -> tuple[str, DiscountConfig | None]:
    """Pick the programme that applies.  Long-stay wins whenever it qualifies."""
    if rental_days <= 0:
        return "none", None
    if long_stay is not None and long_stay.qualifies(rental_days):
        return "long_stay", long_stay
    if standard.qualifies(rental_days):
        return "standard", standard
    return "none", None


def compute_discount(
    rental_days: int,
    rental_hours: int,
    days_price: int,
    standard: DiscountConfig,
    long_stay: DiscountConfig | None = None,
) -> DiscountResult:
    """Discount on ``days_price``.  ``rental_hours`` never earns a discount.

    discount_amount = round(days_price × percentage / 100)
    """
    discount_type, config = select_discount(rental_days, standard, long_stay)
    if config is None:
        return DiscountResult()

    amount = min(percent_of(days_price, config.percentage), days_price)
    return DiscountResult(
        discount_type=discount_type,
        percentage=config.percentage,
        discount_amount=amount,
    )
