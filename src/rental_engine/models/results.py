"""Result types — the contract between the engine, the booking service and renderers.

Every model here is an immutable value object.  Amounts are integer XOF;
the only non-integer figure is ``effective_daily_rate``, which exists for
display and is never billed.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from rental_engine.config.cancellation import CancellingParty

DiscountType = Literal["none", "standard", "long_stay"]
RateTier = Literal["day", "week", "month"]
CancellationRule = Literal["pending", "before_start", "in_progress", "after_end"]


# ═══════════════════════════════════════════════════════════════════════════
# Intermediate results
# ═══════════════════════════════════════════════════════════════════════════

class RentalDuration(BaseModel):
    """Billable units resolved from an interval (DurationResolver output)."""

    model_config = ConfigDict(frozen=True)

    total_hours: int
    """ceil(interval length / 1 hour)."""

    rental_days: int
    """Days billed at the daily rate."""

    rental_hours: int
    """Hours billed at the hourly rate (0 when hourly billing is off)."""

    absorbed_hours: int = 0
    """Leftover hours of a multi-day rental that were not billed separately."""


class RateSelection(BaseModel):
    """Per-day rate used for display and for billing (RateSelector output)."""

    model_config = ConfigDict(frozen=True)

    tier: RateTier
    effective_daily_rate: float
    """Tier-averaged price per day — display only."""

    daily_rate_for_billing: int
    """Always the flat daily rate."""


class DiscountResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    discount_type: DiscountType = "none"
    percentage: float | None = None
    discount_amount: int = 0


class FeeSplit(BaseModel):
    """A tax-inclusive amount and its HT / VAT decomposition."""

    model_config = ConfigDict(frozen=True)

    total: int
    ht: int
    vat: int


class PlatformFees(BaseModel):
    """FeeCalculator output."""

    model_config = ConfigDict(frozen=True)

    service_fee: FeeSplit
    """Charged to the renter on top of the rental price."""

    host_commission: FeeSplit
    """Withheld from the owner's payout."""

    host_net_amount: int
    """base_price_with_driver − host_commission.total."""


# ═══════════════════════════════════════════════════════════════════════════
# Full breakdown
# ═══════════════════════════════════════════════════════════════════════════

class PricingBreakdown(BaseModel):
    """Everything charged for one booking.

    Invariants:
      base_price             = original_total − discount_amount
      base_price_with_driver = base_price + driver_fee
      total_price            = base_price_with_driver + service_fee.total
      host_net_amount        = base_price_with_driver − host_commission.total

    ``security_deposit`` is carried for display only; it never enters any
    of the sums above.
    """

    model_config = ConfigDict(frozen=True)

    rental_days: int
    rental_hours: int
    daily_rate: int
    hourly_rate: int | None = None
    effective_daily_rate: float
    rate_tier: RateTier = "day"

    days_price: int
    hours_price: int
    original_total: int
    """days_price + hours_price."""

    discount_type: DiscountType = "none"
    discount_percentage: float | None = None
    discount_amount: int = 0

    base_price: int
    driver_fee: int = 0
    base_price_with_driver: int

    service_fee: FeeSplit
    host_commission: FeeSplit
    total_price: int
    host_net_amount: int

    security_deposit: int = 0

    @property
    def rental_type(self) -> Literal["daily", "hourly"]:
        return "daily" if self.rental_days > 0 else "hourly"


class PricingResult(BaseModel):
    """Tagged result of :func:`try_compute_pricing` — exactly one side is set."""

    model_config = ConfigDict(frozen=True)

    breakdown: PricingBreakdown | None = None
    error_code: str | None = None
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.breakdown is not None


# ═══════════════════════════════════════════════════════════════════════════
# Informational estimates
# ═══════════════════════════════════════════════════════════════════════════

class CardFeeEstimate(BaseModel):
    """Processor fee the platform expects to pay on a card payment."""

    model_config = ConfigDict(frozen=True)

    region: Literal["eea", "uk", "international"]
    base_rate: float
    needs_fx: bool
    effective_rate: float
    fixed_fee_xof: int
    fee_amount_xof: int
    total_amount_xof: int


class CancellationTerms(BaseModel):
    """Penalty and renter refund when a booking is cancelled, in XOF."""

    model_config = ConfigDict(frozen=True)

    cancelled_by: CancellingParty
    rule: CancellationRule
    hours_before_start: float
    """Negative once the rental has started."""

    penalty_pct: float
    penalty_amount: int
    """Owed by the cancelling party."""

    refund_amount: int
    """Rental price returned to the renter; platform fees excluded."""
