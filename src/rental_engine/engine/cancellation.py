"""Cancellation terms for a vehicle booking.  Amounts only, nothing is moved.

  pending request (nothing paid)  → no penalty, nothing to refund
  before pick-up                  → penalty = rental price × tier %
                                    renter refund = price − penalty
                                    owner cancels: renter refunded in full
  during the rental               → remaining = (days − elapsed − 1) × daily rate
                                    penalty = remaining × in_progress %
                                    renter refund = remaining − penalty
                                    owner cancels: renter refunded ``remaining``
  after the rental end            → penalty = price × in_progress %

The rental price is ``days_price + hours_price`` before discount.  Platform
fees are outside these terms.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from rental_engine.config.cancellation import CancellationPolicy, CancellingParty
from rental_engine.engine.money import percent_of
from rental_engine.errors import InvalidTransitionError
from rental_engine.models.booking import BookingStatus, RentalInterval
from rental_engine.models.results import CancellationTerms, PricingBreakdown

_ONE_DAY = timedelta(days=1)


def compute_cancellation_terms(
    breakdown: PricingBreakdown,
    interval: RentalInterval,
    status: BookingStatus,
    cancelled_at: datetime,
    cancelled_by: CancellingParty = "renter",
    policy: CancellationPolicy | None = None,
) -> CancellationTerms:
    if status.is_terminal:
        raise InvalidTransitionError(f"a {status.value} booking cannot be cancelled")
    policy = policy or CancellationPolicy()
    hours_before = round((interval.start - cancelled_at).total_seconds() / 3_600, 2)

    def terms(rule, pct, penalty, refund):
        return CancellationTerms(
            cancelled_by=cancelled_by,
            rule=rule,
            hours_before_start=hours_before,
            penalty_pct=pct,
            penalty_amount=penalty,
            refund_amount=refund,
        )

    if status is not BookingStatus.CONFIRMED:
        return terms("pending", 0.0, 0, 0)

    price = breakdown.original_total

    if cancelled_at < interval.start:
        pct = policy.notice_pct(cancelled_by, hours_before)
        penalty = percent_of(price, pct)
        refund = price if cancelled_by == "owner" else price - penalty
        return terms("before_start", pct, penalty, refund)

    pct = policy.in_progress_pct
    if cancelled_at < interval.end:
        elapsed_days = (cancelled_at - interval.start) // _ONE_DAY
        remaining_days = max(0, breakdown.rental_days - elapsed_days - 1)
        remaining = remaining_days * breakdown.daily_rate
        penalty = percent_of(remaining, pct)
        refund = remaining if cancelled_by == "owner" else remaining - penalty
        return terms("in_progress", pct, penalty, refund)

    penalty = percent_of(price, pct)
    return terms("after_end", pct, penalty, price - penalty)
