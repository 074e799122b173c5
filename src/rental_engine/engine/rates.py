"""RateSelector — tiered per-day rate for display.

  monthly (rental_days ≥ 30): (⌊d/30⌋ × monthly + (d mod 30) × daily) / d
  weekly  (rental_days ≥ 7):  (⌊d/7⌋  × weekly  + (d mod 7)  × daily) / d
  else:                       daily

Billing always uses the flat daily rate; the tiered average is shown to
the renter but never fed into the discount or fee computation.
"""

from __future__ import annotations

from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.models.results import RateSelection

_DAYS_PER_MONTH = 30
_DAYS_PER_WEEK = 7


def _blended(rental_days: int, block_days: int, block_rate: int, daily_rate: int) -> float:
    blocks, leftover = divmod(rental_days, block_days)
    return (blocks * block_rate + leftover * daily_rate) / rental_days


def select_rate(rental_days: int, policy: VehicleRentalPolicy) -> RateSelection:
    daily = policy.daily_rate

    if policy.monthly_rate is not None and rental_days >= _DAYS_PER_MONTH:
        tier, effective = "month", _blended(rental_days, _DAYS_PER_MONTH, policy.monthly_rate, daily)
    elif policy.weekly_rate is not None and rental_days >= _DAYS_PER_WEEK:
        tier, effective = "week", _blended(rental_days, _DAYS_PER_WEEK, policy.weekly_rate, daily)
    else:
        tier, effective = "day", float(daily)

    return RateSelection(
        tier=tier,
        effective_daily_rate=round(effective, 2),
        daily_rate_for_billing=daily,
    )
