"""DurationResolver — interval → billable days and hours.

  total_hours = ceil((end − start) / 1 h)
  full_days   = total_hours // 24

  total_hours ≥ 24:
    rental_days  = full_days
    rental_hours = remainder if hourly billing, else 0 (remainder absorbed,
                   or rounded up into one extra day when the policy asks)
  total_hours < 24:
    hourly billing → (0, total_hours)
    otherwise      → (1, 0), the one-day minimum

Minimums are checked last.  Nothing here touches I/O.
"""

from __future__ import annotations

import logging
import math

from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.errors import ValidationError
from rental_engine.models.booking import RentalInterval
from rental_engine.models.results import RentalDuration

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3_600
_HOURS_PER_DAY = 24


def validate_interval(interval: RentalInterval) -> None:
    """Reject intervals that cannot be billed (``end <= start``)."""
    if interval.end <= interval.start:
        raise ValidationError(
            "the rental must end after it starts",
            ValidationError.INVALID_INTERVAL,
        )


def billable_hours(interval: RentalInterval) -> int:
    """Started hours between start and end."""
    seconds = (interval.end - interval.start).total_seconds()
    return math.ceil(seconds / _SECONDS_PER_HOUR)


def resolve_duration(interval: RentalInterval, policy: VehicleRentalPolicy) -> RentalDuration:
    """Resolve billable units, raising :class:`ValidationError` on policy violations."""
    validate_interval(interval)
    total_hours = billable_hours(interval)
    full_days = total_hours // _HOURS_PER_DAY
    absorbed = 0

    if total_hours >= _HOURS_PER_DAY:
        remaining = total_hours - full_days * _HOURS_PER_DAY
        rental_days = full_days
        if policy.hourly_billing_enabled:
            rental_hours = remaining
        else:
            rental_hours = 0
            if remaining and policy.bill_partial_day_as_full:
                rental_days += 1
            elif remaining:
                absorbed = remaining
                logger.warning(
                    "%d leftover hour(s) absorbed into a %d-day rental (hourly billing off)",
                    remaining, full_days,
                )
    else:
        if policy.hourly_billing_enabled:
            rental_days, rental_hours = 0, total_hours
        elif policy.sub_day_requires_hourly:
            raise ValidationError(
                "this vehicle cannot be rented for less than a day",
                ValidationError.HOURLY_NOT_SUPPORTED,
            )
        else:
            rental_days, rental_hours = 1, 0

    # ── Minimums ────────────────────────────────────────────────────────
    if 0 < rental_days < policy.min_rental_days:
        raise ValidationError(
            f"minimum rental is {policy.min_rental_days} day(s), got {rental_days}",
            ValidationError.BELOW_MINIMUM_DURATION,
        )
    if rental_hours > 0 and rental_hours < policy.min_rental_hours:
        raise ValidationError(
            f"minimum rental is {policy.min_rental_hours} hour(s), got {rental_hours}",
            ValidationError.BELOW_MINIMUM_DURATION,
        )

    return RentalDuration(
        total_hours=total_hours,
        rental_days=rental_days,
        rental_hours=rental_hours,
        absorbed_hours=absorbed,
    )
