"""Pricing pipeline — RentalRequest → PricingBreakdown.

  DurationResolver → RateSelector → DiscountEngine → FeeCalculator

Pure: identical inputs always produce an identical breakdown.
"""

from __future__ import annotations

from rental_engine.config.fees import FeeSchedule, ServiceCategory
from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.engine.discounts import compute_discount
from rental_engine.engine.duration import resolve_duration
from rental_engine.engine.fees import compute_platform_fees
from rental_engine.engine.rates import select_rate
from rental_engine.errors import ValidationError
from rental_engine.models.booking import RentalInterval, RentalRequest
from rental_engine.models.results import PricingBreakdown, PricingResult


def driver_fee_for(policy: VehicleRentalPolicy, with_driver: bool) -> int:
    """Flat driver surcharge, only when the vehicle offers one and the renter asked."""
    if policy.with_driver and with_driver and policy.driver_fee:
        return policy.driver_fee
    return 0


def price_interval(
    interval: RentalInterval,
    policy: VehicleRentalPolicy,
    with_driver: bool = False,
    fees: FeeSchedule | None = None,
    category: ServiceCategory = "vehicle",
) -> PricingBreakdown:
    """Compute the full breakdown for ``interval`` under ``policy``."""
    duration = resolve_duration(interval, policy)
    rate = select_rate(duration.rental_days, policy)

    # ── Gross price ─────────────────────────────────────────────────────
    days_price = duration.rental_days * rate.daily_rate_for_billing
    hourly_rate = policy.hourly_rate if policy.hourly_billing_enabled else None
    hours_price = duration.rental_hours * hourly_rate if hourly_rate else 0
    original_total = days_price + hours_price

    # ── Discount (day portion only) ─────────────────────────────────────
    discount = compute_discount(
        duration.rental_days,
        duration.rental_hours,
        days_price,
        policy.standard_discount,
        policy.long_stay_discount,
    )
    base_price = original_total - discount.discount_amount

    # ── Driver + platform fees ──────────────────────────────────────────
    driver_fee = driver_fee_for(policy, with_driver)
    base_price_with_driver = base_price + driver_fee
    platform = compute_platform_fees(base_price_with_driver, fees, category)

    return PricingBreakdown(
        rental_days=duration.rental_days,
        rental_hours=duration.rental_hours,
        daily_rate=rate.daily_rate_for_billing,
        hourly_rate=hourly_rate,
        effective_daily_rate=rate.effective_daily_rate,
        rate_tier=rate.tier,
        days_price=days_price,
        hours_price=hours_price,
        original_total=original_total,
        discount_type=discount.discount_type,
        discount_percentage=discount.percentage,
        discount_amount=discount.discount_amount,
        base_price=base_price,
        driver_fee=driver_fee,
        base_price_with_driver=base_price_with_driver,
        service_fee=platform.service_fee,
        host_commission=platform.host_commission,
        total_price=base_price_with_driver + platform.service_fee.total,
        host_net_amount=platform.host_net_amount,
        security_deposit=policy.security_deposit,
    )


def compute_pricing(
    request: RentalRequest,
    policy: VehicleRentalPolicy,
    fees: FeeSchedule | None = None,
) -> PricingBreakdown:
    """Price a booking request.  Raises :class:`ValidationError` on bad input."""
    return price_interval(request.interval, policy, request.with_driver, fees)


def try_compute_pricing(
    request: RentalRequest,
    policy: VehicleRentalPolicy,
    fees: FeeSchedule | None = None,
) -> PricingResult:
    """Same as :func:`compute_pricing`, returning validation failures as data."""
    try:
        breakdown = compute_pricing(request, policy, fees)
    except ValidationError as exc:
        return PricingResult(error_code=exc.code, error_message=str(exc))
    return PricingResult(breakdown=breakdown)
