"""FeeCalculator — traveler service fee, host commission, host net payout.

For each side:
  HT    = round(base × rate / 100)
  VAT   = round(HT × vat / 100)
  total = HT + VAT            (= round(HT × (1 + vat)) since HT is whole)

host_net_amount = base_price_with_driver − host_commission.total
The security deposit is settled in cash between renter and owner and
never enters this figure.
"""

from __future__ import annotations

from rental_engine.config.fees import FeeSchedule, ServiceCategory
from rental_engine.engine.money import percent_of
from rental_engine.models.results import FeeSplit, PlatformFees


def split_fee(base: int, rate_pct: float, vat_pct: float) -> FeeSplit:
    ht = percent_of(base, rate_pct)
    vat = percent_of(ht, vat_pct)
    return FeeSplit(total=ht + vat, ht=ht, vat=vat)


def compute_platform_fees(
    base_price_with_driver: int,
    schedule: FeeSchedule | None = None,
    category: ServiceCategory = "vehicle",
) -> PlatformFees:
    """Fees on the post-discount, driver-inclusive price.

    Rates are flat percentages: the number of billed days or hours does
    not change them.
    """
    schedule = schedule or FeeSchedule()
    rates = schedule.rates_for(category)

    if base_price_with_driver <= 0:
        zero = FeeSplit(total=0, ht=0, vat=0)
        return PlatformFees(
            service_fee=zero,
            host_commission=zero,
            host_net_amount=max(base_price_with_driver, 0),
        )

    service_fee = split_fee(base_price_with_driver, rates.traveler_fee_pct, schedule.vat_pct)
    host_commission = split_fee(base_price_with_driver, rates.host_fee_pct, schedule.vat_pct)

    return PlatformFees(
        service_fee=service_fee,
        host_commission=host_commission,
        host_net_amount=base_price_with_driver - host_commission.total,
    )
