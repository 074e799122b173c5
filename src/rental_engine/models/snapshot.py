"""Calculation snapshot — the frozen record of how a booking was priced.

Invoices, e-mails and PDFs read this instead of recomputing from the
vehicle's live policy, which may have changed since the booking.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from rental_engine.config.currency import Currency
from rental_engine.config.fees import CommissionRates, ServiceCategory
from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.models.booking import RentalInterval
from rental_engine.models.results import PricingBreakdown


class CalculationSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    booking_id: str
    service_category: ServiceCategory = "vehicle"
    interval: RentalInterval
    with_driver: bool
    policy: VehicleRentalPolicy
    """Policy values exactly as they were when the booking was priced."""

    commission_rates: CommissionRates
    vat_pct: float
    currency: Currency = "XOF"
    exchange_rate: Decimal = Decimal(1)
    """XOF per unit of ``currency`` at booking time."""

    breakdown: PricingBreakdown
    calculated_at: datetime
    recomputed: bool = False
    """True when rebuilt for a booking that predates snapshots."""
