"""Result and record models — engine output contracts."""

from rental_engine.models.results import (
    CancellationTerms,
    CardFeeEstimate,
    DiscountResult,
    FeeSplit,
    PlatformFees,
    PricingBreakdown,
    PricingResult,
    RateSelection,
    RentalDuration,
)
from rental_engine.models.booking import (
    AvailabilityQuery,
    BookingRecord,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    RentalInterval,
    RentalRequest,
)
from rental_engine.models.snapshot import CalculationSnapshot

__all__ = [
    "CancellationTerms",
    "CardFeeEstimate",
    "DiscountResult",
    "FeeSplit",
    "PlatformFees",
    "PricingBreakdown",
    "PricingResult",
    "RateSelection",
    "RentalDuration",
    "AvailabilityQuery",
    "BookingRecord",
    "BookingStatus",
    "PaymentMethod",
    "PaymentStatus",
    "RentalInterval",
    "RentalRequest",
    "CalculationSnapshot",
]
