"""Configuration models — policy, fees, payment, currency, cancellation."""

from rental_engine.config.policy import DiscountConfig, VehicleRentalPolicy
from rental_engine.config.fees import CommissionRates, FeeSchedule, ServiceCategory
from rental_engine.config.payment import CardFeeConfig, PaymentSettings
from rental_engine.config.currency import Currency, CurrencySettings
from rental_engine.config.cancellation import CancellationPolicy, CancellingParty, PenaltyTier
from rental_engine.config.settings import EngineSettings, load_settings

__all__ = [
    "DiscountConfig",
    "VehicleRentalPolicy",
    "CommissionRates",
    "FeeSchedule",
    "ServiceCategory",
    "CardFeeConfig",
    "PaymentSettings",
    "Currency",
    "CurrencySettings",
    "CancellationPolicy",
    "CancellingParty",
    "PenaltyTier",
    "EngineSettings",
    "load_settings",
]
