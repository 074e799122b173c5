"""Vehicle rental policy — the pricing inputs owned by the vehicle aggregate.

Built once at the boundary from whatever the vehicle store returns, then
handed to the engine read-only.  Invalid configurations are rejected here
rather than deep inside the pricing code.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiscountConfig(BaseModel):
    """One discount programme.  ``min_units`` is always counted in days."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Programme switched on by the owner")
    min_units: int | None = Field(
        default=None, ge=1,
        description="Minimum billable days for the programme to apply",
    )
    percentage: float | None = Field(
        default=None, gt=0, le=100,
        description="Discount off the day-based price, in percent (10 = 10%)",
    )

    @model_validator(mode="after")
    def _enabled_needs_terms(self) -> DiscountConfig:
        if self.enabled and (self.min_units is None or self.percentage is None):
            raise ValueError("an enabled discount needs both min_units and percentage")
        return self

    def qualifies(self, rental_days: int) -> bool:
        """True when ``rental_days`` reaches this programme's threshold."""
        if not self.enabled or not self.min_units or not self.percentage:
            return False
        return rental_days >= self.min_units


class VehicleRentalPolicy(BaseModel):
    """Pricing and admission policy of one vehicle.  All amounts in XOF."""

    model_config = ConfigDict(frozen=True)

    daily_rate: int = Field(default=20_000, gt=0, description="Flat price per billable day")
    hourly_rate: int | None = Field(default=None, gt=0, description="Price per billable hour")
    weekly_rate: int | None = Field(default=None, gt=0, description="Price of a full 7-day block")
    monthly_rate: int | None = Field(default=None, gt=0, description="Price of a full 30-day block")

    hourly_billing_enabled: bool = Field(
        default=False,
        description="Sub-day and remainder hours are billed at hourly_rate",
    )
    sub_day_requires_hourly: bool = Field(
        default=False,
        description="Reject sub-day requests when hourly billing is off, instead of "
                    "charging the one-day minimum.",
    )
    bill_partial_day_as_full: bool = Field(
        default=False,
        description="With hourly billing off, round leftover hours of a multi-day "
                    "rental up into one more day instead of absorbing them.",
    )
    min_rental_days: int = Field(default=1, ge=1, description="Minimum billable days")
    min_rental_hours: int = Field(default=1, ge=1, description="Minimum billable hours")

    standard_discount: DiscountConfig = Field(default_factory=DiscountConfig)
    long_stay_discount: DiscountConfig | None = Field(default=None)

    with_driver: bool = Field(default=False, description="Vehicle can be rented with a driver")
    driver_fee: int | None = Field(
        default=None, ge=0,
        description="Flat surcharge per booking when the renter asks for the driver",
    )
    security_deposit: int = Field(
        default=0, ge=0,
        description="Cash deposit settled between renter and owner; never billed here",
    )
    auto_booking: bool = Field(
        default=False,
        description="Non-card bookings are confirmed without owner approval",
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> VehicleRentalPolicy:
        if self.hourly_billing_enabled and self.hourly_rate is None:
            raise ValueError("hourly billing requires an hourly_rate")
        if self.with_driver and self.driver_fee is None:
            raise ValueError("a vehicle offered with driver needs a driver_fee")
        long_stay = self.long_stay_discount
        if (
            long_stay is not None
            and long_stay.enabled
            and self.standard_discount.enabled
            and long_stay.min_units <= self.standard_discount.min_units
        ):
            raise ValueError("long-stay threshold must be above the standard threshold")
        return self
