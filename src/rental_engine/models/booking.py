"""Booking-side types — intervals, requests, statuses and the booking record."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rental_engine.config.currency import Currency
from rental_engine.models.results import PricingBreakdown


class BookingStatus(str, Enum):
    NEW = "new"
    PENDING_PAYMENT = "pending_payment"
    PENDING_APPROVAL = "pending_approval"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)


class PaymentMethod(str, Enum):
    CARD = "card"
    MOBILE_MONEY = "mobile_money"
    CASH = "cash"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


RentalType = Literal["daily", "hourly"]


class RentalInterval(BaseModel):
    """Half-open rental window ``[start, end)``, stored in UTC.

    Naive datetimes are read as UTC, so every pair of intervals compares.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def overlaps(self, other: RentalInterval) -> bool:
        """True-overlap test: touching intervals do not conflict."""
        return self.start < other.end and other.start < self.end

    def to_iso(self) -> tuple[str, str]:
        return self.start.isoformat(), self.end.isoformat()


class RentalRequest(BaseModel):
    """One booking submission as it reaches the engine."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: str = Field(min_length=1)
    renter_id: str = Field(min_length=1)
    interval: RentalInterval
    payment_method: PaymentMethod = PaymentMethod.CARD
    with_driver: bool = Field(default=False, description="Renter asked for the vehicle's driver")
    currency: Currency = Field(default="XOF", description="Currency the renter will pay in")


class AvailabilityQuery(BaseModel):
    """Ephemeral availability question; never persisted."""

    model_config = ConfigDict(frozen=True)

    vehicle_id: str
    interval: RentalInterval
    exclude_booking_id: str | None = None


class BookingRecord(BaseModel):
    """A persisted reservation.  Changed only through status transitions."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    vehicle_id: str
    renter_id: str
    interval: RentalInterval
    rental_type: RentalType
    pricing: PricingBreakdown
    payment_method: PaymentMethod
    status: BookingStatus = BookingStatus.NEW
    created_at: datetime | None = None
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str | None = None

    @property
    def occupies_slot(self) -> bool:
        """Every non-cancelled booking blocks its interval."""
        return self.status is not BookingStatus.CANCELLED
