"""Shared test fixtures — policies, a controllable clock and fake collaborators."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from rental_engine.config import DiscountConfig, EngineSettings, VehicleRentalPolicy
from rental_engine.models import PaymentMethod, PaymentStatus, RentalInterval, RentalRequest
from rental_engine.services import (
    BookingService,
    CheckoutSession,
    InMemoryBookingRepository,
    InMemorySnapshotStore,
    RecordingNotifier,
    RepositoryAvailabilityOracle,
)

T0 = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


def window(hours: float, start: datetime = T0) -> RentalInterval:
    """Interval of ``hours`` starting at ``start``."""
    return RentalInterval(start=start, end=start + timedelta(hours=hours))


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakePaymentGateway:
    """Returns queued statuses in order, then repeats the last one."""

    def __init__(self, *statuses: PaymentStatus) -> None:
        self._statuses = list(statuses) or [PaymentStatus.PENDING]
        self.status_calls = 0
        self.sessions: list[dict[str, Any]] = []

    def create_checkout_session(self, booking_id, amount_xof, currency, rate, metadata) -> CheckoutSession:
        self.sessions.append({
            "booking_id": booking_id, "amount_xof": amount_xof,
            "currency": currency, "rate": rate, "metadata": metadata,
        })
        return CheckoutSession(url=f"https://pay.example/{booking_id}")

    def get_payment_status(self, booking_id: str) -> PaymentStatus:
        self.status_calls += 1
        if len(self._statuses) > 1:
            return self._statuses.pop(0)
        return self._statuses[0]


# ═══════════════════════════════════════════════════════════════════════════
# Policies
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def daily_policy() -> VehicleRentalPolicy:
    """Day-only vehicle, no discounts."""
    return VehicleRentalPolicy(daily_rate=20_000, security_deposit=100_000)


@pytest.fixture
def hourly_policy() -> VehicleRentalPolicy:
    return VehicleRentalPolicy(
        daily_rate=20_000,
        hourly_rate=2_000,
        hourly_billing_enabled=True,
    )


@pytest.fixture
def discounted_policy() -> VehicleRentalPolicy:
    """Standard 10% from 7 days, long-stay 20% from 28 days."""
    return VehicleRentalPolicy(
        daily_rate=20_000,
        weekly_rate=120_000,
        monthly_rate=500_000,
        standard_discount=DiscountConfig(enabled=True, min_units=7, percentage=10),
        long_stay_discount=DiscountConfig(enabled=True, min_units=28, percentage=20),
    )


@pytest.fixture
def chauffeured_policy() -> VehicleRentalPolicy:
    return VehicleRentalPolicy(daily_rate=30_000, with_driver=True, driver_fee=15_000)


# ═══════════════════════════════════════════════════════════════════════════
# Service wiring
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(T0 - timedelta(days=7))


@pytest.fixture
def repository(clock: FakeClock) -> InMemoryBookingRepository:
    return InMemoryBookingRepository(clock=clock)


@pytest.fixture
def snapshots() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def payments() -> FakePaymentGateway:
    return FakePaymentGateway(PaymentStatus.PENDING)


@pytest.fixture
def service(repository, snapshots, payments, notifier, clock) -> BookingService:
    return BookingService(
        repository=repository,
        oracle=RepositoryAvailabilityOracle(repository),
        snapshots=snapshots,
        payments=payments,
        notifier=notifier,
        settings=EngineSettings(),
        clock=clock,
    )


def make_request(
    hours: float = 72,
    payment_method: PaymentMethod = PaymentMethod.CASH,
    start: datetime = T0,
    vehicle_id: str = "veh-1",
    **kwargs: Any,
) -> RentalRequest:
    return RentalRequest(
        vehicle_id=vehicle_id,
        renter_id="renter-1",
        interval=window(hours, start),
        payment_method=payment_method,
        **kwargs,
    )
