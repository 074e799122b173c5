"""CalculationSnapshotStore contract — persist what was charged, read it back.

A snapshot is written once, right after the booking row is committed, and
holds the breakdown together with the raw inputs that produced it.  Every
later rendering reads the snapshot.  Only bookings that predate snapshots
fall back to a best-effort recomputation from the policy supplied by the
caller.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol

from rental_engine.config.currency import Currency
from rental_engine.config.fees import FeeSchedule
from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.engine.pricing import price_interval
from rental_engine.errors import NotFoundError
from rental_engine.models.booking import BookingRecord, BookingStatus
from rental_engine.models.snapshot import CalculationSnapshot


class SnapshotStore(Protocol):
    def save(self, snapshot: CalculationSnapshot) -> None:
        """Persist ``snapshot``; raises SnapshotExistsError if one is already stored."""
        ...

    def get(self, booking_id: str) -> CalculationSnapshot | None: ...


def build_snapshot(
    booking: BookingRecord,
    policy: VehicleRentalPolicy,
    with_driver: bool,
    fees: FeeSchedule,
    calculated_at: datetime,
    currency: Currency = "XOF",
    exchange_rate: Decimal = Decimal(1),
) -> CalculationSnapshot:
    if booking.id is None:
        raise ValueError("cannot snapshot a booking that has not been persisted")
    return CalculationSnapshot(
        booking_id=booking.id,
        service_category="vehicle",
        interval=booking.interval,
        with_driver=with_driver,
        policy=policy,
        commission_rates=fees.rates_for("vehicle"),
        vat_pct=fees.vat_pct,
        currency=currency,
        exchange_rate=exchange_rate,
        breakdown=booking.pricing,
        calculated_at=calculated_at,
    )


def snapshot_for_rendering(
    store: SnapshotStore,
    booking: BookingRecord,
    now: datetime,
    legacy_policy: VehicleRentalPolicy | None = None,
    with_driver: bool = False,
    fees: FeeSchedule | None = None,
) -> CalculationSnapshot:
    """Stored snapshot if any; otherwise a recomputation flagged ``recomputed``."""
    if booking.id is not None:
        stored = store.get(booking.id)
        if stored is not None:
            return stored

    if legacy_policy is None:
        raise NotFoundError(f"no calculation snapshot for booking {booking.id}")

    fees = fees or FeeSchedule()
    breakdown = price_interval(booking.interval, legacy_policy, with_driver, fees)
    return CalculationSnapshot(
        booking_id=booking.id or "",
        interval=booking.interval,
        with_driver=with_driver,
        policy=legacy_policy,
        commission_rates=fees.rates_for("vehicle"),
        vat_pct=fees.vat_pct,
        breakdown=breakdown,
        calculated_at=now,
        recomputed=True,
    )


def host_net_for_status(snapshot: CalculationSnapshot, status: BookingStatus) -> int:
    """Owner payout to display: nothing is owed on a cancelled booking."""
    if status is BookingStatus.CANCELLED:
        return 0
    return snapshot.breakdown.host_net_amount
