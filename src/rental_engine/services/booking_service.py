"""Booking service — in-process orchestration of one booking's lifecycle.

submit():
  1. price the request            → ValidationError, nothing persisted
  2. availability (fail closed)   → ConflictError, nothing persisted
  3. decide the initial status
  4. repository.create            → atomic re-check, ConflictError on a lost race
  5. snapshot + notification      → post-commit, failures logged only

A booking exists once step 4 returns; steps 5 never undo it.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from rental_engine.config.cancellation import CancellingParty
from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.config.settings import EngineSettings
from rental_engine.engine.admission import (
    PAYMENT_TIMEOUT_REASON,
    decide_initial_status,
    is_due_for_completion,
    is_payment_expired,
    transition,
)
from rental_engine.engine.availability import AvailabilityOracle, ensure_available
from rental_engine.engine.cancellation import compute_cancellation_terms
from rental_engine.engine.currency import ExchangeRateProvider, FixedRateProvider, convert_at_rate
from rental_engine.engine.pricing import compute_pricing
from rental_engine.engine.snapshot import SnapshotStore, build_snapshot, snapshot_for_rendering
from rental_engine.errors import ConflictError, InvalidTransitionError, PostCommitError
from rental_engine.models.booking import (
    AvailabilityQuery,
    BookingRecord,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
    RentalRequest,
)
from rental_engine.models.results import CancellationTerms, PricingBreakdown
from rental_engine.models.snapshot import CalculationSnapshot
from rental_engine.services.collaborators import (
    BookingRepository,
    CheckoutSession,
    Notifier,
    PaymentGateway,
)

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


_CREATED_TEMPLATES = {
    BookingStatus.PENDING_PAYMENT: "vehicle_booking_payment_pending",
    BookingStatus.PENDING_APPROVAL: "vehicle_booking_request",
    BookingStatus.CONFIRMED: "vehicle_booking_confirmed",
}


class BookingService:
    """Wires the pure engine to storage, payment and notification collaborators.

    Parameters
    ----------
    repository : BookingRepository
        Booking storage; its ``create`` closes the check-then-insert race.
    oracle : AvailabilityOracle
        Conflict oracle consulted before insertion.
    snapshots : SnapshotStore
        Write-once store for calculation snapshots.
    payments : PaymentGateway | None
        Required for card bookings only.
    notifier : Notifier | None
        Best-effort e-mail dispatch.
    settings : EngineSettings | None
        Fee schedule, payment timeout, currency rates, cancellation tiers.
    clock : callable
        Returns the current time; injectable for tests.
    rates : ExchangeRateProvider | None
        Defaults to the fixed reference rates from ``settings.currency``.
    """

    def __init__(
        self,
        repository: BookingRepository,
        oracle: AvailabilityOracle,
        snapshots: SnapshotStore,
        payments: PaymentGateway | None = None,
        notifier: Notifier | None = None,
        settings: EngineSettings | None = None,
        clock: Callable[[], datetime] = _utc_now,
        rates: ExchangeRateProvider | None = None,
    ) -> None:
        self._repository = repository
        self._oracle = oracle
        self._snapshots = snapshots
        self._payments = payments
        self._notifier = notifier
        self._settings = settings or EngineSettings()
        self._clock = clock
        self._rates = rates or FixedRateProvider(self._settings.currency)

    @property
    def settings(self) -> EngineSettings:
        return self._settings

    # ── Pricing ─────────────────────────────────────────────────────────

    def quote(self, request: RentalRequest, policy: VehicleRentalPolicy) -> PricingBreakdown:
        return compute_pricing(request, policy, self._settings.fees)

    # ── Admission ───────────────────────────────────────────────────────

    def submit(self, request: RentalRequest, policy: VehicleRentalPolicy) -> BookingRecord:
        pricing = self.quote(request, policy)

        ensure_available(
            self._oracle,
            AvailabilityQuery(vehicle_id=request.vehicle_id, interval=request.interval),
        )

        status = decide_initial_status(request.payment_method, policy)
        booking = self._repository.create(BookingRecord(
            vehicle_id=request.vehicle_id,
            renter_id=request.renter_id,
            interval=request.interval,
            rental_type=pricing.rental_type,
            pricing=pricing,
            payment_method=request.payment_method,
            status=status,
            confirmed_at=self._clock() if status is BookingStatus.CONFIRMED else None,
        ))
        logger.info(
            "booking %s admitted as %s (vehicle %s, total %d XOF)",
            booking.id, status.value, booking.vehicle_id, pricing.total_price,
        )

        self._after_commit("snapshot", booking.id, lambda: self._store_snapshot(booking, request, policy))
        self._notify(_CREATED_TEMPLATES[status], booking)
        return booking

    def start_checkout(self, booking_id: str) -> CheckoutSession:
        """Open a payment page for a card booking still waiting for payment."""
        booking = self._repository.get(booking_id)
        if booking.status is not BookingStatus.PENDING_PAYMENT:
            raise InvalidTransitionError(f"booking {booking_id} is not waiting for payment")
        if self._payments is None:
            raise RuntimeError("no payment gateway configured")

        snapshot = self._snapshots.get(booking_id)
        if snapshot is not None:
            currency, rate = snapshot.currency, snapshot.exchange_rate
        else:
            currency, rate = "XOF", Decimal(1)
        total = booking.pricing.total_price
        return self._payments.create_checkout_session(
            booking_id,
            total,
            currency,
            rate,
            {
                "vehicle_id": booking.vehicle_id,
                "renter_id": booking.renter_id,
                "amount_xof": total,
                "amount_display": str(convert_at_rate(total, currency, rate)),
            },
        )

    # ── Lifecycle ───────────────────────────────────────────────────────

    def confirm(self, booking_id: str) -> BookingRecord:
        """Owner approval, or payment observed for a card booking."""
        booking = self._move(self._repository.get(booking_id), BookingStatus.CONFIRMED)
        self._notify("vehicle_booking_confirmed", booking)
        return booking

    def cancel(self, booking_id: str, reason: str | None = None) -> BookingRecord:
        booking = self._move(self._repository.get(booking_id), BookingStatus.CANCELLED, reason)
        self._notify("vehicle_booking_cancelled", booking)
        return booking

    def complete_due(self, vehicle_id: str) -> list[BookingRecord]:
        """Complete every confirmed booking of ``vehicle_id`` whose rental has ended."""
        now = self._clock()
        completed = []
        for booking in self._repository.list_for_vehicle(vehicle_id):
            if is_due_for_completion(booking, now):
                completed.append(self._move(booking, BookingStatus.COMPLETED))
        return completed

    # ── Payment-pending expiry ──────────────────────────────────────────

    def poll_payment(self, booking_id: str) -> BookingRecord:
        """One status check; also used as the wake-on-foreground re-check."""
        booking = self._repository.get(booking_id)
        if booking.status is not BookingStatus.PENDING_PAYMENT:
            return booking

        if self._payment_status(booking_id) is PaymentStatus.SUCCEEDED:
            return self._confirm_paid(booking)
        if is_payment_expired(booking, self._clock(), self._settings.payment.pending_timeout_seconds):
            return self.expire_pending_payment(booking_id)
        return booking

    def expire_pending_payment(self, booking_id: str) -> BookingRecord:
        """Cancel an unpaid card booking, after re-verifying the payment once.

        Does nothing before the payment deadline.  Payment success always
        wins: if the gateway reports success on the re-check, or another
        caller confirmed the booking meanwhile, the booking ends up CONFIRMED.
        """
        booking = self._repository.get(booking_id)
        if booking.status is not BookingStatus.PENDING_PAYMENT:
            return booking
        if not is_payment_expired(booking, self._clock(), self._settings.payment.pending_timeout_seconds):
            return booking

        if self._payment_status(booking_id) is PaymentStatus.SUCCEEDED:
            logger.info("booking %s paid just before its payment timeout", booking_id)
            return self._confirm_paid(booking)

        try:
            cancelled = self._move(booking, BookingStatus.CANCELLED, PAYMENT_TIMEOUT_REASON)
        except ConflictError:
            return self._repository.get(booking_id)
        logger.info("booking %s cancelled: %s", booking_id, PAYMENT_TIMEOUT_REASON)
        self._notify("vehicle_booking_payment_expired", cancelled)
        return cancelled

    def wait_for_payment(
        self,
        booking_id: str,
        sleep: Callable[[float], None] = time.sleep,
    ) -> BookingRecord:
        """Poll until the booking leaves PENDING_PAYMENT (paid, or expired)."""
        interval = self._settings.payment.poll_interval_seconds
        while True:
            booking = self.poll_payment(booking_id)
            if booking.status is not BookingStatus.PENDING_PAYMENT:
                return booking
            sleep(interval)

    # ── Rendering ───────────────────────────────────────────────────────

    def render_pricing(
        self,
        booking_id: str,
        legacy_policy: VehicleRentalPolicy | None = None,
        with_driver: bool = False,
    ) -> CalculationSnapshot:
        """Snapshot for invoices and e-mails; recomputes only for pre-snapshot bookings."""
        booking = self._repository.get(booking_id)
        return snapshot_for_rendering(
            self._snapshots,
            booking,
            self._clock(),
            legacy_policy=legacy_policy,
            with_driver=with_driver,
            fees=self._settings.fees,
        )

    def cancellation_terms(self, booking_id: str, cancelled_by: CancellingParty = "renter") -> CancellationTerms:
        """What cancelling right now would cost ``cancelled_by``."""
        booking = self._repository.get(booking_id)
        return compute_cancellation_terms(
            booking.pricing,
            booking.interval,
            booking.status,
            self._clock(),
            cancelled_by,
            self._settings.cancellation,
        )

    # ── Internals ───────────────────────────────────────────────────────

    def _move(self, booking: BookingRecord, target: BookingStatus, reason: str | None = None) -> BookingRecord:
        updated = transition(booking, target, self._clock(), reason)
        return self._repository.update_status(updated, expected=booking.status)

    def _confirm_paid(self, booking: BookingRecord) -> BookingRecord:
        try:
            confirmed = self._move(booking, BookingStatus.CONFIRMED)
        except ConflictError:
            return self._repository.get(booking.id)
        self._notify("vehicle_booking_confirmed", confirmed)
        return confirmed

    def _payment_status(self, booking_id: str) -> PaymentStatus:
        if self._payments is None:
            return PaymentStatus.PENDING
        return self._payments.get_payment_status(booking_id)

    def _store_snapshot(self, booking: BookingRecord, request: RentalRequest, policy: VehicleRentalPolicy) -> None:
        exchange_rate = self._rates.rate_for(request.currency)
        self._snapshots.save(build_snapshot(
            booking,
            policy,
            request.with_driver,
            self._settings.fees,
            calculated_at=self._clock(),
            currency=request.currency,
            exchange_rate=Decimal(exchange_rate),
        ))

    def _notify(self, template_type: str, booking: BookingRecord) -> None:
        data: dict[str, Any] = {
            "booking_id": booking.id,
            "vehicle_id": booking.vehicle_id,
            "status": booking.status.value,
            "start": booking.interval.start.isoformat(),
            "end": booking.interval.end.isoformat(),
            "total_price": booking.pricing.total_price,
        }
        if booking.cancellation_reason:
            data["cancellation_reason"] = booking.cancellation_reason
        if self._notifier is not None:
            self._after_commit(
                f"email {template_type}",
                booking.id,
                lambda: self._notifier.send_email(template_type, booking.renter_id, data),
            )

    @staticmethod
    def _after_commit(step: str, booking_id: str | None, action: Callable[[], None]) -> None:
        try:
            action()
        except Exception as exc:
            failure = PostCommitError(f"{step} failed for booking {booking_id}")
            failure.__cause__ = exc
            logger.error("%s", failure, exc_info=failure)
