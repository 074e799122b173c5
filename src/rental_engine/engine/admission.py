"""BookingAdmissionDecider — initial status and lifecycle transitions.

  NEW ─┬─ card ──────────────→ PENDING_PAYMENT ─┬─ paid ──→ CONFIRMED
       ├─ auto_booking ──────→ CONFIRMED        └─ timeout → CANCELLED
       └─ otherwise ─────────→ PENDING_APPROVAL ─┬─ owner ─→ CONFIRMED
                                                 └─ owner ─→ CANCELLED
  CONFIRMED ── now ≥ end ──→ COMPLETED
  any non-terminal ── cancel ──→ CANCELLED

Transitions return a new record; the input record is never mutated.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from rental_engine.config.policy import VehicleRentalPolicy
from rental_engine.errors import InvalidTransitionError
from rental_engine.models.booking import BookingRecord, BookingStatus, PaymentMethod

PAYMENT_TIMEOUT_REASON = "payment timeout"

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.NEW: frozenset({
        BookingStatus.PENDING_PAYMENT,
        BookingStatus.PENDING_APPROVAL,
        BookingStatus.CONFIRMED,
        BookingStatus.CANCELLED,
    }),
    BookingStatus.PENDING_PAYMENT: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.PENDING_APPROVAL: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


def decide_initial_status(payment_method: PaymentMethod, policy: VehicleRentalPolicy) -> BookingStatus:
    """Card payments always wait for the gateway, whatever ``auto_booking`` says."""
    if payment_method is PaymentMethod.CARD:
        return BookingStatus.PENDING_PAYMENT
    if policy.auto_booking:
        return BookingStatus.CONFIRMED
    return BookingStatus.PENDING_APPROVAL


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(
    record: BookingRecord,
    target: BookingStatus,
    now: datetime,
    reason: str | None = None,
) -> BookingRecord:
    """Move ``record`` to ``target``, stamping the matching timestamp."""
    if not can_transition(record.status, target):
        raise InvalidTransitionError(
            f"booking {record.id}: {record.status.value} → {target.value} is not allowed"
        )
    if target is BookingStatus.COMPLETED and now < record.interval.end:
        raise InvalidTransitionError(
            f"booking {record.id} cannot complete before its rental ends"
        )

    update: dict = {"status": target}
    if target is BookingStatus.CONFIRMED:
        update["confirmed_at"] = now
    elif target is BookingStatus.COMPLETED:
        update["completed_at"] = now
    elif target is BookingStatus.CANCELLED:
        update["cancelled_at"] = now
        update["cancellation_reason"] = reason
    return record.model_copy(update=update)


def payment_deadline(record: BookingRecord, timeout_seconds: int) -> datetime | None:
    if record.status is not BookingStatus.PENDING_PAYMENT or record.created_at is None:
        return None
    return record.created_at + timedelta(seconds=timeout_seconds)


def is_payment_expired(record: BookingRecord, now: datetime, timeout_seconds: int) -> bool:
    deadline = payment_deadline(record, timeout_seconds)
    return deadline is not None and now >= deadline


def is_due_for_completion(record: BookingRecord, now: datetime) -> bool:
    return record.status is BookingStatus.CONFIRMED and now >= record.interval.end
