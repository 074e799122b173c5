"""External collaborator interfaces consumed by :class:`BookingService`."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol

from pydantic import BaseModel

from rental_engine.config.currency import Currency
from rental_engine.models.booking import BookingRecord, BookingStatus, PaymentStatus


class CheckoutSession(BaseModel):
    url: str


class BookingRepository(Protocol):
    """Booking storage.  ``create`` must re-check overlap and insert atomically."""

    def create(self, record: BookingRecord) -> BookingRecord:
        """Persist ``record``; returns it with ``id`` and ``created_at`` set.

        Raises ConflictError when an overlapping non-cancelled booking exists.
        """
        ...

    def get(self, booking_id: str) -> BookingRecord: ...

    def update_status(self, record: BookingRecord, expected: BookingStatus) -> BookingRecord:
        """Store ``record`` if the stored status is still ``expected``."""
        ...

    def list_for_vehicle(self, vehicle_id: str) -> list[BookingRecord]: ...


class PaymentGateway(Protocol):
    def create_checkout_session(
        self,
        booking_id: str,
        amount_xof: int,
        currency: Currency,
        rate: Decimal,
        metadata: dict[str, Any],
    ) -> CheckoutSession:
        """Open a payment page charging ``amount_xof`` in ``currency``.

        ``amount_xof`` is always the XOF total.  ``rate`` is XOF per unit of
        ``currency`` (1 for XOF); the gateway charges ``amount_xof / rate``.
        """
        ...

    def get_payment_status(self, booking_id: str) -> PaymentStatus: ...


class Notifier(Protocol):
    """Best-effort e-mail dispatch with its own retry policy."""

    def send_email(self, template_type: str, recipient: str, data: dict[str, Any]) -> None: ...
