"""Services — booking orchestration and its collaborators."""

from rental_engine.services.collaborators import (
    BookingRepository,
    CheckoutSession,
    Notifier,
    PaymentGateway,
)
from rental_engine.services.memory import (
    InMemoryBookingRepository,
    InMemorySnapshotStore,
    RecordingNotifier,
    RepositoryAvailabilityOracle,
)
from rental_engine.services.booking_service import BookingService

__all__ = [
    "BookingRepository",
    "CheckoutSession",
    "Notifier",
    "PaymentGateway",
    "InMemoryBookingRepository",
    "InMemorySnapshotStore",
    "RecordingNotifier",
    "RepositoryAvailabilityOracle",
    "BookingService",
]
