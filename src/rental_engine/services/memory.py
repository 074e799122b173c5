"""In-process reference collaborators.

``InMemoryBookingRepository`` closes the check-then-insert race the way a
database exclusion constraint would: the overlap check and the insert run
under one lock.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from rental_engine.engine.availability import AvailabilityVerdict
from rental_engine.errors import ConflictError, NotFoundError, SnapshotExistsError, TransientError
from rental_engine.models.booking import AvailabilityQuery, BookingRecord, BookingStatus
from rental_engine.models.snapshot import CalculationSnapshot


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryBookingRepository:
    """Dict-backed booking store with atomic overlap-checked inserts."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._lock = threading.RLock()
        self._bookings: dict[str, BookingRecord] = {}

    def find_conflicts(self, query: AvailabilityQuery) -> list[BookingRecord]:
        with self._lock:
            return [
                b for b in self._bookings.values()
                if b.vehicle_id == query.vehicle_id
                and b.occupies_slot
                and b.id != query.exclude_booking_id
                and b.interval.overlaps(query.interval)
            ]

    def create(self, record: BookingRecord) -> BookingRecord:
        query = AvailabilityQuery(vehicle_id=record.vehicle_id, interval=record.interval)
        with self._lock:
            if self.find_conflicts(query):
                raise ConflictError(f"vehicle {record.vehicle_id} already booked for that interval")
            stored = record.model_copy(update={
                "id": str(uuid.uuid4()),
                "created_at": self._clock(),
            })
            self._bookings[stored.id] = stored
            return stored

    def get(self, booking_id: str) -> BookingRecord:
        with self._lock:
            try:
                return self._bookings[booking_id]
            except KeyError:
                raise NotFoundError(f"no booking {booking_id}") from None

    def update_status(self, record: BookingRecord, expected: BookingStatus) -> BookingRecord:
        with self._lock:
            current = self.get(record.id)
            if current.status is not expected:
                raise ConflictError(
                    f"booking {record.id} moved to {current.status.value} concurrently"
                )
            self._bookings[record.id] = record
            return record

    def list_for_vehicle(self, vehicle_id: str) -> list[BookingRecord]:
        with self._lock:
            return [b for b in self._bookings.values() if b.vehicle_id == vehicle_id]

    def all(self) -> list[BookingRecord]:
        with self._lock:
            return list(self._bookings.values())


class RepositoryAvailabilityOracle:
    """Conflict oracle over :class:`InMemoryBookingRepository`."""

    def __init__(self, repository: InMemoryBookingRepository) -> None:
        self._repository = repository

    def check(self, query: AvailabilityQuery) -> AvailabilityVerdict:
        if self._repository.find_conflicts(query):
            return AvailabilityVerdict.CONFLICT
        return AvailabilityVerdict.AVAILABLE


class InMemorySnapshotStore:
    """Write-once snapshot store keyed by booking id."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._snapshots: dict[str, CalculationSnapshot] = {}

    def save(self, snapshot: CalculationSnapshot) -> None:
        with self._lock:
            if snapshot.booking_id in self._snapshots:
                raise SnapshotExistsError(f"snapshot for {snapshot.booking_id} already stored")
            self._snapshots[snapshot.booking_id] = snapshot

    def get(self, booking_id: str) -> CalculationSnapshot | None:
        with self._lock:
            return self._snapshots.get(booking_id)


class RecordingNotifier:
    """Keeps every e-mail it is asked to send; handy in tests and dry runs."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, str, dict[str, Any]]] = []
        self._fail = fail

    def send_email(self, template_type: str, recipient: str, data: dict[str, Any]) -> None:
        if self._fail:
            raise TransientError("mail provider unreachable")
        self.sent.append((template_type, recipient, data))
