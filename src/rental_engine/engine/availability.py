"""AvailabilityChecker — fail-closed gate in front of the conflict oracle.

The oracle answers with a tagged verdict rather than a nullable boolean.
Two intervals conflict when ``start_a < end_b and start_b < end_a``;
``exclude_booking_id`` lets a re-check ignore the booking being modified.

Anything other than an explicit AVAILABLE (an INDETERMINATE answer, an
exception, an unexpected value) is treated as unavailable.  A positive
answer is never a commit guarantee: storage re-checks atomically on insert.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Protocol

from rental_engine.engine.duration import validate_interval
from rental_engine.errors import ConflictError
from rental_engine.models.booking import AvailabilityQuery

logger = logging.getLogger(__name__)


class AvailabilityVerdict(str, Enum):
    AVAILABLE = "available"
    CONFLICT = "conflict"
    INDETERMINATE = "indeterminate"


class AvailabilityOracle(Protocol):
    """Atomic overlap check against all non-cancelled bookings of a vehicle."""

    def check(self, query: AvailabilityQuery) -> AvailabilityVerdict: ...


def check_availability(oracle: AvailabilityOracle, query: AvailabilityQuery) -> bool:
    """True only when the oracle positively reports the slot free."""
    validate_interval(query.interval)
    try:
        verdict = oracle.check(query)
    except Exception:
        logger.warning(
            "availability oracle failed for vehicle %s; treating slot as taken",
            query.vehicle_id, exc_info=True,
        )
        return False

    if verdict is AvailabilityVerdict.AVAILABLE:
        return True
    if verdict is not AvailabilityVerdict.CONFLICT:
        logger.warning(
            "availability oracle returned %r for vehicle %s; treating slot as taken",
            verdict, query.vehicle_id,
        )
    return False


def ensure_available(oracle: AvailabilityOracle, query: AvailabilityQuery) -> None:
    """Raise :class:`ConflictError` unless the slot is positively free."""
    if not check_availability(oracle, query):
        start, end = query.interval.to_iso()
        raise ConflictError(
            f"vehicle {query.vehicle_id} is not available from {start} to {end}"
        )
