"""Error taxonomy.

ValidationError and ConflictError are raised before anything is persisted.
TransientError is surfaced to the caller untouched; the engine never retries.
PostCommitError marks ancillary work that failed after the booking row was
committed; it is logged by the service layer and never rolls back the booking.
"""

from __future__ import annotations


class RentalEngineError(Exception):
    """Base class for every error raised by this package."""


class ValidationError(RentalEngineError, ValueError):
    """The request cannot be priced or admitted as submitted."""

    INVALID_INTERVAL = "invalid_interval"
    BELOW_MINIMUM_DURATION = "below_minimum_duration"
    HOURLY_NOT_SUPPORTED = "hourly_not_supported"
    MISSING_FIELD = "missing_field"

    def __init__(self, message: str, code: str = "invalid_request") -> None:
        super().__init__(message)
        self.code = code


class ConflictError(RentalEngineError):
    """The requested slot overlaps an existing reservation, or could not be verified."""


class TransientError(RentalEngineError):
    """A collaborator (network, storage, payment) failed; the caller decides on retries."""


class PostCommitError(RentalEngineError):
    """Snapshot, document or notification step failed after the booking was committed."""


class InvalidTransitionError(RentalEngineError):
    """A status change that the booking lifecycle does not allow."""


class NotFoundError(RentalEngineError):
    """No booking (or snapshot) with the requested id."""


class SnapshotExistsError(RentalEngineError):
    """A calculation snapshot is write-once per booking."""
