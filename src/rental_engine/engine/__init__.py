"""Engine — pure pricing, availability gating and booking-lifecycle logic."""

from rental_engine.engine.duration import resolve_duration, validate_interval
from rental_engine.engine.rates import select_rate
from rental_engine.engine.discounts import compute_discount, select_discount
from rental_engine.engine.fees import compute_platform_fees, split_fee
from rental_engine.engine.pricing import compute_pricing, price_interval, try_compute_pricing
from rental_engine.engine.availability import (
    AvailabilityOracle,
    AvailabilityVerdict,
    check_availability,
    ensure_available,
)
from rental_engine.engine.admission import decide_initial_status, transition
from rental_engine.engine.snapshot import SnapshotStore, build_snapshot, snapshot_for_rendering
from rental_engine.engine.card_fees import estimate_card_processing_fee
from rental_engine.engine.currency import FixedRateProvider, convert_at_rate, convert_from_xof, format_xof
from rental_engine.engine.cancellation import compute_cancellation_terms

__all__ = [
    "resolve_duration",
    "validate_interval",
    "select_rate",
    "compute_discount",
    "select_discount",
    "compute_platform_fees",
    "split_fee",
    "compute_pricing",
    "price_interval",
    "try_compute_pricing",
    # Availability + admission
    "AvailabilityOracle",
    "AvailabilityVerdict",
    "check_availability",
    "ensure_available",
    "decide_initial_status",
    "transition",
    # Snapshots
    "SnapshotStore",
    "build_snapshot",
    "snapshot_for_rendering",
    # Estimates
    "estimate_card_processing_fee",
    "FixedRateProvider",
    "convert_at_rate",
    "convert_from_xof",
    "format_xof",
    "compute_cancellation_terms",
]
