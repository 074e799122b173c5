"""Serialization tests — breakdowns and snapshots survive JSON encode/decode.

Snapshots are read back long after booking, so their shape must stay
stable and serializable for invoices and e-mails.
"""

from __future__ import annotations

import json
from decimal import Decimal

from rental_engine.config import FeeSchedule
from rental_engine.engine.pricing import price_interval, try_compute_pricing
from rental_engine.engine.snapshot import build_snapshot
from rental_engine.models import BookingRecord, BookingStatus, CalculationSnapshot, PaymentMethod, PricingBreakdown

from conftest import T0, make_request, window


def test_breakdown_round_trip(discounted_policy):
    original = price_interval(window(24 * 30), discounted_policy)
    restored = PricingBreakdown.model_validate_json(original.model_dump_json())
    assert restored == original


def test_breakdown_json_is_flat_integers(daily_policy):
    data = json.loads(price_interval(window(72), daily_policy).model_dump_json())
    assert data["total_price"] == 67_200
    assert data["service_fee"] == {"total": 7_200, "ht": 6_000, "vat": 1_200}
    assert isinstance(data["host_net_amount"], int)


def test_snapshot_round_trip(chauffeured_policy):
    interval = window(48)
    booking = BookingRecord(
        id="bk-9",
        vehicle_id="veh-1",
        renter_id="renter-1",
        interval=interval,
        rental_type="daily",
        pricing=price_interval(interval, chauffeured_policy, with_driver=True),
        payment_method=PaymentMethod.CARD,
        status=BookingStatus.PENDING_PAYMENT,
    )
    original = build_snapshot(
        booking, chauffeured_policy, True, FeeSchedule(), T0,
        currency="EUR", exchange_rate=Decimal("655.957"),
    )
    restored = CalculationSnapshot.model_validate_json(original.model_dump_json())
    assert restored == original
    assert restored.exchange_rate == Decimal("655.957")
    assert restored.breakdown.driver_fee == 15_000


def test_error_result_serializes(daily_policy):
    result = try_compute_pricing(make_request(hours=0), daily_policy)
    data = json.loads(result.model_dump_json())
    assert data["breakdown"] is None
    assert data["error_code"] == "invalid_interval"
