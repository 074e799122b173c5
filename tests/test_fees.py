"""Tests for engine/fees.py — HT/VAT split and host net amount."""

from __future__ import annotations

from rental_engine.config import FeeSchedule, VehicleRentalPolicy
from rental_engine.engine.fees import compute_platform_fees, split_fee
from rental_engine.engine.pricing import price_interval

from conftest import window


def test_vehicle_fees_on_round_amount():
    fees = compute_platform_fees(60_000)
    # 10% HT = 6 000, VAT 20% = 1 200
    assert (fees.service_fee.ht, fees.service_fee.vat, fees.service_fee.total) == (6_000, 1_200, 7_200)
    # 2% HT = 1 200, VAT 20% = 240
    assert (fees.host_commission.ht, fees.host_commission.vat, fees.host_commission.total) == (1_200, 240, 1_440)
    assert fees.host_net_amount == 58_560


def test_property_category_uses_its_own_rate():
    fees = compute_platform_fees(100_000, category="property")
    assert fees.service_fee.ht == 12_000
    assert fees.host_commission.ht == 2_000


def test_split_rounds_half_up():
    split = split_fee(1_005, 10, 20)
    # 100.5 → 101 ; 20.2 → 20
    assert (split.ht, split.vat, split.total) == (101, 20, 121)


def test_total_is_ht_plus_vat():
    for base in (1, 999, 12_345, 67_891):
        split = split_fee(base, 10, 20)
        assert split.total == split.ht + split.vat


def test_custom_vat_rate():
    schedule = FeeSchedule(vat_pct=18)
    fees = compute_platform_fees(50_000, schedule)
    assert fees.service_fee.vat == 900


def test_zero_base_has_no_fees():
    fees = compute_platform_fees(0)
    assert fees.service_fee.total == 0
    assert fees.host_commission.total == 0
    assert fees.host_net_amount == 0


def test_host_net_identity():
    fees = compute_platform_fees(183_456)
    assert fees.host_net_amount == 183_456 - fees.host_commission.total


def test_fees_independent_of_rental_length():
    three_days = price_interval(window(72), VehicleRentalPolicy(daily_rate=20_000))
    one_day = price_interval(window(24), VehicleRentalPolicy(daily_rate=60_000))
    assert three_days.service_fee == one_day.service_fee
    assert three_days.host_commission == one_day.host_commission
