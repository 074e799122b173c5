"""Tests for engine/rates.py — tiered display rate vs flat billing rate."""

from __future__ import annotations

from rental_engine.config import VehicleRentalPolicy
from rental_engine.engine.rates import select_rate


def test_day_tier_when_no_tiers_configured(daily_policy):
    r = select_rate(10, daily_policy)
    assert r.tier == "day"
    assert r.effective_daily_rate == 20_000


def test_weekly_blend(discounted_policy):
    # (1 × 120 000 + 3 × 20 000) / 10
    r = select_rate(10, discounted_policy)
    assert r.tier == "week"
    assert r.effective_daily_rate == 18_000.0


def test_monthly_blend(discounted_policy):
    # (1 × 500 000 + 15 × 20 000) / 45
    r = select_rate(45, discounted_policy)
    assert r.tier == "month"
    assert r.effective_daily_rate == 17_777.78


def test_weekly_not_used_below_seven_days(discounted_policy):
    assert select_rate(6, discounted_policy).tier == "day"


def test_weekly_used_below_thirty_days_even_with_monthly(discounted_policy):
    assert select_rate(29, discounted_policy).tier == "week"


def test_billing_rate_is_always_flat(discounted_policy):
    for days in (1, 7, 10, 30, 45):
        assert select_rate(days, discounted_policy).daily_rate_for_billing == 20_000


def test_zero_days_falls_back_to_daily():
    policy = VehicleRentalPolicy(daily_rate=15_000, weekly_rate=90_000)
    assert select_rate(0, policy).effective_daily_rate == 15_000
