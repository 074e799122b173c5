"""Informational estimates — card processing fee, currency display, cancellation terms.

None of these change what is charged: total_price stays the pricing total.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from rental_engine.config import CancellationPolicy, CardFeeConfig, CurrencySettings, PenaltyTier
from rental_engine.engine.cancellation import compute_cancellation_terms
from rental_engine.engine.card_fees import estimate_card_processing_fee, resolve_card_region
from rental_engine.engine.currency import FixedRateProvider, convert_from_xof, convert_to_xof, format_xof
from rental_engine.engine.pricing import price_interval
from rental_engine.errors import InvalidTransitionError
from rental_engine.models import BookingStatus

from conftest import T0, window


# ═══════════════════════════════════════════════════════════════════════════
# Card processing fee
# ═══════════════════════════════════════════════════════════════════════════

class TestCardFee:

    @pytest.mark.parametrize("code, region", [
        ("FR", "eea"), ("fr", "eea"), ("NO", "eea"),
        ("GB", "uk"),
        ("SN", "international"), ("US", "international"),
        (None, "international"), ("", "international"),
    ])
    def test_region(self, code, region):
        assert resolve_card_region(code) == region

    def test_fixed_fee_converted_to_xof(self):
        est = estimate_card_processing_fee(0, "EUR", "FR")
        assert est.fixed_fee_xof == 164  # 0.25 × 655.957
        assert est.fee_amount_xof == 164

    def test_eea_card_paying_xof(self):
        est = estimate_card_processing_fee(100_000, "XOF", "FR")
        assert est.needs_fx
        assert est.effective_rate == pytest.approx(0.039)
        assert est.fee_amount_xof == 4_064
        assert est.total_amount_xof == 104_064

    def test_uk_card_paying_eur(self):
        est = estimate_card_processing_fee(100_000, "EUR", "GB")
        assert not est.needs_fx
        assert est.fee_amount_xof == 2_664

    def test_unknown_country_paying_xof(self):
        est = estimate_card_processing_fee(100_000, "XOF")
        assert est.region == "international"
        assert est.fee_amount_xof == 5_414

    def test_custom_config(self):
        config = CardFeeConfig(eea_rate=0.01, fx_surcharge_rate=0, fixed_fee_eur=0)
        assert estimate_card_processing_fee(100_000, "XOF", "DE", config=config).fee_amount_xof == 1_000

    def test_negative_base_clamped(self):
        assert estimate_card_processing_fee(-5_000, "EUR", "FR").total_amount_xof == 164


# ═══════════════════════════════════════════════════════════════════════════
# Currency display
# ═══════════════════════════════════════════════════════════════════════════

class TestCurrency:

    def test_xof_unchanged(self):
        assert convert_from_xof(15_000, "XOF", FixedRateProvider()) == Decimal(15_000)

    def test_xof_to_eur(self):
        assert convert_from_xof(655_957, "EUR", FixedRateProvider()) == Decimal("1000.00")

    def test_eur_rounded_to_cents(self):
        assert convert_from_xof(1_000, "EUR", FixedRateProvider()) == Decimal("1.52")

    def test_custom_usd_rate(self):
        provider = FixedRateProvider(CurrencySettings(usd_xof=610))
        assert convert_from_xof(61_000, "USD", provider) == Decimal("100.00")

    def test_eur_to_xof(self):
        assert convert_to_xof(Decimal("10"), "EUR", FixedRateProvider()) == 6_560

    def test_unsupported_currency(self):
        with pytest.raises(ValueError):
            FixedRateProvider().rate_for("GBP")

    @pytest.mark.parametrize("amount, text", [
        (0, "0 FCFA"),
        (950, "950 FCFA"),
        (15_000, "15 000 FCFA"),
        (1_234_567, "1 234 567 FCFA"),
        (-20_000, "-20 000 FCFA"),
    ])
    def test_format_xof(self, amount, text):
        assert format_xof(amount) == text


# ═══════════════════════════════════════════════════════════════════════════
# Cancellation terms
# ═══════════════════════════════════════════════════════════════════════════

CONFIRMED = BookingStatus.CONFIRMED


@pytest.fixture
def five_days(daily_policy):
    """Confirmed 5-day rental at 20 000/day: rental price 100 000."""
    interval = window(120)
    return price_interval(interval, daily_policy), interval


class TestCancellation:

    def test_renter_five_days_before(self, five_days):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 - timedelta(days=5))
        assert terms.rule == "before_start"
        assert terms.hours_before_start == 120
        assert terms.penalty_pct == 15
        assert terms.penalty_amount == 15_000
        assert terms.refund_amount == 85_000

    @pytest.mark.parametrize("hours, pct", [
        (168.5, 0), (168, 15),
        (73, 15), (72, 30),
        (25, 30), (24, 50),
        (1, 50),
    ])
    def test_renter_tier_boundaries(self, five_days, hours, pct):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 - timedelta(hours=hours))
        assert terms.penalty_pct == pct
        assert terms.penalty_amount == 100_000 * pct // 100
        assert terms.refund_amount == 100_000 - terms.penalty_amount

    @pytest.mark.parametrize("hours, pct", [
        (673, 0), (672, 20),
        (169, 20), (168, 40),
        (49, 40), (48, 50),
    ])
    def test_owner_tier_boundaries(self, five_days, hours, pct):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(
            breakdown, interval, CONFIRMED, T0 - timedelta(hours=hours), cancelled_by="owner",
        )
        assert terms.penalty_amount == 100_000 * pct // 100
        assert terms.refund_amount == 100_000  # renter always refunded in full

    @pytest.mark.parametrize("status", [BookingStatus.PENDING_APPROVAL, BookingStatus.PENDING_PAYMENT])
    def test_pending_request_costs_nothing(self, five_days, status):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(breakdown, interval, status, T0 - timedelta(hours=2))
        assert terms.rule == "pending"
        assert (terms.penalty_amount, terms.refund_amount) == (0, 0)

    def test_renter_mid_rental(self, five_days):
        breakdown, interval = five_days
        # day 2 started: 5 - 1 elapsed - 1 current = 3 days left
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 + timedelta(hours=30))
        assert terms.rule == "in_progress"
        assert terms.hours_before_start == -30
        assert terms.penalty_amount == 30_000
        assert terms.refund_amount == 30_000

    def test_owner_mid_rental_refunds_remaining_days(self, five_days):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(
            breakdown, interval, CONFIRMED, T0 + timedelta(hours=30), cancelled_by="owner",
        )
        assert terms.penalty_amount == 30_000
        assert terms.refund_amount == 60_000

    def test_last_day_leaves_nothing(self, five_days):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 + timedelta(hours=100))
        assert (terms.penalty_amount, terms.refund_amount) == (0, 0)

    def test_after_end(self, five_days):
        breakdown, interval = five_days
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 + timedelta(hours=121))
        assert terms.rule == "after_end"
        assert terms.penalty_amount == 50_000
        assert terms.refund_amount == 50_000

    def test_penalty_on_price_before_discount(self, discounted_policy):
        interval = window(7 * 24)
        breakdown = price_interval(interval, discounted_policy)
        assert breakdown.base_price == 126_000
        terms = compute_cancellation_terms(breakdown, interval, CONFIRMED, T0 - timedelta(days=5))
        assert terms.penalty_amount == 21_000

    @pytest.mark.parametrize("status", [BookingStatus.CANCELLED, BookingStatus.COMPLETED])
    def test_terminal_booking_rejected(self, five_days, status):
        breakdown, interval = five_days
        with pytest.raises(InvalidTransitionError):
            compute_cancellation_terms(breakdown, interval, status, T0 - timedelta(days=1))

    def test_custom_policy(self, five_days):
        breakdown, interval = five_days
        policy = CancellationPolicy(renter_tiers=[PenaltyTier(more_than_hours=12, penalty_pct=0)])
        terms = compute_cancellation_terms(
            breakdown, interval, CONFIRMED, T0 - timedelta(hours=24), policy=policy,
        )
        assert terms.penalty_amount == 0
