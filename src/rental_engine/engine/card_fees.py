"""Card processing fee estimate — informational, never added to total_price.

  rate = regional base rate (+ FX surcharge unless paying in EUR)
  fee  = round(base × rate + fixed_fee_eur × EUR/XOF)
"""

from __future__ import annotations

from decimal import Decimal

from rental_engine.config.currency import Currency, CurrencySettings
from rental_engine.config.payment import CardFeeConfig
from rental_engine.engine.money import round_half_up
from rental_engine.models.results import CardFeeEstimate

EEA_COUNTRY_CODES = frozenset({
    "AD", "AT", "BE", "BG", "CY", "CZ", "DE", "DK", "EE", "ES", "FI", "FR", "GR",
    "HR", "HU", "IE", "IS", "IT", "LI", "LT", "LU", "LV", "MT", "NL", "NO", "PL",
    "PT", "RO", "SE", "SI", "SK", "GI", "GG", "IM", "JE", "MC", "SM", "VA", "GL",
    "FO", "PM", "TR",
})


def resolve_card_region(country_code: str | None) -> str:
    code = (country_code or "").strip().upper()[:2]
    if code == "GB":
        return "uk"
    if code in EEA_COUNTRY_CODES:
        return "eea"
    return "international"


def estimate_card_processing_fee(
    base_amount_xof: int,
    payment_currency: Currency,
    country_code: str | None = None,
    config: CardFeeConfig | None = None,
    currency: CurrencySettings | None = None,
) -> CardFeeEstimate:
    config = config or CardFeeConfig()
    currency = currency or CurrencySettings()

    base = max(0, base_amount_xof)
    region = resolve_card_region(country_code)
    base_rate = {
        "eea": config.eea_rate,
        "uk": config.uk_rate,
        "international": config.international_rate,
    }[region]
    needs_fx = payment_currency != "EUR"
    effective_rate = Decimal(str(base_rate))
    if needs_fx:
        effective_rate += Decimal(str(config.fx_surcharge_rate))

    fixed_fee_xof = round_half_up(Decimal(str(config.fixed_fee_eur)) * Decimal(str(currency.eur_xof)))
    fee = round_half_up(Decimal(base) * effective_rate + fixed_fee_xof)

    return CardFeeEstimate(
        region=region,
        base_rate=base_rate,
        needs_fx=needs_fx,
        effective_rate=float(effective_rate),
        fixed_fee_xof=fixed_fee_xof,
        fee_amount_xof=fee,
        total_amount_xof=base + fee,
    )
