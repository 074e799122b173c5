"""Currency presentation.  Amounts live in XOF; EUR and USD are display-only."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

from rental_engine.config.currency import Currency, CurrencySettings

_CENTS = Decimal("0.01")


class ExchangeRateProvider(Protocol):
    def rate_for(self, currency: Currency) -> Decimal:
        """XOF per one unit of ``currency``."""
        ...


class FixedRateProvider:
    """Reference rates taken from :class:`CurrencySettings`."""

    def __init__(self, settings: CurrencySettings | None = None) -> None:
        settings = settings or CurrencySettings()
        self._rates: dict[str, Decimal] = {
            "XOF": Decimal(1),
            "EUR": Decimal(str(settings.eur_xof)),
            "USD": Decimal(str(settings.usd_xof)),
        }

    def rate_for(self, currency: Currency) -> Decimal:
        try:
            return self._rates[currency]
        except KeyError:
            raise ValueError(f"unsupported currency {currency!r}") from None


def convert_from_xof(amount_xof: int, currency: Currency, provider: ExchangeRateProvider) -> Decimal:
    """XOF → ``currency``; XOF stays whole, others are quantized to cents half-up."""
    if currency == "XOF":
        return Decimal(amount_xof)
    return convert_at_rate(amount_xof, currency, provider.rate_for(currency))


def convert_at_rate(amount_xof: int, currency: Currency, rate: Decimal) -> Decimal:
    """Same as :func:`convert_from_xof` with a rate fixed earlier (e.g. in a snapshot)."""
    if currency == "XOF":
        return Decimal(amount_xof)
    return (Decimal(amount_xof) / rate).quantize(_CENTS, rounding=ROUND_HALF_UP)


def convert_to_xof(amount: Decimal | int, currency: Currency, provider: ExchangeRateProvider) -> int:
    rate = provider.rate_for(currency)
    return int((Decimal(amount) * rate).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_xof(amount: int) -> str:
    """``15000`` → ``"15 000 FCFA"``."""
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,}".replace(",", " ")
    return f"{sign}{grouped} FCFA"
