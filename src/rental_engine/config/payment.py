"""Payment settings — pending-payment expiry and card fee estimation."""

from pydantic import BaseModel, Field


class CardFeeConfig(BaseModel):
    """Processor fee assumptions used for the informational card fee estimate."""

    eea_rate: float = Field(default=0.019, ge=0, le=1, description="Base rate, EEA-issued cards")
    uk_rate: float = Field(default=0.025, ge=0, le=1, description="Base rate, UK-issued cards")
    international_rate: float = Field(default=0.0325, ge=0, le=1, description="Base rate, other cards")
    fx_surcharge_rate: float = Field(
        default=0.02, ge=0, le=1,
        description="Added when the payment currency is not EUR",
    )
    fixed_fee_eur: float = Field(default=0.25, ge=0, description="Per-transaction fixed fee (EUR)")


class PaymentSettings(BaseModel):
    """How long a card booking may sit in PENDING_PAYMENT, and how often to poll."""

    pending_timeout_seconds: int = Field(
        default=600, ge=1,
        description="Card bookings unpaid after this delay are cancelled (10 minutes).",
    )
    poll_interval_seconds: float = Field(
        default=5.0, gt=0,
        description="Delay between two payment-status polls.",
    )
    card_fees: CardFeeConfig = Field(default_factory=CardFeeConfig)
