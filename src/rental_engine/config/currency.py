"""Currency settings — XOF is the ledger currency, the rest is presentation."""

from typing import Literal

from pydantic import BaseModel, Field

Currency = Literal["XOF", "EUR", "USD"]


class CurrencySettings(BaseModel):
    """Reference rates, expressed as XOF per one unit of the foreign currency."""

    canonical: Literal["XOF"] = Field(default="XOF", description="Currency all amounts are kept in")
    eur_xof: float = Field(
        default=655.957, gt=0,
        description="Fixed CFA franc peg to the euro",
    )
    usd_xof: float = Field(
        default=600.0, gt=0,
        description="Fallback USD reference rate when no live provider is wired in",
    )
