"""Platform fee schedule — traveler service fee and host commission."""

from typing import Literal

from pydantic import BaseModel, Field

ServiceCategory = Literal["vehicle", "property"]


class CommissionRates(BaseModel):
    """Tax-exclusive (HT) rates for one service category, in percent."""

    traveler_fee_pct: float = Field(ge=0, le=100, description="Service fee charged to the renter")
    host_fee_pct: float = Field(ge=0, le=100, description="Commission withheld from the owner")

    @property
    def total_platform_pct(self) -> float:
        return self.traveler_fee_pct + self.host_fee_pct


def _default_categories() -> dict[str, CommissionRates]:
    return {
        "vehicle": CommissionRates(traveler_fee_pct=10.0, host_fee_pct=2.0),
        "property": CommissionRates(traveler_fee_pct=12.0, host_fee_pct=2.0),
    }


class FeeSchedule(BaseModel):
    """Category rates plus the VAT applied on top of every HT amount.

    Vehicles: 10% traveler-side + 2% host-side (12% total).
    Properties: 12% traveler-side + 2% host-side (14% total).
    """

    categories: dict[ServiceCategory, CommissionRates] = Field(default_factory=_default_categories)
    vat_pct: float = Field(default=20.0, ge=0, le=100, description="VAT on platform fees")

    def rates_for(self, category: ServiceCategory) -> CommissionRates:
        try:
            return self.categories[category]
        except KeyError:
            raise ValueError(f"no commission rates configured for {category!r}") from None
