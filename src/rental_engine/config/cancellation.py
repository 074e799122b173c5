"""Vehicle cancellation policy — penalty tiers by notice and by who cancels.

Before pick-up the first tier whose ``more_than_hours`` is below the notice
applies; shorter notice falls through to ``last_minute_pct``.

  renter: > 7 days free, > 3 days 15%, > 24 h 30%, else 50%
  owner:  > 28 days free, > 7 days 20%, > 48 h 40%, else 50%

Once the rental has started, ``in_progress_pct`` applies to the days left.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

CancellingParty = Literal["renter", "owner"]


class PenaltyTier(BaseModel):
    more_than_hours: int = Field(ge=0, description="Tier applies when notice exceeds this")
    penalty_pct: float = Field(ge=0, le=100, description="Penalty on the rental price, in percent")


def _renter_tiers() -> list[PenaltyTier]:
    return [
        PenaltyTier(more_than_hours=7 * 24, penalty_pct=0),
        PenaltyTier(more_than_hours=3 * 24, penalty_pct=15),
        PenaltyTier(more_than_hours=24, penalty_pct=30),
    ]


def _owner_tiers() -> list[PenaltyTier]:
    return [
        PenaltyTier(more_than_hours=28 * 24, penalty_pct=0),
        PenaltyTier(more_than_hours=7 * 24, penalty_pct=20),
        PenaltyTier(more_than_hours=48, penalty_pct=40),
    ]


class CancellationPolicy(BaseModel):
    """Penalty schedule for confirmed vehicle bookings."""

    renter_tiers: list[PenaltyTier] = Field(default_factory=_renter_tiers)
    owner_tiers: list[PenaltyTier] = Field(default_factory=_owner_tiers)
    last_minute_pct: float = Field(
        default=50.0, ge=0, le=100,
        description="Penalty when the notice is shorter than every tier",
    )
    in_progress_pct: float = Field(
        default=50.0, ge=0, le=100,
        description="Penalty on the remaining days once the rental has started",
    )

    @model_validator(mode="after")
    def _tiers_descending(self) -> CancellationPolicy:
        for tiers in (self.renter_tiers, self.owner_tiers):
            thresholds = [t.more_than_hours for t in tiers]
            if any(a <= b for a, b in zip(thresholds, thresholds[1:])):
                raise ValueError("penalty tiers must be listed from longest to shortest notice")
        return self

    def tiers_for(self, party: CancellingParty) -> list[PenaltyTier]:
        return self.owner_tiers if party == "owner" else self.renter_tiers

    def notice_pct(self, party: CancellingParty, hours_before_start: float) -> float:
        for tier in self.tiers_for(party):
            if hours_before_start > tier.more_than_hours:
                return tier.penalty_pct
        return self.last_minute_pct
