"""Top-level engine settings — bundles every config section."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from rental_engine.config.cancellation import CancellationPolicy
from rental_engine.config.currency import CurrencySettings
from rental_engine.config.fees import FeeSchedule
from rental_engine.config.payment import PaymentSettings


class EngineSettings(BaseModel):
    """Complete settings bundle.  Every section has working defaults."""

    fees: FeeSchedule = Field(default_factory=FeeSchedule)
    payment: PaymentSettings = Field(default_factory=PaymentSettings)
    currency: CurrencySettings = Field(default_factory=CurrencySettings)
    cancellation: CancellationPolicy = Field(default_factory=CancellationPolicy)


def load_settings(source: str | Path | None = None) -> EngineSettings:
    """Read settings from a JSON file.  ``None`` returns the defaults.

    Missing sections fall back to their defaults; invalid values raise
    ``pydantic.ValidationError``.
    """
    if source is None:
        return EngineSettings()
    path = Path(source)
    return EngineSettings.model_validate_json(path.read_text(encoding="utf-8"))
