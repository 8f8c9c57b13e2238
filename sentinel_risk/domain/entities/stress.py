"""Stress-test entities."""

from dataclasses import dataclass, field
from typing import Any

from sentinel_risk.domain.entities.portfolio import AssetSymbol


@dataclass(frozen=True)
class ShockScenario:
    """A deterministic price shock.

    Shocks are fractional price changes (-0.5 = price halves, 1.0 = price
    doubles). `asset_shocks` wins over `crypto_shock` for the same asset.
    """

    name: str
    asset_shocks: dict[AssetSymbol, float] = field(default_factory=dict)
    crypto_shock: float | None = None

    # Recorded for downstream consumers; revaluation does not use it
    correlation_spike: float | None = None


@dataclass(frozen=True)
class StressResult:
    """Portfolio revaluation under one shock scenario."""

    scenario: str
    original_value: float
    stressed_value: float
    loss_usd: float
    loss_pct: float
    stressed_prices: dict[AssetSymbol, float] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "original_value_usd": self.original_value,
            "stressed_value_usd": self.stressed_value,
            "loss_usd": self.loss_usd,
            "loss_pct": self.loss_pct,
            "stressed_prices": dict(self.stressed_prices),
        }
