"""Portfolio and market snapshot entities.

Snapshots are frozen and their mapping fields are read-only views over
private copies, so a snapshot handed to the risk core can never be changed by
the core or by the caller that built it.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

# Opaque string key identifying a tradable asset (e.g. "SOL", "USDC")
AssetSymbol = str


def _frozen_mapping(values: Mapping[AssetSymbol, float]) -> Mapping[AssetSymbol, float]:
    return MappingProxyType({str(k): float(v) for k, v in values.items()})


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Holdings of a treasury at one instant.

    `holdings` are quantities (not USD). `weights` are fractions of
    `total_value_usd` and sum to ~1 whenever the total is positive.
    """

    total_value_usd: float
    holdings: Mapping[AssetSymbol, float] = field(default_factory=dict)
    weights: Mapping[AssetSymbol, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_value_usd", float(self.total_value_usd))
        object.__setattr__(self, "holdings", _frozen_mapping(self.holdings))
        object.__setattr__(self, "weights", _frozen_mapping(self.weights))

    @classmethod
    def from_holdings(
        cls,
        holdings: Mapping[AssetSymbol, float],
        prices: Mapping[AssetSymbol, float],
    ) -> "PortfolioSnapshot":
        """Build a snapshot valuing each holding at its USD price.

        Every held asset must have a price; use
        `sentinel_risk.domain.services.validation.require_prices` first when
        the inputs come from an untrusted provider.
        """
        values = {asset: qty * prices[asset] for asset, qty in holdings.items()}
        total = sum(values.values())
        if total > 0:
            weights = {asset: value / total for asset, value in values.items()}
        else:
            weights = {asset: 0.0 for asset in values}
        return cls(total_value_usd=total, holdings=holdings, weights=weights)

    @property
    def assets(self) -> list[AssetSymbol]:
        """Held assets in sorted order."""
        return sorted(set(self.holdings) | set(self.weights))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "total_value_usd": self.total_value_usd,
            "holdings": dict(self.holdings),
            "weights": dict(self.weights),
        }


@dataclass(frozen=True)
class MarketSnapshot:
    """USD prices and daily return volatilities supplied per call."""

    prices: Mapping[AssetSymbol, float] = field(default_factory=dict)
    volatilities: Mapping[AssetSymbol, float] = field(default_factory=dict)  # daily stddev, 0.08 = 8%

    def __post_init__(self) -> None:
        object.__setattr__(self, "prices", _frozen_mapping(self.prices))
        object.__setattr__(self, "volatilities", _frozen_mapping(self.volatilities))

    def with_prices(self, prices: Mapping[AssetSymbol, float]) -> "MarketSnapshot":
        """Return a copy with `prices` replaced."""
        return MarketSnapshot(prices=prices, volatilities=self.volatilities)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "prices": dict(self.prices),
            "volatilities": dict(self.volatilities),
        }
