"""Asset classification helpers shared by the risk services."""

from collections.abc import Mapping

from sentinel_risk.domain.constants import (
    MAJOR_CRYPTO,
    STABLECOIN_MARKER,
    STRESS_CRYPTO_ASSETS,
)


def is_stablecoin(asset: str) -> bool:
    """Stablecoins are identified by symbol: anything containing "USD"."""
    return STABLECOIN_MARKER in asset.upper()


def is_major_crypto(asset: str) -> bool:
    return asset.upper() in MAJOR_CRYPTO


def is_stress_crypto(asset: str) -> bool:
    return asset.upper() in STRESS_CRYPTO_ASSETS


def stable_allocation_pct(weights: Mapping[str, float]) -> float:
    """Percentage of the portfolio held in stablecoins."""
    return sum(w for asset, w in weights.items() if is_stablecoin(asset)) * 100.0
