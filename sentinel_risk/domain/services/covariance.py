"""Covariance model construction.

Builds the correlation/covariance structure the Monte Carlo engine samples
from. Correlations come from an asset-class heuristic with random jitter:

- both major crypto          -> 0.75 +/- 0.15
- both stablecoins           -> 0.95 +/- 0.03
- one crypto, one stablecoin -> 0.15 +/- 0.10
- anything else              -> 0.30 +/- 0.20

This is an approximation, not a fit to historical returns. The jitter RNG is
injected so a seeded caller gets the same matrix every time.
"""

import logging
from collections.abc import Iterable

import numpy as np
import pandas as pd
from scipy.linalg import eigvalsh

from sentinel_risk.domain.constants import (
    CORRELATION_EIGENVALUE_FLOOR,
    CRYPTO_CRYPTO_CORRELATION,
    CRYPTO_STABLE_CORRELATION,
    MAX_ABS_CORRELATION,
    OTHER_CORRELATION,
    OTHER_DEFAULT_VOLATILITY,
    STABLE_STABLE_CORRELATION,
    STABLECOIN_DEFAULT_VOLATILITY,
    VOLATILITY_DEFAULTS,
)
from sentinel_risk.domain.entities.portfolio import MarketSnapshot
from sentinel_risk.domain.entities.risk import CovarianceModel
from sentinel_risk.domain.exceptions import InvalidPortfolioError
from sentinel_risk.domain.services.assets import is_major_crypto, is_stablecoin

logger = logging.getLogger(__name__)


def asset_volatility(asset: str, market: MarketSnapshot) -> float:
    """Daily volatility for an asset.

    Market data wins; otherwise a per-symbol default, then a class default.
    """
    if asset in market.volatilities:
        return float(market.volatilities[asset])
    if asset.upper() in VOLATILITY_DEFAULTS:
        return VOLATILITY_DEFAULTS[asset.upper()]
    if is_stablecoin(asset):
        return STABLECOIN_DEFAULT_VOLATILITY
    return OTHER_DEFAULT_VOLATILITY


def _pair_correlation_params(asset_a: str, asset_b: str) -> tuple[float, float]:
    """(base, jitter std) for a pair of assets."""
    crypto_a, crypto_b = is_major_crypto(asset_a), is_major_crypto(asset_b)
    stable_a, stable_b = is_stablecoin(asset_a), is_stablecoin(asset_b)

    if crypto_a and crypto_b:
        return CRYPTO_CRYPTO_CORRELATION
    if stable_a and stable_b:
        return STABLE_STABLE_CORRELATION
    if (crypto_a and stable_b) or (crypto_b and stable_a):
        return CRYPTO_STABLE_CORRELATION
    return OTHER_CORRELATION


def _shrink_to_psd(corr: np.ndarray) -> tuple[np.ndarray, float]:
    """Shrink a correlation matrix toward identity until it is PSD.

    With eigenvalue e_min < floor, the blend (1 - lam) * C + lam * I has
    smallest eigenvalue (1 - lam) * e_min + lam, so
    lam = (floor - e_min) / (1 - e_min) is the minimal shrinkage. The unit
    diagonal is preserved and off-diagonal magnitudes only shrink.

    Returns:
        Tuple of (matrix, shrinkage applied)
    """
    min_eig = float(eigvalsh(corr)[0])
    if min_eig >= CORRELATION_EIGENVALUE_FLOOR:
        return corr, 0.0

    lam = (CORRELATION_EIGENVALUE_FLOOR - min_eig) / (1.0 - min_eig)
    identity = np.eye(corr.shape[0])
    return (1.0 - lam) * corr + lam * identity, lam


def build_correlation(
    assets: list[str],
    rng: np.random.Generator,
) -> tuple[pd.DataFrame, float]:
    """Heuristic correlation matrix over `assets` (in the given order).

    Args:
        assets: Ordered asset symbols
        rng: Generator used for the pairwise jitter, one draw per pair in
             row-major upper-triangle order

    Returns:
        Tuple of (correlation DataFrame, shrinkage applied)
    """
    n = len(assets)
    corr = np.eye(n)

    for i in range(n):
        for j in range(i + 1, n):
            base, jitter = _pair_correlation_params(assets[i], assets[j])
            value = base + jitter * rng.standard_normal()
            value = float(np.clip(value, -MAX_ABS_CORRELATION, MAX_ABS_CORRELATION))
            corr[i, j] = corr[j, i] = value

    shrinkage = 0.0
    if n > 2:
        corr, shrinkage = _shrink_to_psd(corr)
        if shrinkage > 0:
            logger.warning(
                f"Heuristic correlation matrix was indefinite; shrunk toward identity by {shrinkage:.4f}"
            )

    return pd.DataFrame(corr, index=assets, columns=assets), shrinkage


def build_covariance(
    assets: Iterable[str],
    market: MarketSnapshot,
    rng: np.random.Generator | None = None,
) -> CovarianceModel:
    """Build the covariance model for `assets`.

    Assets are put in sorted order, which defines the matrix index order.

    Args:
        assets: Asset symbols to include
        market: Market snapshot supplying volatilities
        rng: Jitter generator; a fresh unseeded generator when omitted

    Returns:
        CovarianceModel with covariance[i, j] = corr[i, j] * vol[i] * vol[j]
    """
    ordered = sorted(set(assets))
    if not ordered:
        raise InvalidPortfolioError("Cannot build a covariance model over zero assets", field="assets")

    if rng is None:
        rng = np.random.default_rng()

    vols = pd.Series([asset_volatility(a, market) for a in ordered], index=ordered, dtype=float)
    corr, shrinkage = build_correlation(ordered, rng)

    cov = corr * np.outer(vols.values, vols.values)

    return CovarianceModel(
        assets=tuple(ordered),
        correlation=corr,
        covariance=cov,
        volatilities=vols,
        shrinkage=shrinkage,
    )
