"""Input validation for snapshots and simulation parameters.

All checks raise typed errors from `sentinel_risk.domain.exceptions`; none of
them repair or substitute data.
"""

import math
import numbers
from collections.abc import Iterable

from sentinel_risk.domain.constants import WEIGHT_SUM_TOLERANCE
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.exceptions import (
    InvalidMarketDataError,
    InvalidPortfolioError,
    SimulationParameterError,
)


def validate_trials(trials: int) -> None:
    """Trial count must be a positive integer."""
    if isinstance(trials, bool) or not isinstance(trials, numbers.Integral) or trials <= 0:
        raise SimulationParameterError(
            f"trials must be a positive integer, got {trials!r}",
            field="trials",
            value=trials,
        )


def validate_seed(seed: int) -> None:
    """Seed must be a non-negative integer (numpy SeedSequence entropy)."""
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral) or seed < 0:
        raise SimulationParameterError(
            f"seed must be a non-negative integer, got {seed!r}",
            field="seed",
            value=seed,
        )


def is_empty_portfolio(portfolio: PortfolioSnapshot) -> bool:
    """True when there is nothing to simulate."""
    return portfolio.total_value_usd <= 0 or not portfolio.weights


def validate_portfolio(portfolio: PortfolioSnapshot) -> None:
    """Check total value and the weight-sum invariant.

    Raises:
        InvalidPortfolioError: empty weights, non-positive or non-finite
            total value, non-finite weights, or weights not summing to ~1.
    """
    total = portfolio.total_value_usd
    if not math.isfinite(total) or total <= 0:
        raise InvalidPortfolioError(
            f"Portfolio total value must be positive, got {total}",
            field="total_value_usd",
            value=total,
        )
    if not portfolio.weights:
        raise InvalidPortfolioError("Portfolio has no weighted assets", field="weights")

    bad = {a: w for a, w in portfolio.weights.items() if not math.isfinite(w)}
    if bad:
        raise InvalidPortfolioError(f"Non-finite weights: {bad}", field="weights", value=bad)

    weight_sum = sum(portfolio.weights.values())
    if abs(weight_sum - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise InvalidPortfolioError(
            f"Portfolio weights sum to {weight_sum:.8f}, expected 1.0",
            field="weights",
            value=weight_sum,
        )


def validate_market(market: MarketSnapshot) -> None:
    """Every supplied price must be finite and positive."""
    for asset, price in market.prices.items():
        if not math.isfinite(price) or price <= 0:
            raise InvalidMarketDataError(
                f"Price for {asset} must be positive, got {price}",
                asset=asset,
                value=price,
            )
    for asset, vol in market.volatilities.items():
        if not math.isfinite(vol) or vol < 0:
            raise InvalidMarketDataError(
                f"Volatility for {asset} must be non-negative, got {vol}",
                asset=asset,
                value=vol,
            )


def require_prices(market: MarketSnapshot, assets: Iterable[str]) -> None:
    """Every asset in `assets` must have a positive price.

    Raises:
        InvalidMarketDataError: first asset without a usable price.
    """
    for asset in assets:
        price = market.prices.get(asset)
        if price is None:
            raise InvalidMarketDataError(f"Missing price for {asset}", asset=asset)
        if not math.isfinite(price) or price <= 0:
            raise InvalidMarketDataError(
                f"Price for {asset} must be positive, got {price}",
                asset=asset,
                value=price,
            )
