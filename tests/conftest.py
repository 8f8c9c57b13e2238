"""Pytest configuration and fixtures for all tests.

This module ensures tests run in isolation from SENTINEL_* environment variables.
"""

import os

import pytest

from sentinel_risk.core.config import ALL_ENV_VARS
from sentinel_risk.domain.entities import MarketSnapshot, PortfolioSnapshot


@pytest.fixture(autouse=True)
def isolate_from_env():
    """Clear SENTINEL_* env vars before each test so config always starts from defaults.

    This fixture runs automatically for every test (autouse=True).
    It saves original values, clears them for the test, then restores after.
    """
    original_values = {}
    for var in ALL_ENV_VARS:
        if var in os.environ:
            original_values[var] = os.environ.pop(var)

    yield

    for var, value in original_values.items():
        os.environ[var] = value


@pytest.fixture
def market() -> MarketSnapshot:
    """Prices and volatilities for the usual Solana treasury assets."""
    return MarketSnapshot(
        prices={"SOL": 100.0, "ETH": 2500.0, "BTC": 60000.0, "USDC": 1.0, "USDT": 1.0},
        volatilities={"SOL": 0.08, "ETH": 0.06, "BTC": 0.05, "USDC": 0.002, "USDT": 0.003},
    )


@pytest.fixture
def sol_usdc_portfolio(market) -> PortfolioSnapshot:
    """100,000 USD treasury: 70% SOL, 30% USDC."""
    return PortfolioSnapshot.from_holdings({"SOL": 700.0, "USDC": 30000.0}, market.prices)


@pytest.fixture
def sol_only_portfolio(market) -> PortfolioSnapshot:
    """100% SOL, 10 SOL at 100 USD."""
    return PortfolioSnapshot.from_holdings({"SOL": 10.0}, market.prices)


@pytest.fixture
def empty_portfolio() -> PortfolioSnapshot:
    return PortfolioSnapshot(total_value_usd=0.0)
