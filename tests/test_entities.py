"""Unit tests for domain entities."""

import pytest

from sentinel_risk.domain.entities import (
    LiquidityAction,
    LiquidityKind,
    MarketSnapshot,
    PortfolioSnapshot,
    RouteCandidate,
    SwapAction,
    VarReport,
)


class TestPortfolioSnapshot:
    """Tests for PortfolioSnapshot."""

    def test_from_holdings(self):
        portfolio = PortfolioSnapshot.from_holdings({"SOL": 10.0, "USDC": 500.0}, {"SOL": 150.0, "USDC": 1.0})

        assert portfolio.total_value_usd == 2000.0
        assert portfolio.weights["SOL"] == pytest.approx(0.75)
        assert portfolio.weights["USDC"] == pytest.approx(0.25)
        assert portfolio.assets == ["SOL", "USDC"]

    def test_zero_value_holdings(self):
        portfolio = PortfolioSnapshot.from_holdings({"SOL": 0.0}, {"SOL": 150.0})

        assert portfolio.total_value_usd == 0.0
        assert dict(portfolio.weights) == {"SOL": 0.0}

    def test_caller_dict_changes_do_not_leak(self):
        holdings = {"SOL": 10.0}
        portfolio = PortfolioSnapshot(total_value_usd=1000.0, holdings=holdings, weights={"SOL": 1.0})
        holdings["SOL"] = 99.0

        assert portfolio.holdings["SOL"] == 10.0

    def test_mappings_are_read_only(self):
        portfolio = PortfolioSnapshot(total_value_usd=1000.0, holdings={"SOL": 10.0}, weights={"SOL": 1.0})
        with pytest.raises(TypeError):
            portfolio.holdings["SOL"] = 1.0  # type: ignore[index]

    def test_to_dict(self):
        portfolio = PortfolioSnapshot(total_value_usd=1000.0, holdings={"SOL": 10.0}, weights={"SOL": 1.0})
        assert portfolio.to_dict() == {
            "total_value_usd": 1000.0,
            "holdings": {"SOL": 10.0},
            "weights": {"SOL": 1.0},
        }


class TestMarketSnapshot:
    """Tests for MarketSnapshot."""

    def test_with_prices_keeps_volatilities(self):
        market = MarketSnapshot(prices={"SOL": 100.0}, volatilities={"SOL": 0.08})
        shocked = market.with_prices({"SOL": 50.0})

        assert shocked.prices["SOL"] == 50.0
        assert shocked.volatilities["SOL"] == 0.08
        assert market.prices["SOL"] == 100.0


class TestVarReport:
    """Tests for VarReport."""

    def test_zero_sentinel(self):
        report = VarReport.zero(trial_count=500, seed=4)

        assert report.is_zero
        assert report.trial_count == 500
        assert report.seed == 4
        assert report.to_dict()["var_pct_95_24h"] == 0.0


class TestRouteCandidate:
    """Tests for RouteCandidate and its actions."""

    def test_swaps_and_venues(self):
        route = RouteCandidate(
            id="r",
            description="mixed",
            actions=[
                SwapAction("SOL", "USDC", 10.0, "Orca"),
                LiquidityAction("SOL-USDC", "Jupiter", kind=LiquidityKind.REMOVE),
                SwapAction("SOL", "ETH", 5.0, "Orca"),
            ],
        )

        assert isinstance(route.actions, tuple)
        assert len(route.swaps) == 2
        assert route.venues == ["Orca", "Jupiter"]
        assert route.actions[0].estimated_slippage_bps == 30.0
        assert route.actions[1].to_dict()["type"] == "remove_liquidity"
