"""Unit tests for the Monte Carlo VaR domain service."""

import math

import numpy as np
import pytest

from sentinel_risk.domain.entities import EmptyPortfolioPolicy, MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.exceptions import (
    DataValidationError,
    InvalidMarketDataError,
    InvalidPortfolioError,
    SimulationParameterError,
)
from sentinel_risk.domain.services.covariance import build_covariance
from sentinel_risk.domain.services.var import demo_portfolio, evaluate, simulate


class TestSimulate:
    """Tests for simulate on a prebuilt covariance model."""

    def test_report_ordering_invariants(self, market):
        model = build_covariance(["SOL", "USDC"], market, rng=np.random.default_rng(3))
        report = simulate({"SOL": 0.7, "USDC": 0.3}, 100_000.0, model, trials=5000, seed=7)

        assert 0 <= report.var95_1d <= report.var99_1d
        assert report.expected_shortfall95 >= report.var95_1d
        assert report.max_loss >= report.var99_1d
        assert report.trial_count == 5000
        assert report.seed == 7

    def test_seven_day_scaling(self, market):
        model = build_covariance(["SOL", "USDC"], market, rng=np.random.default_rng(3))
        report = simulate({"SOL": 0.7, "USDC": 0.3}, 100_000.0, model, trials=2000, seed=1)

        assert report.var95_7d == pytest.approx(report.var95_1d * math.sqrt(7))
        assert report.var99_7d == pytest.approx(report.var99_1d * math.sqrt(7))
        assert report.scaled_var95(7) == pytest.approx(report.var95_7d)

    def test_var_pct_relative_to_total(self, market):
        model = build_covariance(["SOL"], market)
        report = simulate({"SOL": 1.0}, 50_000.0, model, trials=2000, seed=1)

        assert report.var_pct_95_24h == pytest.approx(report.var95_1d / 50_000.0 * 100.0)

    def test_single_asset_matches_normal_quantile(self, market):
        """One asset at 8% daily vol: VaR95 ~ 1.645 * 8% of value."""
        model = build_covariance(["SOL"], market)
        report = simulate({"SOL": 1.0}, 100_000.0, model, trials=50_000, seed=11)

        assert report.var_pct_95_24h == pytest.approx(1.645 * 8.0, rel=0.05)
        assert report.portfolio_volatility == pytest.approx(0.08, rel=0.05)

    def test_same_seed_same_report(self, market):
        model = build_covariance(["SOL", "USDC"], market, rng=np.random.default_rng(3))

        first = simulate({"SOL": 0.5, "USDC": 0.5}, 1000.0, model, trials=1000, seed=99)
        second = simulate({"SOL": 0.5, "USDC": 0.5}, 1000.0, model, trials=1000, seed=99)

        assert first == second

    def test_none_seed_is_recorded(self, market):
        model = build_covariance(["SOL"], market)
        report = simulate({"SOL": 1.0}, 1000.0, model, trials=100, seed=None)

        assert isinstance(report.seed, int)

    @pytest.mark.parametrize("trials", [0, -5])
    def test_non_positive_trials_raise(self, market, trials):
        model = build_covariance(["SOL"], market)
        with pytest.raises(SimulationParameterError):
            simulate({"SOL": 1.0}, 1000.0, model, trials=trials, seed=1)

    def test_negative_seed_raises(self, market):
        model = build_covariance(["SOL"], market)
        with pytest.raises(SimulationParameterError) as exc_info:
            simulate({"SOL": 1.0}, 1000.0, model, trials=100, seed=-7)
        assert exc_info.value.field == "seed"

    def test_zero_total_raises(self, market):
        model = build_covariance(["SOL"], market)
        with pytest.raises(InvalidPortfolioError):
            simulate({"SOL": 1.0}, 0.0, model, trials=100, seed=1)

    def test_asset_missing_from_covariance_raises(self, market):
        model = build_covariance(["SOL"], market)
        with pytest.raises(DataValidationError):
            simulate({"SOL": 0.5, "ETH": 0.5}, 1000.0, model, trials=100, seed=1)


class TestEvaluate:
    """Tests for evaluate (covariance + simulation end to end)."""

    def test_deterministic_for_fixed_seed(self, sol_usdc_portfolio, market):
        first = evaluate(sol_usdc_portfolio, market, trials=2000, seed=12345)
        second = evaluate(sol_usdc_portfolio, market, trials=2000, seed=12345)

        assert first == second

    def test_different_seeds_differ(self, sol_usdc_portfolio, market):
        first = evaluate(sol_usdc_portfolio, market, trials=2000, seed=1)
        second = evaluate(sol_usdc_portfolio, market, trials=2000, seed=2)

        assert first.var95_1d != second.var95_1d

    def test_seventy_thirty_sol_usdc_single_digit_var(self, sol_usdc_portfolio, market):
        """70% SOL / 30% USDC, 100k USD, 10,000 trials, seed 12345.

        Portfolio vol = sqrt(0.7^2 * 0.08^2 + 0.3^2 * 0.002^2
                             + 2 * 0.7 * 0.3 * 0.15 * 0.08 * 0.002)
                      ~ 5.609% per day
        VaR95%        ~ 1.645 * 5.609 ~ 9.23%
        VaR99%        ~ 2.326 * 5.609 ~ 13.05%
        ES95%         ~ 2.063 * 5.609 ~ 11.57%

        Tolerances cover the correlation jitter and 10,000-trial sampling error.
        """
        report = evaluate(sol_usdc_portfolio, market, trials=10_000, seed=12345)

        assert sol_usdc_portfolio.total_value_usd == pytest.approx(100_000.0)
        assert report.var_pct_95_24h == pytest.approx(9.23, abs=0.4)
        assert report.var99_1d / 1000.0 == pytest.approx(13.05, abs=0.7)
        assert report.expected_shortfall95 / 1000.0 == pytest.approx(11.57, abs=0.6)
        assert report.portfolio_volatility == pytest.approx(0.0561, abs=0.002)
        assert 8.0 < report.var_pct_95_24h < 10.0
        assert report.trial_count == 10_000
        assert report.synthetic is False

    def test_more_stables_lower_var(self, market):
        risky = PortfolioSnapshot.from_holdings({"SOL": 900.0, "USDC": 10_000.0}, market.prices)
        safe = PortfolioSnapshot.from_holdings({"SOL": 100.0, "USDC": 90_000.0}, market.prices)

        assert (
            evaluate(safe, market, trials=2000, seed=5).var_pct_95_24h
            < evaluate(risky, market, trials=2000, seed=5).var_pct_95_24h
        )

    def test_trials_zero_raises(self, sol_usdc_portfolio, market):
        with pytest.raises(SimulationParameterError):
            evaluate(sol_usdc_portfolio, market, trials=0)

    @pytest.mark.parametrize("seed", [-1, -12345])
    def test_negative_seed_raises(self, sol_usdc_portfolio, market, seed):
        """Negative seeds are rejected before reaching numpy SeedSequence."""
        with pytest.raises(SimulationParameterError) as exc_info:
            evaluate(sol_usdc_portfolio, market, trials=500, seed=seed)
        assert exc_info.value.field == "seed"

    def test_numpy_integer_trials_accepted(self, sol_usdc_portfolio, market):
        report = evaluate(sol_usdc_portfolio, market, trials=np.int64(500), seed=12345)
        expected = evaluate(sol_usdc_portfolio, market, trials=500, seed=12345)

        assert report.trial_count == 500
        assert type(report.trial_count) is int
        assert report == expected

    def test_bool_trials_rejected(self, sol_usdc_portfolio, market):
        with pytest.raises(SimulationParameterError):
            evaluate(sol_usdc_portfolio, market, trials=True)

    def test_bad_weight_sum_raises(self, market):
        portfolio = PortfolioSnapshot(total_value_usd=1000.0, weights={"SOL": 0.5, "USDC": 0.3})
        with pytest.raises(InvalidPortfolioError):
            evaluate(portfolio, market, trials=100)

    def test_non_positive_price_raises(self, sol_usdc_portfolio):
        market = MarketSnapshot(prices={"SOL": 0.0, "USDC": 1.0})
        with pytest.raises(InvalidMarketDataError) as exc_info:
            evaluate(sol_usdc_portfolio, market, trials=100)
        assert exc_info.value.asset == "SOL"


class TestEmptyPortfolioPolicy:
    """Tests for each empty-portfolio policy branch."""

    def test_raise_is_default(self, empty_portfolio, market):
        with pytest.raises(InvalidPortfolioError):
            evaluate(empty_portfolio, market, trials=100)

    def test_zero_returns_sentinel(self, empty_portfolio, market):
        report = evaluate(
            empty_portfolio, market, trials=100, seed=3, empty_policy=EmptyPortfolioPolicy.ZERO
        )

        assert report.is_zero
        assert report.var_pct_95_24h == 0.0
        assert report.trial_count == 100
        assert report.seed == 3
        assert report.synthetic is False

    def test_demo_uses_synthetic_portfolio(self, empty_portfolio, market):
        report = evaluate(
            empty_portfolio, market, trials=1000, seed=3, empty_policy=EmptyPortfolioPolicy.DEMO
        )

        assert report.synthetic is True
        assert report.var95_1d > 0

    def test_demo_accepts_string_policy(self, empty_portfolio, market):
        report = evaluate(empty_portfolio, market, trials=500, seed=3, empty_policy="demo")
        assert report.synthetic is True

    def test_demo_with_caller_fallback(self, empty_portfolio, sol_only_portfolio, market):
        with_fallback = evaluate(
            empty_portfolio,
            market,
            trials=1000,
            seed=3,
            empty_policy=EmptyPortfolioPolicy.DEMO,
            fallback=sol_only_portfolio,
        )
        direct = evaluate(sol_only_portfolio, market, trials=1000, seed=3)

        assert with_fallback.synthetic is True
        assert with_fallback.var95_1d == direct.var95_1d

    def test_demo_portfolio_shape(self):
        demo = demo_portfolio()

        assert demo.total_value_usd == 1500.0
        assert dict(demo.weights) == {"SOL": 0.667, "USDC": 0.333}
        assert sum(demo.weights.values()) == pytest.approx(1.0)
