"""Deterministic stress-test sweep.

Revalues the portfolio under a catalogue of fixed price shocks. No
randomness is involved: each scenario is a pure substitution of prices.
"""

import logging
import math
from collections.abc import Mapping, Sequence

import pandas as pd

from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.stress import ShockScenario, StressResult
from sentinel_risk.domain.exceptions import DataValidationError, InvalidPortfolioError
from sentinel_risk.domain.services.assets import is_stress_crypto
from sentinel_risk.domain.services.validation import require_prices

logger = logging.getLogger(__name__)


DEFAULT_SCENARIOS: tuple[ShockScenario, ...] = (
    ShockScenario(name="crypto_crash", crypto_shock=-0.50),
    ShockScenario(name="stable_depeg", asset_shocks={"USDC": -0.05, "USDT": -0.08}),
    ShockScenario(name="black_swan", crypto_shock=-0.70, correlation_spike=0.95),
    ShockScenario(name="bull_run", asset_shocks={"SOL": 1.00, "ETH": 1.50}),
)


def _check_shock(scenario: ShockScenario, shock: float) -> None:
    if not math.isfinite(shock) or shock < -1.0:
        raise DataValidationError(
            f"Scenario {scenario.name}: shock {shock} would make a price negative",
            field="shock",
            value=shock,
        )


def apply_shock(scenario: ShockScenario, prices: Mapping[str, float]) -> dict[str, float]:
    """Return shocked prices; assets the scenario does not touch keep their price."""
    stressed: dict[str, float] = {}
    for asset, price in prices.items():
        if asset in scenario.asset_shocks:
            shock = scenario.asset_shocks[asset]
        elif scenario.crypto_shock is not None and is_stress_crypto(asset):
            shock = scenario.crypto_shock
        else:
            stressed[asset] = price
            continue
        _check_shock(scenario, shock)
        stressed[asset] = price * (1.0 + shock)
    return stressed


def _value(holdings: Mapping[str, float], prices: Mapping[str, float]) -> float:
    return sum(qty * prices[asset] for asset, qty in holdings.items())


def run_stress_test(
    scenario: ShockScenario,
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
) -> StressResult:
    """Revalue the portfolio under one scenario.

    The original value is the holdings valued at current market prices, so
    the loss percentage compares like with like.
    """
    require_prices(market, portfolio.holdings)

    original = _value(portfolio.holdings, market.prices)
    if original <= 0:
        raise InvalidPortfolioError(
            "Cannot stress-test a portfolio with non-positive value",
            field="holdings",
            value=original,
        )

    stressed_prices = apply_shock(scenario, market.prices)
    stressed = _value(portfolio.holdings, stressed_prices)
    loss = original - stressed

    return StressResult(
        scenario=scenario.name,
        original_value=original,
        stressed_value=stressed,
        loss_usd=loss,
        loss_pct=loss / original * 100.0,
        stressed_prices=stressed_prices,
    )


def run_stress_sweep(
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    scenarios: Sequence[ShockScenario] = DEFAULT_SCENARIOS,
) -> dict[str, StressResult]:
    """Run every scenario; results keyed by scenario name in catalogue order."""
    names = [s.name for s in scenarios]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise DataValidationError(f"Duplicate scenario names: {duplicates}", field="scenarios", value=duplicates)

    results = {s.name: run_stress_test(s, portfolio, market) for s in scenarios}

    if results:
        worst = max(results.values(), key=lambda r: r.loss_pct)
        logger.info(f"Stress sweep: {len(results)} scenarios, worst {worst.scenario} at {worst.loss_pct:.1f}%")
    return results


def worst_case_loss_pct(results: Mapping[str, StressResult]) -> float:
    """Largest loss percentage across scenarios (0 when there are none)."""
    return max((r.loss_pct for r in results.values()), default=0.0)


def stress_results_to_frame(results: Mapping[str, StressResult]) -> pd.DataFrame:
    """Tabular view of a sweep, one row per scenario, worst loss first."""
    rows = [
        {
            "scenario": r.scenario,
            "original_value_usd": r.original_value,
            "stressed_value_usd": r.stressed_value,
            "loss_usd": r.loss_usd,
            "loss_pct": r.loss_pct,
        }
        for r in results.values()
    ]
    columns = ["scenario", "original_value_usd", "stressed_value_usd", "loss_usd", "loss_pct"]
    df = pd.DataFrame(rows, columns=columns)
    return df.sort_values("loss_pct", ascending=False, kind="stable").reset_index(drop=True)
