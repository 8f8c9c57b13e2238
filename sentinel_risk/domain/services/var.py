"""Monte Carlo Value-at-Risk domain service.

Draws joint one-day asset returns from a multivariate normal with zero mean
and the heuristic covariance, revalues the portfolio per trial and reads VaR
and Expected Shortfall off the simulated loss distribution.

Multi-day figures use square-root-of-time scaling of the 1-day VaR. That
assumes i.i.d. daily returns and is an approximation, not an exact 7-day VaR.
"""

import dataclasses
import logging
import math
from collections.abc import Mapping

import numpy as np

from sentinel_risk.domain.constants import (
    DEFAULT_SEED,
    DEFAULT_TRIALS,
    DEMO_PORTFOLIO_HOLDINGS,
    DEMO_PORTFOLIO_VALUE_USD,
    DEMO_PORTFOLIO_WEIGHTS,
    VAR_CONFIDENCE_95,
    VAR_CONFIDENCE_99,
    VAR_LONG_HORIZON_DAYS,
)
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.risk import CovarianceModel, EmptyPortfolioPolicy, VarReport
from sentinel_risk.domain.exceptions import (
    DataValidationError,
    DegenerateSimulationError,
    InvalidPortfolioError,
)
from sentinel_risk.domain.services.covariance import build_covariance
from sentinel_risk.domain.services.validation import (
    is_empty_portfolio,
    validate_market,
    validate_portfolio,
    validate_seed,
    validate_trials,
)

logger = logging.getLogger(__name__)


def demo_portfolio() -> PortfolioSnapshot:
    """Synthetic two-asset portfolio (66.7% SOL / 33.3% USDC, 1,500 USD).

    Only used when a caller opts into EmptyPortfolioPolicy.DEMO. Reports built
    from it are flagged `synthetic=True`; they describe no real treasury.
    """
    return PortfolioSnapshot(
        total_value_usd=DEMO_PORTFOLIO_VALUE_USD,
        holdings=DEMO_PORTFOLIO_HOLDINGS,
        weights=DEMO_PORTFOLIO_WEIGHTS,
    )


def resolve_seed(seed: int | None) -> int:
    """Return `seed`, or fresh OS entropy when None, so every run is replayable.

    Raises:
        SimulationParameterError: negative or non-integer seed
    """
    if seed is None:
        return int(np.random.SeedSequence().entropy)
    validate_seed(seed)
    return int(seed)


def spawn_generators(seed: int) -> tuple[np.random.Generator, np.random.Generator]:
    """Independent (correlation jitter, return sampling) generators for `seed`."""
    corr_seq, sample_seq = np.random.SeedSequence(seed).spawn(2)
    return np.random.default_rng(corr_seq), np.random.default_rng(sample_seq)


def _draw_returns(
    covariance: CovarianceModel,
    trials: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Draw a (trials, n_assets) matrix of one-period returns."""
    n = covariance.size
    if n == 1:
        vol = float(covariance.volatilities.iloc[0])
        return rng.normal(0.0, vol, size=(trials, 1))

    cov = covariance.covariance.to_numpy()
    return rng.multivariate_normal(np.zeros(n), cov, size=trials, method="eigh")


def simulate(
    weights: Mapping[str, float],
    total_value_usd: float,
    covariance: CovarianceModel,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
) -> VarReport:
    """Run the Monte Carlo simulation and compute the VaR report.

    Steps:
    1. Draw `trials` joint returns (univariate normal for a single asset)
    2. Portfolio return per trial = weights . returns
    3. Loss per trial = total - total * (1 + return)
    4. Drop non-finite losses
    5. VaR95/VaR99 = 95th/99th percentile of losses,
       ES95 = mean of losses strictly above VaR95 (0 if none)

    Args:
        weights: Asset -> fraction of total value
        total_value_usd: Portfolio value in USD
        covariance: Covariance model covering every weighted asset
        trials: Number of Monte Carlo trials (> 0)
        seed: Seed recorded on the report; also seeds sampling when `rng`
              is not supplied
        rng: Optional pre-built sampling generator

    Returns:
        VarReport

    Raises:
        SimulationParameterError: trials <= 0 or negative seed
        InvalidPortfolioError: non-positive total value or no assets
        DegenerateSimulationError: no finite loss was produced
    """
    validate_trials(trials)
    trials = int(trials)

    if not math.isfinite(total_value_usd) or total_value_usd <= 0 or not weights:
        raise InvalidPortfolioError(
            "Cannot simulate an empty portfolio or a non-positive total value",
            field="total_value_usd",
            value=total_value_usd,
        )

    missing = [a for a in weights if a not in covariance.assets]
    if missing:
        raise DataValidationError(
            f"Covariance model does not cover weighted assets: {missing}",
            field="covariance",
            value=missing,
        )

    if rng is None:
        seed = resolve_seed(seed)
        rng = np.random.default_rng(seed)

    w = np.array([weights.get(asset, 0.0) for asset in covariance.assets], dtype=float)
    returns = _draw_returns(covariance, trials, rng)

    portfolio_returns = returns @ w
    portfolio_values = total_value_usd * (1.0 + portfolio_returns)
    losses = total_value_usd - portfolio_values

    finite = np.isfinite(losses)
    if not finite.any():
        raise DegenerateSimulationError(
            f"All {trials} trials produced non-finite losses", trials=trials
        )
    if not finite.all():
        logger.warning(f"Dropped {int((~finite).sum())} non-finite trials of {trials}")
        losses = losses[finite]
        portfolio_returns = portfolio_returns[finite]

    var95 = float(np.percentile(losses, VAR_CONFIDENCE_95 * 100))
    var99 = float(np.percentile(losses, VAR_CONFIDENCE_99 * 100))

    tail = losses[losses > var95]
    expected_shortfall = float(tail.mean()) if tail.size else 0.0

    volatility = float(np.std(portfolio_returns, ddof=1)) if portfolio_returns.size > 1 else 0.0

    var95 = max(var95, 0.0)
    var99 = max(var99, var95)
    horizon_scale = math.sqrt(VAR_LONG_HORIZON_DAYS)

    return VarReport(
        var95_1d=var95,
        var99_1d=var99,
        var95_7d=var95 * horizon_scale,
        var99_7d=var99 * horizon_scale,
        expected_shortfall95=max(expected_shortfall, 0.0),
        portfolio_volatility=volatility,
        var_pct_95_24h=var95 / total_value_usd * 100.0,
        trial_count=trials,
        seed=seed,
        max_loss=max(float(losses.max()), 0.0),
    )


def evaluate(
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = DEFAULT_SEED,
    empty_policy: EmptyPortfolioPolicy = EmptyPortfolioPolicy.RAISE,
    fallback: PortfolioSnapshot | None = None,
) -> VarReport:
    """Evaluate a portfolio snapshot end to end.

    Builds the covariance model and runs `simulate`, both seeded from child
    streams of `seed`, so identical arguments give an identical report.

    Args:
        portfolio: Portfolio snapshot
        market: Market snapshot
        trials: Number of Monte Carlo trials
        seed: Master seed; None draws fresh entropy, which is recorded on the report
        empty_policy: What to do with an empty / zero-valued portfolio
        fallback: Portfolio used instead of the built-in demo portfolio when
                  `empty_policy` is DEMO

    Returns:
        VarReport
    """
    validate_trials(trials)
    trials = int(trials)
    seed = resolve_seed(seed)
    synthetic = False

    if is_empty_portfolio(portfolio):
        empty_policy = EmptyPortfolioPolicy(empty_policy)
        if empty_policy is EmptyPortfolioPolicy.RAISE:
            raise InvalidPortfolioError(
                "Portfolio is empty or has non-positive total value",
                field="total_value_usd",
                value=portfolio.total_value_usd,
            )
        if empty_policy is EmptyPortfolioPolicy.ZERO:
            logger.info("Empty portfolio: returning zero VaR report")
            return VarReport.zero(trials, seed=seed)

        logger.warning("Empty portfolio: evaluating SYNTHETIC demo portfolio, not real holdings")
        portfolio = fallback if fallback is not None else demo_portfolio()
        synthetic = True

    validate_portfolio(portfolio)
    validate_market(market)

    corr_rng, sample_rng = spawn_generators(seed)
    covariance = build_covariance(portfolio.weights.keys(), market, rng=corr_rng)
    report = simulate(
        portfolio.weights,
        portfolio.total_value_usd,
        covariance,
        trials=trials,
        seed=seed,
        rng=sample_rng,
    )

    if synthetic:
        report = dataclasses.replace(report, synthetic=True)
    return report
