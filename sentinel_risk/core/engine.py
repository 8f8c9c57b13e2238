"""Risk engine facades.

Thin stateful wrappers over the pure domain services. Each facade carries a
SimulationConfig so callers set trials, seed and worker count once instead
of threading them through every call; explicit arguments still win.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence

import numpy as np

from sentinel_risk.core.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.risk import CovarianceModel, VarReport
from sentinel_risk.domain.entities.route import RouteAnalysis, RouteCandidate
from sentinel_risk.domain.entities.stress import ShockScenario, StressResult
from sentinel_risk.domain.services import covariance as covariance_service
from sentinel_risk.domain.services import routes as routes_service
from sentinel_risk.domain.services import stress as stress_service
from sentinel_risk.domain.services import var as var_service

logger = logging.getLogger(__name__)


# ============================================================================
# Monte Carlo VaR
# ============================================================================


class RiskModel:
    """Monte Carlo VaR over a heuristic covariance model."""

    def __init__(
        self,
        config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
        fallback: PortfolioSnapshot | None = None,
    ):
        self.config = config
        self.fallback = fallback

    def build_covariance(
        self,
        assets: Iterable[str],
        market: MarketSnapshot,
        rng: np.random.Generator | None = None,
    ) -> CovarianceModel:
        return covariance_service.build_covariance(assets, market, rng=rng)

    def simulate(
        self,
        weights: Mapping[str, float],
        total_value_usd: float,
        covariance: CovarianceModel,
        trials: int | None = None,
        seed: int | None = None,
    ) -> VarReport:
        return var_service.simulate(
            weights,
            total_value_usd,
            covariance,
            trials=self.config.trials if trials is None else trials,
            seed=self.config.seed if seed is None else seed,
        )

    def evaluate(
        self,
        portfolio: PortfolioSnapshot,
        market: MarketSnapshot,
        trials: int | None = None,
        seed: int | None = None,
    ) -> VarReport:
        """Evaluate a portfolio, defaulting trials and seed from the config.

        Empty portfolios follow `config.empty_portfolio_policy`.
        """
        trials = self.config.trials if trials is None else trials
        seed = self.config.seed if seed is None else seed

        report = var_service.evaluate(
            portfolio,
            market,
            trials=trials,
            seed=seed,
            empty_policy=self.config.empty_portfolio_policy,
            fallback=self.fallback,
        )
        logger.info(
            f"VaR95 1d ${report.var95_1d:,.2f} ({report.var_pct_95_24h:.2f}%), "
            f"trials={report.trial_count}, seed={report.seed}"
        )
        return report


# ============================================================================
# Route evaluation
# ============================================================================


class RouteEvaluator:
    """Scores and ranks rebalancing routes by projected risk and cost."""

    def __init__(self, config: SimulationConfig = DEFAULT_SIMULATION_CONFIG):
        self.config = config

    def apply_route(
        self,
        route: RouteCandidate,
        portfolio: PortfolioSnapshot,
        market: MarketSnapshot,
    ) -> PortfolioSnapshot:
        return routes_service.apply_route(route, portfolio, market)

    def score_route(
        self,
        route: RouteCandidate,
        portfolio: PortfolioSnapshot,
        market: MarketSnapshot,
        trials: int | None = None,
        seed: int | None = None,
        baseline: VarReport | None = None,
    ) -> RouteAnalysis:
        return routes_service.score_route(
            route,
            portfolio,
            market,
            trials=self.config.trials if trials is None else trials,
            seed=self.config.seed if seed is None else seed,
            baseline=baseline,
        )

    def rank_candidates(
        self,
        routes: Sequence[RouteCandidate],
        portfolio: PortfolioSnapshot,
        market: MarketSnapshot,
        trials: int | None = None,
        seed: int | None = None,
        baseline: VarReport | None = None,
    ) -> list[RouteAnalysis]:
        """Rank routes, best (lowest projected VaR%) first.

        Scoring runs on `config.max_workers` threads when set; the ranking is
        the same for any worker count.
        """
        ranked = routes_service.rank_routes(
            routes,
            portfolio,
            market,
            trials=self.config.trials if trials is None else trials,
            seed=self.config.seed if seed is None else seed,
            baseline=baseline,
            max_workers=self.config.max_workers,
        )
        if ranked:
            logger.info(f"Ranked {len(ranked)} routes, best: {ranked[0].id} ({ranked[0].expected_var_pct:.2f}%)")
        return ranked


# ============================================================================
# Stress testing
# ============================================================================


class StressTestSweep:
    """Deterministic price-shock sweep over a scenario catalogue."""

    def __init__(self, scenarios: Sequence[ShockScenario] = stress_service.DEFAULT_SCENARIOS):
        self.scenarios = tuple(scenarios)

    def run(
        self,
        portfolio: PortfolioSnapshot,
        market: MarketSnapshot,
        scenarios: Sequence[ShockScenario] | None = None,
    ) -> dict[str, StressResult]:
        return stress_service.run_stress_sweep(
            portfolio,
            market,
            self.scenarios if scenarios is None else scenarios,
        )
