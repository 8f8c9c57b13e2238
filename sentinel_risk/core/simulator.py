"""Full simulation suite for one portfolio/market snapshot.

Runs, in order:
1. Current-portfolio VaR
2. Candidate route analysis (standard candidates unless routes are given)
3. Stress sweep
4. Policy checks per candidate
5. Recommendations
"""

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime

from sentinel_risk.core.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig
from sentinel_risk.core.engine import RiskModel, RouteEvaluator, StressTestSweep
from sentinel_risk.domain.entities.policy import DEFAULT_RISK_POLICY, RiskPolicy
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.risk import EmptyPortfolioPolicy
from sentinel_risk.domain.entities.route import RouteAnalysis, RouteCandidate
from sentinel_risk.domain.entities.simulation import SimulationResult
from sentinel_risk.domain.entities.stress import StressResult
from sentinel_risk.domain.services.candidates import generate_candidate_routes
from sentinel_risk.domain.services.policy_checks import check_route_policy
from sentinel_risk.domain.services.recommendations import generate_recommendations
from sentinel_risk.domain.services.validation import is_empty_portfolio
from sentinel_risk.domain.services.var import demo_portfolio

logger = logging.getLogger(__name__)


def run_simulation_suite(
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    policy: RiskPolicy = DEFAULT_RISK_POLICY,
    config: SimulationConfig = DEFAULT_SIMULATION_CONFIG,
    routes: Sequence[RouteCandidate] | None = None,
    fallback: PortfolioSnapshot | None = None,
) -> SimulationResult:
    """Run the complete risk simulation for a snapshot.

    An empty portfolio follows `config.empty_portfolio_policy`: RAISE
    propagates InvalidPortfolioError, ZERO returns the zero report with no
    routes or stress results, DEMO runs the whole suite on the synthetic
    demo portfolio (or `fallback`) and marks the result synthetic.

    Args:
        portfolio: Current portfolio
        market: Current market snapshot
        policy: Risk limits
        config: Trials, seed, worker count, empty-portfolio policy
        routes: Candidate routes; the standard candidates when None
        fallback: Portfolio used in place of the demo portfolio under DEMO

    Returns:
        SimulationResult
    """
    started = time.perf_counter()
    logger.info(f"Starting simulation suite (trials={config.trials}, seed={config.seed})")

    risk_model = RiskModel(config, fallback=fallback)
    current_var = risk_model.evaluate(portfolio, market)

    # Portfolio the routes and stress sweep run on; None skips both
    subject: PortfolioSnapshot | None = portfolio
    if is_empty_portfolio(portfolio):
        if config.empty_portfolio_policy is EmptyPortfolioPolicy.DEMO:
            subject = fallback if fallback is not None else demo_portfolio()
        else:
            logger.info("Empty portfolio: skipping route analysis and stress sweep")
            subject = None

    candidates: list[RouteAnalysis] = []
    stress_results: dict[str, StressResult] = {}
    if subject is not None:
        if routes is None:
            routes = generate_candidate_routes(subject, market, policy)
        candidates = RouteEvaluator(config).rank_candidates(routes, subject, market, baseline=current_var)
        stress_results = StressTestSweep().run(subject, market)

    policy_checks = {c.id: check_route_policy(c, policy) for c in candidates}
    recommendations = generate_recommendations(current_var, candidates, stress_results, policy)

    elapsed_ms = (time.perf_counter() - started) * 1000.0
    logger.info(f"Simulation suite finished in {elapsed_ms:.0f}ms: {len(candidates)} routes analysed")

    return SimulationResult(
        timestamp=datetime.now(UTC),
        current_var=current_var,
        candidates=candidates,
        stress_tests=stress_results,
        policy_checks=policy_checks,
        recommendations=recommendations,
        metadata={
            "seed": current_var.seed,
            "trials": config.trials,
            "computation_time_ms": elapsed_ms,
            "synthetic": current_var.synthetic,
        },
    )
