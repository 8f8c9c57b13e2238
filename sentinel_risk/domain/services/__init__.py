"""Domain services - pure risk computations.

These services contain the core algorithms. They perform no I/O and never
read the process environment; everything they need is passed in.
"""

from sentinel_risk.domain.services.candidates import generate_candidate_routes
from sentinel_risk.domain.services.covariance import (
    asset_volatility,
    build_correlation,
    build_covariance,
)
from sentinel_risk.domain.services.policy_checks import check_route_policy
from sentinel_risk.domain.services.recommendations import generate_recommendations
from sentinel_risk.domain.services.routes import (
    apply_route,
    compute_risk_score,
    estimate_execution_minutes,
    rank_routes,
    route_slippage_bps,
    score_route,
)
from sentinel_risk.domain.services.stress import (
    DEFAULT_SCENARIOS,
    apply_shock,
    run_stress_sweep,
    run_stress_test,
    stress_results_to_frame,
    worst_case_loss_pct,
)
from sentinel_risk.domain.services.var import demo_portfolio, evaluate, simulate

__all__ = [
    # Covariance
    "asset_volatility",
    "build_correlation",
    "build_covariance",
    # VaR
    "simulate",
    "evaluate",
    "demo_portfolio",
    # Routes
    "apply_route",
    "route_slippage_bps",
    "estimate_execution_minutes",
    "compute_risk_score",
    "score_route",
    "rank_routes",
    "generate_candidate_routes",
    # Stress
    "DEFAULT_SCENARIOS",
    "apply_shock",
    "run_stress_test",
    "run_stress_sweep",
    "worst_case_loss_pct",
    "stress_results_to_frame",
    # Policy
    "check_route_policy",
    "generate_recommendations",
]
