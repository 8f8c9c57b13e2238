"""Domain entities - pure dataclasses.

These entities represent the core objects of the risk model: snapshots,
reports, routes, stress scenarios and policy.
"""

from sentinel_risk.domain.entities.policy import (
    DEFAULT_RISK_POLICY,
    PolicyCheckResult,
    RiskPolicy,
)
from sentinel_risk.domain.entities.portfolio import (
    AssetSymbol,
    MarketSnapshot,
    PortfolioSnapshot,
)
from sentinel_risk.domain.entities.risk import (
    CovarianceModel,
    EmptyPortfolioPolicy,
    VarReport,
)
from sentinel_risk.domain.entities.route import (
    LiquidityAction,
    LiquidityKind,
    RouteAction,
    RouteAnalysis,
    RouteCandidate,
    SwapAction,
)
from sentinel_risk.domain.entities.simulation import (
    Priority,
    Recommendation,
    SimulationResult,
)
from sentinel_risk.domain.entities.stress import ShockScenario, StressResult

__all__ = [
    # Snapshots
    "AssetSymbol",
    "PortfolioSnapshot",
    "MarketSnapshot",
    # Risk
    "CovarianceModel",
    "EmptyPortfolioPolicy",
    "VarReport",
    # Routes
    "SwapAction",
    "LiquidityAction",
    "LiquidityKind",
    "RouteAction",
    "RouteCandidate",
    "RouteAnalysis",
    # Stress
    "ShockScenario",
    "StressResult",
    # Policy
    "RiskPolicy",
    "DEFAULT_RISK_POLICY",
    "PolicyCheckResult",
    # Simulation
    "Priority",
    "Recommendation",
    "SimulationResult",
]
