"""Configuration, engine facades and the simulation-suite orchestrator."""

from sentinel_risk.core.config import (
    SimulationConfig,
    load_risk_policy,
    load_simulation_config,
)
from sentinel_risk.core.engine import RiskModel, RouteEvaluator, StressTestSweep
from sentinel_risk.core.simulator import run_simulation_suite

__all__ = [
    "SimulationConfig",
    "load_simulation_config",
    "load_risk_policy",
    "RiskModel",
    "RouteEvaluator",
    "StressTestSweep",
    "run_simulation_suite",
]
