"""Simulation-suite result entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from sentinel_risk.domain.entities.policy import PolicyCheckResult
from sentinel_risk.domain.entities.risk import VarReport
from sentinel_risk.domain.entities.route import RouteAnalysis
from sentinel_risk.domain.entities.stress import StressResult


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Recommendation:
    """A prioritized follow-up derived from the risk numbers."""

    kind: str  # var_reduction, stress_vulnerability, optimal_route
    priority: Priority
    message: str
    route_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "priority": self.priority.value,
            "message": self.message,
            "route_ids": list(self.route_ids),
        }


@dataclass
class SimulationResult:
    """Everything the simulator produces for one portfolio/market snapshot."""

    timestamp: datetime
    current_var: VarReport
    candidates: list[RouteAnalysis]
    stress_tests: dict[str, StressResult]
    policy_checks: dict[str, PolicyCheckResult]
    recommendations: list[Recommendation]

    # seed, trials, computation_time_ms
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def best_route(self) -> RouteAnalysis | None:
        return self.candidates[0] if self.candidates else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "current_var": self.current_var.to_dict(),
            "candidates": [c.to_dict() for c in self.candidates],
            "stress_tests": {name: r.to_dict() for name, r in self.stress_tests.items()},
            "policy_checks": {rid: c.to_dict() for rid, c in self.policy_checks.items()},
            "recommendations": [r.to_dict() for r in self.recommendations],
            "metadata": dict(self.metadata),
        }
