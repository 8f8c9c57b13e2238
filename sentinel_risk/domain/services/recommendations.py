"""Recommendations derived from VaR, route ranking and stress results."""

from collections.abc import Mapping, Sequence

from sentinel_risk.domain.entities.policy import RiskPolicy
from sentinel_risk.domain.entities.risk import VarReport
from sentinel_risk.domain.entities.route import RouteAnalysis
from sentinel_risk.domain.entities.simulation import Priority, Recommendation
from sentinel_risk.domain.entities.stress import StressResult
from sentinel_risk.domain.services.stress import worst_case_loss_pct

SUGGESTED_ROUTE_COUNT = 2


def generate_recommendations(
    current: VarReport,
    ranked_routes: Sequence[RouteAnalysis],
    stress_results: Mapping[str, StressResult],
    policy: RiskPolicy,
) -> list[Recommendation]:
    """Build prioritized recommendations.

    - var_reduction (high): current VaR% above the policy limit
    - stress_vulnerability (medium): worst stress loss above the alert level
    - optimal_route (low): the best-ranked route, when there is one
    """
    recommendations: list[Recommendation] = []

    current_var_pct = current.var_pct_95_24h
    if current_var_pct > policy.max_daily_var_pct:
        recommendations.append(
            Recommendation(
                kind="var_reduction",
                priority=Priority.HIGH,
                message=(
                    f"Current VaR ({current_var_pct:.1f}%) exceeds "
                    f"{policy.max_daily_var_pct:g}% threshold. Consider rebalancing."
                ),
                route_ids=tuple(r.id for r in ranked_routes[:SUGGESTED_ROUTE_COUNT]),
            )
        )

    worst_loss = worst_case_loss_pct(stress_results)
    if worst_loss > policy.stress_loss_alert_pct:
        recommendations.append(
            Recommendation(
                kind="stress_vulnerability",
                priority=Priority.MEDIUM,
                message=(
                    f"Portfolio shows high vulnerability to stress scenarios "
                    f"(max loss: {worst_loss:.1f}%). Increase stable allocation."
                ),
            )
        )

    if ranked_routes:
        best = ranked_routes[0]
        recommendations.append(
            Recommendation(
                kind="optimal_route",
                priority=Priority.LOW,
                message=f"Recommended rebalancing: {best.description}",
                route_ids=(best.id,),
            )
        )

    return recommendations
