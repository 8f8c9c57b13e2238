"""Unit tests for route policy checks and recommendations."""

from sentinel_risk.domain.entities import (
    LiquidityAction,
    Priority,
    RiskPolicy,
    RouteAnalysis,
    StressResult,
    SwapAction,
    VarReport,
)
from sentinel_risk.domain.services.policy_checks import check_route_policy
from sentinel_risk.domain.services.recommendations import generate_recommendations


def _report(var_pct: float) -> VarReport:
    var95 = var_pct * 1000.0
    return VarReport(
        var95_1d=var95,
        var99_1d=var95 * 1.4,
        var95_7d=var95 * 7**0.5,
        var99_7d=var95 * 1.4 * 7**0.5,
        expected_shortfall95=var95 * 1.2,
        portfolio_volatility=var_pct / 165.0,
        var_pct_95_24h=var_pct,
        trial_count=1000,
    )


def _analysis(
    route_id: str = "r",
    var_pct: float = 5.0,
    weights: dict[str, float] | None = None,
    actions: tuple = (SwapAction("SOL", "USDC", 20.0, "Orca", 30.0),),
) -> RouteAnalysis:
    return RouteAnalysis(
        id=route_id,
        description=f"route {route_id}",
        projected_var_report=_report(var_pct),
        slippage_cost_bps=6.0,
        risk_score=var_pct + 0.3,
        actions=actions,
        new_weights=weights if weights is not None else {"SOL": 0.6, "USDC": 0.4},
    )


def _stress(loss_pct: float) -> dict[str, StressResult]:
    return {
        "crypto_crash": StressResult(
            scenario="crypto_crash",
            original_value=100.0,
            stressed_value=100.0 - loss_pct,
            loss_usd=loss_pct,
            loss_pct=loss_pct,
        )
    }


class TestCheckRoutePolicy:
    """Tests for check_route_policy."""

    def test_compliant_route(self):
        result = check_route_policy(_analysis(), RiskPolicy())

        assert result.compliant
        assert result.failed == []
        assert result.passed == [
            "max_daily_var",
            "min_stable_allocation",
            "allowed_venues",
            "concentration_limits",
            "transaction_limits",
            "slippage_tolerance",
        ]
        assert result.to_dict()["overall_status"] == "compliant"

    def test_var_above_limit_fails(self):
        result = check_route_policy(_analysis(var_pct=9.5), RiskPolicy())

        assert result.failed == ["max_daily_var"]
        assert result.details["max_daily_var"]["margin"] < 0

    def test_low_stable_allocation_fails(self):
        result = check_route_policy(_analysis(weights={"SOL": 0.5, "ETH": 0.3, "USDC": 0.2}), RiskPolicy())
        assert "min_stable_allocation" in result.failed

    def test_unauthorized_venue_fails(self):
        actions = (SwapAction("SOL", "USDC", 10.0, "Raydium", 30.0), LiquidityAction("SOL-USDC", "Orca"))
        result = check_route_policy(_analysis(actions=actions), RiskPolicy())

        assert "allowed_venues" in result.failed
        assert result.details["allowed_venues"]["unauthorized_venues"] == ["Raydium"]

    def test_concentration_ignores_stablecoins(self):
        result = check_route_policy(_analysis(weights={"SOL": 0.2, "USDC": 0.8}), RiskPolicy())
        assert "concentration_limits" in result.passed

    def test_concentration_flags_volatile_asset(self):
        result = check_route_policy(_analysis(weights={"SOL": 0.75, "USDC": 0.25}), RiskPolicy())
        assert result.details["concentration_limits"]["violations"] == {"SOL": 75.0}

    def test_oversized_swap_fails(self):
        actions = (SwapAction("SOL", "USDC", 40.0, "Orca", 30.0),)
        result = check_route_policy(_analysis(actions=actions), RiskPolicy())
        assert "transaction_limits" in result.failed

    def test_slippage_uses_worst_swap(self):
        actions = (
            SwapAction("SOL", "USDC", 10.0, "Orca", 20.0),
            SwapAction("SOL", "USDC", 10.0, "Orca", 150.0),
        )
        result = check_route_policy(_analysis(actions=actions), RiskPolicy())

        assert "slippage_tolerance" in result.failed
        assert result.details["slippage_tolerance"]["max_slippage_bps"] == 150.0


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_calm_portfolio_only_gets_optimal_route(self):
        recs = generate_recommendations(_report(4.0), [_analysis("a")], _stress(10.0), RiskPolicy())

        assert [r.kind for r in recs] == ["optimal_route"]
        assert recs[0].priority is Priority.LOW
        assert recs[0].route_ids == ("a",)

    def test_high_var_suggests_top_two_routes(self):
        ranked = [_analysis("a"), _analysis("b"), _analysis("c")]
        recs = generate_recommendations(_report(12.0), ranked, _stress(10.0), RiskPolicy())

        assert recs[0].kind == "var_reduction"
        assert recs[0].priority is Priority.HIGH
        assert recs[0].route_ids == ("a", "b")

    def test_stress_vulnerability(self):
        recs = generate_recommendations(_report(4.0), [], _stress(60.0), RiskPolicy())

        assert [r.kind for r in recs] == ["stress_vulnerability"]
        assert recs[0].priority is Priority.MEDIUM
        assert "60.0%" in recs[0].message

    def test_nothing_to_say(self):
        assert generate_recommendations(_report(0.0), [], {}, RiskPolicy()) == []
