"""Deterministic policy checks for analysed routes.

Each check appends its name to `passed` or `failed` and records a details
entry with the measured value and the limit.
"""

from sentinel_risk.domain.entities.policy import PolicyCheckResult, RiskPolicy
from sentinel_risk.domain.entities.route import RouteAnalysis, SwapAction
from sentinel_risk.domain.services.assets import is_stablecoin, stable_allocation_pct


def _record(result: PolicyCheckResult, name: str, ok: bool, **details) -> None:
    (result.passed if ok else result.failed).append(name)
    result.details[name] = {"status": "passed" if ok else "failed", **details}


def _check_max_var(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    var_pct = analysis.expected_var_pct
    limit = policy.max_daily_var_pct
    _record(result, "max_daily_var", var_pct <= limit, expected_var_pct=var_pct, limit=limit, margin=limit - var_pct)


def _check_min_stable(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    stable_pct = stable_allocation_pct(analysis.new_weights)
    required = policy.min_stable_allocation_pct
    _record(
        result,
        "min_stable_allocation",
        stable_pct >= required,
        stable_allocation_pct=stable_pct,
        requirement=required,
        margin=stable_pct - required,
    )


def _check_venues(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    used: list[str] = []
    for action in analysis.actions:
        if action.venue not in used:
            used.append(action.venue)
    unauthorized = [v for v in used if v not in policy.allowed_venues]
    _record(
        result,
        "allowed_venues",
        not unauthorized,
        used_venues=used,
        unauthorized_venues=unauthorized,
        allowed_venues=list(policy.allowed_venues),
    )


def _check_concentration(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    limit = policy.max_single_asset_allocation_pct
    allocations = {a: w * 100.0 for a, w in analysis.new_weights.items()}
    violations = {a: pct for a, pct in allocations.items() if pct > limit and not is_stablecoin(a)}
    _record(
        result,
        "concentration_limits",
        not violations,
        max_allocation_pct=max(allocations.values(), default=0.0),
        violations=violations,
        limit=limit,
    )


def _check_transaction_sizes(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    limit = policy.max_single_transaction_pct
    sizes = [a.from_amount_pct for a in analysis.actions if isinstance(a, SwapAction)]
    oversized = [s for s in sizes if s > limit]
    _record(
        result,
        "transaction_limits",
        not oversized,
        max_transaction_pct=max(sizes, default=0.0),
        oversized=oversized,
        limit=limit,
    )


def _check_slippage(result: PolicyCheckResult, analysis: RouteAnalysis, policy: RiskPolicy) -> None:
    limit = policy.max_slippage_tolerance_bps
    worst = max(
        (a.estimated_slippage_bps for a in analysis.actions if isinstance(a, SwapAction)),
        default=0.0,
    )
    _record(result, "slippage_tolerance", worst <= limit, max_slippage_bps=worst, limit_bps=limit)


def check_route_policy(analysis: RouteAnalysis, policy: RiskPolicy) -> PolicyCheckResult:
    """Check one analysed route against every policy limit.

    Checks:
    - max_daily_var: projected VaR% <= max_daily_var_pct
    - min_stable_allocation: stablecoin share after the route >= minimum
    - allowed_venues: every action venue is allowed
    - concentration_limits: no non-stable asset above the single-asset cap
    - transaction_limits: no swap larger than max_single_transaction_pct
    - slippage_tolerance: no swap slippage estimate above the tolerance

    Returns:
        PolicyCheckResult
    """
    result = PolicyCheckResult(route_id=analysis.id)
    _check_max_var(result, analysis, policy)
    _check_min_stable(result, analysis, policy)
    _check_venues(result, analysis, policy)
    _check_concentration(result, analysis, policy)
    _check_transaction_sizes(result, analysis, policy)
    _check_slippage(result, analysis, policy)
    return result
