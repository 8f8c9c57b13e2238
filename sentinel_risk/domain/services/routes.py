"""Route evaluation domain service.

Applies candidate rebalancing routes to a hypothetical copy of the portfolio,
re-runs the Monte Carlo VaR on the result and scores each route by projected
risk plus slippage cost.

Every candidate is evaluated with the same seed (common random numbers), so
differences between routes come from the routes and not from sampling noise,
and the ranking is identical however many workers scored the candidates.
"""

import concurrent.futures
import logging
import math
from collections.abc import Sequence

from sentinel_risk.domain.constants import (
    BPS_PER_UNIT,
    DEFAULT_SEED,
    DEFAULT_TRIALS,
    LIQUIDITY_ACTION_COST_BPS,
    LIQUIDITY_EXECUTION_MINUTES,
    RISK_SCORE_COST_CAP,
    RISK_SCORE_COST_DIVISOR,
    RISK_SCORE_VAR_CAP,
    SWAP_EXECUTION_MINUTES,
)
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.risk import VarReport
from sentinel_risk.domain.entities.route import (
    LiquidityAction,
    RouteAnalysis,
    RouteCandidate,
    SwapAction,
)
from sentinel_risk.domain.exceptions import InvalidRouteError, UnknownAssetError
from sentinel_risk.domain.services.validation import require_prices
from sentinel_risk.domain.services.var import evaluate, resolve_seed

logger = logging.getLogger(__name__)


def _validate_swap(swap: SwapAction, route_id: str) -> None:
    pct = swap.from_amount_pct
    if not math.isfinite(pct) or not 0.0 <= pct <= 100.0:
        raise InvalidRouteError(
            f"Route {route_id}: from_amount_pct must be within [0, 100], got {pct}",
            route_id=route_id,
            field="from_amount_pct",
            value=pct,
        )
    bps = swap.estimated_slippage_bps
    if not math.isfinite(bps) or not 0.0 <= bps <= BPS_PER_UNIT:
        raise InvalidRouteError(
            f"Route {route_id}: estimated_slippage_bps must be within [0, {BPS_PER_UNIT}], got {bps}",
            route_id=route_id,
            field="estimated_slippage_bps",
            value=bps,
        )


def _resolve_asset(asset: str, holdings: dict[str, float], market: MarketSnapshot) -> None:
    if asset not in holdings and asset not in market.prices:
        raise UnknownAssetError(f"Asset {asset} is neither held nor priced", asset=asset)
    require_prices(market, [asset])


def apply_route(
    route: RouteCandidate,
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
) -> PortfolioSnapshot:
    """Apply a route's swaps to a copy of the portfolio.

    For each swap, in order:
        swap_amount = holdings[from] * from_amount_pct / 100
        received    = swap_amount * price[from] / price[to] * (1 - slippage_bps / 10000)

    Liquidity actions leave holdings unchanged. Total value and weights are
    recomputed at current prices. The input snapshot is never modified.

    Raises:
        InvalidRouteError: swap parameters out of range
        UnknownAssetError: action asset neither held nor priced
        InvalidMarketDataError: referenced or held asset without a positive price
    """
    holdings = dict(portfolio.holdings)

    for action in route.actions:
        if not isinstance(action, SwapAction):
            continue

        _validate_swap(action, route.id)
        _resolve_asset(action.from_asset, holdings, market)
        _resolve_asset(action.to_asset, holdings, market)

        swap_amount = holdings.get(action.from_asset, 0.0) * (action.from_amount_pct / 100.0)
        slippage_factor = 1.0 - action.estimated_slippage_bps / BPS_PER_UNIT

        from_price = market.prices[action.from_asset]
        to_price = market.prices[action.to_asset]
        received_amount = (swap_amount * from_price / to_price) * slippage_factor

        holdings[action.from_asset] = holdings.get(action.from_asset, 0.0) - swap_amount
        holdings[action.to_asset] = holdings.get(action.to_asset, 0.0) + received_amount

    require_prices(market, holdings)
    return PortfolioSnapshot.from_holdings(holdings, market.prices)


def route_slippage_bps(route: RouteCandidate) -> float:
    """Size-weighted slippage cost of a route in basis points.

    Swaps contribute slippage_bps * from_amount_pct / 100; each liquidity
    action adds a flat 10 bps.
    """
    total = 0.0
    for action in route.actions:
        if isinstance(action, SwapAction):
            total += action.estimated_slippage_bps * (action.from_amount_pct / 100.0)
        elif isinstance(action, LiquidityAction):
            total += LIQUIDITY_ACTION_COST_BPS
    return total


def estimate_execution_minutes(route: RouteCandidate) -> int:
    """Rough wall-clock estimate: 2 minutes per swap, 5 per liquidity action."""
    minutes = 0
    for action in route.actions:
        if isinstance(action, SwapAction):
            minutes += SWAP_EXECUTION_MINUTES
        else:
            minutes += LIQUIDITY_EXECUTION_MINUTES
    return minutes


def compute_risk_score(var_pct: float, slippage_cost_bps: float) -> float:
    """min(VaR%, 10) + min(slippage_bps / 20, 5). Lower is better."""
    var_score = min(var_pct, RISK_SCORE_VAR_CAP)
    cost_score = min(slippage_cost_bps / RISK_SCORE_COST_DIVISOR, RISK_SCORE_COST_CAP)
    return var_score + cost_score


def score_route(
    route: RouteCandidate,
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = DEFAULT_SEED,
    baseline: VarReport | None = None,
) -> RouteAnalysis:
    """Project VaR and cost for one route.

    Args:
        route: Candidate route
        portfolio: Current portfolio (not modified)
        market: Current market snapshot
        trials: Monte Carlo trials for the projected VaR
        seed: Seed for the projected VaR
        baseline: Current-portfolio report; enables `var_reduction_pct`

    Returns:
        RouteAnalysis
    """
    logger.info(f"Analyzing route {route.id}")

    simulated = apply_route(route, portfolio, market)
    report = evaluate(simulated, market, trials=trials, seed=seed)
    slippage_bps = route_slippage_bps(route)

    var_reduction = 0.0
    if baseline is not None:
        var_reduction = baseline.var_pct_95_24h - report.var_pct_95_24h

    return RouteAnalysis(
        id=route.id,
        description=route.description,
        projected_var_report=report,
        slippage_cost_bps=slippage_bps,
        risk_score=compute_risk_score(report.var_pct_95_24h, slippage_bps),
        actions=route.actions,
        new_weights=dict(simulated.weights),
        slippage_cost_usd=slippage_bps / BPS_PER_UNIT * portfolio.total_value_usd,
        execution_complexity=len(route.actions),
        estimated_time_minutes=estimate_execution_minutes(route),
        var_reduction_pct=var_reduction,
    )


def rank_routes(
    routes: Sequence[RouteCandidate],
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = DEFAULT_SEED,
    baseline: VarReport | None = None,
    max_workers: int | None = None,
) -> list[RouteAnalysis]:
    """Score every route and rank them.

    Ordered ascending by projected VaR% (primary) and risk score (tie-break).
    Results are collected by input position before sorting, and the sort is
    stable, so the output does not depend on completion order.

    Args:
        routes: Candidate routes
        portfolio: Current portfolio
        market: Current market snapshot
        trials: Monte Carlo trials per route
        seed: Seed shared by every route
        baseline: Current-portfolio report for `var_reduction_pct`
        max_workers: Thread pool size; None or 1 scores sequentially

    Returns:
        Ranked list of RouteAnalysis
    """
    if not routes:
        return []

    # One seed for all routes, resolved once so None still yields common draws
    seed = resolve_seed(seed)

    def _score(route: RouteCandidate) -> RouteAnalysis:
        return score_route(route, portfolio, market, trials=trials, seed=seed, baseline=baseline)

    analyses: list[RouteAnalysis | None] = [None] * len(routes)

    if max_workers is None or max_workers <= 1 or len(routes) == 1:
        for idx, route in enumerate(routes):
            analyses[idx] = _score(route)
    else:
        logger.info(f"Scoring {len(routes)} routes on {max_workers} workers")
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as pool:
            futures = {pool.submit(_score, route): idx for idx, route in enumerate(routes)}
            for future in concurrent.futures.as_completed(futures):
                analyses[futures[future]] = future.result()

    return sorted(analyses, key=lambda a: (a.expected_var_pct, a.risk_score))
