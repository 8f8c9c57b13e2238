"""Standard candidate rebalancing routes.

Builds the three routes the simulator compares by default:

- increase_stables: move 15% of the largest volatile holding into a stablecoin
- diversify_holdings: move 10% into a second major crypto and seed a
  volatile/stable liquidity pool
- conservative_rebalance: move 25% into a stablecoin
"""

from sentinel_risk.domain.constants import DEFAULT_STABLECOIN
from sentinel_risk.domain.entities.policy import RiskPolicy
from sentinel_risk.domain.entities.portfolio import MarketSnapshot, PortfolioSnapshot
from sentinel_risk.domain.entities.route import (
    LiquidityAction,
    RouteCandidate,
    SwapAction,
)
from sentinel_risk.domain.services.assets import is_stablecoin

INCREASE_STABLES_PCT = 15.0
INCREASE_STABLES_SLIPPAGE_BPS = 25.0

DIVERSIFY_PCT = 10.0
DIVERSIFY_SLIPPAGE_BPS = 35.0
DIVERSIFY_LIQUIDITY_PCT = 5.0

CONSERVATIVE_PCT = 25.0
CONSERVATIVE_SLIPPAGE_BPS = 45.0

# Preferred order when picking the diversification target
DIVERSIFY_PREFERENCE = ("ETH", "BTC", "SOL")


def _largest_volatile_holding(portfolio: PortfolioSnapshot) -> str | None:
    volatile = {a: w for a, w in portfolio.weights.items() if not is_stablecoin(a) and w > 0}
    if not volatile:
        return None
    # Highest weight, ties broken by symbol for determinism
    return min(volatile, key=lambda a: (-volatile[a], a))


def _preferred_stablecoin(market: MarketSnapshot) -> str | None:
    if DEFAULT_STABLECOIN in market.prices:
        return DEFAULT_STABLECOIN
    stables = sorted(a for a in market.prices if is_stablecoin(a))
    return stables[0] if stables else None


def _diversification_target(source: str, market: MarketSnapshot) -> str | None:
    for asset in DIVERSIFY_PREFERENCE:
        if asset != source and asset in market.prices:
            return asset
    return None


def generate_candidate_routes(
    portfolio: PortfolioSnapshot,
    market: MarketSnapshot,
    policy: RiskPolicy,
) -> list[RouteCandidate]:
    """Build the standard candidate routes for the current portfolio.

    Routes that cannot be expressed (no volatile holding to reduce, no priced
    stablecoin, no diversification target) are left out.

    Args:
        portfolio: Current portfolio
        market: Current market snapshot
        policy: Risk policy (minimum stable allocation, allowed venues)

    Returns:
        List of RouteCandidate, possibly empty
    """
    source = _largest_volatile_holding(portfolio)
    if source is None:
        return []

    stable = _preferred_stablecoin(market)
    venues = policy.allowed_venues or ("Orca",)
    primary = venues[0]
    secondary = venues[1] if len(venues) > 1 else primary

    routes: list[RouteCandidate] = []

    if stable is not None:
        target_pct = policy.min_stable_allocation_pct + 5
        routes.append(
            RouteCandidate(
                id="increase_stables",
                description=f"Increase {stable} allocation to {target_pct:g}%",
                actions=(
                    SwapAction(
                        from_asset=source,
                        to_asset=stable,
                        from_amount_pct=INCREASE_STABLES_PCT,
                        venue=primary,
                        estimated_slippage_bps=INCREASE_STABLES_SLIPPAGE_BPS,
                    ),
                ),
            )
        )

    target = _diversification_target(source, market)
    if target is not None:
        actions: list[SwapAction | LiquidityAction] = [
            SwapAction(
                from_asset=source,
                to_asset=target,
                from_amount_pct=DIVERSIFY_PCT,
                venue=secondary,
                estimated_slippage_bps=DIVERSIFY_SLIPPAGE_BPS,
            )
        ]
        if stable is not None:
            actions.append(
                LiquidityAction(
                    pool=f"{source}-{stable}",
                    venue=primary,
                    amount_a_pct=DIVERSIFY_LIQUIDITY_PCT,
                    amount_b_pct=DIVERSIFY_LIQUIDITY_PCT,
                )
            )
        routes.append(
            RouteCandidate(
                id="diversify_holdings",
                description="Diversify into multiple assets to reduce concentration",
                actions=tuple(actions),
            )
        )

    if stable is not None:
        routes.append(
            RouteCandidate(
                id="conservative_rebalance",
                description="Move to very conservative allocation",
                actions=(
                    SwapAction(
                        from_asset=source,
                        to_asset=stable,
                        from_amount_pct=CONSERVATIVE_PCT,
                        venue=primary,
                        estimated_slippage_bps=CONSERVATIVE_SLIPPAGE_BPS,
                    ),
                ),
            )
        )

    return routes
