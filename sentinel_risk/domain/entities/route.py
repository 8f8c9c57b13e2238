"""Rebalancing route entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from sentinel_risk.domain.entities.portfolio import AssetSymbol
from sentinel_risk.domain.entities.risk import VarReport


@dataclass(frozen=True)
class SwapAction:
    """Swap a percentage of one holding into another asset on a venue."""

    from_asset: AssetSymbol
    to_asset: AssetSymbol
    from_amount_pct: float  # 0-100, share of the current from_asset holding
    venue: str
    estimated_slippage_bps: float = 30.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "swap",
            "from_asset": self.from_asset,
            "to_asset": self.to_asset,
            "from_amount_pct": self.from_amount_pct,
            "venue": self.venue,
            "estimated_slippage_bps": self.estimated_slippage_bps,
        }


class LiquidityKind(str, Enum):
    ADD = "add_liquidity"
    REMOVE = "remove_liquidity"


@dataclass(frozen=True)
class LiquidityAction:
    """Add or remove liquidity in a pool.

    Liquidity actions do not move holdings when a route is applied; they only
    contribute a flat cost and execution time.
    """

    pool: str
    venue: str
    kind: LiquidityKind = LiquidityKind.ADD
    amount_a_pct: float = 0.0
    amount_b_pct: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "pool": self.pool,
            "venue": self.venue,
            "amount_a_pct": self.amount_a_pct,
            "amount_b_pct": self.amount_b_pct,
        }


RouteAction = Union[SwapAction, LiquidityAction]


@dataclass(frozen=True)
class RouteCandidate:
    """A candidate sequence of rebalancing actions."""

    id: str
    description: str
    actions: tuple[RouteAction, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))

    @property
    def swaps(self) -> list[SwapAction]:
        return [a for a in self.actions if isinstance(a, SwapAction)]

    @property
    def venues(self) -> list[str]:
        """Distinct venues in action order."""
        seen: list[str] = []
        for action in self.actions:
            if action.venue not in seen:
                seen.append(action.venue)
        return seen


@dataclass(frozen=True)
class RouteAnalysis:
    """Projected risk and cost of applying one candidate route.

    `risk_score` = min(VaR%, 10) + min(slippage_bps / 20, 5); lower is better.
    """

    id: str
    description: str
    projected_var_report: VarReport
    slippage_cost_bps: float
    risk_score: float

    actions: tuple[RouteAction, ...] = ()
    new_weights: dict[AssetSymbol, float] = field(default_factory=dict)
    slippage_cost_usd: float = 0.0
    execution_complexity: int = 0
    estimated_time_minutes: int = 0
    var_reduction_pct: float = 0.0  # baseline VaR% minus projected VaR%

    @property
    def expected_var_pct(self) -> float:
        return self.projected_var_report.var_pct_95_24h

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "description": self.description,
            "actions": [a.to_dict() for a in self.actions],
            "expected_var_pct": self.expected_var_pct,
            "var_reduction_pct": self.var_reduction_pct,
            "slippage_cost_bps": self.slippage_cost_bps,
            "slippage_cost_usd": self.slippage_cost_usd,
            "execution_complexity": self.execution_complexity,
            "estimated_time_minutes": self.estimated_time_minutes,
            "new_allocation": dict(self.new_weights),
            "risk_score": self.risk_score,
            "projected_var": self.projected_var_report.to_dict(),
        }
