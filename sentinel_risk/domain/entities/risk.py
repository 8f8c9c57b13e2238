"""Risk-model entities: covariance model and VaR report."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

import pandas as pd

from sentinel_risk.domain.entities.portfolio import AssetSymbol


class EmptyPortfolioPolicy(str, Enum):
    """What `evaluate` does with an empty or zero-valued portfolio.

    RAISE is the default. ZERO and DEMO let a caller opt into a non-raising
    result explicitly; a DEMO report is always flagged `synthetic=True`.
    """

    RAISE = "raise"
    ZERO = "zero"
    DEMO = "demo"


@dataclass(frozen=True, eq=False)
class CovarianceModel:
    """Correlation and covariance over an ordered asset list.

    The correlation comes from a class-based heuristic with random jitter,
    not from historical data. It is an approximation meant to give the Monte
    Carlo engine a plausible co-movement structure.
    """

    assets: tuple[AssetSymbol, ...]
    correlation: pd.DataFrame  # NxN, unit diagonal, off-diagonal in [-0.95, 0.95]
    covariance: pd.DataFrame  # correlation[i, j] * vol[i] * vol[j]
    volatilities: pd.Series

    # Shrinkage toward identity applied to restore positive semi-definiteness
    shrinkage: float = 0.0

    @property
    def size(self) -> int:
        return len(self.assets)


@dataclass(frozen=True)
class VarReport:
    """Monte Carlo Value-at-Risk report for one portfolio.

    Loss figures are USD amounts and always >= 0. The 7-day figures use
    square-root-of-time scaling, which assumes i.i.d. daily returns and is an
    approximation rather than an exact multi-day VaR.
    """

    var95_1d: float
    var99_1d: float
    var95_7d: float
    var99_7d: float
    expected_shortfall95: float
    portfolio_volatility: float
    var_pct_95_24h: float
    trial_count: int

    # Replay information
    seed: int | None = None
    max_loss: float = 0.0
    synthetic: bool = False  # True only for the opt-in demo fallback

    @classmethod
    def zero(cls, trial_count: int, seed: int | None = None) -> "VarReport":
        """All-zero sentinel report, keeping the trial count and seed."""
        return cls(
            var95_1d=0.0,
            var99_1d=0.0,
            var95_7d=0.0,
            var99_7d=0.0,
            expected_shortfall95=0.0,
            portfolio_volatility=0.0,
            var_pct_95_24h=0.0,
            trial_count=trial_count,
            seed=seed,
        )

    @property
    def is_zero(self) -> bool:
        return self.var95_1d == 0.0 and self.var99_1d == 0.0 and self.expected_shortfall95 == 0.0

    def scaled_var95(self, days: int) -> float:
        """1-day VaR95 scaled to `days` by the square-root-of-time rule."""
        return self.var95_1d * math.sqrt(days)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "var95_1d": self.var95_1d,
            "var99_1d": self.var99_1d,
            "var95_7d": self.var95_7d,
            "var99_7d": self.var99_7d,
            "expected_shortfall95": self.expected_shortfall95,
            "portfolio_volatility": self.portfolio_volatility,
            "var_pct_95_24h": self.var_pct_95_24h,
            "trial_count": self.trial_count,
            "seed": self.seed,
            "max_loss": self.max_loss,
            "synthetic": self.synthetic,
        }
