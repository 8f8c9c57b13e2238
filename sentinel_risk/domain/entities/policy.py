"""Risk policy entities.

The policy store is consumed as a read-only value. It is built once by the
caller (see `sentinel_risk.core.config.load_risk_policy`) and passed in.
"""

from dataclasses import dataclass, field
from typing import Any

from sentinel_risk.domain.constants import (
    DEFAULT_ALLOWED_VENUES,
    DEFAULT_MAX_DAILY_VAR_PCT,
    DEFAULT_MAX_SINGLE_ASSET_PCT,
    DEFAULT_MAX_SINGLE_TRANSACTION_PCT,
    DEFAULT_MAX_SLIPPAGE_BPS,
    DEFAULT_MIN_STABLE_ALLOCATION_PCT,
    DEFAULT_STRESS_LOSS_ALERT_PCT,
)


@dataclass(frozen=True)
class RiskPolicy:
    """Numeric risk limits from the treasury policy store."""

    max_daily_var_pct: float = DEFAULT_MAX_DAILY_VAR_PCT
    min_stable_allocation_pct: float = DEFAULT_MIN_STABLE_ALLOCATION_PCT
    allowed_venues: tuple[str, ...] = DEFAULT_ALLOWED_VENUES
    max_single_asset_allocation_pct: float = DEFAULT_MAX_SINGLE_ASSET_PCT
    max_single_transaction_pct: float = DEFAULT_MAX_SINGLE_TRANSACTION_PCT
    max_slippage_tolerance_bps: float = DEFAULT_MAX_SLIPPAGE_BPS
    stress_loss_alert_pct: float = DEFAULT_STRESS_LOSS_ALERT_PCT

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_venues", tuple(self.allowed_venues))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "max_daily_var_pct": self.max_daily_var_pct,
            "min_stable_allocation_pct": self.min_stable_allocation_pct,
            "allowed_venues": list(self.allowed_venues),
            "max_single_asset_allocation_pct": self.max_single_asset_allocation_pct,
            "max_single_transaction_pct": self.max_single_transaction_pct,
            "max_slippage_tolerance_bps": self.max_slippage_tolerance_bps,
            "stress_loss_alert_pct": self.stress_loss_alert_pct,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RiskPolicy":
        """Create policy from dictionary."""
        if "allowed_venues" in data:
            data = data.copy()
            data["allowed_venues"] = tuple(data["allowed_venues"])
        return cls(**data)


# Default policy
DEFAULT_RISK_POLICY = RiskPolicy()


@dataclass
class PolicyCheckResult:
    """Outcome of checking one analysed route against the risk policy."""

    route_id: str
    passed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    details: dict[str, dict[str, Any]] = field(default_factory=dict)

    @property
    def compliant(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "route_id": self.route_id,
            "overall_status": "compliant" if self.compliant else "non_compliant",
            "passed": list(self.passed),
            "failed": list(self.failed),
            "details": self.details,
        }
