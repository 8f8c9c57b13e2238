"""Configuration for the risk simulator.

Configuration is resolved once, at the edge, into immutable values that are
passed to the engine. Nothing below `sentinel_risk.domain` reads the process
environment.

Reads:
- SENTINEL_MC_TRIALS: Monte Carlo trials per simulation (default: 10000)
- SENTINEL_MC_SEED: master seed (default: 12345)
- SENTINEL_MAX_WORKERS: route-scoring thread pool size (default: sequential)
- SENTINEL_EMPTY_PORTFOLIO_POLICY: raise | zero | demo (default: raise)
- SENTINEL_MAX_DAILY_VAR_PCT, SENTINEL_MIN_STABLE_ALLOCATION_PCT,
  SENTINEL_ALLOWED_VENUES (comma-separated), SENTINEL_MAX_SINGLE_ASSET_PCT,
  SENTINEL_MAX_SINGLE_TRANSACTION_PCT, SENTINEL_MAX_SLIPPAGE_BPS,
  SENTINEL_STRESS_LOSS_ALERT_PCT: risk policy limits
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sentinel_risk.domain.constants import DEFAULT_SEED, DEFAULT_TRIALS
from sentinel_risk.domain.entities.policy import DEFAULT_RISK_POLICY, RiskPolicy
from sentinel_risk.domain.entities.risk import EmptyPortfolioPolicy
from sentinel_risk.domain.exceptions import ConfigurationError

# Environment variable names
ENV_MC_TRIALS = "SENTINEL_MC_TRIALS"
ENV_MC_SEED = "SENTINEL_MC_SEED"
ENV_MAX_WORKERS = "SENTINEL_MAX_WORKERS"
ENV_EMPTY_PORTFOLIO_POLICY = "SENTINEL_EMPTY_PORTFOLIO_POLICY"

ENV_MAX_DAILY_VAR_PCT = "SENTINEL_MAX_DAILY_VAR_PCT"
ENV_MIN_STABLE_ALLOCATION_PCT = "SENTINEL_MIN_STABLE_ALLOCATION_PCT"
ENV_ALLOWED_VENUES = "SENTINEL_ALLOWED_VENUES"
ENV_MAX_SINGLE_ASSET_PCT = "SENTINEL_MAX_SINGLE_ASSET_PCT"
ENV_MAX_SINGLE_TRANSACTION_PCT = "SENTINEL_MAX_SINGLE_TRANSACTION_PCT"
ENV_MAX_SLIPPAGE_BPS = "SENTINEL_MAX_SLIPPAGE_BPS"
ENV_STRESS_LOSS_ALERT_PCT = "SENTINEL_STRESS_LOSS_ALERT_PCT"

ALL_ENV_VARS = [
    ENV_MC_TRIALS,
    ENV_MC_SEED,
    ENV_MAX_WORKERS,
    ENV_EMPTY_PORTFOLIO_POLICY,
    ENV_MAX_DAILY_VAR_PCT,
    ENV_MIN_STABLE_ALLOCATION_PCT,
    ENV_ALLOWED_VENUES,
    ENV_MAX_SINGLE_ASSET_PCT,
    ENV_MAX_SINGLE_TRANSACTION_PCT,
    ENV_MAX_SLIPPAGE_BPS,
    ENV_STRESS_LOSS_ALERT_PCT,
]


@dataclass(frozen=True)
class SimulationConfig:
    """Monte Carlo and execution settings for one simulator run."""

    trials: int = DEFAULT_TRIALS
    seed: int = DEFAULT_SEED
    max_workers: int | None = None  # None = score routes sequentially
    empty_portfolio_policy: EmptyPortfolioPolicy = EmptyPortfolioPolicy.RAISE

    def __post_init__(self) -> None:
        if self.trials <= 0:
            raise ConfigurationError("trials must be positive", key="trials", value=self.trials)
        if self.seed < 0:
            raise ConfigurationError("seed must be non-negative", key="seed", value=self.seed)
        if self.max_workers is not None and self.max_workers <= 0:
            raise ConfigurationError("max_workers must be positive", key="max_workers", value=self.max_workers)
        object.__setattr__(self, "empty_portfolio_policy", EmptyPortfolioPolicy(self.empty_portfolio_policy))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "trials": self.trials,
            "seed": self.seed,
            "max_workers": self.max_workers,
            "empty_portfolio_policy": self.empty_portfolio_policy.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SimulationConfig":
        """Create config from dictionary."""
        return cls(**data)


# Default configuration
DEFAULT_SIMULATION_CONFIG = SimulationConfig()


def _read_int(environ: Mapping[str, str], key: str, default: int | None) -> int | None:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}", key=key, value=raw) from None


def _read_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}", key=key, value=raw) from None


def load_simulation_config(environ: Mapping[str, str] | None = None) -> SimulationConfig:
    """Resolve SimulationConfig from environment variables.

    Args:
        environ: Mapping to read instead of os.environ (tests, embedding)

    Returns:
        SimulationConfig

    Raises:
        ConfigurationError: malformed or out-of-range value
    """
    if environ is None:
        environ = os.environ

    policy_raw = environ.get(ENV_EMPTY_PORTFOLIO_POLICY, "").strip().lower()
    try:
        empty_policy = EmptyPortfolioPolicy(policy_raw) if policy_raw else EmptyPortfolioPolicy.RAISE
    except ValueError:
        raise ConfigurationError(
            f"{ENV_EMPTY_PORTFOLIO_POLICY} must be one of raise/zero/demo, got {policy_raw!r}",
            key=ENV_EMPTY_PORTFOLIO_POLICY,
            value=policy_raw,
        ) from None

    return SimulationConfig(
        trials=_read_int(environ, ENV_MC_TRIALS, DEFAULT_TRIALS),
        seed=_read_int(environ, ENV_MC_SEED, DEFAULT_SEED),
        max_workers=_read_int(environ, ENV_MAX_WORKERS, None),
        empty_portfolio_policy=empty_policy,
    )


def load_risk_policy(environ: Mapping[str, str] | None = None) -> RiskPolicy:
    """Resolve RiskPolicy from environment variables, defaulting each limit."""
    if environ is None:
        environ = os.environ

    d = DEFAULT_RISK_POLICY
    venues_raw = environ.get(ENV_ALLOWED_VENUES, "").strip()
    venues = tuple(v.strip() for v in venues_raw.split(",") if v.strip()) if venues_raw else d.allowed_venues

    return RiskPolicy(
        max_daily_var_pct=_read_float(environ, ENV_MAX_DAILY_VAR_PCT, d.max_daily_var_pct),
        min_stable_allocation_pct=_read_float(environ, ENV_MIN_STABLE_ALLOCATION_PCT, d.min_stable_allocation_pct),
        allowed_venues=venues,
        max_single_asset_allocation_pct=_read_float(
            environ, ENV_MAX_SINGLE_ASSET_PCT, d.max_single_asset_allocation_pct
        ),
        max_single_transaction_pct=_read_float(environ, ENV_MAX_SINGLE_TRANSACTION_PCT, d.max_single_transaction_pct),
        max_slippage_tolerance_bps=_read_float(environ, ENV_MAX_SLIPPAGE_BPS, d.max_slippage_tolerance_bps),
        stress_loss_alert_pct=_read_float(environ, ENV_STRESS_LOSS_ALERT_PCT, d.stress_loss_alert_pct),
    )
