"""Domain constants for sentinel_risk.

This module centralizes all magic numbers used by the risk model,
route evaluator and stress sweep so they are documented in one place.
"""

# ============================================================================
# Asset classes
# ============================================================================

# Assets treated as "major crypto" by the correlation heuristic
MAJOR_CRYPTO = frozenset({"SOL", "ETH", "BTC"})

# Assets moved by a scenario-wide crypto shock in the stress sweep
STRESS_CRYPTO_ASSETS = frozenset({"SOL", "ETH", "BTC", "ORCA"})

# Any symbol containing this marker is classified as a stablecoin
STABLECOIN_MARKER = "USD"

# Preferred stablecoin when a route needs a destination stable
DEFAULT_STABLECOIN = "USDC"


# ============================================================================
# Volatility defaults (daily return standard deviation)
# ============================================================================

VOLATILITY_DEFAULTS = {
    "SOL": 0.08,
    "ETH": 0.06,
    "BTC": 0.05,
    "WBTC": 0.05,
    "ORCA": 0.12,
    "USDC": 0.002,
    "USDT": 0.003,
}

STABLECOIN_DEFAULT_VOLATILITY = 0.003
OTHER_DEFAULT_VOLATILITY = 0.05


# ============================================================================
# Correlation heuristic (base, jitter std)
# ============================================================================

CRYPTO_CRYPTO_CORRELATION = (0.75, 0.15)
STABLE_STABLE_CORRELATION = (0.95, 0.03)
CRYPTO_STABLE_CORRELATION = (0.15, 0.10)
OTHER_CORRELATION = (0.30, 0.20)

# Off-diagonal correlations are clamped into [-MAX_ABS_CORRELATION, MAX_ABS_CORRELATION]
MAX_ABS_CORRELATION = 0.95

# Smallest eigenvalue tolerated before the matrix is shrunk toward identity
CORRELATION_EIGENVALUE_FLOOR = 1e-10


# ============================================================================
# Monte Carlo
# ============================================================================

DEFAULT_TRIALS = 10_000
DEFAULT_SEED = 12345

VAR_CONFIDENCE_95 = 0.95
VAR_CONFIDENCE_99 = 0.99

# Multi-day VaR uses square-root-of-time scaling from the 1-day figure
VAR_LONG_HORIZON_DAYS = 7

# Tolerance for sum(weights) == 1
WEIGHT_SUM_TOLERANCE = 1e-6

# Demo portfolio used only by the opt-in DEMO empty-portfolio policy
DEMO_PORTFOLIO_VALUE_USD = 1500.0
DEMO_PORTFOLIO_HOLDINGS = {"SOL": 7.14, "USDC": 500.0}
DEMO_PORTFOLIO_WEIGHTS = {"SOL": 0.667, "USDC": 0.333}


# ============================================================================
# Route costs
# ============================================================================

BPS_PER_UNIT = 10_000

# Flat cost charged for each liquidity add/remove action
LIQUIDITY_ACTION_COST_BPS = 10.0

# Risk score caps: VaR% capped at 10, cost score (bps / 20) capped at 5
RISK_SCORE_VAR_CAP = 10.0
RISK_SCORE_COST_DIVISOR = 20.0
RISK_SCORE_COST_CAP = 5.0

# Execution time estimates (minutes)
SWAP_EXECUTION_MINUTES = 2
LIQUIDITY_EXECUTION_MINUTES = 5


# ============================================================================
# Policy defaults
# ============================================================================

DEFAULT_MAX_DAILY_VAR_PCT = 8.0
DEFAULT_MIN_STABLE_ALLOCATION_PCT = 30.0
DEFAULT_ALLOWED_VENUES = ("Orca", "Jupiter", "Phoenix")
DEFAULT_MAX_SINGLE_ASSET_PCT = 70.0
DEFAULT_MAX_SINGLE_TRANSACTION_PCT = 25.0
DEFAULT_MAX_SLIPPAGE_BPS = 100.0
DEFAULT_STRESS_LOSS_ALERT_PCT = 50.0
