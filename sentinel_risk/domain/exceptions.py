"""Custom exceptions for sentinel_risk domain.

Every failure the risk core can produce is a local validation failure and is
raised to the caller as one of these types. Nothing is retried and nothing is
converted into a zero report behind the caller's back.
"""

from typing import Any


class SentinelRiskError(Exception):
    """Base exception for all sentinel_risk errors."""

    pass


# ============================================================================
# Data errors
# ============================================================================


class DataError(SentinelRiskError):
    """Base class for input data errors."""

    pass


class DataValidationError(DataError):
    """Raised when input data fails validation.

    Examples:
    - Weights not summing to 1
    - Negative swap percentage
    - Non-positive trial count
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class InvalidPortfolioError(DataValidationError):
    """Raised for an empty portfolio, bad weights, or non-positive total value."""

    pass


class InvalidMarketDataError(DataValidationError):
    """Raised when a price is missing or non-positive for a referenced asset."""

    def __init__(self, message: str, asset: str | None = None, value: Any = None):
        super().__init__(message, field="prices", value=value)
        self.asset = asset


class UnknownAssetError(DataValidationError):
    """Raised when a route action references an asset absent from holdings and prices."""

    def __init__(self, message: str, asset: str):
        super().__init__(message, field="asset", value=asset)
        self.asset = asset


class InvalidRouteError(DataValidationError):
    """Raised when a route action has out-of-range parameters."""

    def __init__(self, message: str, route_id: str | None = None, field: str | None = None, value: Any = None):
        super().__init__(message, field=field, value=value)
        self.route_id = route_id


class SimulationParameterError(DataValidationError):
    """Raised when simulation parameters are invalid (e.g. trials <= 0)."""

    pass


# ============================================================================
# Simulation errors
# ============================================================================


class SimulationError(SentinelRiskError):
    """Base class for Monte Carlo simulation faults."""

    pass


class DegenerateSimulationError(SimulationError):
    """Raised when no trial produced a finite loss.

    This is unreachable with validated inputs and indicates a programming
    error rather than a recoverable condition.
    """

    def __init__(self, message: str, trials: int | None = None):
        super().__init__(message)
        self.trials = trials


# ============================================================================
# Configuration errors
# ============================================================================


class ConfigurationError(SentinelRiskError):
    """Raised when configuration values are malformed."""

    def __init__(self, message: str, key: str | None = None, value: Any = None):
        super().__init__(message)
        self.key = key
        self.value = value
