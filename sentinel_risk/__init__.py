"""Treasury risk core: Monte Carlo VaR, route evaluation and stress testing."""

__version__ = "0.1.0"
