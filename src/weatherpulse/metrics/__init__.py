"""Summary metrics over pipeline outputs."""

from weatherpulse.metrics.definitions import MetricsEngine

__all__ = ["MetricsEngine"]
