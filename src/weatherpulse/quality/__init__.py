"""Quality checks on pipeline outputs."""

from weatherpulse.quality.checks import QualityChecker

__all__ = ["QualityChecker"]
