"""Usage and degradation telemetry.

Python 3.13+.
"""

from .usage import UsageAnalytics, UsageMetric, metric_key

__all__ = ["UsageAnalytics", "UsageMetric", "metric_key"]
