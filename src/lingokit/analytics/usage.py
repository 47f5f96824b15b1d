"""Translation usage and quality telemetry.

Records, per (locale, key): how often the key was rendered, a smoothed render
time, how many renders degraded, and when it was last used. Reporting methods
are read-only views for operators looking for hot, slow or broken content.

Observational only: nothing here influences translation output.

Thread Safety:
    All operations protected by one RLock.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from threading import RLock

from lingokit.constants import DEFAULT_MOST_USED_LIMIT, DEFAULT_SLOW_THRESHOLD_MS
from lingokit.diagnostics import Degradation

__all__ = ["UsageAnalytics", "UsageMetric", "metric_key"]

logger = logging.getLogger(__name__)


def metric_key(locale: str, key: str) -> str:
    """Export form of a (locale, key) pair.

    Example:
        >>> metric_key("pt_BR", "cta.book")
        'pt_BR:cta.book'
    """
    return f"{locale}:{key}"


@dataclass(slots=True)
class UsageMetric:
    """Counters for one (locale, key).

    Attributes:
        usage_count: Completed translate() calls
        avg_render_time: Smoothed render time in milliseconds
        error_count: Degradations recorded for the key
        last_used: Time of the most recent observation (UTC)
    """

    usage_count: int
    avg_render_time: float
    error_count: int
    last_used: datetime


class UsageAnalytics:
    """Per-key usage, latency and error counters.

    ``avg_render_time`` is updated as ``(old + new) / 2``. This is a recency
    weighted smoothing rather than a true mean: the latest sample always
    carries half the weight. Dashboards already read it this way, so it is
    kept.

    Example:
        >>> analytics = UsageAnalytics()
        >>> analytics.track_translation("cta.book", "en", 4.0)
        >>> analytics.track_translation("cta.book", "en", 8.0)
        >>> analytics.get_metrics()["en:cta.book"].avg_render_time
        6.0
    """

    __slots__ = ("_last_degradation", "_lock", "_metrics", "_now")

    def __init__(self, *, now: Callable[[], datetime] | None = None) -> None:
        """Initialize analytics.

        Args:
            now: Wall-clock source for ``last_used`` (default: UTC now)
        """
        self._metrics: dict[tuple[str, str], UsageMetric] = {}
        self._last_degradation: dict[tuple[str, str], Degradation] = {}
        self._now = now if now is not None else _utc_now
        self._lock = RLock()

    def track_translation(self, key: str, locale: str, render_time_ms: float) -> None:
        """Record one completed translate() call.

        Args:
            key: Translation key
            locale: Active locale
            render_time_ms: Elapsed time for the call in milliseconds
        """
        with self._lock:
            metric = self._metrics.get((locale, key))
            if metric is None:
                self._metrics[(locale, key)] = UsageMetric(
                    usage_count=1,
                    avg_render_time=render_time_ms,
                    error_count=0,
                    last_used=self._now(),
                )
                return
            metric.usage_count += 1
            metric.avg_render_time = (metric.avg_render_time + render_time_ms) / 2
            metric.last_used = self._now()

    def track_error(self, degradation: Degradation, *, replayed: bool = False) -> None:
        """Record one degradation against its (locale, key).

        A key first seen through an error gets a metric with zero usage.
        Every occurrence is counted; only the first occurrence of a cached
        degradation is logged at WARNING, replays from the template cache log
        at DEBUG.

        Args:
            degradation: Recovered problem on the translation path
            replayed: True when the degradation comes from a cached template
        """
        pair = (degradation.locale, degradation.key)
        with self._lock:
            metric = self._metrics.get(pair)
            if metric is None:
                self._metrics[pair] = UsageMetric(
                    usage_count=0,
                    avg_render_time=0.0,
                    error_count=1,
                    last_used=self._now(),
                )
            else:
                metric.error_count += 1
            self._last_degradation[pair] = degradation
        if replayed:
            logger.debug("Translation degraded (cached): %s", degradation.format_error())
        else:
            logger.warning("Translation degraded: %s", degradation.format_error())

    def get_metrics(self) -> dict[str, UsageMetric]:
        """Snapshot of every metric, keyed by "locale:key".

        Returned metrics are copies; mutating them does not affect the
        recorded counters.
        """
        with self._lock:
            return {
                metric_key(locale, key): replace(metric)
                for (locale, key), metric in self._metrics.items()
            }

    def get_metric(self, locale: str, key: str) -> UsageMetric | None:
        """Snapshot of one metric, or None if the key was never observed."""
        with self._lock:
            metric = self._metrics.get((locale, key))
            return replace(metric) if metric is not None else None

    def get_most_used_translations(
        self, limit: int = DEFAULT_MOST_USED_LIMIT
    ) -> list[tuple[str, int]]:
        """Keys ordered by usage count, highest first.

        Args:
            limit: Maximum rows returned

        Returns:
            List of ("locale:key", usage_count)
        """
        with self._lock:
            rows = [
                (metric_key(locale, key), metric.usage_count)
                for (locale, key), metric in self._metrics.items()
            ]
        rows.sort(key=lambda row: row[1], reverse=True)
        return rows[: max(limit, 0)]

    def get_slow_translations(
        self, threshold_ms: float = DEFAULT_SLOW_THRESHOLD_MS
    ) -> list[tuple[str, float]]:
        """Keys whose smoothed render time exceeds a threshold, slowest first.

        Returns:
            List of ("locale:key", avg_render_time)
        """
        with self._lock:
            rows = [
                (metric_key(locale, key), metric.avg_render_time)
                for (locale, key), metric in self._metrics.items()
                if metric.avg_render_time > threshold_ms
            ]
        rows.sort(key=lambda row: row[1], reverse=True)
        return rows

    def get_error_prone_translations(self) -> list[tuple[str, int]]:
        """Keys with at least one degradation, most errors first.

        Returns:
            List of ("locale:key", error_count)
        """
        with self._lock:
            rows = [
                (metric_key(locale, key), metric.error_count)
                for (locale, key), metric in self._metrics.items()
                if metric.error_count > 0
            ]
        rows.sort(key=lambda row: row[1], reverse=True)
        return rows

    def get_last_degradation(self, locale: str, key: str) -> Degradation | None:
        """Most recent degradation recorded for (locale, key), or None."""
        with self._lock:
            return self._last_degradation.get((locale, key))

    def __len__(self) -> int:
        """Number of (locale, key) pairs observed."""
        with self._lock:
            return len(self._metrics)


def _utc_now() -> datetime:
    return datetime.now(UTC)
