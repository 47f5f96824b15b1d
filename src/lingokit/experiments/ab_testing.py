"""Deterministic A/B testing of translation text.

Each test holds alternative texts for one translation key. Users are bucketed
by a stable hash of ``user_id + test_key``, so a user sees the same variant on
every call and in every process for the lifetime of the test.

Hash Compatibility:
    The bucketing hash is the 32-bit polynomial ``h = h * 31 + unit`` over the
    UTF-16 code units of the input, wrapped to a signed 32-bit integer, then
    normalized as ``abs(h) / 2147483647``. Running experiments depend on these
    exact assignments; changing any step reshuffles every live user.

Thread Safety:
    Registration and counters are protected by one RLock. Bucketing itself is
    a pure function and is never memoized.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from threading import RLock
from types import MappingProxyType

from lingokit.constants import CONFIDENCE_Z_SCORE, INT32_MAX
from lingokit.diagnostics import (
    DuplicateTestError,
    EmptyVariantSetError,
    InvalidDistributionError,
)

__all__ = [
    "ABTest",
    "ABTestManager",
    "VariantResult",
    "bucket_position",
    "confidence",
    "stable_hash",
]

logger = logging.getLogger(__name__)

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def stable_hash(text: str) -> int:
    """Signed 32-bit polynomial hash over UTF-16 code units.

    Example:
        >>> stable_hash("a")
        97
        >>> stable_hash("ab")
        3105
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + unit) & _UINT32_MASK
    return h - (1 << 32) if h & _INT32_SIGN else h


def bucket_position(user_id: str, test_key: str) -> float:
    """Normalized bucketing position for a user in a test.

    Usually in [0, 1]; the single hash value -2**31 maps slightly above 1,
    which selects the first variant.
    """
    return abs(stable_hash(user_id + test_key)) / INT32_MAX


def confidence(conversions: int, views: int) -> float:
    """Single-proportion margin heuristic, clamped to [0, 1].

    ``1 - 1.96 * sqrt(p * (1 - p) / views)``. This is a display hint for
    dashboards, not a significance test between variants. Zero views give 0.
    """
    if views <= 0:
        return 0.0
    p = min(max(conversions / views, 0.0), 1.0)
    margin = CONFIDENCE_Z_SCORE * math.sqrt(p * (1 - p) / views)
    return max(0.0, min(1.0, 1 - margin))


@dataclass(frozen=True, slots=True)
class ABTest:
    """Registered test definition.

    Attributes:
        key: Translation key under test
        variants: Variant id -> text, in registration order
        distribution: Variant id -> weight; weights sum to 1.0
    """

    key: str
    variants: Mapping[str, str]
    distribution: Mapping[str, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "variants", MappingProxyType(dict(self.variants)))
        object.__setattr__(self, "distribution", MappingProxyType(dict(self.distribution)))

    def choose(self, position: float) -> str:
        """Variant id for a bucketing position.

        Walks variants in registration order accumulating weight; the first
        whose cumulative weight exceeds ``position`` wins. When floating point
        rounding leaves none, the first variant is used.
        """
        cumulative = 0.0
        for variant_id in self.variants:
            cumulative += self.distribution[variant_id]
            if position < cumulative:
                return variant_id
        return next(iter(self.variants))


@dataclass(frozen=True, slots=True)
class VariantResult:
    """Reported outcome for one variant.

    Attributes:
        variant_id: Variant identifier
        views: Times the variant was served
        conversions: Conversions attributed to the variant
        conversion_rate: conversions / views, 0 when never viewed
        confidence: Display-only margin heuristic, 0 when never viewed
    """

    variant_id: str
    views: int
    conversions: int
    conversion_rate: float
    confidence: float


@dataclass(slots=True)
class _Counters:
    views: int = 0
    conversions: int = 0


@dataclass(slots=True)
class _TestState:
    test: ABTest
    counters: dict[str, _Counters] = field(default_factory=dict)


def _normalize_distribution(
    test_key: str,
    variant_ids: list[str],
    distribution: Mapping[str, float] | None,
) -> dict[str, float]:
    if distribution is None:
        share = 1 / len(variant_ids)
        return dict.fromkeys(variant_ids, share)

    unknown = sorted(set(distribution) - set(variant_ids))
    if unknown:
        raise InvalidDistributionError(test_key, f"unknown variant ids {unknown}")

    weights = {variant_id: float(distribution.get(variant_id, 0.0)) for variant_id in variant_ids}
    if any(not math.isfinite(w) or w < 0 for w in weights.values()):
        raise InvalidDistributionError(test_key, "weights must be finite and non-negative")

    total = math.fsum(weights.values())
    if total <= 0:
        raise InvalidDistributionError(test_key, "weights sum to zero")
    if total == 1.0:
        return weights
    return {variant_id: w / total for variant_id, w in weights.items()}


class ABTestManager:
    """Registry of text experiments with view and conversion counters.

    Example:
        >>> manager = ABTestManager()
        >>> test = manager.register_test("cta.button", {"A": "Book now", "B": "Reserve today"})
        >>> text = manager.get_variant("cta.button", "user-42")
        >>> text in {"Book now", "Reserve today"}
        True
    """

    __slots__ = ("_lock", "_tests")

    def __init__(self) -> None:
        self._tests: dict[str, _TestState] = {}
        self._lock = RLock()

    def register_test(
        self,
        key: str,
        variant_texts: Mapping[str, str],
        distribution: Mapping[str, float] | None = None,
    ) -> ABTest:
        """Register a new test.

        Args:
            key: Translation key under test
            variant_texts: Variant id -> text, in the order used for bucketing
            distribution: Variant id -> weight (default: equal split).
                Weights are normalized to sum to 1; omitted variants get 0.

        Returns:
            The registered test definition

        Raises:
            DuplicateTestError: A test with this key already exists
            EmptyVariantSetError: variant_texts is empty
            InvalidDistributionError: Unknown variant ids, negative weights,
                or a zero total
        """
        variant_ids = list(variant_texts)
        if not variant_ids:
            raise EmptyVariantSetError(key)
        weights = _normalize_distribution(key, variant_ids, distribution)
        test = ABTest(key, variant_texts, weights)

        with self._lock:
            if key in self._tests:
                raise DuplicateTestError(key)
            self._tests[key] = _TestState(
                test, {variant_id: _Counters() for variant_id in variant_ids}
            )

        logger.info("Registered A/B test '%s' with variants %s", key, variant_ids)
        return test

    def bucket(self, key: str, user_id: str) -> str | None:
        """Variant id a user falls into, without counting a view.

        Returns:
            Variant id, or None for an unknown test
        """
        with self._lock:
            state = self._tests.get(key)
        if state is None:
            return None
        return state.test.choose(bucket_position(user_id, key))

    def get_variant(self, key: str, user_id: str) -> str | None:
        """Serve the user's variant text and count a view.

        Returns:
            Variant text, or None for an unknown test
        """
        with self._lock:
            state = self._tests.get(key)
            if state is None:
                return None
            variant_id = state.test.choose(bucket_position(user_id, key))
            state.counters[variant_id].views += 1
            return state.test.variants[variant_id]

    def record_conversion(self, key: str, user_id: str) -> None:
        """Attribute a conversion to the user's variant.

        The variant is re-derived with the same bucketing as get_variant().
        Unknown tests are ignored.
        """
        with self._lock:
            state = self._tests.get(key)
            if state is None:
                logger.debug("Conversion for unknown A/B test '%s' ignored", key)
                return
            variant_id = state.test.choose(bucket_position(user_id, key))
            state.counters[variant_id].conversions += 1

    def get_results(self, key: str) -> dict[str, VariantResult] | None:
        """Per-variant results, in registration order.

        Returns:
            Variant id -> VariantResult, or None for an unknown test
        """
        with self._lock:
            state = self._tests.get(key)
            if state is None:
                return None
            snapshot = [
                (variant_id, counters.views, counters.conversions)
                for variant_id, counters in state.counters.items()
            ]

        return {
            variant_id: VariantResult(
                variant_id=variant_id,
                views=views,
                conversions=conversions,
                conversion_rate=conversions / views if views > 0 else 0.0,
                confidence=confidence(conversions, views),
            )
            for variant_id, views, conversions in snapshot
        }

    def get_test(self, key: str) -> ABTest | None:
        """Registered test definition, or None."""
        with self._lock:
            state = self._tests.get(key)
        return state.test if state is not None else None

    def test_keys(self) -> tuple[str, ...]:
        """Keys of all registered tests, in registration order."""
        with self._lock:
            return tuple(self._tests)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._tests

    def __len__(self) -> int:
        with self._lock:
            return len(self._tests)
