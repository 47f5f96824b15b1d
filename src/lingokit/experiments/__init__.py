"""Deterministic A/B testing of translation text.

Python 3.13+.
"""

from .ab_testing import (
    ABTest,
    ABTestManager,
    VariantResult,
    bucket_position,
    confidence,
    stable_hash,
)

__all__ = [
    "ABTest",
    "ABTestManager",
    "VariantResult",
    "bucket_position",
    "confidence",
    "stable_hash",
]
