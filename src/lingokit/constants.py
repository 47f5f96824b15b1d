"""Shared constants for lingokit.

This module provides centralized configuration constants used across the
runtime, analytics and experiments packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale defaults: Base locale used when the active locale lacks a key
- Cache limits: TTL and memory bounds for the translation cache
- Analytics defaults: Reporting thresholds
- Experiment math: Hash normalization and confidence z-score
- Formatting: Native digit systems

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE",
    # Cache limits
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_CACHE_TTL",
    "MAX_LOCALE_CACHE_SIZE",
    # Analytics defaults
    "DEFAULT_MOST_USED_LIMIT",
    "DEFAULT_SLOW_THRESHOLD_MS",
    # Experiment math
    "INT32_MAX",
    "CONFIDENCE_Z_SCORE",
    # Variant map keys
    "DEFAULT_VARIANT_KEY",
    # Formatting
    "NATIVE_NUMBERING_SYSTEMS",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Base locale of the marketplace. Content for this locale is always deployed
# and is the second (and last) content tier of the fallback chain.
DEFAULT_LOCALE: str = "en"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Default lifetime of a cached template, in seconds (24 hours).
DEFAULT_CACHE_TTL: float = 24 * 60 * 60.0

# Default maximum cache entries.
# A marketplace screen renders a few hundred strings; 1000 covers several
# screens per locale before LRU eviction starts.
DEFAULT_CACHE_SIZE: int = 1000

# Maximum cached Babel Locale instances.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# ANALYTICS DEFAULTS
# ============================================================================

# Number of rows returned by UsageAnalytics.get_most_used_translations().
DEFAULT_MOST_USED_LIMIT: int = 10

# Smoothed render time (milliseconds) above which a key is reported as slow.
DEFAULT_SLOW_THRESHOLD_MS: float = 10.0

# ============================================================================
# EXPERIMENT MATH
# ============================================================================

# Largest signed 32-bit integer. Bucketing hashes are normalized by this value,
# so live experiments keep their existing assignments.
INT32_MAX: int = 2_147_483_647

# Two-sided 95% z-score used by the single-proportion confidence heuristic.
CONFIDENCE_Z_SCORE: float = 1.96

# ============================================================================
# VARIANT MAP KEYS
# ============================================================================

# Variant map entry used when no requested dimension matches.
DEFAULT_VARIANT_KEY: str = "default"

# ============================================================================
# FORMATTING
# ============================================================================

# CLDR numbering systems used when numbers are rendered in native digits,
# keyed by language subtag. Other languages keep Latin digits.
NATIVE_NUMBERING_SYSTEMS: Mapping[str, str] = MappingProxyType({
    "ar": "arab",
    "fa": "arabext",
    "hi": "deva",
    "bn": "beng",
    "th": "thai",
})
