"""Cache configuration for TranslationEngine.

Provides a single frozen dataclass that encapsulates all cache-related
parameters, so the engine and the cache share one validated object.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from lingokit.constants import DEFAULT_CACHE_SIZE, DEFAULT_CACHE_TTL

__all__ = ["CacheConfig"]


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Immutable configuration for translation template caching.

    All fields have sensible defaults; constructing ``CacheConfig()`` with
    no arguments produces a usable configuration.

    Attributes:
        size: Maximum cache entries before least-recently-used eviction
            (default: 1000).
        ttl: Default entry lifetime in seconds (default: 86400, 24 hours).
        enabled: When False the engine resolves every call from content
            (default: True).

    Example:
        >>> config = CacheConfig(size=500, ttl=3600.0)
        >>> config.ttl
        3600.0
        >>> CacheConfig(size=0)
        Traceback (most recent call last):
        ...
        ValueError: size must be positive
    """

    size: int = DEFAULT_CACHE_SIZE
    ttl: float = DEFAULT_CACHE_TTL
    enabled: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If size is not positive, or ttl is not a positive
                finite number.
        """
        if self.size <= 0:
            msg = "size must be positive"
            raise ValueError(msg)
        if not math.isfinite(self.ttl) or self.ttl <= 0:
            msg = "ttl must be a positive finite number of seconds"
            raise ValueError(msg)
