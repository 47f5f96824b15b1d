"""Thread-safe TTL cache for resolved translation templates.

Memoizes the outcome of key resolution and contextual selection so repeated
translate() calls skip the content walk. Interpolation is not cached; the
engine stores pre-interpolation templates and substitutes variables on every
read.

Architecture:
    - Thread-safe using threading.RLock (reentrant lock)
    - Lazy expiry: get() checks the entry's age and deletes it when stale
    - Explicit sweep: cleanup() removes every expired entry (called by an
      external scheduler; this module starts no timers)
    - LRU eviction via OrderedDict once ``size`` entries are held
    - Injectable clock for deterministic tests

Cache Key Structure:
    "{locale}:{key}:{dimensions}"
    - locale: active locale code
    - key: dotted translation key
    - dimensions: "name=repr(value)" pairs for the template-shaping options,
      joined with "|" in a fixed field order

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from threading import RLock

from lingokit.runtime.cache_config import CacheConfig
from lingokit.runtime.options import TranslationOptions

__all__ = ["CacheEntry", "TranslationCache"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One cached value with its lifetime.

    Attributes:
        data: Cached value
        created_at: Clock reading when the entry was stored (seconds)
        ttl: Lifetime in seconds
    """

    data: object
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """True once the entry has outlived its TTL."""
        return now - self.created_at > self.ttl


class TranslationCache:
    """Thread-safe TTL cache with an LRU size bound.

    Uses OrderedDict for LRU eviction and RLock for thread safety.
    Transparent to caller - returns None on miss or expiry.

    Attributes:
        size: Maximum number of cache entries
        ttl: Default entry lifetime in seconds
        hits: Number of cache hits (for metrics)
        misses: Number of cache misses, expired reads included (for metrics)
    """

    __slots__ = ("_cache", "_clock", "_evictions", "_hits", "_lock", "_misses", "_size", "_ttl")

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize translation cache.

        Args:
            config: Size and default TTL (default: CacheConfig())
            clock: Monotonic seconds source (default: time.monotonic)
        """
        config = config if config is not None else CacheConfig()
        self._cache: OrderedDict[str, CacheEntry] = OrderedDict()
        self._size = config.size
        self._ttl = config.ttl
        self._clock = clock
        self._lock = RLock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, key: str) -> object | None:
        """Get cached value if present and fresh.

        Thread-safe. An expired entry is deleted on read and counts as a miss.

        Args:
            key: Cache key

        Returns:
            Cached value, or None
        """
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                self._misses += 1
                return None

            if entry.is_expired(self._clock()):
                del self._cache[key]
                self._misses += 1
                logger.debug("Cache entry '%s' expired", key)
                return None

            # Move to end (mark as recently used)
            self._cache.move_to_end(key)
            self._hits += 1
            return entry.data

    def set(self, key: str, value: object, ttl: float | None = None) -> None:
        """Store a value.

        Thread-safe. Evicts the LRU entry if the cache is full.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Lifetime in seconds (default: configured TTL)

        Raises:
            ValueError: If ttl is not positive
        """
        lifetime = self._ttl if ttl is None else ttl
        if lifetime <= 0:
            msg = "ttl must be positive"
            raise ValueError(msg)

        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
            elif len(self._cache) >= self._size:
                evicted, _ = self._cache.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache full; evicted '%s'", evicted)

            self._cache[key] = CacheEntry(value, self._clock(), lifetime)

    def cleanup(self) -> int:
        """Remove every expired entry.

        Thread-safe. Intended to be called periodically by the host's
        scheduler.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._cache.items() if entry.is_expired(now)]
            for key in expired:
                del self._cache[key]
        if expired:
            logger.debug("Cache cleanup removed %d expired entries", len(expired))
        return len(expired)

    def clear(self) -> None:
        """Clear all cached entries.

        Thread-safe. Call on locale switch or content redeploy.
        """
        with self._lock:
            self._cache.clear()
            # Reset metrics on clear
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def get_stats(self) -> dict[str, int | float]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Current number of cached entries
            - maxsize (int): Maximum cache capacity
            - ttl (float): Default entry lifetime in seconds
            - hits (int): Number of cache hits
            - misses (int): Number of cache misses
            - hit_rate (float): Hit rate as percentage (0.0-100.0)
            - evictions (int): Entries dropped by the size bound
        """
        with self._lock:
            total = self._hits + self._misses
            hit_rate = (self._hits / total * 100) if total > 0 else 0.0

            return {
                "size": len(self._cache),
                "maxsize": self._size,
                "ttl": self._ttl,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(hit_rate, 2),
                "evictions": self._evictions,
            }

    @staticmethod
    def make_key(locale: str, key: str, options: TranslationOptions | None = None) -> str:
        """Create the cache key for one translate() call.

        Only the options that shape the selected template take part, so calls
        differing only in interpolation variables share an entry.

        Args:
            locale: Active locale code
            key: Dotted translation key
            options: Translation options

        Returns:
            Composite string key

        Example:
            >>> TranslationCache.make_key("en", "greet.hello", TranslationOptions(count=5))
            'en:greet.hello:count=5'
        """
        dimensions = options.selection_key() if options is not None else ()
        return f"{locale}:{key}:" + "|".join(f"{name}={value}" for name, value in dimensions)

    def __len__(self) -> int:
        """Get current cache size, expired entries not yet swept included.

        Thread-safe.
        """
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        """True when key is held, without touching LRU order or expiry."""
        with self._lock:
            return key in self._cache

    @property
    def size(self) -> int:
        """Maximum cache size."""
        return self._size

    @property
    def ttl(self) -> float:
        """Default entry lifetime in seconds."""
        return self._ttl

    @property
    def hits(self) -> int:
        """Number of cache hits.

        Thread-safe.
        """
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        """Number of cache misses.

        Thread-safe.
        """
        with self._lock:
            return self._misses
