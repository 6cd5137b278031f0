"""
Analytics Cache

Memoizes analytics results on disk with per-entry TTL and tag-based
invalidation.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from diskcache import Cache
from loguru import logger

T = TypeVar("T")

ANALYTICS_TAG = "analytics"
_MISSING = object()


@dataclass
class CacheStats:
    """Hit/miss counters for the current process."""

    hits: int = 0
    misses: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for display."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "entries": self.entries,
            "hit_rate": round(self.hit_rate, 4),
        }


def build_cache_key(operation: str, *identifiers: Any, **options: Any) -> str:
    """
    Build a cache key from an operation name, input identifiers and options.

    Options are serialised with sorted keys so argument order does not
    change the key.
    """
    key = ":".join([operation, *(str(identifier) for identifier in identifiers)])
    if options:
        key += ":" + json.dumps(options, sort_keys=True, default=str)
    return key


class AnalyticsCache:
    """
    Disk-backed get-or-compute cache.

    When disabled every lookup calls the producer and nothing is stored.
    """

    def __init__(
        self,
        cache_dir: str | Path = "data/cache",
        default_ttl: int = 1800,
        enabled: bool = True,
    ) -> None:
        """
        Initialize the cache.

        Args:
            cache_dir: Directory for cache files
            default_ttl: TTL in seconds used when get_or_compute gets none
            enabled: Whether to store and serve cached values
        """
        self.default_ttl = default_ttl
        self.enabled = enabled
        self.stats = CacheStats()

        if enabled:
            self.cache_dir = Path(cache_dir)
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache: Cache | None = Cache(str(self.cache_dir))
        else:
            self.cache = None

    def get_or_compute(
        self,
        key: str,
        producer: Callable[[], T],
        ttl_seconds: int | None = None,
        tag: str = ANALYTICS_TAG,
    ) -> tuple[T, bool]:
        """
        Return the cached value for key, computing and storing it on a miss.

        Args:
            key: Cache key
            producer: Zero-argument callable computing the value
            ttl_seconds: Entry lifetime; default_ttl when None
            tag: Tag for later invalidation

        Returns:
            (value, cached) where cached tells whether it came from the cache
        """
        if self.cache is None:
            self.stats.misses += 1
            return producer(), False

        cached = self.cache.get(key, default=_MISSING)
        if cached is not _MISSING:
            self.stats.hits += 1
            logger.debug(f"Cache hit for key: {key}")
            return cached, True

        self.stats.misses += 1
        value = producer()
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        self.cache.set(key, value, expire=ttl or None, tag=tag)
        logger.debug(f"Cached result for key: {key}")
        return value, False

    def invalidate(self, tag: str = ANALYTICS_TAG) -> int:
        """Evict every entry with the given tag; returns the number removed."""
        if self.cache is None:
            return 0
        removed = self.cache.evict(tag)
        logger.info(f"Invalidated {removed} cache entries tagged '{tag}'")
        return removed

    def clear(self) -> None:
        """Remove all entries."""
        if self.cache is not None:
            self.cache.clear()
            logger.info("Analytics cache cleared")

    def get_stats(self) -> CacheStats:
        self.stats.entries = len(self.cache) if self.cache is not None else 0
        return self.stats

    def close(self) -> None:
        if self.cache is not None:
            self.cache.close()

    def __enter__(self) -> "AnalyticsCache":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
