#!/usr/bin/env python3
"""Query result cache for ctxignore.

This module provides the per-filter query cache:
- Path -> included mapping
- Optional LRU bound on the number of entries
- Thread-safe operations
- Cache statistics
- Full invalidation when rules are added

Cached values are pure functions of the path and the rule set, so a
concurrent miss on the same key only repeats work.

Example:
    >>> cache = QueryCache(CacheConfig(max_entries=1000))
    >>> cache.set("src/main.py", True)
    >>> cache.get("src/main.py")
    True
    >>> cache.clear()
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ctxignore.core.constants import Limits


@dataclass
class CacheConfig:
    """Configuration for the query cache."""

    max_entries: int = Limits.DEFAULT_CACHE_MAX_ENTRIES
    enabled: bool = True

    def validate(self) -> None:
        """Validate cache configuration."""
        if self.max_entries <= 0:
            raise ValueError(f"max_entries must be positive: {self.max_entries}")


class QueryCache:
    """Thread-safe LRU cache of path query results."""

    def __init__(self, config: Optional[CacheConfig] = None):
        """Initialize query cache.

        Args:
            config: Cache configuration (defaults if None)
        """
        self.config = config or CacheConfig()
        self.config.validate()
        self._cache: "OrderedDict[str, bool]" = OrderedDict()
        self._lock = threading.RLock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._clears = 0

    def get(self, path: str) -> Optional[bool]:
        """Get cached result.

        Args:
            path: Forward-slash query path

        Returns:
            Cached result or None if not cached
        """
        if not self.config.enabled:
            self._misses += 1
            return None

        with self._lock:
            if path not in self._cache:
                self._misses += 1
                return None

            # Move to end (most recently used)
            self._cache.move_to_end(path)
            self._hits += 1
            return self._cache[path]

    def set(self, path: str, included: bool) -> None:
        """Store a result.

        Args:
            path: Forward-slash query path
            included: Evaluation result
        """
        if not self.config.enabled:
            return

        with self._lock:
            if path in self._cache:
                self._cache.move_to_end(path)
            else:
                while len(self._cache) >= self.config.max_entries:
                    self._evict_lru()
            self._cache[path] = included

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()
            self._clears += 1

    def _evict_lru(self) -> None:
        """Evict least recently used entry."""
        if self._cache:
            # First item is LRU
            self._cache.popitem(last=False)
            self._evictions += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Cache statistics
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0

            return {
                "entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": hit_rate,
                "evictions": self._evictions,
                "clears": self._clears,
            }

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)
