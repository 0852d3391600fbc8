"""
Backend caching for derived link lists.

The graph screen asks for the derived links on every render. Results are
cached by a fingerprint of the explicit data, with TTL and LRU eviction.
Thread-safe implementation for concurrent access.
"""

from __future__ import annotations

import copy
import logging
import threading
import time
from typing import Any

logger = logging.getLogger(__name__)


class GraphCacheManager:
    """Thread-safe cache of derived link lists keyed by content fingerprint."""

    def __init__(self, ttl_seconds: int = 900, max_cache_size: int = 100):
        """Initialize cache manager.

        Args:
            ttl_seconds: Time to live for cached entries (default: 15 minutes)
            max_cache_size: Maximum number of link lists to cache
        """
        self._cache: dict[str, list[dict[str, Any]]] = {}
        self._cache_times: dict[str, float] = {}
        self._access_times: dict[str, float] = {}
        self._ttl = ttl_seconds
        self._max_size = max_cache_size
        self._lock = threading.RLock()
        self._hit_count = 0
        self._miss_count = 0

        logger.info(f"GraphCacheManager initialized with TTL={ttl_seconds}s, max_size={max_cache_size}")

    def get_links(self, fingerprint: str) -> list[dict[str, Any]] | None:
        """Get cached links if available and not expired.

        Returns:
            Copy of the cached links or None if not found/expired
        """
        with self._lock:
            if fingerprint in self._cache:
                if time.time() - self._cache_times[fingerprint] > self._ttl:
                    logger.debug(f"Cache expired for {fingerprint}")
                    self._evict(fingerprint)
                    self._miss_count += 1
                    return None

                self._access_times[fingerprint] = time.time()
                self._hit_count += 1
                logger.debug(f"Cache hit for {fingerprint}")

                # Return a copy to prevent mutations
                return copy.deepcopy(self._cache[fingerprint])

            self._miss_count += 1
            logger.debug(f"Cache miss for {fingerprint}")
            return None

    def cache_links(self, fingerprint: str, links: list[dict[str, Any]]) -> None:
        """Cache a derived link list.

        Args:
            fingerprint: Content fingerprint of the explicit data
            links: Output of derive_links for that data
        """
        with self._lock:
            if len(self._cache) >= self._max_size and fingerprint not in self._cache:
                self._evict_lru()

            # Store a copy to prevent external mutations
            self._cache[fingerprint] = copy.deepcopy(links)
            self._cache_times[fingerprint] = time.time()
            self._access_times[fingerprint] = time.time()

            logger.debug(f"Cached {len(links)} links under {fingerprint}")

    def invalidate(self, fingerprint: str) -> bool:
        """Drop one cached entry.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            if fingerprint not in self._cache:
                return False
            self._evict(fingerprint)
            return True

    def clear(self) -> None:
        """Clear all cached entries."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._cache_times.clear()
            self._access_times.clear()
            logger.info(f"Cleared {count} cached link lists")

    def cleanup_expired(self) -> int:
        """Remove expired entries from cache.

        Returns:
            Number of entries removed
        """
        with self._lock:
            current_time = time.time()
            keys_to_remove = [key for key, cache_time in self._cache_times.items() if current_time - cache_time > self._ttl]

            for key in keys_to_remove:
                self._evict(key)

            if keys_to_remove:
                logger.debug(f"Cleaned up {len(keys_to_remove)} expired entries")

            return len(keys_to_remove)

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            total_requests = self._hit_count + self._miss_count
            hit_rate = self._hit_count / total_requests if total_requests > 0 else 0.0

            return {
                "cache_size": len(self._cache),
                "hit_count": self._hit_count,
                "miss_count": self._miss_count,
                "hit_rate": round(hit_rate, 3),
                "total_requests": total_requests,
                "ttl_seconds": self._ttl,
                "max_size": self._max_size,
            }

    def _evict(self, key: str) -> None:
        """Evict a specific key from cache."""
        if key in self._cache:
            del self._cache[key]
            del self._cache_times[key]
            self._access_times.pop(key, None)

    def _evict_lru(self) -> None:
        """Evict least recently used entry."""
        if not self._access_times:
            return

        lru_key = min(self._access_times.items(), key=lambda x: x[1])[0]
        logger.debug(f"Evicting LRU entry: {lru_key}")
        self._evict(lru_key)
