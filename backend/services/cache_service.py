"""
cache_service.py - Per-user habit cache
Bounded in-memory cache of serialized habits keyed by user_id.
Supports TTL-based expiry, LRU eviction, explicit invalidation and hit-rate statistics.
The store stays the source of truth; a miss always falls through to it.
"""

import sys
import threading
import time
from collections import OrderedDict

from config import HABIT_CACHE_TTL_SECONDS, HABIT_CACHE_MAX_USERS


class HabitCache:
    """In-memory habit cache with TTL, LRU bound and hit tracking."""

    def __init__(self, max_users: int = HABIT_CACHE_MAX_USERS, ttl_seconds: int = HABIT_CACHE_TTL_SECONDS):
        # user_id → {habits, timestamp, ttl, hit_count}
        self._cache: OrderedDict[int, dict] = OrderedDict()
        self._lock = threading.Lock()
        self.max_users = max_users
        self.ttl_seconds = ttl_seconds
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    def get(self, user_id: int) -> dict[int, dict] | None:
        """Return {habit_id: habit} for the user, or None on miss / expiry."""
        with self._lock:
            entry = self._cache.get(user_id)
            if entry is None:
                self._misses += 1
                return None

            age = time.monotonic() - entry["timestamp"]
            if age > entry["ttl"]:
                del self._cache[user_id]
                self._misses += 1
                return None

            self._cache.move_to_end(user_id)
            entry["hit_count"] += 1
            self._hits += 1
            return dict(entry["habits"])

    # ------------------------------------------------------------------
    def set(self, user_id: int, habits: dict[int, dict]):
        """Store a user's habits. ttl_seconds <= 0 → don't cache."""
        if self.ttl_seconds <= 0 or self.max_users <= 0:
            return
        with self._lock:
            self._cache[user_id] = {
                "habits": dict(habits),
                "timestamp": time.monotonic(),
                "ttl": self.ttl_seconds,
                "hit_count": 0,
            }
            self._cache.move_to_end(user_id)
            while len(self._cache) > self.max_users:
                self._cache.popitem(last=False)

    # ------------------------------------------------------------------
    def invalidate(self, user_id: int):
        with self._lock:
            self._cache.pop(user_id, None)

    def clear(self):
        """Drop every entry and reset the counters."""
        with self._lock:
            self._cache.clear()
            self._hits = 0
            self._misses = 0

    # ------------------------------------------------------------------
    def clear_expired(self):
        """Evict all entries past their TTL."""
        now = time.monotonic()
        with self._lock:
            expired = [
                k for k, v in self._cache.items()
                if now - v["timestamp"] > v["ttl"]
            ]
            for k in expired:
                del self._cache[k]

    # ------------------------------------------------------------------
    def get_stats(self) -> dict:
        """Cache statistics: entries, hit rate, estimated memory."""
        with self._lock:
            total_lookups = self._hits + self._misses
            return {
                "total_entries": len(self._cache),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total_lookups, 4) if total_lookups else 0.0,
                "estimated_memory_bytes": sys.getsizeof(self._cache),
            }


habit_cache = HabitCache()
