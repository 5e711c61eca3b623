"""
Response caches for recipe queries.

Recipes only change when an extraction or a clear runs, so query results are
kept until then (or until their TTL runs out) and every write drops them all.
Writes from another process are not seen here; they show up once entries
expire after settings.cache_ttl_seconds.
"""
from collections import OrderedDict
from typing import Callable, Generic, Optional, Tuple, TypeVar
import threading
import time

from backend.app.core.config import settings

T = TypeVar('T')


class ResponseCache(Generic[T]):
    """
    Thread-safe LRU map of query key -> response, with a TTL.
    """

    def __init__(self, name: str, max_items: int = 100, ttl_seconds: float = 300):
        self.name = name
        self.max_items = max_items
        self.ttl = ttl_seconds
        # key -> (expires_at, value), least recently used first
        self._entries: "OrderedDict[str, Tuple[float, T]]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def _drop_expired(self, now: float):
        for key in [k for k, (expires_at, _) in self._entries.items() if expires_at <= now]:
            del self._entries[key]

    def get(self, key: str) -> Optional[T]:
        """Get a live response, or None."""
        with self._lock:
            found = self._entries.get(key)
            if found is None or found[0] <= time.time():
                self._entries.pop(key, None)
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return found[1]

    def set(self, key: str, value: T):
        with self._lock:
            now = time.time()
            self._entries.pop(key, None)
            self._drop_expired(now)
            while len(self._entries) >= self.max_items:
                self._entries.popitem(last=False)
            self._entries[key] = (now + self.ttl, value)

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        """
        Return the cached response for key, computing and storing it on a miss.

        Errors from compute propagate and nothing is cached.
        """
        value = self.get(key)
        if value is None:
            value = compute()
            self.set(key, value)
        return value

    def clear(self):
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict:
        """Get cache statistics."""
        with self._lock:
            self._drop_expired(time.time())
            lookups = self._hits + self._misses
            return {
                "name": self.name,
                "items": len(self._entries),
                "max_items": self.max_items,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / lookups * 100, 1) if lookups else 0.0,
                "ttl_seconds": self.ttl,
            }


def cache_key(kind: str, *parts) -> str:
    """Build a readable key such as "list:0:50" or "ingredient:iron"."""
    return ":".join([kind] + [str(part) for part in parts])


# ============================================
# Application Caches
# ============================================

stats_cache = ResponseCache[dict]("stats", max_items=10, ttl_seconds=settings.cache_ttl_seconds)
recipes_list_cache = ResponseCache[list]("recipes_list", max_items=100, ttl_seconds=settings.cache_ttl_seconds)
search_cache = ResponseCache[list]("search", max_items=200, ttl_seconds=settings.cache_ttl_seconds)

ALL_CACHES = (stats_cache, recipes_list_cache, search_cache)


def get_all_cache_stats() -> dict:
    """Get stats for all caches, keyed by cache name."""
    return {cache.name: cache.stats() for cache in ALL_CACHES}


def invalidate_recipe_caches() -> None:
    """Drop every cached response; called after any write to the recipe table."""
    for cache in ALL_CACHES:
        cache.clear()
