"""In-process cache for read paths, invalidated per category on every write."""

import copy
import logging
import time
from typing import Any, Dict, Hashable

from app.core.config import settings

logger = logging.getLogger(__name__)

USERS = "users"
CARDS = "cards"
MESSAGES = "messages"

_MISSING = object()


class CacheStore:
    """Category -> key -> value store with a TTL per entry."""

    def __init__(self, default_ttl: int = 300):
        self._entries: Dict[str, Dict[Hashable, Dict[str, Any]]] = {}
        self.default_ttl = default_ttl
        self.stats = {"hits": 0, "misses": 0, "sets": 0, "evictions": 0, "invalidations": 0}

    def get(self, category: str, key: Hashable, default: Any = None) -> Any:
        self._cleanup_expired(category)
        entry = self._entries.get(category, {}).get(key)
        if entry is not None:
            self.stats["hits"] += 1
            return copy.deepcopy(entry["value"])
        self.stats["misses"] += 1
        return default

    def set(self, category: str, key: Hashable, value: Any, ttl: int | None = None) -> None:
        if ttl is None:
            ttl = self.default_ttl
        self._cleanup_expired(category)
        self._entries.setdefault(category, {})[key] = {
            "value": copy.deepcopy(value),
            "expires_at": time.monotonic() + ttl,
        }
        self.stats["sets"] += 1

    def invalidate_all(self, *categories: str) -> None:
        for category in categories:
            dropped = len(self._entries.pop(category, {}))
            self.stats["invalidations"] += 1
            logger.debug("Cache category %s invalidated (%d entries), stats: %s",
                         category, dropped, self.get_stats())

    def size(self, category: str) -> int:
        return len(self._entries.get(category, {}))

    def get_stats(self) -> Dict[str, Any]:
        total_requests = self.stats["hits"] + self.stats["misses"]
        hit_rate = (self.stats["hits"] / total_requests * 100) if total_requests > 0 else 0
        return {
            **self.stats,
            "total_requests": total_requests,
            "hit_rate_percent": round(hit_rate, 2),
            "cache_size": sum(len(bucket) for bucket in self._entries.values()),
        }

    def _cleanup_expired(self, category: str) -> None:
        bucket = self._entries.get(category)
        if not bucket:
            return
        now = time.monotonic()
        expired_keys = [key for key, entry in bucket.items() if entry["expires_at"] <= now]
        for key in expired_keys:
            del bucket[key]
            self.stats["evictions"] += 1

    async def get_or_load(self, category: str, key: Hashable, loader) -> Any:
        """Return the cached value or await ``loader()`` and cache its result."""
        value = self.get(category, key, _MISSING)
        if value is not _MISSING:
            return value
        value = await loader()
        if value is not None:
            self.set(category, key, value)
        return value


cache = CacheStore(default_ttl=settings.CACHE_TTL_SECONDS)
