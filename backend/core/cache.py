"""
Analysis Cache

Keeps recent project analyses in memory so re-opening the setup flow does
not re-fetch and re-classify the same table. Entries expire after a TTL
and the least recently used entry is evicted at capacity.
"""

import time
from collections import OrderedDict
from threading import Lock
from typing import Any, Hashable, Optional

from config import get_settings
from core.logging_config import cache_logger as logger


# (project_id, table_name, row_limit)
AnalysisKey = tuple[str, str, int]


class TTLCache:
    """Thread-safe LRU cache with per-entry TTL."""

    def __init__(self, maxsize: int = 128, ttl_seconds: int = 600, enabled: bool = True):
        self.maxsize = maxsize
        self.ttl_seconds = ttl_seconds
        self.enabled = enabled
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[Hashable, tuple[Any, float]] = OrderedDict()
        self._lock = Lock()

    @staticmethod
    def analysis_key(project_id: str, table_name: str, row_limit: int) -> AnalysisKey:
        """Key of one analysed table snapshot."""
        return (str(project_id), str(table_name), int(row_limit))

    def _expired(self, stored_at: float) -> bool:
        return time.time() - stored_at > self.ttl_seconds

    def get(self, key: Hashable) -> Optional[Any]:
        """Get a live entry, refreshing its recency."""
        if not self.enabled:
            return None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None

            value, stored_at = entry
            if self._expired(stored_at):
                del self._entries[key]
                self.misses += 1
                logger.debug(f"Expired cache entry {key}")
                return None

            self._entries.move_to_end(key)
            self.hits += 1
            return value

    def set(self, key: Hashable, value: Any) -> None:
        """Store an entry, evicting the least recently used at capacity."""
        if not self.enabled:
            return
        with self._lock:
            self._entries.pop(key, None)
            while len(self._entries) >= self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted cache entry {evicted}")
            self._entries[key] = (value, time.time())

    def delete(self, key: Hashable) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def invalidate_project(self, project_id: str) -> int:
        """Drop every analysis of a project; returns how many were dropped."""
        with self._lock:
            stale = [
                key for key in self._entries
                if isinstance(key, tuple) and key and key[0] == str(project_id)
            ]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.debug(f"Invalidated {len(stale)} cached analyses of {project_id}")
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> dict[str, int]:
        """Entry count and hit/miss counters."""
        with self._lock:
            return {"size": len(self._entries), "hits": self.hits, "misses": self.misses}

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and not self._expired(entry[1])

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# Global analysis cache
settings = get_settings()
analysis_cache = TTLCache(
    maxsize=settings.cache.max_size,
    ttl_seconds=settings.cache.ttl_seconds,
    enabled=settings.cache.enabled,
)
