"""
In-process cache of resolved maps.
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from shared.logging import get_logger
from ..rules.models import ResolvedMaps


CacheKey = Tuple[str, Optional[int]]


@dataclass
class _CacheEntry:
    maps: ResolvedMaps
    # Holding the context keeps its id from being reused while cached.
    context: Any


class MapsCache:
    """Maps keyed by (role, context identity).

    The lock only guards the dictionary. Compilation runs outside of it,
    so two threads missing the same key may both compile; the first one
    to publish wins and both return that instance.
    """

    def __init__(self):
        self.logger = get_logger("access_control.cache")
        self._entries: Dict[CacheKey, _CacheEntry] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(role: str, context: Any = None) -> CacheKey:
        return (role, None if context is None else id(context))

    def get(self, role: str, context: Any = None) -> Optional[ResolvedMaps]:
        """Get cached maps, or None on miss."""
        key = self.make_key(role, context)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.context is not context:
                self.misses += 1
                return None
            self.hits += 1
        self.logger.debug("Cache hit for maps", role=role, context_id=key[1])
        return entry.maps

    def publish(self, role: str, context: Any, maps: ResolvedMaps) -> ResolvedMaps:
        """Store maps unless another thread got there first; return the stored value."""
        key = self.make_key(role, context)
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.context is context:
                return entry.maps
            self._entries[key] = _CacheEntry(maps=maps, context=context)
        return maps

    def get_or_compute(self, role: str, context: Any,
                       compute: Callable[[], ResolvedMaps]) -> Tuple[ResolvedMaps, bool]:
        """Return (maps, hit)."""
        cached = self.get(role, context)
        if cached is not None:
            return cached, True
        return self.publish(role, context, compute()), False

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        self.logger.info("Maps cache cleared", entries=count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get_cache_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
            }
