"""Response caches for upstream collection fetches."""

import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import structlog

logger = structlog.get_logger()

CacheKey = Tuple[str, Tuple[Tuple[str, str], ...]]


def make_cache_key(resource: str, params: Optional[Mapping[str, Any]] = None) -> CacheKey:
    """Key a fetch by resource path and its query params, independent of param order."""
    items = tuple(sorted((str(k), str(v)) for k, v in (params or {}).items()))
    return (resource, items)


class ResponseCache(ABC):
    """Abstract base class for collection caches."""

    @abstractmethod
    def get(self, key: CacheKey) -> Optional[List[Any]]:
        """Return the cached payload, or None when missing or stale."""
        pass

    @abstractmethod
    def set(self, key: CacheKey, value: List[Any]) -> None:
        """Store a payload."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""
        pass


class NullResponseCache(ResponseCache):
    """Cache that stores nothing; every fetch goes upstream."""

    def get(self, key: CacheKey) -> Optional[List[Any]]:
        return None

    def set(self, key: CacheKey, value: List[Any]) -> None:
        pass

    def clear(self) -> None:
        pass


class InMemoryResponseCache(ResponseCache):
    """
    Process-local TTL cache.

    Sync endpoints run in a threadpool, so the entry dict is guarded by a lock.
    The clock is injectable to make expiry testable.
    """

    def __init__(self, ttl_seconds: float = 30.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[CacheKey, Tuple[float, List[Any]]] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[List[Any]]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                logger.debug("Cache entry expired", resource=key[0])
                return None
            return value

    def set(self, key: CacheKey, value: List[Any]) -> None:
        with self._lock:
            self._entries[key] = (self._clock(), value)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
