"""
In-process result cache with per-entry expiry and namespace invalidation.

Entity services share one ``ResultCache`` instance, created by the
application factory (or by a test) and passed in explicitly.  Keys are
built by ``build_list_key`` and ``build_item_key`` so that all list
queries of one entity kind live under a common prefix::

    location:list:search='par'|fields='city'|page=1|size=10
    location:item:42

A write to an entity removes its item key and sweeps the kind's list
namespace; nothing else is evicted early.  The cache has no size bound:
entries leave when their TTL expires, either lazily on read or through
``purge_expired``.
"""

import copy
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def list_namespace(kind: str) -> str:
    """Prefix shared by every list-query key of an entity kind."""
    return f"{kind.lower()}:list:"


def build_list_key(
    kind: str,
    search_term: Optional[str],
    fields: Optional[str],
    page_number: int,
    page_size: int,
    filters: Optional[Mapping[str, Any]] = None,
) -> str:
    """Deterministic key for a paged list query."""
    parts = [
        f"search={search_term!r}",
        f"fields={fields!r}",
        f"page={page_number}",
        f"size={page_size}",
    ]
    for name in sorted(filters or {}):
        value = filters[name]
        if value is not None:
            parts.append(f"{name}={value}")
    return list_namespace(kind) + "|".join(parts)


def build_item_key(kind: str, entity_id: int) -> str:
    """Key for a single record looked up by id."""
    return f"{kind.lower()}:item:{entity_id}"


@dataclass
class CacheEntry:
    """Single cache entry with its expiry on the monotonic clock."""

    value: Any
    expires_at: float

    @property
    def is_expired(self) -> bool:
        return time.monotonic() >= self.expires_at


class ResultCache:
    """Thread-safe key/value cache with a default time-to-live.

    The public methods are coroutines so a networked store can replace
    this class without touching the services.  All state changes happen
    under a ``threading.RLock`` and never await while holding it, so the
    cache is safe both across tasks and across threads.

    A ``default_ttl`` of zero or less disables caching: ``set`` without
    an explicit positive ``ttl`` stores nothing.
    """

    def __init__(self, default_ttl: float = 300.0) -> None:
        self.default_ttl = default_ttl
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.RLock()

    async def try_get(self, key: str) -> Optional[Any]:
        """Return a copy of the cached value, or ``None`` on a miss."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                logger.debug("Cache miss for %s", key)
                return None
            if entry.is_expired:
                del self._store[key]
                logger.debug("Cache entry %s expired", key)
                return None
            logger.debug("Cache hit for %s", key)
            return copy.deepcopy(entry.value)

    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store a copy of ``value`` for ``ttl`` seconds (default TTL if omitted)."""
        effective_ttl = self.default_ttl if ttl is None else ttl
        if effective_ttl <= 0:
            return
        entry = CacheEntry(value=copy.deepcopy(value), expires_at=time.monotonic() + effective_ttl)
        with self._lock:
            self._store[key] = entry

    async def remove(self, key: str) -> bool:
        """Remove a single key.  Returns whether it was present."""
        with self._lock:
            return self._store.pop(key, None) is not None

    async def remove_by_prefix(self, prefix: str) -> int:
        """Remove every key starting with ``prefix`` and return the count."""
        with self._lock:
            keys = [key for key in self._store if key.startswith(prefix)]
            for key in keys:
                del self._store[key]
        if keys:
            logger.debug("Removed %s cache entries under %s", len(keys), prefix)
        return len(keys)

    async def invalidate_all(self, kind: str) -> int:
        """Drop every entry of an entity kind, list queries and single records."""
        return await self.remove_by_prefix(f"{kind.lower()}:")

    async def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        logger.info("Cleared all %s cache entries", count)
        return count

    async def purge_expired(self) -> int:
        """Drop expired entries eagerly.  Returns how many were removed."""
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.is_expired]
            for key in expired:
                del self._store[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
