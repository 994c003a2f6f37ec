"""In-process implementation of ResultCache.

The default backend: a plain dict keyed by (service, key). Entries expire
lazily when read, and writes sweep out every expired entry at most once
per sweep interval.
"""

import logging
import time
from collections.abc import Callable

from entity_suggest.config import settings
from entity_suggest.entities import CacheEntryEntity

logger = logging.getLogger(__name__)


class InMemoryResultCache:
    """Dict-backed result cache with lazy, age-based expiry.

    This class satisfies the ResultCache protocol through structural
    typing - no explicit inheritance needed.

    Every read and write is a single dict operation, so concurrent tasks
    on one event loop never observe a half-written entry. A stored entry
    is never mutated; ``set`` replaces it and ``get`` returns a copy.

    Example:
        ```python
        cache = InMemoryResultCache()
        await cache.set("wikidata", "dish:pho", ["Pho"], ttl=300)
        await cache.get("wikidata", "dish:pho")  # ["Pho"]
        ```
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ) -> None:
        """Initialize the cache.

        Args:
            clock: Source of "now" in seconds. Injectable for tests.
            sweep_interval: Minimum seconds between expiry sweeps on write.
        """
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()
        self._entries: dict[tuple[str, str], CacheEntryEntity] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls) -> "InMemoryResultCache":
        return cls()

    async def get(self, service: str, key: str) -> list[str] | None:
        entry = self._entries.get((service, key))
        if entry is None:
            self._misses += 1
            return None

        if entry.is_expired(self._clock()):
            # Only drop the entry we looked at; a concurrent set may have replaced it.
            if self._entries.get((service, key)) is entry:
                del self._entries[(service, key)]
            self._misses += 1
            logger.debug("Cache entry expired: %s %s", service, key)
            return None

        self._hits += 1
        return list(entry.values)

    async def set(self, service: str, key: str, values: list[str], ttl: float) -> None:
        now = self._clock()
        if now - self._last_sweep >= self._sweep_interval:
            self._sweep(now)
        self._entries[(service, key)] = CacheEntryEntity(
            service=service,
            key=key,
            values=tuple(values),
            created_at=now,
            ttl=ttl,
        )

    def _sweep(self, now: float) -> None:
        """Drop every expired entry, including keys that are never read again."""
        expired = [entry_key for entry_key, entry in self._entries.items() if entry.is_expired(now)]
        for entry_key in expired:
            del self._entries[entry_key]
        self._last_sweep = now
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))

    async def clear(self, service: str | None = None) -> int:
        if service is None:
            count = len(self._entries)
            self._entries.clear()
            return count

        doomed = [entry_key for entry_key in self._entries if entry_key[0] == service]
        for entry_key in doomed:
            self._entries.pop(entry_key, None)
        return len(doomed)

    async def get_stats(self) -> dict:
        per_service: dict[str, int] = {}
        for service, _ in self._entries:
            per_service[service] = per_service.get(service, 0) + 1
        return {
            "backend": "memory",
            "total_entries": len(self._entries),
            "entries_by_service": per_service,
            "hits": self._hits,
            "misses": self._misses,
            "ttl": settings.cache_ttl,
        }
