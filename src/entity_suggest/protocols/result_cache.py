"""Result cache protocol.

Defines the interface for the time-bounded memo of cleaned lookup results,
keyed by (service, normalized query).

Implementations:
- In-process dict with lazy expiry (default)
- Redis, shared between worker processes
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ResultCache(Protocol):
    """Protocol for lookup result caches.

    Entries are written only after a successful external response and
    expire by age at read time. Returned lists are copies; callers may
    mutate them freely.
    """

    async def get(self, service: str, key: str) -> list[str] | None:
        """Return the cached names, or None on a miss or an expired entry.

        Args:
            service: External service identifier (e.g. "wikidata")
            key: Kind-qualified normalized query

        Returns:
            A fresh list of names, or None
        """
        ...

    async def set(self, service: str, key: str, values: list[str], ttl: float) -> None:
        """Store names for (service, key), replacing any previous entry.

        Args:
            service: External service identifier
            key: Kind-qualified normalized query
            values: Cleaned names, in order
            ttl: Time-to-live in seconds
        """
        ...

    async def clear(self, service: str | None = None) -> int:
        """Drop every entry, or only those of one service.

        Returns:
            Number of entries removed
        """
        ...

    async def get_stats(self) -> dict:
        """Return backend-specific statistics (entry counts, hits, misses)."""
        ...
