"""Cache entry domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for one cached lookup result.

    Entries are immutable once written. Values are stored as a tuple so a
    reader can never mutate what another request will see.

    Attributes:
        service: The external service the result came from
        key: Normalized query key (kind-qualified)
        values: Cleaned suggestion names, in the order they were produced
        created_at: Clock reading when the entry was written (seconds)
        ttl: Time-to-live in seconds
    """

    service: str
    key: str
    values: tuple[str, ...]
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        """Return True once the entry is at least ``ttl`` seconds old."""
        return now - self.created_at >= self.ttl
