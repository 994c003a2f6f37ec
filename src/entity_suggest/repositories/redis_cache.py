"""Redis implementation of ResultCache.

Shares cached lookup results between worker processes. Redis handles
expiry itself (``SET ... EX``), which gives the same lazy, read-time
semantics as the in-memory backend. Redis errors never reach callers: a
failed read is a miss and a failed write is skipped.
"""

import json
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from entity_suggest.config import get_redis_client, settings

logger = logging.getLogger(__name__)


class RedisResultCache:
    """Redis-backed result cache.

    This class satisfies the ResultCache protocol through structural
    typing - no explicit inheritance needed.

    Keys are ``{prefix}:{service}:{key}`` and values are JSON arrays.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
    ) -> None:
        """Initialize the Redis result cache.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
            key_prefix: Namespace for all keys. Defaults to settings.cache_key_prefix.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._hits = 0
        self._misses = 0

    @classmethod
    def create(cls, key_prefix: str | None = None) -> "RedisResultCache":
        """Factory method to create RedisResultCache with defaults."""
        return cls(key_prefix=key_prefix)

    def _key(self, service: str, key: str) -> str:
        return f"{self._prefix}:{service}:{key}"

    async def get(self, service: str, key: str) -> list[str] | None:
        try:
            raw = await self._client.get(self._key(service, key))
        except RedisError as e:
            logger.warning("Redis read failed for %s %s: %s", service, key, e)
            self._misses += 1
            return None

        if raw is None:
            self._misses += 1
            return None

        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding undecodable cache entry %s", self._key(service, key))
            self._misses += 1
            return None

        if not isinstance(values, list):
            self._misses += 1
            return None

        self._hits += 1
        return [str(value) for value in values]

    async def set(self, service: str, key: str, values: list[str], ttl: float) -> None:
        try:
            await self._client.set(
                self._key(service, key),
                json.dumps(list(values)),
                ex=max(1, int(ttl)),
            )
        except RedisError as e:
            logger.warning("Redis write failed for %s %s: %s", service, key, e)

    async def clear(self, service: str | None = None) -> int:
        pattern = f"{self._prefix}:{service}:*" if service else f"{self._prefix}:*"
        count = 0
        try:
            async for redis_key in self._client.scan_iter(match=pattern):
                count += await self._client.delete(redis_key)
        except RedisError as e:
            logger.warning("Redis clear failed for pattern %s: %s", pattern, e)
        return count

    async def count_all(self) -> int:
        count = 0
        async for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    async def health_check(self) -> bool:
        """Check if Redis is accessible."""
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def get_stats(self) -> dict:
        try:
            total = await self.count_all()
        except RedisError as e:
            logger.warning("Redis stats unavailable: %s", e)
            total = -1
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": total,
            "hits": self._hits,
            "misses": self._misses,
            "ttl": settings.cache_ttl,
        }

    async def close(self) -> None:
        await self._client.aclose()

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
