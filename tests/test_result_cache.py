"""Tests for the in-memory and Redis result caches."""

import json

import pytest

from entity_suggest.protocols import ResultCache
from entity_suggest.repositories import InMemoryResultCache, RedisResultCache


class TestInMemoryResultCache:
    @pytest.mark.asyncio
    async def test_set_then_get(self, cache):
        await cache.set("wikidata", "dish:pho", ["Pho", "Pho Bo"], ttl=300)

        assert await cache.get("wikidata", "dish:pho") == ["Pho", "Pho Bo"]
        assert await cache.get("wikipedia", "dish:pho") is None

    @pytest.mark.asyncio
    async def test_returned_lists_are_copies(self, cache):
        await cache.set("wikidata", "dish:pho", ["Pho"], ttl=300)

        first = await cache.get("wikidata", "dish:pho")
        first.append("Mutated")

        assert await cache.get("wikidata", "dish:pho") == ["Pho"]

    @pytest.mark.asyncio
    async def test_entries_expire_by_age(self, cache, clock):
        await cache.set("wikidata", "dish:pho", ["Pho"], ttl=300)

        clock.advance(299)
        assert await cache.get("wikidata", "dish:pho") == ["Pho"]

        clock.advance(1)
        assert await cache.get("wikidata", "dish:pho") is None

    @pytest.mark.asyncio
    async def test_writes_sweep_expired_keys_never_read_again(self, cache, clock):
        for i in range(1000):
            await cache.set("wikidata", f"dish:q{i}", ["X"], ttl=1)

        clock.advance(10_000)
        await cache.set("wikidata", "dish:fresh", ["Fresh"], ttl=300)

        stats = await cache.get_stats()
        assert stats["total_entries"] == 1
        assert await cache.get("wikidata", "dish:fresh") == ["Fresh"]

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_entries(self, cache, clock):
        await cache.set("wikidata", "dish:short", ["Short"], ttl=10)
        await cache.set("wikidata", "dish:long", ["Long"], ttl=300)

        clock.advance(120)
        await cache.set("wikidata", "dish:new", ["New"], ttl=300)

        stats = await cache.get_stats()
        assert stats["total_entries"] == 2
        assert await cache.get("wikidata", "dish:long") == ["Long"]

    @pytest.mark.asyncio
    async def test_clear_one_service_or_all(self, cache):
        await cache.set("wikidata", "dish:a", ["A"], ttl=300)
        await cache.set("wikidata", "dish:b", ["B"], ttl=300)
        await cache.set("wikipedia", "dish:a", ["A"], ttl=300)

        assert await cache.clear("wikidata") == 2
        assert await cache.get("wikipedia", "dish:a") == ["A"]
        assert await cache.clear() == 1

    @pytest.mark.asyncio
    async def test_stats(self, cache):
        await cache.set("wikidata", "dish:a", ["A"], ttl=300)
        await cache.get("wikidata", "dish:a")
        await cache.get("wikidata", "dish:missing")

        stats = await cache.get_stats()
        assert stats["total_entries"] == 1
        assert stats["entries_by_service"] == {"wikidata": 1}
        assert stats["hits"] == 1
        assert stats["misses"] == 1

    def test_satisfies_protocol(self, cache):
        assert isinstance(cache, ResultCache)


class TestRedisResultCache:
    @pytest.fixture
    def redis_cache(self, fake_redis):
        return RedisResultCache(redis_client=fake_redis, key_prefix="test")

    @pytest.mark.asyncio
    async def test_round_trip_with_expiry(self, redis_cache, fake_redis):
        await redis_cache.set("wikidata", "dish:pho", ["Pho"], ttl=300)

        assert fake_redis.store["test:wikidata:dish:pho"] == json.dumps(["Pho"])
        assert fake_redis.expiry["test:wikidata:dish:pho"] == 300
        assert await redis_cache.get("wikidata", "dish:pho") == ["Pho"]

    @pytest.mark.asyncio
    async def test_redis_errors_degrade(self, redis_cache, fake_redis):
        fake_redis.fail = True

        await redis_cache.set("wikidata", "dish:pho", ["Pho"], ttl=300)
        assert await redis_cache.get("wikidata", "dish:pho") is None
        assert await redis_cache.clear() == 0
        assert await redis_cache.health_check() is False

    @pytest.mark.asyncio
    async def test_undecodable_entry_is_a_miss(self, redis_cache, fake_redis):
        fake_redis.store["test:wikidata:dish:pho"] = "not json"

        assert await redis_cache.get("wikidata", "dish:pho") is None

    @pytest.mark.asyncio
    async def test_clear_by_service(self, redis_cache):
        await redis_cache.set("wikidata", "dish:a", ["A"], ttl=300)
        await redis_cache.set("wikipedia", "dish:a", ["A"], ttl=300)

        assert await redis_cache.clear("wikidata") == 1
        assert (await redis_cache.get_stats())["total_entries"] == 1

    def test_satisfies_protocol(self, redis_cache):
        assert isinstance(redis_cache, ResultCache)


def test_memory_cache_factory():
    assert isinstance(InMemoryResultCache.create(), InMemoryResultCache)
