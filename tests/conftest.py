"""Shared fakes for suggestion engine tests."""

import asyncio
import fnmatch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from entity_suggest.entities import Candidate, EntityKind
from entity_suggest.pipeline import DEFAULT_DEMONYM_SUFFIXES
from entity_suggest.repositories import InMemoryResultCache
from entity_suggest.services import CircuitBreaker, ExternalLookupClient


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSource:
    """LookupSource returning canned candidates and counting calls."""

    def __init__(
        self,
        name: str = "fake",
        kinds=(EntityKind.DISH,),
        candidates=None,
        error: Exception | None = None,
        delay: float = 0.0,
        billable: bool = False,
    ) -> None:
        self.name = name
        self.billable = billable
        self.kinds = set(kinds)
        self.candidates = list(candidates or [])
        self.error = error
        self.delay = delay
        self.calls = []

    def supports(self, kind) -> bool:
        return kind in self.kinds

    async def search(self, query):
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


class FakeSummarySource:
    """SummarySource backed by a dict; values that are exceptions are raised."""

    def __init__(self, summaries: dict) -> None:
        self.summaries = summaries
        self.calls = []

    async def fetch_summary(self, title: str) -> str:
        self.calls.append(title)
        value = self.summaries.get(title, "")
        if isinstance(value, Exception):
            raise value
        return value


class FakeRedis:
    """Minimal asyncio Redis stand-in for the result cache."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expiry: dict[str, int | None] = {}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise RedisConnectionError("redis is down")

    async def get(self, key):
        self._check()
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        self.expiry[key] = ex

    async def delete(self, *keys):
        self._check()
        return sum(1 for key in keys if self.store.pop(key, None) is not None)

    async def scan_iter(self, match="*"):
        self._check()
        for key in list(self.store):
            if fnmatch.fnmatchcase(key, match):
                yield key

    async def ping(self):
        self._check()
        return True

    async def aclose(self):
        return None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return InMemoryResultCache(clock=clock)


@pytest.fixture
def make_client(cache, clock):
    """Build an ExternalLookupClient around a source with test-friendly defaults."""

    def _make(source, **kwargs):
        kwargs.setdefault("timeout", 1.0)
        kwargs.setdefault("cache_ttl", 300)
        kwargs.setdefault("min_query_length", 2)
        kwargs.setdefault("verify_limit", 5)
        kwargs.setdefault("suffixes", DEFAULT_DEMONYM_SUFFIXES)
        return ExternalLookupClient(
            source=source,
            cache=kwargs.pop("cache", cache),
            breaker=kwargs.pop(
                "breaker",
                CircuitBreaker(source.name, max_failures=3, failure_window=60, clock=clock),
            ),
            **kwargs,
        )

    return _make


@pytest.fixture
def carbonara_source():
    return FakeSource(
        candidates=[
            Candidate("Carbonara (dish)", "Italian pasta dish with egg and guanciale"),
            Candidate("List of pasta dishes", "dish list"),
        ]
    )


@pytest.fixture
def fake_redis():
    return FakeRedis()
