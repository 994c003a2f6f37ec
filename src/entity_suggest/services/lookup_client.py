"""Resilient wrapper around one external lookup source.

Per call: cache check, circuit check, network call under a hard timeout,
candidate pipeline, cache write. Every failure mode resolves to an empty
list; ``lookup`` only ever raises ``asyncio.CancelledError``.
"""

import asyncio
import logging

import httpx

from entity_suggest.config import settings
from entity_suggest.entities import EntityKind, Query
from entity_suggest.exceptions import LookupSourceError
from entity_suggest.pipeline import CandidatePipeline, get_pipeline, is_chef_summary
from entity_suggest.protocols import LookupSource, ResultCache, SummarySource, UsageTracker

from .circuit_breaker import CircuitBreaker

logger = logging.getLogger(__name__)


class ExternalLookupClient:
    """Cache + circuit breaker + deadline around a LookupSource.

    One instance per source, created at startup and shared by all requests.
    The cache and breaker are the only state it touches.

    Example:
        ```python
        client = ExternalLookupClient.create(
            source=WikidataSource.create(),
            cache=InMemoryResultCache(),
        )
        names = await client.lookup(Query.create("carbo", "dish", limit=10))
        ```
    """

    def __init__(
        self,
        source: LookupSource,
        cache: ResultCache,
        breaker: CircuitBreaker,
        usage_tracker: UsageTracker | None = None,
        summary_source: SummarySource | None = None,
        timeout: float | None = None,
        cache_ttl: float | None = None,
        min_query_length: int | None = None,
        verify_limit: int | None = None,
        suffixes: tuple[str, ...] | None = None,
    ) -> None:
        """Initialize the lookup client.

        Args:
            source: The external source (required).
            cache: Result cache shared with other clients (required).
            breaker: Circuit breaker for this source (required).
            usage_tracker: Notified of every call when the source is billable.
            summary_source: Enables chef verification when given.
            timeout: Hard deadline per network call. Defaults to settings.
            cache_ttl: Seconds a successful result stays cached. Defaults to settings.
            min_query_length: Shorter normalized queries skip the network. Defaults to settings.
            verify_limit: Chef candidates verified per lookup. Defaults to settings.
            suffixes: Demonym suffixes for the pipeline. Defaults to settings.
        """
        self._source = source
        self._cache = cache
        self._breaker = breaker
        self._tracker = usage_tracker
        self._summaries = summary_source
        self._timeout = timeout or settings.lookup_timeout
        self._cache_ttl = cache_ttl or settings.cache_ttl
        self._min_query_length = (
            settings.min_external_query_length if min_query_length is None else min_query_length
        )
        self._verify_limit = settings.chef_verify_limit if verify_limit is None else verify_limit
        self._suffixes = suffixes
        self._pipelines: dict[EntityKind, CandidatePipeline] = {}
        self._background: set[asyncio.Task] = set()

    @classmethod
    def create(
        cls,
        source: LookupSource,
        cache: ResultCache,
        usage_tracker: UsageTracker | None = None,
        summary_source: SummarySource | None = None,
        max_failures: int | None = None,
        failure_window: float | None = None,
    ) -> "ExternalLookupClient":
        """Factory method with a breaker built from settings.

        Args:
            source: The external source.
            cache: Shared result cache.
            usage_tracker: Quota collaborator for billable sources.
            summary_source: Source used to verify chef candidates.
            max_failures: Breaker threshold. If None, uses settings.
            failure_window: Breaker window in seconds. If None, uses settings.
        """
        breaker = CircuitBreaker(
            service=source.name,
            max_failures=max_failures or settings.breaker_max_failures,
            failure_window=failure_window or settings.breaker_failure_window,
        )
        return cls(
            source=source,
            cache=cache,
            breaker=breaker,
            usage_tracker=usage_tracker,
            summary_source=summary_source,
        )

    @property
    def name(self) -> str:
        return self._source.name

    @property
    def breaker(self) -> CircuitBreaker:
        return self._breaker

    def supports(self, kind: EntityKind) -> bool:
        return self._source.supports(kind)

    def _pipeline(self, kind: EntityKind) -> CandidatePipeline:
        if kind not in self._pipelines:
            self._pipelines[kind] = get_pipeline(kind, self._suffixes)
        return self._pipelines[kind]

    async def lookup(self, query: Query) -> list[str]:
        """Return cleaned names for ``query``, or [] on any failure.

        Args:
            query: The normalized query

        Returns:
            Names in source order, deduplicated. Never raises except on
            cancellation.
        """
        if not self.supports(query.kind) or len(query.normalized) < self._min_query_length:
            return []

        key = query.cache_key
        cached = await self._cache.get(self.name, key)
        if cached is not None:
            logger.debug("Cache hit for %s %s", self.name, key)
            return cached

        if self._breaker.is_open():
            logger.info("Circuit open for %s, skipping lookup for %r", self.name, query.raw)
            return []

        if self._source.billable:
            self._record_usage()

        try:
            candidates = await asyncio.wait_for(self._source.search(query), timeout=self._timeout)
            names = self._pipeline(query.kind).run(candidates, query)
            complete = True
            if query.kind is EntityKind.CHEF and self._summaries is not None:
                names, complete = await self._verify_chefs(names)
        except asyncio.TimeoutError:
            self._breaker.record_failure()
            logger.warning(
                "%s lookup for %r timed out after %.1fs", self.name, query.raw, self._timeout
            )
            return []
        except (httpx.HTTPError, LookupSourceError) as e:
            self._breaker.record_failure()
            logger.warning(
                "%s lookup for %r failed: %s: %s", self.name, query.raw, type(e).__name__, e
            )
            return []
        except Exception:
            self._breaker.record_failure()
            logger.exception("Unexpected error in %s lookup for %r", self.name, query.raw)
            return []

        if complete:
            await self._cache.set(self.name, key, names, self._cache_ttl)
        logger.info("%s returned %d %s names for %r", self.name, len(names), query.kind.value, query.raw)
        return list(names)

    async def _verify_chefs(self, names: list[str]) -> tuple[list[str], bool]:
        """Keep the top names whose article opens by calling them a chef.

        Returns the verified names and whether every check completed. A
        failed check drops its name and marks the result incomplete, so it
        is not cached.
        """
        head = names[: self._verify_limit]
        if not head:
            return [], True

        results = await asyncio.gather(
            *(asyncio.wait_for(self._summaries.fetch_summary(name), self._timeout) for name in head),
            return_exceptions=True,
        )

        verified = []
        complete = True
        for name, result in zip(head, results):
            if isinstance(result, asyncio.CancelledError):
                raise result
            if isinstance(result, Exception):
                self._breaker.record_failure()
                complete = False
                logger.warning(
                    "Summary check for %r failed: %s: %s", name, type(result).__name__, result
                )
                continue
            if is_chef_summary(result):
                verified.append(name)
            else:
                logger.debug("Rejected chef candidate %r after summary check", name)
        return verified, complete

    def _record_usage(self) -> None:
        if self._tracker is None:
            return
        task = asyncio.create_task(self._notify_tracker())
        self._background.add(task)
        task.add_done_callback(self._background.discard)

    async def _notify_tracker(self) -> None:
        try:
            await self._tracker.record_external_call(self.name)
        except Exception as e:
            logger.warning("Usage tracking failed for %s: %s", self.name, e)

    def get_stats(self) -> dict:
        return self._breaker.snapshot()
