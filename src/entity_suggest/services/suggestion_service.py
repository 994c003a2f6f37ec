"""Suggestion orchestration: static lists first, external sources on demand.

Per request, not persisted:

    INITIAL -> STATIC_MATCHED                                  (plain search, static hit)
    INITIAL -> STATIC_EMPTY_OR_PARTIAL -> EXTERNAL_MATCHED
                                       |  EXTERNAL_EMPTY       (enhanced, or sparse kind)

The service never raises out of ``suggest``: external failures are already
absorbed by each ExternalLookupClient, so the worst case is fewer results
tagged with a weaker source.
"""

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence

from entity_suggest.config import settings
from entity_suggest.data import REFERENCE_LISTS
from entity_suggest.entities import (
    EntityKind,
    Query,
    ResultOrigin,
    SuggestionOutcome,
    SuggestionResult,
    SuggestionSource,
    SuggestionState,
)
from entity_suggest.normalizer import normalize
from entity_suggest.pipeline import matches
from entity_suggest.protocols import ResultCache, UsageTracker
from entity_suggest.ranking import rank

from .lookup_client import ExternalLookupClient

logger = logging.getLogger(__name__)


def merge_unique(*groups: Iterable[tuple[str, ResultOrigin]]) -> list[tuple[str, ResultOrigin]]:
    """Concatenate groups, keeping the first spelling of each normalized name."""
    seen: set[str] = set()
    merged = []
    for group in groups:
        for name, origin in group:
            key = normalize(name)
            if key and key not in seen:
                seen.add(key)
                merged.append((name, origin))
    return merged


class SuggestionService:
    """Core suggestion orchestration service.

    This service depends on PROTOCOLS and lookup clients, not on concrete
    sources:
    - ExternalLookupClient: one per source, each with its own breaker
    - ResultCache: shared by every client, cleared through this service

    Example:
        ```python
        service = SuggestionService.create(clients=[wikidata_client, wikipedia_client])
        outcome = await service.suggest("jam", "cuisine")
        outcome.names   # ["Jamaican"]
        outcome.source  # SuggestionSource.STATIC_MATCH
        ```
    """

    def __init__(
        self,
        clients: Sequence[ExternalLookupClient],
        cache: ResultCache | None = None,
        usage_tracker: UsageTracker | None = None,
        reference_lists: Mapping[EntityKind, Sequence[str]] | None = None,
        static_threshold: int | None = None,
        external_on_miss: Iterable[EntityKind | str] | None = None,
        suffixes: tuple[str, ...] | None = None,
    ) -> None:
        """Initialize the suggestion service.

        Args:
            clients: Lookup clients, in preference order (required).
            cache: The cache the clients share, for clear/stats.
            usage_tracker: Quota tracker, for stats.
            reference_lists: Static names per kind. Defaults to the bundled lists.
            static_threshold: Fewer static hits than this reports has_more_results.
                              Defaults to settings.static_result_threshold.
            external_on_miss: Kinds looked up externally when static matching
                              finds nothing. Defaults to settings.external_on_miss_kinds.
            suffixes: Demonym suffixes for static matching. Defaults to settings.
        """
        self._clients = list(clients)
        self._cache = cache
        self._tracker = usage_tracker
        self._reference = dict(REFERENCE_LISTS if reference_lists is None else reference_lists)
        self._threshold = static_threshold or settings.static_result_threshold
        self._external_on_miss = frozenset(
            EntityKind(kind)
            for kind in (
                settings.external_on_miss_kinds if external_on_miss is None else external_on_miss
            )
        )
        self._suffixes = tuple(settings.demonym_suffixes if suffixes is None else suffixes)

    @classmethod
    def create(
        cls,
        clients: Sequence[ExternalLookupClient],
        cache: ResultCache | None = None,
        usage_tracker: UsageTracker | None = None,
    ) -> "SuggestionService":
        """Factory method to create SuggestionService with defaults."""
        return cls(clients=clients, cache=cache, usage_tracker=usage_tracker)

    @property
    def clients(self) -> list[ExternalLookupClient]:
        return list(self._clients)

    def resolve_limit(self, limit: int | None, enhanced: bool) -> int:
        if limit is None:
            limit = settings.enhanced_limit if enhanced else settings.default_limit
        return max(1, min(limit, settings.max_limit))

    async def suggest(
        self,
        raw: str,
        kind: EntityKind | str,
        limit: int | None = None,
        enhanced: bool = False,
        location: str | None = None,
    ) -> SuggestionOutcome:
        """Suggest completions for a partially typed name.

        Args:
            raw: The text typed so far
            kind: Entity kind being completed
            limit: Maximum suggestions. Defaults to the plain or enhanced limit.
            enhanced: Query every external source and merge with static matches
            location: Restaurant search area

        Returns:
            SuggestionOutcome with ranked, deduplicated suggestions
        """
        query = Query.create(raw, kind, self.resolve_limit(limit, enhanced), location)

        if query.kind is EntityKind.RESTAURANT:
            return await self._suggest_restaurants(query)

        if query.is_empty:
            return self._outcome(
                self.popular(query.kind)[: query.limit],
                ResultOrigin.STATIC,
                SuggestionSource.STATIC_POPULAR,
                SuggestionState.STATIC_EMPTY_OR_PARTIAL,
            )

        if enhanced:
            return await self._enhanced(query)
        return await self._plain(query)

    def popular(self, kind: EntityKind) -> list[str]:
        return list(self._reference.get(kind, ())[: settings.popular_limit])

    def static_matches(self, query: Query) -> list[str]:
        """Match the reference list in tiers: exact, then partial, then chef word fuzzy.

        Every tier compares normalized strings, so accents and case never
        matter. The partial tier also accepts demonym-suffix matches, so
        "jam" finds "Jamaican".
        """
        names = self._reference.get(query.kind, ())
        q = query.normalized
        if not q:
            return []

        exact = [name for name in names if normalize(name) == q]
        partial = [
            name for name in names if name not in exact and matches(name, q, self._suffixes)
        ]
        found = exact + partial
        if not found and query.kind is EntityKind.CHEF:
            found = self._fuzzy_chefs(names, q)
        return rank(found, q)

    @staticmethod
    def _fuzzy_chefs(names: Iterable[str], normalized_query: str) -> list[str]:
        """Word-fragment match: any query word inside any name word, or vice versa."""
        query_words = normalized_query.split()
        found = []
        for name in names:
            name_words = [word for word in normalize(name).split() if len(word) >= 3]
            if any(
                q_word in n_word or n_word in q_word
                for q_word in query_words
                for n_word in name_words
            ):
                found.append(name)
        return found

    async def _plain(self, query: Query) -> SuggestionOutcome:
        static = self.static_matches(query)
        if static:
            return self._outcome(
                static[: query.limit],
                ResultOrigin.STATIC,
                SuggestionSource.STATIC_MATCH,
                SuggestionState.STATIC_MATCHED,
                has_more=len(static) < self._threshold,
                query=query,
            )

        if query.kind in self._external_on_miss:
            client = next((c for c in self._clients if c.supports(query.kind)), None)
            if client is not None:
                names = rank(await client.lookup(query), query.normalized)
                if names:
                    return self._outcome(
                        names[: query.limit],
                        ResultOrigin.EXTERNAL_ENHANCED,
                        SuggestionSource.EXTERNAL_API,
                        SuggestionState.EXTERNAL_MATCHED,
                    )
                return self._outcome(
                    [],
                    ResultOrigin.STATIC,
                    SuggestionSource.NO_MATCH,
                    SuggestionState.EXTERNAL_EMPTY,
                    has_more=True,
                    query=query,
                )

        return self._outcome(
            [],
            ResultOrigin.STATIC,
            SuggestionSource.NO_MATCH,
            SuggestionState.STATIC_EMPTY_OR_PARTIAL,
            has_more=True,
            query=query,
        )

    async def _enhanced(self, query: Query) -> SuggestionOutcome:
        static = self.static_matches(query)
        clients = [client for client in self._clients if client.supports(query.kind)]
        external_lists = await asyncio.gather(*(client.lookup(query) for client in clients))
        external = [name for names in external_lists for name in names]

        merged = merge_unique(
            ((name, ResultOrigin.STATIC) for name in static),
            ((name, ResultOrigin.EXTERNAL_ENHANCED) for name in external),
        )
        origins = {name: origin for name, origin in merged}
        ranked = rank(origins, query.normalized)[: query.limit]

        logger.debug(
            "Enhanced %s search for %r: %d static, %d external, %d merged",
            query.kind.value,
            query.raw,
            len(static),
            len(external),
            len(merged),
        )
        return SuggestionOutcome(
            suggestions=[SuggestionResult(name=name, source=origins[name]) for name in ranked],
            source=(
                SuggestionSource.EXTERNAL_ENHANCED if external else SuggestionSource.STATIC_FALLBACK
            ),
            state=SuggestionState.EXTERNAL_MATCHED if external else SuggestionState.EXTERNAL_EMPTY,
        )

    async def _suggest_restaurants(self, query: Query) -> SuggestionOutcome:
        if query.location and not query.is_empty:
            for client in self._clients:
                if not client.supports(EntityKind.RESTAURANT):
                    continue
                names = await client.lookup(query)
                if names:
                    return self._outcome(
                        names[: query.limit],
                        ResultOrigin.EXTERNAL_ENHANCED,
                        SuggestionSource.PLACES_API,
                        SuggestionState.EXTERNAL_MATCHED,
                    )

        if query.is_empty:
            names = self.popular(EntityKind.RESTAURANT)
        else:
            reference = self._reference.get(EntityKind.RESTAURANT, ())
            names = rank(
                [name for name in reference if query.normalized in normalize(name)],
                query.normalized,
            ) or self.popular(EntityKind.RESTAURANT)

        return self._outcome(
            names[: query.limit],
            ResultOrigin.STATIC,
            SuggestionSource.STATIC_FALLBACK,
            SuggestionState.STATIC_EMPTY_OR_PARTIAL,
        )

    def _outcome(
        self,
        names: list[str],
        origin: ResultOrigin,
        source: SuggestionSource,
        state: SuggestionState,
        has_more: bool = False,
        query: Query | None = None,
    ) -> SuggestionOutcome:
        message = None
        if has_more and query is not None and not query.is_empty:
            message = f"Try enhanced search for more {query.kind.value} options"
        return SuggestionOutcome(
            suggestions=[SuggestionResult(name=name, source=origin) for name in names],
            source=source,
            state=state,
            has_more_results=has_more,
            message=message,
        )

    async def clear_cache(self, service: str | None = None) -> int:
        """Drop cached lookup results, for every service or just one."""
        if self._cache is None:
            return 0
        count = await self._cache.clear(service)
        logger.info("Cleared %d cached results (service=%s)", count, service or "all")
        return count

    async def get_stats(self) -> dict:
        return {
            "circuits": {client.name: client.get_stats() for client in self._clients},
            "cache": await self._cache.get_stats() if self._cache is not None else {},
            "usage": self._tracker.get_stats() if self._tracker is not None else {},
        }
