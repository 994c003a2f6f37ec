"""Tests for suggestion orchestration."""

import httpx
import pytest

from entity_suggest.config import settings
from entity_suggest.entities import (
    EntityKind,
    ResultOrigin,
    SuggestionSource,
    SuggestionState,
)
from entity_suggest.pipeline import DEFAULT_DEMONYM_SUFFIXES
from entity_suggest.services import SuggestionService
from entity_suggest.services.suggestion_service import merge_unique

from conftest import FakeSource

REFERENCE = {
    EntityKind.CUISINE: ("Italian", "Jamaican", "Japanese", "Thai"),
    EntityKind.CHEF: ("Gordon Ramsay", "Jamie Oliver", "Joël Robuchon"),
    EntityKind.DISH: ("Pizza", "Pizza Margherita", "Crème Brûlée", "Pad Thai"),
    EntityKind.INGREDIENT: ("Saffron", "Basil"),
    EntityKind.RESTAURANT: ("Nobu", "Joe's Pizza", "Din Tai Fung"),
}


class StubClient:
    """Stands in for an ExternalLookupClient with a fixed answer."""

    def __init__(self, name, kinds, names=()):
        self.name = name
        self.kinds = set(kinds)
        self.names = list(names)
        self.calls = []

    def supports(self, kind):
        return kind in self.kinds

    async def lookup(self, query):
        self.calls.append(query)
        return list(self.names)

    def get_stats(self):
        return {"service": self.name, "state": "closed"}


def make_service(*clients, cache=None):
    return SuggestionService(
        clients=list(clients),
        cache=cache,
        reference_lists=REFERENCE,
        static_threshold=8,
        external_on_miss=("dish",),
        suffixes=DEFAULT_DEMONYM_SUFFIXES,
    )


class TestPlainSearch:
    @pytest.mark.asyncio
    async def test_partial_demonym_is_a_static_match(self):
        outcome = await make_service().suggest("jam", "cuisine")

        assert outcome.names == ["Jamaican"]
        assert outcome.source is SuggestionSource.STATIC_MATCH
        assert outcome.state is SuggestionState.STATIC_MATCHED
        assert outcome.has_more_results
        assert outcome.message == "Try enhanced search for more cuisine options"

    @pytest.mark.asyncio
    async def test_bundled_chef_list(self):
        service = SuggestionService(clients=[], external_on_miss=())

        outcome = await service.suggest("Gordon", EntityKind.CHEF)

        assert outcome.names == ["Gordon Ramsay"]
        assert outcome.source is SuggestionSource.STATIC_MATCH
        assert outcome.has_more_results

    @pytest.mark.asyncio
    async def test_accents_and_case_are_ignored(self):
        service = make_service()

        assert (await service.suggest("creme", "dish")).names == ["Crème Brûlée"]
        assert (await service.suggest("CRÈME brulee", "dish")).names == ["Crème Brûlée"]

    @pytest.mark.asyncio
    async def test_chef_word_fuzzy_match(self):
        outcome = await make_service().suggest("chef gordon", "chef")

        assert outcome.names == ["Gordon Ramsay"]
        assert outcome.source is SuggestionSource.STATIC_MATCH

    @pytest.mark.asyncio
    async def test_results_are_ranked_and_limited(self):
        outcome = await make_service().suggest("pizza", "dish", limit=1)

        assert outcome.names == ["Pizza"]
        assert outcome.suggestions[0].source is ResultOrigin.STATIC

    @pytest.mark.asyncio
    async def test_empty_query_returns_popular(self):
        outcome = await make_service().suggest("   ", "cuisine")

        assert outcome.names == list(REFERENCE[EntityKind.CUISINE])
        assert outcome.source is SuggestionSource.STATIC_POPULAR
        assert outcome.message is None

    @pytest.mark.asyncio
    async def test_miss_on_static_only_kind_skips_external(self):
        client = StubClient("wikipedia", [EntityKind.CUISINE, EntityKind.DISH], ["Zzz"])

        outcome = await make_service(client).suggest("zzz", "cuisine")

        assert outcome.names == []
        assert outcome.source is SuggestionSource.NO_MATCH
        assert outcome.state is SuggestionState.STATIC_EMPTY_OR_PARTIAL
        assert outcome.has_more_results
        assert outcome.message == "Try enhanced search for more cuisine options"
        assert client.calls == []

    @pytest.mark.asyncio
    async def test_dish_miss_falls_through_to_first_external_source(self):
        first = StubClient("wikidata", [EntityKind.DISH], ["Carbonara"])
        second = StubClient("wikipedia", [EntityKind.DISH], ["Carbonara di mare"])

        outcome = await make_service(first, second).suggest("carbo", "dish")

        assert outcome.names == ["Carbonara"]
        assert outcome.source is SuggestionSource.EXTERNAL_API
        assert outcome.state is SuggestionState.EXTERNAL_MATCHED
        assert outcome.suggestions[0].source is ResultOrigin.EXTERNAL_ENHANCED
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_dish_miss_with_empty_external(self):
        client = StubClient("wikidata", [EntityKind.DISH])

        outcome = await make_service(client).suggest("carbo", "dish")

        assert outcome.names == []
        assert outcome.source is SuggestionSource.NO_MATCH
        assert outcome.state is SuggestionState.EXTERNAL_EMPTY
        assert outcome.has_more_results


class TestEnhancedSearch:
    @pytest.mark.asyncio
    async def test_merges_static_and_external_without_duplicates(self):
        client = StubClient("wikidata", [EntityKind.DISH], ["pizza", "Pizza al taglio"])

        outcome = await make_service(client).suggest("pizza", "dish", enhanced=True)

        assert outcome.names == ["Pizza", "Pizza al taglio", "Pizza Margherita"]
        assert [s.source for s in outcome.suggestions] == [
            ResultOrigin.STATIC,
            ResultOrigin.EXTERNAL_ENHANCED,
            ResultOrigin.STATIC,
        ]
        assert outcome.source is SuggestionSource.EXTERNAL_ENHANCED
        assert outcome.state is SuggestionState.EXTERNAL_MATCHED

    @pytest.mark.asyncio
    async def test_queries_every_supporting_source(self):
        wikidata = StubClient("wikidata", [EntityKind.CHEF], ["Gordon Hamersley"])
        wikipedia = StubClient("wikipedia", [EntityKind.CHEF], ["Gordon Hamersley"])
        places = StubClient("places", [EntityKind.RESTAURANT], ["Gordon's"])

        outcome = await make_service(wikidata, wikipedia, places).suggest(
            "gordon", "chef", enhanced=True
        )

        assert outcome.names == ["Gordon Ramsay", "Gordon Hamersley"]
        assert len(wikidata.calls) == len(wikipedia.calls) == 1
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_degrades_to_static_when_sources_return_nothing(self):
        client = StubClient("wikipedia", [EntityKind.CUISINE])

        outcome = await make_service(client).suggest("jam", "cuisine", enhanced=True)

        assert outcome.names == ["Jamaican"]
        assert outcome.source is SuggestionSource.STATIC_FALLBACK
        assert outcome.state is SuggestionState.EXTERNAL_EMPTY

    @pytest.mark.asyncio
    async def test_default_enhanced_limit(self):
        client = StubClient(
            "wikidata", [EntityKind.DISH], [f"Pizza {i:02d}" for i in range(40)]
        )

        outcome = await make_service(client).suggest("pizza", "dish", enhanced=True)

        assert len(outcome.names) == settings.enhanced_limit


class TestFailingExternalSource:
    """Real lookup clients around sources that time out or error."""

    @pytest.mark.asyncio
    async def test_enhanced_timeout_falls_back_to_static(self, make_client):
        source = FakeSource(name="wikidata", delay=1.0)
        client = make_client(source, timeout=0.01)

        outcome = await make_service(client).suggest("pizza", "dish", enhanced=True)

        assert outcome.names == ["Pizza", "Pizza Margherita"]
        assert outcome.source is SuggestionSource.STATIC_FALLBACK
        assert outcome.state is SuggestionState.EXTERNAL_EMPTY
        assert client.breaker.failure_count() == 1

    @pytest.mark.asyncio
    async def test_enhanced_error_falls_back_to_static(self, make_client):
        client = make_client(FakeSource(name="wikidata", error=httpx.ConnectError("down")))

        outcome = await make_service(client).suggest("pizza", "dish", enhanced=True)

        assert outcome.names == ["Pizza", "Pizza Margherita"]
        assert outcome.source is SuggestionSource.STATIC_FALLBACK

    @pytest.mark.asyncio
    async def test_plain_dish_miss_with_timeout(self, make_client):
        source = FakeSource(name="wikidata", delay=1.0)
        client = make_client(source, timeout=0.01)

        outcome = await make_service(client).suggest("carbo", "dish")

        assert outcome.names == []
        assert outcome.source is SuggestionSource.NO_MATCH
        assert outcome.state is SuggestionState.EXTERNAL_EMPTY
        assert outcome.has_more_results
        assert len(source.calls) == 1

    @pytest.mark.asyncio
    async def test_plain_dish_miss_with_error(self, make_client):
        client = make_client(FakeSource(name="wikidata", error=RuntimeError("boom")))

        outcome = await make_service(client).suggest("carbo", "dish")

        assert outcome.names == []
        assert outcome.state is SuggestionState.EXTERNAL_EMPTY


class TestRestaurants:
    @pytest.mark.asyncio
    async def test_places_result_with_location(self):
        places = StubClient("places", [EntityKind.RESTAURANT], ["Regina Pizzeria"])

        outcome = await make_service(places).suggest("pizza", "restaurant", location="Boston")

        assert outcome.names == ["Regina Pizzeria"]
        assert outcome.source is SuggestionSource.PLACES_API
        assert places.calls[0].location == "Boston"

    @pytest.mark.asyncio
    async def test_without_location_filters_static_list(self):
        places = StubClient("places", [EntityKind.RESTAURANT], ["Regina Pizzeria"])

        outcome = await make_service(places).suggest("pizza", "restaurant")

        assert outcome.names == ["Joe's Pizza"]
        assert outcome.source is SuggestionSource.STATIC_FALLBACK
        assert places.calls == []

    @pytest.mark.asyncio
    async def test_places_miss_falls_back_to_popular(self):
        places = StubClient("places", [EntityKind.RESTAURANT])

        outcome = await make_service(places).suggest("zzz", "restaurant", location="Boston")

        assert outcome.names == list(REFERENCE[EntityKind.RESTAURANT])
        assert outcome.source is SuggestionSource.STATIC_FALLBACK

    @pytest.mark.asyncio
    async def test_empty_query_never_calls_places(self):
        places = StubClient("places", [EntityKind.RESTAURANT], ["Regina Pizzeria"])

        outcome = await make_service(places).suggest("", "restaurant", location="Boston")

        assert outcome.names == list(REFERENCE[EntityKind.RESTAURANT])
        assert places.calls == []


def test_resolve_limit_is_clamped():
    service = make_service()

    assert service.resolve_limit(None, enhanced=False) == settings.default_limit
    assert service.resolve_limit(None, enhanced=True) == settings.enhanced_limit
    assert service.resolve_limit(0, enhanced=False) == 1
    assert service.resolve_limit(10_000, enhanced=False) == settings.max_limit


def test_merge_unique_keeps_first_spelling():
    merged = merge_unique(
        [("Crème Brûlée", ResultOrigin.STATIC)],
        [("creme brulee", ResultOrigin.EXTERNAL_ENHANCED), ("Flan", ResultOrigin.EXTERNAL_ENHANCED)],
    )

    assert merged == [
        ("Crème Brûlée", ResultOrigin.STATIC),
        ("Flan", ResultOrigin.EXTERNAL_ENHANCED),
    ]


def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        SuggestionService(clients=[], external_on_miss=("beverage",))


@pytest.mark.asyncio
async def test_clear_cache_and_stats(cache):
    await cache.set("wikidata", "dish:carbo", ["Carbonara"], ttl=300)
    await cache.set("wikipedia", "dish:carbo", ["Carbonara"], ttl=300)
    service = make_service(StubClient("wikidata", [EntityKind.DISH]), cache=cache)

    assert await service.clear_cache("wikidata") == 1

    stats = await service.get_stats()
    assert stats["circuits"]["wikidata"]["state"] == "closed"
    assert stats["cache"]["total_entries"] == 1
    assert stats["usage"] == {}
