#!/usr/bin/env python3
"""
Demo script for entity suggestions.

Runs a few plain and enhanced queries against the bundled lists and the
live Wikidata / Wikipedia endpoints, then repeats one to show the cache.
"""

import asyncio
import time

from entity_suggest import (
    ExternalLookupClient,
    InMemoryResultCache,
    SuggestionService,
    WikidataSource,
    WikipediaSource,
)


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def show(service: SuggestionService, query: str, kind: str, enhanced: bool = False) -> None:
    start = time.perf_counter()
    outcome = await service.suggest(query, kind, enhanced=enhanced)
    elapsed = (time.perf_counter() - start) * 1000

    mode = "enhanced" if enhanced else "plain"
    print(f"\n🔍 {kind} {query!r} ({mode}) -> {outcome.source.value} in {elapsed:.0f}ms")
    for result in outcome.suggestions:
        print(f"  • {result.name}  [{result.source.value}]")
    if not outcome.suggestions:
        print("  (no suggestions)")
    if outcome.message:
        print(f"  💡 {outcome.message}")


async def main() -> None:
    cache = InMemoryResultCache()
    wikidata = WikidataSource.create()
    wikipedia = WikipediaSource.create()
    service = SuggestionService.create(
        clients=[
            ExternalLookupClient.create(source=wikidata, cache=cache),
            ExternalLookupClient.create(source=wikipedia, cache=cache, summary_source=wikipedia),
        ],
        cache=cache,
    )

    try:
        print_section("Static Matching")
        await show(service, "jam", "cuisine")
        await show(service, "Gordon", "chef")
        await show(service, "creme", "dish")
        await show(service, "", "ingredient")

        print_section("External Lookups")
        await show(service, "carbo", "dish")
        await show(service, "ramsay", "chef", enhanced=True)
        await show(service, "saffr", "ingredient", enhanced=True)

        print_section("Cached Repeat")
        await show(service, "ramsay", "chef", enhanced=True)

        print_section("Stats")
        stats = await service.get_stats()
        for name, circuit in stats["circuits"].items():
            print(f"  {name}: {circuit['state']} ({circuit['failures_in_window']} recent failures)")
        print(f"  cache entries: {stats['cache']['total_entries']}")
    finally:
        await wikidata.close()
        await wikipedia.close()


if __name__ == "__main__":
    asyncio.run(main())
