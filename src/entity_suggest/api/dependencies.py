"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Sources, caches and clients built once in the lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from entity_suggest.config import settings
from entity_suggest.handlers import SuggestionHandler
from entity_suggest.protocols import ResultCache
from entity_suggest.repositories import (
    ApiUsageTracker,
    InMemoryResultCache,
    PlacesSource,
    RedisResultCache,
    WikidataSource,
    WikipediaSource,
)
from entity_suggest.services import (
    CircuitBreaker,
    ExternalLookupClient,
    SuggestionService,
    SupersedingRunner,
)

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_cache() -> ResultCache:
    if settings.cache_backend == "redis":
        return RedisResultCache.create()
    return InMemoryResultCache.create()


def get_handler(request: Request) -> SuggestionHandler:
    """Dependency injection for SuggestionHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "suggestion_handler", None)
    if handler is None:
        raise RuntimeError("SuggestionHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (cache, usage tracker, external sources)
    2. Lookup clients, one per source, each with its own breaker
    3. Service - stored in app.state.suggestion_service
    4. Handler - stored in app.state.suggestion_handler

    Cleanup:
        Closes HTTP clients and the cache connection, then removes
        everything from app.state.
    """
    configure_logging()

    cache = build_cache()
    usage_tracker = ApiUsageTracker()
    wikidata = WikidataSource.create()
    wikipedia = WikipediaSource.create()
    sources = [wikidata, wikipedia]

    # Wikidata first: it is the source used for automatic lookups on a static miss.
    clients = [
        ExternalLookupClient.create(source=wikidata, cache=cache),
        ExternalLookupClient.create(source=wikipedia, cache=cache, summary_source=wikipedia),
    ]

    if settings.places_enabled:
        places = PlacesSource.create()
        sources.append(places)
        clients.append(
            ExternalLookupClient(
                source=places,
                cache=cache,
                breaker=CircuitBreaker(
                    service=places.name,
                    max_failures=settings.places_max_failures,
                    failure_window=settings.places_failure_window,
                ),
                usage_tracker=usage_tracker,
            )
        )
    else:
        logger.info("GOOGLE_PLACES_API_KEY not set; restaurant suggestions use the static list")

    suggestion_service = SuggestionService.create(
        clients=clients,
        cache=cache,
        usage_tracker=usage_tracker,
    )
    suggestion_handler = SuggestionHandler(
        suggestion_service=suggestion_service,
        runner=SupersedingRunner(),
    )

    app.state.suggestion_service = suggestion_service
    app.state.suggestion_handler = suggestion_handler
    app.state.cache = cache

    logger.info(
        "Suggestion service initialized: cache=%s, sources=%s",
        settings.cache_backend,
        ", ".join(client.name for client in clients),
    )

    yield

    for source in sources:
        await source.close()
    if isinstance(cache, RedisResultCache):
        await cache.close()

    del app.state.suggestion_handler
    del app.state.suggestion_service
    del app.state.cache
    logger.info("Suggestion service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SuggestionHandler, Depends(get_handler)]
