"""Entity Suggest - autocomplete for food-domain entity names.

This package combines static reference lists with live lookups against
Wikidata, Wikipedia and (for restaurants) Google Places, in layers:

Layers:
    - normalizer, ranking, pipeline: pure matching and cleanup
    - protocols: Interface contracts (ResultCache, LookupSource, UsageTracker)
    - repositories: Cache backends and external sources
    - services: Resilience (breaker, timeout, cache) and orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from entity_suggest.services import SuggestionService

    service = SuggestionService.create(clients=[])
    outcome = await service.suggest("gordon", "chef")
    ```

For HTTP API:
    ```python
    from entity_suggest.api.app import app
    ```
"""

from entity_suggest.config import get_redis_client, settings
from entity_suggest.dto import SuggestionRequest, SuggestionResponse
from entity_suggest.entities import EntityKind, Query, SuggestionOutcome, SuggestionSource
from entity_suggest.handlers import SuggestionHandler
from entity_suggest.normalizer import normalize
from entity_suggest.protocols import LookupSource, ResultCache, SummarySource, UsageTracker
from entity_suggest.ranking import rank
from entity_suggest.repositories import (
    ApiUsageTracker,
    InMemoryResultCache,
    PlacesSource,
    RedisResultCache,
    WikidataSource,
    WikipediaSource,
)
from entity_suggest.services import CircuitBreaker, ExternalLookupClient, SuggestionService

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Matching
    "normalize",
    "rank",
    # Protocols (interfaces)
    "LookupSource",
    "ResultCache",
    "SummarySource",
    "UsageTracker",
    # Services (business logic)
    "CircuitBreaker",
    "ExternalLookupClient",
    "SuggestionService",
    # Handlers (HTTP)
    "SuggestionHandler",
    # Repositories (data access)
    "ApiUsageTracker",
    "InMemoryResultCache",
    "PlacesSource",
    "RedisResultCache",
    "WikidataSource",
    "WikipediaSource",
    # Entities (domain models)
    "EntityKind",
    "Query",
    "SuggestionOutcome",
    "SuggestionSource",
    # DTOs (API contracts)
    "SuggestionRequest",
    "SuggestionResponse",
]
