"""Repository layer for data access.

This layer puts external dependencies (Redis, Wikidata, Wikipedia, Google
Places) behind protocol-based interfaces. This enables:
- Swapping the cache backend through configuration
- Unit testing with fake sources and mock transports
- Keeping network and payload parsing out of the services

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from .memory_cache import InMemoryResultCache
from .places_source import PlacesSource
from .redis_cache import RedisResultCache
from .usage_tracker import ApiUsageTracker
from .wikidata_source import WikidataSource
from .wikipedia_source import WikipediaSource

__all__ = [
    "ApiUsageTracker",
    "InMemoryResultCache",
    "PlacesSource",
    "RedisResultCache",
    "WikidataSource",
    "WikipediaSource",
]
