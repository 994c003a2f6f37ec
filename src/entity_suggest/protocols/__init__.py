"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping the cache backend (in-memory → Redis) without touching services
- Unit testing with fake sources and spies
- A clear line between orchestration and network code

Usage:
    ```python
    from entity_suggest.protocols import LookupSource, ResultCache

    cache: ResultCache = InMemoryResultCache()   # works
    cache: ResultCache = RedisResultCache.create()  # also works
    ```
"""

from .lookup_source import LookupSource, SummarySource
from .result_cache import ResultCache
from .usage_tracker import UsageTracker

__all__ = [
    "LookupSource",
    "ResultCache",
    "SummarySource",
    "UsageTracker",
]
