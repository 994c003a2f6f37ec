"""Domain entities for internal representation.

These are plain dataclasses and enums used internally by the pipeline,
services and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No network or storage dependencies
"""

from .cache_entry import CacheEntryEntity
from .candidate import Candidate
from .query import EntityKind, Query
from .suggestion import (
    ResultOrigin,
    SuggestionOutcome,
    SuggestionResult,
    SuggestionSource,
    SuggestionState,
)

__all__ = [
    "CacheEntryEntity",
    "Candidate",
    "EntityKind",
    "Query",
    "ResultOrigin",
    "SuggestionOutcome",
    "SuggestionResult",
    "SuggestionSource",
    "SuggestionState",
]
