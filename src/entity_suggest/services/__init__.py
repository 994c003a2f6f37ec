"""Service layer for business logic.

Services orchestrate operations across repositories and contain the
suggestion rules: resilience around external lookups, static-first
matching, merge and ranking.
"""

from .circuit_breaker import CircuitBreaker, CircuitState
from .lookup_client import ExternalLookupClient
from .suggestion_service import SuggestionService
from .supersession import SupersedingRunner

__all__ = [
    "CircuitBreaker",
    "CircuitState",
    "ExternalLookupClient",
    "SuggestionService",
    "SupersedingRunner",
]
