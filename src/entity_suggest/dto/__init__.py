"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import SuggestionRequest
from .responses import CacheClearResponse, HealthCheckResponse, SuggestionResponse

__all__ = [
    "CacheClearResponse",
    "HealthCheckResponse",
    "SuggestionRequest",
    "SuggestionResponse",
]
