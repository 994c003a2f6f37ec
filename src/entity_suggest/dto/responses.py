"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class SuggestionResponse(BaseModel):
    """Response DTO for suggestions.

    Serialized with camelCase keys (``hasMoreResults``, ``entityKind``).
    """

    model_config = ConfigDict(populate_by_name=True)

    suggestions: list[str] = Field(default_factory=list, description="Ranked suggestion names")
    source: str = Field(
        ...,
        description=(
            "How the list was produced: static_match, static_popular, no_match, "
            "static_fallback, external_api, external_enhanced, places_api, superseded"
        ),
    )
    has_more_results: bool | None = Field(
        None,
        alias="hasMoreResults",
        description="Whether an enhanced search might find more",
    )
    message: str | None = Field(None, description="Hint for the UI")
    query: str = Field(..., description="The query as received")
    entity_kind: str = Field(..., alias="entityKind", description="The entity kind requested")


class CacheClearResponse(BaseModel):
    """Response DTO for cache invalidation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    deleted_count: int = Field(..., description="Number of cached results removed", ge=0)
    service: str | None = Field(None, description="Service cleared, or null for all")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy'")
    open_circuits: list[str] = Field(
        default_factory=list,
        description="External services currently skipped by their circuit breaker",
    )
